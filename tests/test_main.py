"""Tests for the command line entry point."""

import json

import pytest

from cow_amm_batch.builder import tx_builder_json
import cow_amm_batch.main as main_module
from cow_amm_batch.main import main
from cow_amm_batch.types import Token, TxData


TOKEN0 = "0x" + "11" * 20 + ":18:1"
TOKEN1 = "0x" + "22" * 20 + ":6:2"
AMM_ADDRESS = "0x" + "ab" * 20


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("BATCH_OUTPUT", "BATCH_JSON_INDENT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _args(*extra) -> list[str]:
    return ["--chain-id", "1", "--amm", AMM_ADDRESS, "--token0", TOKEN0, "--token1", TOKEN1, *extra]


def test_writes_document_to_stdout(capsys):
    main(_args())
    doc = json.loads(capsys.readouterr().out)
    assert doc["chainId"] == "1"
    assert doc["meta"]["createdFromSafeAddress"] == AMM_ADDRESS


def test_writes_document_to_file(tmp_path):
    out = tmp_path / "batch.json"
    main(_args("--output", str(out)))
    doc = json.loads(out.read_text())
    assert doc["meta"]["description"] == "Setup transaction for a CoW AMM trading 1/1"


def test_missing_arguments_exit():
    with pytest.raises(SystemExit):
        main(["--chain-id", "1"])


def test_malformed_token_exits():
    with pytest.raises(SystemExit):
        main(["--chain-id", "1", "--amm", AMM_ADDRESS, "--token0", "0x11", "--token1", TOKEN1])


def test_invalid_address_exits():
    with pytest.raises(SystemExit):
        main(["--chain-id", "1", "--amm", "0x123", "--token0", TOKEN0, "--token1", TOKEN1])


def test_port_zero_is_passed_to_server(monkeypatch):
    calls = {}

    def fake_run(app, host, port, log_level):
        calls["port"] = port

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    main(["--serve", "--port", "0"])
    assert calls["port"] == 0


def test_request_rejects_short_address_builder_accepts_it():
    """Short addresses are refused at the CLI while the builder stays total."""
    short = "0x588c956bc94f1399e3b4747ab207762241c5469"
    with pytest.raises(SystemExit):
        main(["--chain-id", "1", "--amm", short, "--token0", TOKEN0, "--token1", TOKEN1])

    batch = tx_builder_json(
        TxData(
            chain_id=1,
            amm_address=short,
            token0=Token(decimals=18, symbol=0, address="0x" + "11" * 20),
            token1=Token(decimals=18, symbol=1, address="0x" + "22" * 20),
        )
    )
    assert batch.meta.created_from_safe_address == short
