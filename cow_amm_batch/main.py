"""Entry point: build a CoW AMM setup batch and write it out, or serve the API."""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from .api import create_app
from .builder import tx_builder_json
from .config import Config
from .types import BatchRequest

logger = logging.getLogger(__name__)


def _parse_token(value: str) -> dict:
    """Parse ``ADDRESS:DECIMALS:SYMBOL``."""
    parts = value.split(":")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected ADDRESS:DECIMALS:SYMBOL, got {value!r}")
    address, decimals, symbol = parts
    try:
        return {"address": address, "decimals": int(decimals), "symbol": int(symbol)}
    except ValueError:
        raise argparse.ArgumentTypeError(f"Decimals and symbol must be integers in {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CoW AMM Safe batch builder")
    parser.add_argument("--serve", action="store_true", help="Serve the HTTP API instead")
    parser.add_argument("--chain-id", type=int, default=None, help="Chain id")
    parser.add_argument("--amm", default=None, help="CoW AMM (Safe) address")
    parser.add_argument("--token0", type=_parse_token, default=None, help="ADDRESS:DECIMALS:SYMBOL")
    parser.add_argument("--token1", type=_parse_token, default=None, help="ADDRESS:DECIMALS:SYMBOL")
    parser.add_argument("--output", default=None, help="Output file (overrides .env, default stdout)")
    parser.add_argument("--port", type=int, default=None, help="API port")
    return parser


def main(argv: list[str] | None = None):
    """Entry point."""
    load_dotenv(Path.cwd() / ".env")

    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config()
    if args.output is not None:
        config.output_path = args.output
    if args.port is not None:
        config.api_port = args.port

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.serve:
        logger.info(f"Batch builder API starting on {config.api_host}:{config.api_port}")
        uvicorn.run(create_app(config), host=config.api_host, port=config.api_port, log_level="info")
        return

    missing = [name for name in ("chain_id", "amm", "token0", "token1") if getattr(args, name) is None]
    if missing:
        parser.error("missing required arguments: " + ", ".join("--" + m.replace("_", "-") for m in missing))

    try:
        request = BatchRequest(
            chain_id=args.chain_id,
            amm_address=args.amm,
            token0=args.token0,
            token1=args.token1,
        )
    except ValidationError as e:
        parser.error(str(e))

    batch = tx_builder_json(request.to_tx_data())
    document = batch.to_json(indent=config.json_indent)

    if config.output_path:
        Path(config.output_path).write_text(document + "\n")
        logger.info(f"Wrote batch for {request.amm_address} to {config.output_path}")
    else:
        sys.stdout.write(document + "\n")


if __name__ == "__main__":
    main()
