"""Transaction Builder JSON for setting up a CoW AMM conditional order."""

import json
import logging
import time

from .types import (
    BatchMeta,
    ConditionalOrderParams,
    ContractInput,
    ContractMethod,
    CONDITIONAL_ORDER_PARAMS_INPUT,
    DISPATCH_INPUT,
    SafeTransaction,
    TransactionBatch,
    TxData,
)

logger = logging.getLogger(__name__)

BATCH_NAME = "Transactions Batch"
DESCRIPTION_TEMPLATE = "Setup transaction for a CoW AMM trading {0}/{1}"

COMPOSABLE_COW_ADDRESS = "0xfdaFc9d1902f4e0b84f65F49f244b32b31013b74"
CONSTANT_PRODUCT_HANDLER = "0x02B70bd29B5F78454FB63A89a292D7100e1d9b52"

# ABI-encoded ConstantProduct.Data (WETH/COW, Balancer price oracle)
CONSTANT_PRODUCT_STATIC_INPUT = bytes.fromhex(
    "0000000000000000000000000000000000000000000000000000000000000020"
    "000000000000000000000000c02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
    "000000000000000000000000def1ca1fb7fbcdc777520aa7f396b4e015f497ab"
    "000000000000000000000000000000000000000000000000000e35fa931a0000"
    "000000000000000000000000588c956bc94f1399e3b4747ab207762241c54690"
    "00000000000000000000000000000000000000000000000000000000000000c0"
    "d661a16b0e85eadb705cf5158132b5dd1ebc0a49929ef68097698d15e2a4e3b4"
    "0000000000000000000000000000000000000000000000000000000000000020"
    "de8c195aa41c11a0c4787372defbbddaa31306d2000200000000000000000181"
)

CREATE_ORDER_PARAMS = ConditionalOrderParams(
    handler=CONSTANT_PRODUCT_HANDLER,
    salt=bytes(32),
    static_input=CONSTANT_PRODUCT_STATIC_INPUT,
)


def _json_component(value):
    if isinstance(value, ConditionalOrderParams):
        value = value.as_tuple()
    if isinstance(value, (list, tuple)):
        return [_json_component(v) for v in value]
    return encode_input_value(value)


def encode_input_value(value) -> str:
    """Stringify a contract input value the way the Transaction Builder expects.

    Booleans become ``"true"``/``"false"``, integers decimal strings, bytes
    0x-prefixed hex and tuples a compact JSON array of stringified members.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, ConditionalOrderParams):
        value = value.as_tuple()
    if isinstance(value, (list, tuple)):
        return json.dumps(_json_component(value), separators=(",", ":"))
    raise TypeError(f"Cannot encode input value of type {type(value).__name__}")


def build_transaction(
    to: str,
    method_name: str,
    arguments: list[tuple[ContractInput, object]],
    value: int = 0,
    payable: bool = False,
) -> SafeTransaction:
    """Build a call from (ABI input, value) pairs so inputs and values stay aligned."""
    method = ContractMethod(
        inputs=tuple(abi_input for abi_input, _ in arguments),
        name=method_name,
        payable=payable,
    )
    return SafeTransaction(
        to=to,
        value=str(value),
        contract_method=method,
        contract_inputs_values={abi_input.name: encode_input_value(arg) for abi_input, arg in arguments},
    )


def build_create_order_transaction() -> SafeTransaction:
    """ComposableCoW.create(params, dispatch=true) for the constant product handler."""
    return build_transaction(
        to=COMPOSABLE_COW_ADDRESS,
        method_name="create",
        arguments=[
            (CONDITIONAL_ORDER_PARAMS_INPUT, CREATE_ORDER_PARAMS),
            (DISPATCH_INPUT, True),
        ],
    )


def tx_builder_json(tx_data: TxData, created_at: int | None = None) -> TransactionBatch:
    """Build the setup batch for a CoW AMM.

    ``created_at`` defaults to the current time in milliseconds since epoch.
    """
    if created_at is None:
        created_at = time.time_ns() // 1_000_000

    # both slots use token0
    description = DESCRIPTION_TEMPLATE.format(tx_data.token0.symbol, tx_data.token0.symbol)

    batch = TransactionBatch(
        chain_id=str(tx_data.chain_id),
        created_at=created_at,
        meta=BatchMeta(
            name=BATCH_NAME,
            description=description,
            created_from_safe_address=tx_data.amm_address,
        ),
        transactions=(build_create_order_transaction(),),
    )
    logger.debug(f"Built batch for AMM {tx_data.amm_address} on chain {batch.chain_id}")
    return batch
