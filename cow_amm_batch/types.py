"""Safe Transaction Builder batch structures for CoW AMM setup."""

import json
from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, Field, field_validator
from web3 import Web3


@dataclass(frozen=True)
class Token:
    """Token traded by a CoW AMM pool."""

    decimals: int
    symbol: int
    address: str  # address


@dataclass(frozen=True)
class TxData:
    """Parameters of a setup batch."""

    chain_id: int
    amm_address: str  # address
    token0: Token
    token1: Token


@dataclass(frozen=True)
class SimpleInput:
    """Scalar ABI parameter."""

    internal_type: str
    name: str
    type: str

    def __post_init__(self):
        if self.type == "tuple":
            raise ValueError(f"Input '{self.name}' has type tuple but no components")

    @property
    def canonical_type(self) -> str:
        return self.type

    def to_dict(self) -> dict:
        return {"internalType": self.internal_type, "name": self.name, "type": self.type}


@dataclass(frozen=True)
class TupleInput:
    """Struct ABI parameter, components may nest further tuples."""

    internal_type: str
    name: str
    components: tuple["ContractInput", ...]
    type: str = "tuple"

    def __post_init__(self):
        if self.type != "tuple":
            raise ValueError(f"Input '{self.name}' has components but type {self.type}")
        object.__setattr__(self, "components", tuple(self.components))

    @property
    def canonical_type(self) -> str:
        return "(" + ",".join(c.canonical_type for c in self.components) + ")"

    def to_dict(self) -> dict:
        return {
            "internalType": self.internal_type,
            "name": self.name,
            "type": self.type,
            "components": [c.to_dict() for c in self.components],
        }


ContractInput = Union[SimpleInput, TupleInput]


def input_from_abi(entry: dict) -> ContractInput:
    """Parse one entry of a JSON ABI ``inputs`` list."""
    internal_type = entry.get("internalType", entry["type"])
    if "components" in entry:
        return TupleInput(
            internal_type=internal_type,
            name=entry["name"],
            components=tuple(input_from_abi(c) for c in entry["components"]),
            type=entry["type"],
        )
    return SimpleInput(internal_type=internal_type, name=entry["name"], type=entry["type"])


@dataclass(frozen=True)
class ContractMethod:
    """Signature of the invoked function, independent of argument values."""

    inputs: tuple[ContractInput, ...]
    name: str
    payable: bool = False

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))

    @classmethod
    def from_abi(cls, entry: dict) -> "ContractMethod":
        """Build from a JSON ABI function entry."""
        return cls(
            inputs=tuple(input_from_abi(i) for i in entry.get("inputs", [])),
            name=entry["name"],
            payable=entry.get("stateMutability") == "payable" or bool(entry.get("payable", False)),
        )

    @property
    def input_names(self) -> list[str]:
        return [i.name for i in self.inputs]

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``create((address,bytes32,bytes),bool)``."""
        return f"{self.name}(" + ",".join(i.canonical_type for i in self.inputs) + ")"

    @property
    def selector(self) -> str:
        return "0x" + bytes(Web3.keccak(text=self.signature))[:4].hex()

    def to_dict(self) -> dict:
        return {
            "inputs": [i.to_dict() for i in self.inputs],
            "name": self.name,
            "payable": self.payable,
        }


@dataclass(frozen=True)
class SafeTransaction:
    """One contract call inside a batch. Values are already stringified."""

    to: str  # address
    value: str  # wei, decimal
    contract_method: ContractMethod
    contract_inputs_values: dict[str, str]
    data: None = None

    def __post_init__(self):
        names = self.contract_method.input_names
        if sorted(names) != sorted(self.contract_inputs_values):
            raise ValueError(
                f"Input values {sorted(self.contract_inputs_values)} do not match "
                f"method inputs {sorted(names)}"
            )

    def to_dict(self) -> dict:
        return {
            "to": self.to,
            "value": self.value,
            "data": self.data,
            "contractMethod": self.contract_method.to_dict(),
            "contractInputsValues": dict(self.contract_inputs_values),
        }


@dataclass(frozen=True)
class BatchMeta:
    name: str
    description: str
    created_from_safe_address: str  # address

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "createdFromSafeAddress": self.created_from_safe_address,
        }


@dataclass(frozen=True)
class TransactionBatch:
    """Transaction Builder import document."""

    chain_id: str
    created_at: int  # ms since epoch
    meta: BatchMeta
    transactions: tuple[SafeTransaction, ...] = field(default_factory=tuple)
    version: str = "1.0"

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "chainId": self.chain_id,
            "createdAt": self.created_at,
            "meta": self.meta.to_dict(),
            "transactions": [tx.to_dict() for tx in self.transactions],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True)
class ConditionalOrderParams:
    """IConditionalOrder.ConditionalOrderParams struct."""

    handler: str  # address
    salt: bytes  # bytes32
    static_input: bytes

    def as_tuple(self) -> tuple:
        return (self.handler, self.salt, self.static_input)


class TokenRequest(BaseModel):
    """API request model for a token."""

    decimals: int = Field(ge=0, le=255)
    symbol: int
    address: str

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        if not Web3.is_address(value):
            raise ValueError(f"Invalid address: {value}")
        return value

    def to_token(self) -> Token:
        return Token(decimals=self.decimals, symbol=self.symbol, address=self.address)


class BatchRequest(BaseModel):
    """API request model for building a setup batch."""

    chain_id: int = Field(ge=0)
    amm_address: str
    token0: TokenRequest
    token1: TokenRequest

    @field_validator("amm_address")
    @classmethod
    def _check_amm_address(cls, value: str) -> str:
        if not Web3.is_address(value):
            raise ValueError(f"Invalid address: {value}")
        return value

    def to_tx_data(self) -> TxData:
        return TxData(
            chain_id=self.chain_id,
            amm_address=self.amm_address,
            token0=self.token0.to_token(),
            token1=self.token1.to_token(),
        )


# ComposableCoW.create ABI
CONDITIONAL_ORDER_PARAMS_INPUT = TupleInput(
    internal_type="struct IConditionalOrder.ConditionalOrderParams",
    name="params",
    components=(
        SimpleInput(internal_type="contract IConditionalOrder", name="handler", type="address"),
        SimpleInput(internal_type="bytes32", name="salt", type="bytes32"),
        SimpleInput(internal_type="bytes", name="staticInput", type="bytes"),
    ),
)

DISPATCH_INPUT = SimpleInput(internal_type="bool", name="dispatch", type="bool")
