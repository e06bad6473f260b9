"""Core data types shared by the event adapters and the ingestion pipeline."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bridgeagg.db.models.transaction import ZERO_ADDRESS

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def to_epoch_ms(value: datetime) -> int:
    """Datetime to integer epoch milliseconds. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - _EPOCH) // timedelta(milliseconds=1)


def normalize_amount(value: Any) -> str:
    """Render an amount as a plain non-negative decimal string."""
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"amount is not a number: {value!r}") from e
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"amount must be a non-negative number: {value!r}")
    return format(amount, "f")


class ChainDescriptor(BaseModel):
    """A chain entry from the Hyperlane registry metadata document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    protocol: str
    chain_id: int | str = Field(alias="chainId")
    is_testnet: bool = Field(default=False, alias="isTestnet")


class ChainTable(BaseModel):
    """Resolved registry state for one adapter build."""

    chains: dict[str, ChainDescriptor] = {}  # registry key -> mainnet EVM chain
    addresses: dict[str, dict[str, str]] = {}  # registry key -> {role: address}
    aliases: dict[str, str] = {}  # registry key -> provider key

    def provider_key(self, chain: str) -> str:
        return self.aliases.get(chain, chain)


class TransactionRow(BaseModel):
    """Canonical persisted ledger row. ts is epoch milliseconds."""

    bridge_id: int
    chain: str
    tx_hash: str
    ts: int
    tx_block: Optional[int] = None
    tx_from: str = "0x"
    tx_to: str = "0x"
    token: str = ZERO_ADDRESS
    amount: str
    is_deposit: bool
    is_usd_volume: bool = False
    txs_counted_as: Optional[int] = None
    origin_chain: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> str:
        return normalize_amount(v)


class EventRow(BaseModel):
    """A bridge event decoded from logs by an adapter fetch function."""

    block_number: int
    tx_hash: str
    timestamp: Optional[int] = None  # epoch milliseconds of the block
    from_address: str
    to_address: str
    token: str
    amount: str
    is_deposit: bool

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> str:
        return normalize_amount(v)


class ExternalTransaction(BaseModel):
    """One cross-chain transfer from an externally produced dump (LayerZero schema)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timestamp_source: datetime = Field(alias="timestampSource")
    tx_hash_source: str = Field(alias="txHashSource")
    tx_hash_destination: str = Field(alias="txHashDestination")
    chain_source: str = Field(alias="chainSource")
    chain_destination: str = Field(alias="chainDestination")
    token: Optional[str] = None
    usd_amount: Decimal = Field(alias="usdAmount", ge=0)
    eoa_address_from: Optional[str] = Field(default=None, alias="eoaAddressFrom")
    eoa_address_to: Optional[str] = Field(default=None, alias="eoaAddressTo")

    @field_validator("token", "eoa_address_from", "eoa_address_to", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class FileBatch(BaseModel):
    """All transactions of one source file."""

    file_name: str
    transactions: list[ExternalTransaction]


# Adapter fetch function: (from_block, to_block) -> decoded event rows
FetchFn = Callable[[int, int], Awaitable[list[EventRow]]]
