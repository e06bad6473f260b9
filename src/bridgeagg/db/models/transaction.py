from typing import Optional

import sqlalchemy as sa
from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bridgeagg.db.session import Base, TimestampMixin

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Natural key of a ledger row; replays upsert onto it instead of duplicating
NATURAL_KEY = ("bridge_id", "chain", "tx_hash", "token", "tx_from", "tx_to", "is_deposit")


class BridgeTransaction(TimestampMixin, Base):
    """One side (deposit or withdrawal) of a bridged transfer. BigInt PK for append-heavy data."""

    __tablename__ = "transactions"
    __table_args__ = (
        UniqueConstraint(*NATURAL_KEY, name="uq_transactions_natural_key"),
        Index("ix_transactions_bridge_ts", "bridge_id", "ts"),
    )

    id: Mapped[int] = mapped_column(BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True, autoincrement=True)
    bridge_id: Mapped[int] = mapped_column(ForeignKey("bridge_configs.id"))
    chain: Mapped[str] = mapped_column(String(50))
    tx_hash: Mapped[str] = mapped_column(String(100), index=True)
    ts: Mapped[int] = mapped_column(BigInteger)  # epoch milliseconds
    tx_block: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)
    tx_from: Mapped[str] = mapped_column(String(100), default="0x")
    tx_to: Mapped[str] = mapped_column(String(100), default="0x")
    token: Mapped[str] = mapped_column(String(100), default=ZERO_ADDRESS)
    amount: Mapped[str] = mapped_column(String(100))  # decimal string, raw units or USD
    is_deposit: Mapped[bool] = mapped_column(Boolean)
    is_usd_volume: Mapped[bool] = mapped_column(Boolean, default=False)
    txs_counted_as: Mapped[Optional[int]] = mapped_column(Integer, default=None)
    origin_chain: Mapped[Optional[str]] = mapped_column(String(50), default=None)
