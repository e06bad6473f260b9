from typing import Optional

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bridgeagg.db.session import Base, TimestampMixin


class BridgeConfig(TimestampMixin, Base):
    """One row per (bridge, chain) an adapter covers. Its id is the bridge_id of stored transactions."""

    __tablename__ = "bridge_configs"
    __table_args__ = (UniqueConstraint("bridge_name", "chain", name="uq_bridge_configs_bridge_chain"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bridge_name: Mapped[str] = mapped_column(String(50), index=True)
    chain: Mapped[str] = mapped_column(String(50))
    destination_chain: Mapped[Optional[str]] = mapped_column(String(50), default=None)
