"""Durable key/value cache (processed-file checkpoints and similar run state)."""

from typing import Optional

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bridgeagg.db.session import Base, TimestampMixin


class CacheEntry(TimestampMixin, Base):
    __tablename__ = "cache_entries"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    expires_at: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)  # Unix epoch, None = never
