"""Serialized document ORM model (SQL blob backend)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lotto_picks.models.base import Base


class StoredDocument(Base):
    """One whole serialized document per row, addressed by key."""

    __tablename__ = "documents"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False, default="application/json")
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
