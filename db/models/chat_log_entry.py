"""
db/models/chat_log_entry.py

One recorded customer-service chat interaction.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class ChatLogEntry(Base, TimestampMixin):
    __tablename__ = "chat_log_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="",
        comment="Canonical DD Mon YYYY date",
    )
    shift: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    cs: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    channel: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    cust: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    order_number: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    intention: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    case: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    product_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    closing_status: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chat_status: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    chat_status2: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    follow_up: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    survey: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        default="",
        comment="TRUE, FALSE or empty",
    )

    __table_args__ = (
        Index("ix_chat_log_entries_channel", "channel"),
        Index("ix_chat_log_entries_cs", "cs"),
    )
