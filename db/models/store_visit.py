"""
db/models/store_visit.py

Daily store-visit tally reported by in-store staff.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class StoreVisit(Base):
    __tablename__ = "store_visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    taft_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    store: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    visitor: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    intensi: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    case: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    product_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    reason: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    ket: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (Index("ix_store_visits_store", "store"),)
