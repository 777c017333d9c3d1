"""
db/models/stock_item.py

Master stock-keeping unit with pricing columns.
"""

from __future__ import annotations

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class StockItem(Base, TimestampMixin):
    __tablename__ = "stock_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String(120), nullable=False)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    grade: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    hpp: Mapped[str] = mapped_column(String(32), nullable=False, default="", comment="Cost price")
    hpj: Mapped[str] = mapped_column(String(32), nullable=False, default="", comment="Selling price")
    hpt: Mapped[str] = mapped_column(String(32), nullable=False, default="", comment="Listed price")
    artikel: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")

    __table_args__ = (UniqueConstraint("sku", name="uq_stock_items_sku"),)
