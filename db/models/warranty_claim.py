"""
db/models/warranty_claim.py

Warranty registration submitted by a customer.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class WarrantyClaim(Base):
    __tablename__ = "warranty_claims"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="",
        comment="Submission timestamp as captured by the form",
    )
    channel: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    order_number: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    product_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    serial_number: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    __table_args__ = (Index("ix_warranty_claims_channel", "channel"),)
