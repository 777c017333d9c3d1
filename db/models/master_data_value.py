"""
db/models/master_data_value.py

Allowed values for categorical fields (dropdown master data).
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class MasterDataValue(Base, TimestampMixin):
    __tablename__ = "master_data_values"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    field_name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Allowed-set name, e.g. shift, channel, artikel",
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("field_name", "value", name="uq_master_data_values_field_value"),
        Index("ix_master_data_values_field_name", "field_name"),
    )
