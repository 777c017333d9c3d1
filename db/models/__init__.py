"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.chat_log_entry import ChatLogEntry
from db.models.master_data_value import MasterDataValue
from db.models.stock_item import StockItem
from db.models.store_visit import StoreVisit
from db.models.warranty_claim import WarrantyClaim

__all__ = [
    "ChatLogEntry",
    "MasterDataValue",
    "StockItem",
    "StoreVisit",
    "WarrantyClaim",
]
