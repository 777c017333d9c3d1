"""
app/repositories/record_repository.py

Record source, allowed-set source and persist sink for every entity type.

Rows come back as plain dictionaries keyed by the entity's record schema
fields, each with a stable ``row_index`` (the primary key).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.records import Record, get_schema
from app.repositories.errors import PersistenceError, UpstreamFetchError
from db.base import Base
from db.models.chat_log_entry import ChatLogEntry
from db.models.master_data_value import MasterDataValue
from db.models.stock_item import StockItem
from db.models.store_visit import StoreVisit
from db.models.warranty_claim import WarrantyClaim

logger = logging.getLogger(__name__)

_MODELS: dict[str, type[Base]] = {
    "chat_log": ChatLogEntry,
    "stock": StockItem,
    "warranty": WarrantyClaim,
    "store_visit": StoreVisit,
}

# Record field -> model attribute, where the two differ.
_ATTRIBUTE_OVERRIDES: dict[str, dict[str, str]] = {
    "stock": {
        "SKU": "sku",
        "Product_name": "product_name",
        "Category": "category",
        "Grade": "grade",
        "HPP": "hpp",
        "HPJ": "hpj",
        "HPT": "hpt",
        "Artikel": "artikel",
    },
}


class RecordStore(Protocol):
    """
    Storage boundary consumed by import and analytics services.
    """

    def fetch_records(
        self,
        entity: str,
        criteria: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        ...

    def fetch_allowed_sets(self) -> dict[str, list[str]]:
        ...

    def persist_record(self, entity: str, record: Mapping[str, Any]) -> None:
        ...

    def commit(self) -> None:
        ...


class RecordRepository:
    """
    SQLAlchemy-backed RecordStore.

    The caller owns the session lifecycle; ``persist_record`` writes inside
    a savepoint so one failing row leaves earlier rows intact.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def fetch_records(
        self,
        entity: str,
        criteria: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        """
        Return every row of *entity*, optionally narrowed by exact-match criteria.

        Criteria values of ``"all"`` or empty are ignored.
        """

        model = self._model(entity)
        fields = self._field_attributes(entity)
        stmt = select(model).order_by(model.id)
        for field_name, value in (criteria or {}).items():
            if value is None or str(value).strip() in {"", "all"}:
                continue
            attribute = fields.get(field_name)
            if attribute is None:
                raise ValueError(f"Unknown filter field {field_name!r} for {entity}.")
            stmt = stmt.where(getattr(model, attribute) == str(value))

        try:
            rows = self._session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("Record fetch failed entity=%s", entity, exc_info=True)
            raise UpstreamFetchError(f"Unable to read {entity} records.") from exc

        return [self._to_record(row, fields) for row in rows]

    def fetch_allowed_sets(self) -> dict[str, list[str]]:
        """
        Return master data grouped by allowed-set name, blank values dropped.
        """

        stmt = select(MasterDataValue).order_by(
            MasterDataValue.field_name,
            MasterDataValue.position,
            MasterDataValue.id,
        )
        try:
            rows = self._session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("Master data fetch failed", exc_info=True)
            raise UpstreamFetchError("Unable to read master data.") from exc

        allowed_sets: dict[str, list[str]] = {}
        for row in rows:
            if row.value and row.value.strip():
                allowed_sets.setdefault(row.field_name, []).append(row.value)
        return allowed_sets

    def persist_record(self, entity: str, record: Mapping[str, Any]) -> None:
        """
        Insert one normalized record; raises PersistenceError on failure.
        """

        model = self._model(entity)
        fields = self._field_attributes(entity)
        values = {
            attribute: "" if record.get(field_name) is None else str(record.get(field_name))
            for field_name, attribute in fields.items()
        }
        try:
            with self._session.begin_nested():
                self._session.add(model(**values))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Unable to persist {entity} record.") from exc

    def commit(self) -> None:
        """
        Commit every savepoint written so far in this session.
        """

        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("Import commit failed", exc_info=True)
            raise PersistenceError("Unable to commit imported records.") from exc

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _model(entity: str) -> type[Base]:
        try:
            return _MODELS[entity]
        except KeyError:
            raise ValueError(f"Unknown entity {entity!r}.") from None

    @staticmethod
    def _field_attributes(entity: str) -> dict[str, str]:
        overrides = _ATTRIBUTE_OVERRIDES.get(entity, {})
        return {name: overrides.get(name, name) for name in get_schema(entity).fields}

    @staticmethod
    def _to_record(row: Any, fields: Mapping[str, str]) -> Record:
        record: Record = {"row_index": row.id}
        for field_name, attribute in fields.items():
            value = getattr(row, attribute)
            record[field_name] = "" if value is None else value
        return record
