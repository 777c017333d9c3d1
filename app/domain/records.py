"""
app/domain/records.py

Explicit record shapes per entity type.

Records travel through the system as plain ``dict[str, Any]`` rows; a
:class:`RecordSchema` documents which keys each entity recognizes and what
rules apply to them during import (date, required, categorical, boolean
and numeric fields).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final, Mapping

Record = dict[str, Any]


@dataclass(frozen=True)
class RecordSchema:
    """
    Field layout and import rules for one entity type.

    Attributes
    ----------
    entity:             Stable identifier (``chat_log``, ``stock`` ...).
    fields:             Recognized fields, in display / persistence order.
    date_field:         Field normalized by DateNormalizer, if any.
    required_fields:    Field -> human label for "<Label> is required".
    categorical_fields: Field -> allowed-set name in master data.
    boolean_fields:     Field -> human label for "<Label> must be TRUE/FALSE".
    numeric_fields:     Field -> human label for "<Label> must be a number".
    """

    entity: str
    fields: tuple[str, ...]
    date_field: str | None = None
    required_fields: Mapping[str, str] = field(default_factory=dict)
    categorical_fields: Mapping[str, str] = field(default_factory=dict)
    boolean_fields: Mapping[str, str] = field(default_factory=dict)
    numeric_fields: Mapping[str, str] = field(default_factory=dict)

    @property
    def importable(self) -> bool:
        return bool(self.required_fields or self.date_field)

    def empty_record(self) -> Record:
        return {name: "" for name in self.fields}


CHAT_LOG_SCHEMA: Final[RecordSchema] = RecordSchema(
    entity="chat_log",
    fields=(
        "date",
        "shift",
        "cs",
        "channel",
        "name",
        "cust",
        "order_number",
        "intention",
        "case",
        "product_name",
        "closing_status",
        "note",
        "chat_status",
        "chat_status2",
        "follow_up",
        "survey",
    ),
    date_field="date",
    required_fields={
        "shift": "Shift",
        "cs": "CS",
        "channel": "Channel",
        "closing_status": "Closing Status",
    },
    categorical_fields={
        "shift": "shift",
        "cs": "cs",
        "channel": "channel",
        "intention": "intention",
        "case": "case",
        "product_name": "artikel",
        "closing_status": "closing_status",
        "chat_status": "chat_status",
        "chat_status2": "chat_status2",
        "follow_up": "follow_up",
    },
    boolean_fields={"survey": "Survey"},
)

STOCK_SCHEMA: Final[RecordSchema] = RecordSchema(
    entity="stock",
    fields=(
        "SKU",
        "Product_name",
        "Category",
        "Grade",
        "HPP",
        "HPJ",
        "HPT",
        "Artikel",
        "image_url",
    ),
    required_fields={
        "SKU": "SKU",
        "Product_name": "Product Name",
    },
    categorical_fields={
        "Category": "category",
        "Grade": "grade",
    },
    numeric_fields={
        "HPP": "HPP",
        "HPJ": "HPJ",
        "HPT": "HPT",
    },
)

# Read-only shapes: consumed by analytics, never imported through the validator.

WARRANTY_SCHEMA: Final[RecordSchema] = RecordSchema(
    entity="warranty",
    fields=(
        "created_at",
        "channel",
        "customer_name",
        "phone",
        "order_number",
        "product_name",
        "serial_number",
        "status",
    ),
)

STORE_VISIT_SCHEMA: Final[RecordSchema] = RecordSchema(
    entity="store_visit",
    fields=(
        "date",
        "taft_name",
        "store",
        "visitor",
        "intensi",
        "case",
        "product_name",
        "status",
        "reason",
        "ket",
    ),
)

SCHEMAS: Final[dict[str, RecordSchema]] = {
    schema.entity: schema
    for schema in (CHAT_LOG_SCHEMA, STOCK_SCHEMA, WARRANTY_SCHEMA, STORE_VISIT_SCHEMA)
}

IMPORTABLE_ENTITIES: Final[frozenset[str]] = frozenset(
    name for name, schema in SCHEMAS.items() if schema.importable
)


def get_schema(entity: str) -> RecordSchema:
    """
    Return the schema for *entity*; raises KeyError for unknown entities.
    """

    return SCHEMAS[entity]
