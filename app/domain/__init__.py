"""
app/domain package marker.
"""

from app.domain.import_results import CommitResult, ImportSummary, ValidationOutcome
from app.domain.records import IMPORTABLE_ENTITIES, SCHEMAS, RecordSchema, get_schema

__all__ = [
    "CommitResult",
    "IMPORTABLE_ENTITIES",
    "ImportSummary",
    "RecordSchema",
    "SCHEMAS",
    "ValidationOutcome",
    "get_schema",
]
