"""
app/services package marker.
"""

from app.services.bulk_import_service import (
    BulkImportService,
    EmptyImportError,
    UnknownEntityError,
    get_bulk_import_service,
)
from app.services.export_service import PivotExportService, get_pivot_export_service

__all__ = [
    "BulkImportService",
    "EmptyImportError",
    "UnknownEntityError",
    "get_bulk_import_service",
    "PivotExportService",
    "get_pivot_export_service",
]
