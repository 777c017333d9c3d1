"""
app/api/dependencies.py

Shared FastAPI dependencies: upload validation and per-request services.
"""

from __future__ import annotations

import csv
import io
from typing import Any

from fastapi import Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from analytics.orchestrator import AnalyticsOrchestrator
from app.config import get_analytics_settings
from app.repositories.record_repository import RecordRepository, RecordStore
from db.session import get_db

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def read_csv_rows(upload: UploadFile) -> list[dict[str, Any]]:
    """
    Parse an uploaded CSV into one dict per data row (header row excluded).

    Short rows are padded with None so missing trailing cells count as blank.
    """

    try:
        text = upload.file.read().decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV file must be UTF-8 encoded.",
        ) from exc
    finally:
        upload.file.close()

    reader = csv.DictReader(io.StringIO(text))
    return [
        {key: value for key, value in row.items() if key is not None}
        for row in reader
    ]


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordRepository(db)


def get_analytics_orchestrator(
    store: RecordStore = Depends(get_record_store),
) -> AnalyticsOrchestrator:
    return AnalyticsOrchestrator(store, get_analytics_settings())
