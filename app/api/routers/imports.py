"""
app/api/routers/imports.py

Bulk import HTTP endpoints.

    POST /imports/{entity}/preview          JSON rows, validate only
    POST /imports/{entity}/commit           JSON rows, validate then persist
    POST /imports/{entity}/preview/upload   CSV file, validate only
    POST /imports/{entity}/commit/upload    CSV file, validate then persist
    GET  /imports/{entity}/template         blank xlsx with master-data dropdowns

Commit answers 200 with ``committed=false`` and the preview error list when
any row is invalid; nothing is written in that case.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from app.api.dependencies import get_csv_upload, get_record_store, read_csv_rows
from app.repositories.errors import PersistenceError, UpstreamFetchError
from app.repositories.record_repository import RecordStore
from app.schemas.imports import ImportCommitResponse, ImportPreviewResponse, ImportRowsRequest
from app.services.bulk_import_service import (
    BulkImportService,
    EmptyImportError,
    UnknownEntityError,
    get_bulk_import_service,
)
from app.services.export_service import XLSX_MEDIA_TYPE
from app.services.import_template_service import ImportTemplateService, get_import_template_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/imports", tags=["imports"])


def _load_allowed_sets(store: RecordStore) -> dict[str, list[str]]:
    try:
        return store.fetch_allowed_sets()
    except UpstreamFetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Master data is unavailable; try again later.",
        ) from exc


def _run_preview(
    entity: str,
    rows: Sequence[Mapping[str, Any]],
    store: RecordStore,
    service: BulkImportService,
) -> ImportPreviewResponse:
    allowed_sets = _load_allowed_sets(store)
    try:
        summary = service.preview(entity, rows, allowed_sets)
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except EmptyImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ImportPreviewResponse.from_summary(entity, summary)


def _run_commit(
    entity: str,
    rows: Sequence[Mapping[str, Any]],
    store: RecordStore,
    service: BulkImportService,
) -> ImportCommitResponse:
    allowed_sets = _load_allowed_sets(store)

    def _persist(record: dict[str, Any]) -> None:
        store.persist_record(entity, record)

    try:
        result = service.commit(entity, rows, allowed_sets, _persist)
        if result.committed:
            store.commit()
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except EmptyImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to persist imported rows.",
        ) from exc

    logger.info("Import commit entity=%s %s", entity, result.message)
    return ImportCommitResponse.from_result(entity, result)


@router.post("/{entity}/preview", response_model=ImportPreviewResponse)
def preview_rows(
    entity: str,
    payload: ImportRowsRequest,
    store: RecordStore = Depends(get_record_store),
    service: BulkImportService = Depends(get_bulk_import_service),
) -> ImportPreviewResponse:
    """
    Validate already-parsed rows without persisting anything.
    """

    return _run_preview(entity, payload.rows, store, service)


@router.post("/{entity}/commit", response_model=ImportCommitResponse)
def commit_rows(
    entity: str,
    payload: ImportRowsRequest,
    store: RecordStore = Depends(get_record_store),
    service: BulkImportService = Depends(get_bulk_import_service),
) -> ImportCommitResponse:
    """
    Persist already-parsed rows when every row validates.
    """

    return _run_commit(entity, payload.rows, store, service)


@router.post("/{entity}/preview/upload", response_model=ImportPreviewResponse)
def preview_upload(
    entity: str,
    file: UploadFile = Depends(get_csv_upload),
    store: RecordStore = Depends(get_record_store),
    service: BulkImportService = Depends(get_bulk_import_service),
) -> ImportPreviewResponse:
    """
    Validate an uploaded CSV without persisting anything.
    """

    return _run_preview(entity, read_csv_rows(file), store, service)


@router.post("/{entity}/commit/upload", response_model=ImportCommitResponse)
def commit_upload(
    entity: str,
    file: UploadFile = Depends(get_csv_upload),
    store: RecordStore = Depends(get_record_store),
    service: BulkImportService = Depends(get_bulk_import_service),
) -> ImportCommitResponse:
    """
    Persist an uploaded CSV when every row validates.
    """

    return _run_commit(entity, read_csv_rows(file), store, service)


@router.get("/{entity}/template", response_class=Response)
def download_template(
    entity: str,
    store: RecordStore = Depends(get_record_store),
    service: ImportTemplateService = Depends(get_import_template_service),
) -> Response:
    """
    Blank ``.xlsx`` template with master-data dropdowns for *entity*.
    """

    allowed_sets = _load_allowed_sets(store)
    try:
        content = service.build(entity, allowed_sets)
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    filename = f"{entity}_import_template_{date.today().isoformat()}.xlsx"
    logger.info("Import template download entity=%s bytes=%d", entity, len(content))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
