"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ImportSettings:
    """
    Runtime settings for bulk import preview / commit.
    """

    preview_limit: int = 10
    log_validation_errors: bool = True


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Defaults for the analytics read paths.
    """

    default_view: str = "intention"
    closed_status: str = "Closed"
    open_status: str = "Open"


@dataclass(frozen=True)
class ExportSettings:
    """
    Layout settings for pivot exports and import templates.
    """

    row_label_width: int = 20
    column_width: int = 15
    template_rows: int = 50


@lru_cache(maxsize=1)
def get_import_settings() -> ImportSettings:
    """
    Return cached import settings from environment variables.
    """

    return ImportSettings(
        preview_limit=max(1, _get_int_env("IMPORT_PREVIEW_LIMIT", 10)),
        log_validation_errors=_get_bool_env("IMPORT_LOG_VALIDATION_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_analytics_settings() -> AnalyticsSettings:
    """
    Return cached analytics settings from environment variables.
    """

    return AnalyticsSettings(
        default_view=_get_str_env("ANALYTICS_DEFAULT_VIEW", "intention"),
        closed_status=_get_str_env("ANALYTICS_CLOSED_STATUS", "Closed"),
        open_status=_get_str_env("ANALYTICS_OPEN_STATUS", "Open"),
    )


@lru_cache(maxsize=1)
def get_export_settings() -> ExportSettings:
    """
    Return cached export settings from environment variables.
    """

    return ExportSettings(
        row_label_width=max(5, _get_int_env("EXPORT_ROW_LABEL_WIDTH", 20)),
        column_width=max(5, _get_int_env("EXPORT_COLUMN_WIDTH", 15)),
        template_rows=max(1, _get_int_env("IMPORT_TEMPLATE_ROWS", 50)),
    )
