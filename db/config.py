"""
db/config.py

Where the dashboard finds its PostgreSQL database.

``DATABASE_URL`` names the deployed database; ``LOCAL_DATABASE_URL`` is the
developer fallback. Both may come from the process environment or from
``.env`` / ``.env.local`` at the project root. Process variables win.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[1]
ENV_FILES: Final[tuple[str, ...]] = (".env", ".env.local")
DATABASE_URL_VARIABLES: Final[tuple[str, ...]] = ("DATABASE_URL", "LOCAL_DATABASE_URL")

_PSYCOPG_SCHEME: Final[str] = "postgresql+psycopg://"
_BARE_SCHEMES: Final[tuple[str, ...]] = ("postgres://", "postgresql://")


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def load_env_files(root: Path | None = None) -> None:
    """
    Copy KEY=VALUE pairs from the dashboard's env files into ``os.environ``.

    Variables already set in the process are left alone, so a deployment
    can always override a checked-out ``.env``.
    """

    root = root or PROJECT_ROOT
    for filename in ENV_FILES:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def normalize_postgres_url(url: str) -> str:
    """Point bare postgres URLs at the psycopg 3 driver."""
    for scheme in _BARE_SCHEMES:
        if url.startswith(scheme):
            return _PSYCOPG_SCHEME + url[len(scheme):]
    return url


def configured_database_url() -> str | None:
    """
    Return the first non-empty URL in ``DATABASE_URL_VARIABLES`` order.
    """

    for name in DATABASE_URL_VARIABLES:
        value = os.getenv(name, "").strip()
        if value:
            return normalize_postgres_url(value)
    return None


def resolve_database_url() -> str:
    """
    Load the env files and return the dashboard database URL.

    Raises RuntimeError when neither variable is set.
    """

    load_env_files()
    url = configured_database_url()
    if url is None:
        raise RuntimeError(
            "No database URL configured. Set DATABASE_URL, or LOCAL_DATABASE_URL "
            "for a development database."
        )
    return url
