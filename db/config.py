"""
db/config.py

Database URL resolution from the process environment and optional
``.env`` / ``.env.local`` files at the project root.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILES: tuple[str, ...] = (".env", ".env.local")
CLOUD_ENVIRONMENTS = frozenset({"prod", "production", "staging", "cloud"})

_POSTGRES_PREFIXES: tuple[tuple[str, str], ...] = (
    ("postgres://", "postgresql+psycopg://"),
    ("postgresql://", "postgresql+psycopg://"),
    ("postgresql+psycopg2://", "postgresql+psycopg://"),
)


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export "):]
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def load_env_files(root: Path = PROJECT_ROOT) -> None:
    """
    Load KEY=VALUE pairs from ``.env`` then ``.env.local``.

    Variables already present in the process environment win.
    """

    for filename in ENV_FILES:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def normalize_postgres_url(url: str) -> str:
    """
    Rewrite postgres URLs to the psycopg (v3) driver SQLAlchemy should use.
    """

    for prefix, replacement in _POSTGRES_PREFIXES:
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def is_postgres_url(url: str) -> bool:
    return url.startswith("postgresql")


def resolve_database_url() -> str:
    """
    Pick the database URL.

    Priority: ``DATABASE_URL``; ``CLOUD_DATABASE_URL`` when ``ENVIRONMENT``
    is cloud-like; ``LOCAL_DATABASE_URL``; finally ``CLOUD_DATABASE_URL``.
    """

    load_env_files()

    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    direct_url = os.getenv("DATABASE_URL", "").strip()
    cloud_url = os.getenv("CLOUD_DATABASE_URL", "").strip()
    local_url = os.getenv("LOCAL_DATABASE_URL", "").strip()

    if environment in CLOUD_ENVIRONMENTS:
        candidates = (direct_url, cloud_url, local_url)
    else:
        candidates = (direct_url, local_url, cloud_url)

    for url in candidates:
        if url:
            return normalize_postgres_url(url)

    raise RuntimeError(
        "No database URL configured. Set DATABASE_URL, LOCAL_DATABASE_URL or CLOUD_DATABASE_URL."
    )
