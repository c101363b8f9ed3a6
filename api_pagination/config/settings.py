"""
Central configuration for the api_pagination package.

All tunables live here. Nothing is hardcoded in module code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache


def _project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: two levels up from config/settings.py
    return Path(__file__).resolve().parent.parent.parent


@dataclass(frozen=True)
class PaginationSettings:
    """Page sizing and cursor settings shared by every pager."""

    # Page size used when the caller asks for nothing (or for <= 0)
    per_page_default: int = 25

    # Hard upper bound on any page size
    per_page_max: int = 100

    # Over-fetch factor for client-side filtered pagination.
    # Each batch fetches per_page * multiplier rows.
    pessimistic_multiplier: int = 2

    # Ordering column used by the cursor pagers when none is given
    default_column: str = "created_at"

    # Wire format of cursor tokens, reported in error messages.
    # %N is nine fractional digits (nanoseconds).
    timestamp_format: str = "%Y-%m-%dT%H:%M:%S.%N%z"


@dataclass(frozen=True)
class StorageSettings:
    """Settings for SQLite storage."""

    # Path to the SQLite database file (relative to the data dir)
    db_name: str = "api_pagination.db"

    # SQLite journal mode
    journal_mode: str = "WAL"

    # SQLite busy timeout (milliseconds): how long to wait for a locked DB
    busy_timeout_ms: int = 5000


@dataclass(frozen=True)
class ApiSettings:
    """Settings for the demo HTTP service."""

    title: str = "api_pagination demo"
    version: str = "0.1.0"

    # Number of days back the seed command spreads generated items over
    seed_days: int = 30


@dataclass
class Settings:
    """
    Top-level settings container. Aggregates all subsystem settings.

    Usage:
        settings = get_settings()
        print(settings.pagination.per_page_max)
        print(settings.db_path)
    """

    project_root: Path = field(default_factory=_project_root)
    pagination: PaginationSettings = field(default_factory=PaginationSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    api: ApiSettings = field(default_factory=ApiSettings)

    @property
    def data_dir(self) -> Path:
        """Root directory for all runtime data (DB, logs)."""
        return self.project_root / "data"

    @property
    def db_path(self) -> Path:
        """Full path to the SQLite database file."""
        return self.data_dir / "db" / self.storage.db_name

    @property
    def logs_dir(self) -> Path:
        """Root directory for log files."""
        return self.data_dir / "logs"

    def ensure_dirs(self) -> None:
        """Create all required data directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns the singleton Settings instance.

    Call this instead of constructing Settings() directly so the entire
    application shares one config object. Directories are created by the
    entrypoints (server, CLI), not here, so importing a pager never touches
    the filesystem.
    """
    return Settings()
