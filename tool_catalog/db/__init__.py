"""SQLite persistence for the catalog seed."""

from .store import (
    BUNDLED_SCHEMA,
    ApplyStats,
    RebuildResult,
    apply_script,
    open_database,
    rebuild_database,
    split_sql,
    table_counts,
)

__all__ = [
    "BUNDLED_SCHEMA",
    "ApplyStats",
    "RebuildResult",
    "apply_script",
    "open_database",
    "rebuild_database",
    "split_sql",
    "table_counts",
]
