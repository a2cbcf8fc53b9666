"""
Local SQLite persistence for the generated seed.

The database handle is always opened through ``open_database``, which scopes
the connection to a ``with`` block and guarantees it is closed. Scripts are
applied statement by statement: a failing statement is counted and logged,
and the rest of the script still runs.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
from pathlib import Path
import re
import sqlite3
from typing import Iterator

from ..errors import SetupError
from ..utils.logging import log_event

BUNDLED_SCHEMA = Path(__file__).parent / "schema.sql"
MAX_ERROR_SAMPLES = 5

_INSERT_TABLE_RE = re.compile(r"^INSERT\s+(?:OR\s+\w+\s+)?INTO\s+(\w+)", re.IGNORECASE)


@dataclass
class ApplyStats:
    """Outcome of applying one SQL script.

    Attributes:
        statements: Statements attempted
        inserted: Rows inserted per table
        errors: Statements that failed
        samples: Messages of the first failures
    """

    statements: int = 0
    inserted: dict[str, int] = field(default_factory=dict)
    errors: int = 0
    samples: list[str] = field(default_factory=list)


@dataclass
class RebuildResult:
    db_path: Path
    schema: ApplyStats
    seed: ApplyStats
    counts: dict[str, int]


@contextmanager
def open_database(path: Path | str) -> Iterator[sqlite3.Connection]:
    """Open a SQLite connection, commit on success and always close it."""
    conn = sqlite3.connect(str(path))
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        yield conn
        conn.commit()
    finally:
        conn.close()


def split_sql(text: str) -> list[str]:
    """Split a SQL script into statements.

    Semicolons inside single-quoted strings (with ``''`` escapes) or inside
    parentheses do not end a statement, and ``--`` comments outside strings
    are dropped.
    """
    statements: list[str] = []
    current: list[str] = []
    in_quote = False
    depth = 0
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if in_quote:
            current.append(char)
            if char == "'":
                if i + 1 < length and text[i + 1] == "'":
                    current.append("'")
                    i += 1
                else:
                    in_quote = False
        elif char == "'":
            in_quote = True
            current.append(char)
        elif char == "-" and text.startswith("--", i):
            newline = text.find("\n", i)
            i = length if newline == -1 else newline
            continue
        elif char == ";" and depth == 0:
            _flush(current, statements)
            current = []
        else:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            current.append(char)
        i += 1

    _flush(current, statements)
    return statements


def _flush(current: list[str], statements: list[str]) -> None:
    statement = "".join(current).strip()
    if statement:
        statements.append(statement)


def apply_script(
    conn: sqlite3.Connection, text: str, logger: logging.Logger | None = None
) -> ApplyStats:
    """Execute every statement of ``text``, recovering from per-statement errors."""
    stats = ApplyStats()
    for statement in split_sql(text):
        stats.statements += 1
        try:
            cursor = conn.execute(statement)
        except sqlite3.Error as exc:
            stats.errors += 1
            if stats.errors <= MAX_ERROR_SAMPLES:
                message = f"{exc} :: {statement[:100]}"
                stats.samples.append(message)
                log_event(
                    logger,
                    f"Statement failed: {message}",
                    level=logging.WARNING,
                    event="statement_failed",
                    error=str(exc),
                    statement=statement[:200],
                )
            continue
        match = _INSERT_TABLE_RE.match(statement)
        if match and cursor.rowcount > 0:
            table = match.group(1).lower()
            stats.inserted[table] = stats.inserted.get(table, 0) + cursor.rowcount
    return stats


def table_counts(conn: sqlite3.Connection, tables: tuple[str, ...] = ("users", "categories", "tools")) -> dict[str, int]:
    return {table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] for table in tables}


def read_script(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SetupError(f"Cannot read SQL script {path}: {exc}") from exc


def rebuild_database(
    db_path: Path,
    seed_path: Path,
    schema_path: Path | None = None,
    logger: logging.Logger | None = None,
) -> RebuildResult:
    """Recreate ``db_path`` from the schema and the seed script.

    Raises:
        SetupError: If the schema or seed file cannot be read, or the old
                    database cannot be removed
    """
    schema_text = read_script(schema_path or BUNDLED_SCHEMA)
    seed_text = read_script(seed_path)

    if db_path.exists():
        try:
            db_path.unlink()
        except OSError as exc:
            raise SetupError(f"Cannot remove old database {db_path}: {exc}") from exc
        log_event(logger, f"Removed old database {db_path}", event="database_removed", path=str(db_path))
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with open_database(db_path) as conn:
        schema_stats = apply_script(conn, schema_text, logger)
        seed_stats = apply_script(conn, seed_text, logger)
        counts = table_counts(conn)

    log_event(
        logger,
        "Database rebuilt",
        event="database_rebuilt",
        path=str(db_path),
        errors=schema_stats.errors + seed_stats.errors,
        **{f"{table}_count": count for table, count in counts.items()},
    )
    return RebuildResult(db_path=db_path, schema=schema_stats, seed=seed_stats, counts=counts)
