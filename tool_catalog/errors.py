"""Exception types raised by the ingestion pipeline."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all tool catalog errors."""


class SourceError(CatalogError):
    """A single source query failed (network, HTTP status or payload shape).

    Source adapters catch this per query and treat the query as empty.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SeedError(CatalogError):
    """A candidate reached the seed emitter without its required fields."""


class SetupError(CatalogError):
    """Unrecoverable setup failure (output directories, schema file)."""
