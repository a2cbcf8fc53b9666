"""
Tool Catalog - ingestion pipeline for the AI tool marketplace catalog.

This package collects tool listings from external catalogs (GitHub search,
the VS Code Marketplace, the npm registry and curated awesome lists),
normalizes them into a common shape, merges duplicates, filters low-signal
entries and emits a SQL seed script for the marketplace database.

Main entry point is the CLI via `tool-catalog collect` command.

Example:
    $ tool-catalog collect -o data/
"""

__all__ = [
    "__version__",
    "CandidateTool",
    "ToolSource",
    "dedupe",
    "normalize",
    "quality_filter",
    "slugify",
]
__version__ = "0.1.0"

from .core.dedup import dedupe
from .core.normalize import normalize
from .core.quality import quality_filter
from .core.text import slugify
from .core.types import CandidateTool, ToolSource
