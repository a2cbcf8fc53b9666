"""
Core domain models and business logic.

This package contains the candidate data model and the pure pipeline
stages (normalize, dedupe, quality filter) that do not touch the network.
"""

from .dedup import dedupe, merge_into
from .normalize import normalize, normalize_all, popularity_rating
from .quality import popularity_score, quality_filter
from .text import slugify
from .types import (
    CandidateTool,
    Category,
    CuratedLink,
    ExtensionRecord,
    ManualEntry,
    PackageRecord,
    RawRecord,
    RepoRecord,
    ToolSource,
)

__all__ = [
    "CandidateTool",
    "Category",
    "CuratedLink",
    "ExtensionRecord",
    "ManualEntry",
    "PackageRecord",
    "RawRecord",
    "RepoRecord",
    "ToolSource",
    "dedupe",
    "merge_into",
    "normalize",
    "normalize_all",
    "popularity_rating",
    "popularity_score",
    "quality_filter",
    "slugify",
]
