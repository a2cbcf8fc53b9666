"""
Source adapters for external tool catalogs.

Each adapter fetches raw records of its own shape; the normalizer maps
them into CandidateTool.
"""

from .base import CollectStats, Source
from .curated import CuratedListSource, extract_links
from .factory import available_sources, create_source, enabled_sources
from .github import GitHubSource
from .manual import ManualSource
from .npm import NpmSource
from .vscode import VSCodeSource

__all__ = [
    "CollectStats",
    "Source",
    "GitHubSource",
    "VSCodeSource",
    "NpmSource",
    "CuratedListSource",
    "ManualSource",
    "extract_links",
    "available_sources",
    "create_source",
    "enabled_sources",
]
