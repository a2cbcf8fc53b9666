"""
Core data types for the tool catalog pipeline.

This module defines the fundamental data structures used throughout the pipeline:
- ToolSource: Which external catalog a record came from
- RepoRecord / ExtensionRecord / PackageRecord / CuratedLink / ManualEntry:
  Raw records as collected by each source adapter
- CandidateTool: A normalized tool listing flowing through dedup, filter and seed
- Category: A category row derived from the final candidate list
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any


class ToolSource(str, Enum):
    """Origin adapter of a record.

    Values are the strings stored in the ``tools.source`` column.
    """

    REPO_SEARCH = "github"
    EXTENSION_GALLERY = "vscode"
    PACKAGE_REGISTRY = "npm"
    CURATED_LIST = "awesome-list"
    MANUAL = "manual"


@dataclass
class RepoRecord:
    """A repository returned by the GitHub repository search.

    Attributes:
        name: Repository name (machine name, e.g. "claude-dev")
        full_name: "owner/repo" identifier
        description: Repository description, empty when unset
        url: HTML URL of the repository
        stars: Stargazer count
        topics: Repository topics in API order
        archived: Whether the repository is archived
        search_query: The query that first surfaced this repository
    """

    name: str
    full_name: str
    url: str
    owner: str
    description: str = ""
    stars: int = 0
    forks: int = 0
    language: str = ""
    license: str = ""
    topics: list[str] = field(default_factory=list)
    last_updated: str = ""
    created_at: str = ""
    homepage: str = ""
    open_issues: int = 0
    watchers: int = 0
    default_branch: str = ""
    archived: bool = False
    search_query: str = ""


@dataclass
class ExtensionRecord:
    """An extension returned by the VS Code Marketplace gallery query.

    Attributes:
        extension_id: Gallery GUID of the extension
        name: Extension machine name
        display_name: Human readable name shown in the marketplace
        installs: Install count from the flattened statistics
        rating: Average rating rounded to one decimal, 0 when unrated
        url: Canonical marketplace listing URL
    """

    extension_id: str
    name: str
    publisher: str
    url: str
    display_name: str = ""
    publisher_display_name: str = ""
    short_description: str = ""
    installs: int = 0
    rating: float = 0.0
    rating_count: int = 0
    version: str = ""
    last_updated: str = ""
    search_query: str = ""


@dataclass
class PackageRecord:
    """A package returned by the npm registry search."""

    name: str
    npm_url: str
    description: str = ""
    version: str = ""
    author: str = ""
    homepage: str = ""
    repository: str = ""
    keywords: list[str] = field(default_factory=list)
    license: str = ""
    date: str = ""
    search_query: str = ""


@dataclass
class CuratedLink:
    """A link extracted from a curated awesome-list README."""

    name: str
    url: str
    description: str = ""
    source_repo: str = ""


@dataclass
class ManualEntry:
    """A hand-curated tool entry loaded from the manual catalog file.

    Attributes:
        name: Display name of the tool
        category: Category name; inferred when empty or outside the taxonomy
        description: Short description
        github: "owner/repo" path on GitHub, empty when unknown
        stars: Known star count
        installs: Known install count
        website: Homepage or store URL
    """

    name: str
    category: str = ""
    description: str = ""
    github: str = ""
    stars: int = 0
    installs: int = 0
    website: str = ""


RawRecord = RepoRecord | ExtensionRecord | PackageRecord | CuratedLink | ManualEntry


@dataclass
class CandidateTool:
    """A normalized tool listing.

    Created by the normalizer from one raw record, possibly mutated by the
    deduplicator (URLs back-filled, counts max-merged) and read-only after
    the quality filter. Text fields default to "" and counts to 0.
    """

    name: str
    slug: str
    category: str
    source: str
    description: str = ""
    short_desc: str = ""
    full_description: str = ""
    source_id: str = ""
    version: str = ""
    creator_name: str = ""
    icon_url: str = ""
    website_url: str = ""
    github_url: str = ""
    extension_store_url: str = ""
    rating: float = 0.0
    download_count: int = 0
    install_count: int = 0
    stars: int = 0
    tags: list[str] = field(default_factory=list)
    license: str = ""
    pricing_model: str = "free"
    last_updated: str = ""
    problem_solved: str = ""
    target_audience: str = "developers"
    setup_difficulty: str = "intermediate"
    best_for: str = ""
    alternatives: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CandidateTool":
        """Build a candidate from a serialized dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass(frozen=True)
class Category:
    name: str
    slug: str
    icon: str = ""
