"""
Normalization of raw source records into CandidateTool.

Each source has its own mapping function; all of them are pure, so the same
record always yields the same candidate. Category, pricing, difficulty and
audience come from the keyword tables in ``heuristics``.
"""

from __future__ import annotations

import math
from typing import Callable

from .heuristics import (
    CATEGORIES,
    best_for,
    infer_audience,
    infer_category,
    infer_difficulty,
    infer_pricing,
    problem_solved_for,
)
from .text import short_description, slugify, title_from_identifier
from .types import (
    CandidateTool,
    CuratedLink,
    ExtensionRecord,
    ManualEntry,
    PackageRecord,
    RawRecord,
    RepoRecord,
    ToolSource,
)

MAX_TAGS = 5
PACKAGE_RATING = 3.5
CURATED_RATING = 4.0
EXTENSION_CATEGORY = "VS Code Extension"


def popularity_rating(stars: int) -> float:
    """Log-scaled rating in [1, 5] derived from a star count."""
    return min(5.0, max(1.0, 3 + math.log10(max(stars, 0) + 1) / 2))


def build_tags(*groups: list[str]) -> list[str]:
    """Merge tag groups into an ordered, de-duplicated list of at most MAX_TAGS."""
    tags: list[str] = []
    for group in groups:
        for tag in group:
            tag = (tag or "").strip()
            if tag and tag not in tags:
                tags.append(tag)
    return tags[:MAX_TAGS]


def normalize(record: RawRecord, source: ToolSource) -> CandidateTool:
    """Map a raw record from ``source`` into a CandidateTool.

    Raises:
        ValueError: If no mapping is registered for ``source``
    """
    mapper = _MAPPERS.get(ToolSource(source))
    if mapper is None:
        raise ValueError(f"Unsupported source: {source}")
    return mapper(record)


def normalize_all(records: list[RawRecord], source: ToolSource) -> list[CandidateTool]:
    return [normalize(record, source) for record in records]


def _from_repo(repo: RepoRecord) -> CandidateTool:
    description = repo.description or f"A Claude AI tool by {repo.owner}"
    category = infer_category(repo.name, repo.description, repo.topics)
    language = [repo.language.lower()] if repo.language else []
    return CandidateTool(
        name=title_from_identifier(repo.name),
        slug=slugify(repo.name),
        category=category,
        source=ToolSource.REPO_SEARCH.value,
        description=description,
        short_desc=short_description(description),
        full_description=repo.description,
        source_id=repo.full_name,
        creator_name=repo.owner,
        icon_url=f"https://github.com/{repo.owner}.png?size=64",
        website_url=repo.homepage or repo.url,
        github_url=repo.url,
        rating=popularity_rating(repo.stars),
        stars=repo.stars,
        tags=build_tags(repo.topics[:MAX_TAGS], language),
        license=repo.license,
        pricing_model=infer_pricing(repo.description),
        last_updated=repo.last_updated,
        problem_solved=problem_solved_for(category),
        target_audience=infer_audience(repo.description),
        setup_difficulty=infer_difficulty(repo.description, repo.topics),
        best_for=best_for(category),
    )


def _from_extension(ext: ExtensionRecord) -> CandidateTool:
    creator = ext.publisher_display_name or ext.publisher
    description = ext.short_description or f"VS Code extension by {creator}"
    return CandidateTool(
        name=ext.display_name or ext.name,
        slug=slugify(ext.display_name or ext.name),
        category=EXTENSION_CATEGORY,
        source=ToolSource.EXTENSION_GALLERY.value,
        description=description,
        short_desc=short_description(description),
        full_description=ext.short_description,
        source_id=ext.extension_id,
        version=ext.version,
        creator_name=creator,
        website_url=ext.url,
        extension_store_url=ext.url,
        # Marketplace rating is taken verbatim; 0 means unrated
        rating=ext.rating,
        install_count=ext.installs,
        tags=build_tags(["vscode", "extension", "claude", "ai"]),
        pricing_model=infer_pricing(ext.short_description),
        last_updated=ext.last_updated,
        problem_solved=problem_solved_for(EXTENSION_CATEGORY),
        target_audience="developers",
        setup_difficulty="beginner",
        best_for=best_for(EXTENSION_CATEGORY),
    )


def _from_package(pkg: PackageRecord) -> CandidateTool:
    description = pkg.description or f"npm package by {pkg.author or 'Unknown'}"
    category = infer_category(pkg.name, pkg.description, pkg.keywords)
    return CandidateTool(
        name=title_from_identifier(pkg.name),
        slug=slugify(pkg.name),
        category=category,
        source=ToolSource.PACKAGE_REGISTRY.value,
        description=description,
        short_desc=short_description(description),
        full_description=pkg.description,
        source_id=pkg.name,
        version=pkg.version,
        creator_name=pkg.author or "Unknown",
        website_url=pkg.homepage or pkg.npm_url,
        github_url=pkg.repository,
        extension_store_url=pkg.npm_url,
        rating=PACKAGE_RATING,
        tags=build_tags(pkg.keywords[:4], ["npm"]),
        license=pkg.license,
        pricing_model="free",
        last_updated=pkg.date,
        problem_solved=problem_solved_for(category),
        target_audience=infer_audience(pkg.description),
        setup_difficulty=infer_difficulty(pkg.description, pkg.keywords),
        best_for=best_for(category),
    )


def _from_curated(link: CuratedLink) -> CandidateTool:
    description = link.description or link.name
    category = infer_category(link.name, link.description)
    return CandidateTool(
        name=link.name,
        slug=slugify(link.name),
        category=category,
        source=ToolSource.CURATED_LIST.value,
        description=description,
        short_desc=short_description(description),
        full_description=link.description,
        source_id=link.url,
        creator_name="Community",
        website_url=link.url,
        github_url=link.url if "github.com" in link.url else "",
        extension_store_url=link.url if "npmjs.com" in link.url else "",
        rating=CURATED_RATING,
        tags=build_tags(["community", "awesome-list"]),
        pricing_model="free",
        problem_solved=problem_solved_for(category),
        target_audience="developers",
        setup_difficulty="intermediate",
        best_for=best_for(category),
    )


def _from_manual(entry: ManualEntry) -> CandidateTool:
    if entry.category in CATEGORIES:
        category = entry.category
    else:
        category = infer_category(entry.name, entry.description)
    github_url = f"https://github.com/{entry.github}" if entry.github else ""
    return CandidateTool(
        name=entry.name,
        slug=slugify(entry.name),
        category=category,
        source=ToolSource.MANUAL.value,
        description=entry.description,
        short_desc=short_description(entry.description),
        full_description=entry.description,
        source_id=slugify(entry.name),
        creator_name="Community",
        website_url=entry.website or github_url,
        github_url=github_url,
        rating=popularity_rating(entry.stars),
        install_count=entry.installs,
        stars=entry.stars,
        tags=build_tags([category.lower(), "claude", "ai"]),
        pricing_model=infer_pricing(entry.description),
        problem_solved=problem_solved_for(category),
        target_audience=infer_audience(entry.description),
        setup_difficulty=infer_difficulty(entry.description),
        best_for=best_for(category),
    )


_MAPPERS: dict[ToolSource, Callable[..., CandidateTool]] = {
    ToolSource.REPO_SEARCH: _from_repo,
    ToolSource.EXTENSION_GALLERY: _from_extension,
    ToolSource.PACKAGE_REGISTRY: _from_package,
    ToolSource.CURATED_LIST: _from_curated,
    ToolSource.MANUAL: _from_manual,
}
