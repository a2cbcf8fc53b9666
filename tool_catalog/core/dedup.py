"""
Candidate deduplication across all sources.

Two candidates are the same tool when they share:
1. A non-empty GitHub URL
2. A non-empty extension store URL
3. The same (source, source_id) pair
4. A normalized name (lowercase, alphanumerics only)
5. A slug

Matching is a linear scan over the kept candidates for every incoming one,
which is quadratic. That is fine for a few hundred records; at larger scale
an index keyed by URL and normalized name should replace the scan while
keeping the same merge semantics.
"""

from __future__ import annotations

from rapidfuzz import fuzz

from .text import normalize_name
from .types import CandidateTool


def dedupe(candidates: list[CandidateTool], name_threshold: int = 100) -> list[CandidateTool]:
    """Merge duplicate candidates into a unique list.

    The merge pass is repeated until nothing more collapses, so running
    ``dedupe`` on its own output returns the same list.

    Args:
        candidates: Normalized candidates from every source, in source order
        name_threshold: Similarity (0-100) for normalized-name matching.
                        100 requires identical normalized names.

    Returns:
        Unique candidates in first-seen order
    """
    kept = _dedupe_pass(candidates, name_threshold)
    while True:
        again = _dedupe_pass(kept, name_threshold)
        if len(again) == len(kept):
            return again
        kept = again


def _dedupe_pass(candidates: list[CandidateTool], name_threshold: int) -> list[CandidateTool]:
    seen: dict[str, CandidateTool] = {}

    for tool in candidates:
        existing_key = _find_match(tool, seen, name_threshold)
        if existing_key is None:
            seen[tool.slug] = tool
            continue
        existing = seen[existing_key]
        # The new record only takes over on strictly more stars, so ties keep the first seen
        if tool.stars > existing.stars:
            seen[existing_key] = merge_into(tool, existing)
        else:
            merge_into(existing, tool)

    return list(seen.values())


def merge_into(canonical: CandidateTool, other: CandidateTool) -> CandidateTool:
    """Back-fill ``canonical`` from ``other`` and max-merge the usage counts."""
    if not canonical.extension_store_url and other.extension_store_url:
        canonical.extension_store_url = other.extension_store_url
    if not canonical.github_url and other.github_url:
        canonical.github_url = other.github_url
    canonical.install_count = max(canonical.install_count, other.install_count)
    canonical.download_count = max(canonical.download_count, other.download_count)
    return canonical


def _find_match(
    tool: CandidateTool, seen: dict[str, CandidateTool], name_threshold: int
) -> str | None:
    if tool.github_url:
        for key, kept in seen.items():
            if kept.github_url == tool.github_url:
                return key
    if tool.extension_store_url:
        for key, kept in seen.items():
            if kept.extension_store_url == tool.extension_store_url:
                return key
    if tool.source_id:
        for key, kept in seen.items():
            if kept.source == tool.source and kept.source_id == tool.source_id:
                return key

    name = normalize_name(tool.name)
    for key, kept in seen.items():
        if _is_same_name(name, normalize_name(kept.name), name_threshold):
            return key

    for key, kept in seen.items():
        if key == tool.slug or kept.slug == tool.slug:
            return key
    return None


def _is_same_name(name: str, other: str, threshold: int) -> bool:
    """Compare two normalized names.

    Uses rapidfuzz's ratio below 100; at 100 the names must be identical.
    """
    if threshold >= 100:
        return name == other
    return fuzz.ratio(name, other) >= threshold
