"""Quality filter: drop low-signal candidates and rank the rest by popularity."""

from __future__ import annotations

from ..config import QualityConfig
from .types import CandidateTool, ToolSource


def popularity_score(tool: CandidateTool) -> int:
    return tool.stars * 10 + tool.install_count + tool.download_count


def passes(tool: CandidateTool, cfg: QualityConfig) -> bool:
    if not tool.name or len(tool.name) < cfg.min_name_length:
        return False
    if not tool.description or len(tool.description) < cfg.min_description_length:
        return False
    if tool.source == ToolSource.REPO_SEARCH.value and tool.stars < cfg.min_repo_stars:
        return False
    if (
        tool.source == ToolSource.EXTENSION_GALLERY.value
        and tool.install_count < cfg.min_extension_installs
        and tool.rating <= 0
    ):
        return False
    return True


def quality_filter(
    candidates: list[CandidateTool], cfg: QualityConfig | None = None
) -> list[CandidateTool]:
    """Keep candidates passing every rule, most popular first.

    ``sorted`` is stable, so equal scores keep their input order. The
    returned objects are the input objects themselves.
    """
    cfg = cfg or QualityConfig()
    kept = [tool for tool in candidates if passes(tool, cfg)]
    return sorted(kept, key=popularity_score, reverse=True)
