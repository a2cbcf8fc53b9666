"""
Main pipeline orchestration for the tool catalog.

This module coordinates the entire workflow:
1. Collect raw records from every enabled source (sequentially)
2. Normalize them into candidates
3. Deduplicate across sources
4. Apply the quality filter and rank by popularity
5. Write the clean JSON list and render the SQL seed

Supports both progress bar and quiet modes. Source failures never stop a
run; only setup failures (output directories) and candidates missing a
required seed field do.
"""

from __future__ import annotations

from collections import Counter
from contextlib import nullcontext
from dataclasses import asdict, dataclass, field
import logging
from pathlib import Path
import time
from typing import Callable

import httpx
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .config import AppConfig
from .core.dedup import dedupe
from .core.normalize import normalize_all
from .core.quality import quality_filter
from .core.types import CandidateTool, RawRecord
from .errors import SetupError
from .fetch import build_client
from .output.artifacts import load_clean, write_clean, write_json, write_raw_dump
from .output.seed import write_seed
from .sources.base import CollectStats, Source
from .sources.factory import enabled_sources
from .utils.logging import log_event, setup_logging


@dataclass
class PipelineResult:
    """Counts and artifact locations of one pipeline run.

    Attributes:
        source_stats: Per-adapter query and record counts, in run order
        collected: Raw records across all sources
        normalized: Candidates produced by the normalizer
        deduplicated: Candidates left after merging duplicates
        tools: Final candidates in ranking order
        raw_paths: Raw dump written per source
        clean_path: Cleaned candidate list
        seed_path: SQL seed script
    """

    source_stats: list[CollectStats] = field(default_factory=list)
    collected: int = 0
    normalized: int = 0
    deduplicated: int = 0
    tools: list[CandidateTool] = field(default_factory=list)
    raw_paths: list[Path] = field(default_factory=list)
    clean_path: Path | None = None
    seed_path: Path | None = None

    @property
    def by_category(self) -> Counter[str]:
        return Counter(tool.category for tool in self.tools)

    @property
    def by_source(self) -> Counter[str]:
        return Counter(tool.source for tool in self.tools)


def run_pipeline(
    output_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
    transport: httpx.BaseTransport | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PipelineResult:
    """Run the complete catalog ingestion pipeline.

    Args:
        output_dir: Data directory receiving raw and clean artifacts
        cfg: Application configuration
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)
        transport: Optional httpx transport override (used by tests)
        sleep: Rate-limit sleep function (tests pass a no-op)

    Returns:
        PipelineResult with per-stage counts and artifact paths

    Raises:
        SetupError: If the output directories cannot be created
        SeedError: If a final candidate lacks a required field
    """
    console = console or Console()
    raw_dir, clean_path, seed_path = _prepare_paths(output_dir, cfg)
    logger = setup_logging(cfg.logging, output_dir)
    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        output=str(output_dir),
        seed=str(seed_path),
    )

    result = PipelineResult()
    candidates: list[CandidateTool] = []

    with build_client(cfg.fetch, transport=transport) as client:
        sources = enabled_sources(client, cfg, logger=logger, sleep=sleep)
        progress = _build_progress(console) if show_progress else None

        with progress or nullcontext():
            stage_task = None
            if progress is not None:
                stage_task = progress.add_task("Stages", total=len(sources) + 3)

            for source in sources:
                if progress is not None:
                    progress.update(stage_task, description=f"Collect {source.name}")
                records = _collect_source(source, raw_dir, result, logger)
                candidates.extend(normalize_all(records, source.kind))
                if progress is not None:
                    progress.advance(stage_task, 1)

            result.normalized = len(candidates)
            log_event(
                logger,
                f"Normalized {result.normalized} candidates",
                event="stage_complete",
                stage="normalize",
                count=result.normalized,
            )

            if progress is not None:
                progress.update(stage_task, description="Deduplicate")
            if cfg.dedup.enabled:
                candidates = dedupe(candidates, cfg.dedup.name_similarity_threshold)
            result.deduplicated = len(candidates)
            log_event(
                logger,
                f"{result.deduplicated} candidates after deduplication",
                event="stage_complete",
                stage="dedupe",
                count=result.deduplicated,
            )
            if progress is not None:
                progress.advance(stage_task, 1)
                progress.update(stage_task, description="Quality filter")

            result.tools = quality_filter(candidates, cfg.quality)
            log_event(
                logger,
                f"{len(result.tools)} candidates passed the quality filter",
                event="stage_complete",
                stage="quality",
                count=len(result.tools),
            )
            if progress is not None:
                progress.advance(stage_task, 1)
                progress.update(stage_task, description="Write outputs")

            result.clean_path = write_clean(clean_path, result.tools)
            result.seed_path = write_seed(result.tools, seed_path, cfg.seed_user)
            write_json(output_dir / "summary.json", summary_dict(result))
            if progress is not None:
                progress.advance(stage_task, 1)

    log_event(
        logger,
        "Pipeline complete",
        event="pipeline_complete",
        collected=result.collected,
        normalized=result.normalized,
        deduplicated=result.deduplicated,
        kept=len(result.tools),
        failed_queries=sum(stats.failed_queries for stats in result.source_stats),
    )
    _render_summary(result, console)
    return result


def regenerate_seed(
    clean_path: Path,
    seed_path: Path,
    cfg: AppConfig,
) -> tuple[int, Path]:
    """Render the seed from an existing clean list without any network access.

    Raises:
        SetupError: If the clean list is missing or malformed
        SeedError: If a candidate lacks a required field
    """
    try:
        tools = load_clean(clean_path)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        raise SetupError(f"Cannot load clean tool list {clean_path}: {exc}") from exc
    try:
        seed_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"Cannot create seed directory {seed_path.parent}: {exc}") from exc
    return len(tools), write_seed(tools, seed_path, cfg.seed_user)


def _collect_source(
    source: Source,
    raw_dir: Path,
    result: PipelineResult,
    logger: logging.Logger,
) -> list[RawRecord]:
    records = source.collect()
    result.source_stats.append(source.stats)
    result.collected += len(records)
    result.raw_paths.append(write_raw_dump(raw_dir, source.name, records))
    log_event(
        logger,
        f"{source.name}: collected {len(records)} records "
        f"({source.stats.failed_queries}/{source.stats.queries} queries failed)",
        event="source_complete",
        source=source.name,
        records=len(records),
        queries=source.stats.queries,
        failed_queries=source.stats.failed_queries,
    )
    return records


def _prepare_paths(output_dir: Path, cfg: AppConfig) -> tuple[Path, Path, Path]:
    """Create the artifact directories and return (raw dir, clean file, seed file).

    A relative seed path is resolved against the working directory.
    """
    raw_dir = output_dir / cfg.output.raw_dirname
    clean_path = output_dir / cfg.output.clean_dirname / cfg.output.clean_filename
    seed_path = Path(cfg.output.seed_path)
    for directory in (raw_dir, clean_path.parent, seed_path.parent):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SetupError(f"Cannot create output directory {directory}: {exc}") from exc
    return raw_dir, clean_path, seed_path


def _build_progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def _render_summary(result: PipelineResult, console: Console) -> None:
    """Display per-source, per-stage and per-category counts."""
    sources = Table(title="Sources")
    sources.add_column("Source")
    sources.add_column("Queries", justify="right")
    sources.add_column("Failed", justify="right")
    sources.add_column("Records", justify="right")
    sources.add_column("Kept", justify="right")
    kept_by_source = result.by_source
    for stats in result.source_stats:
        sources.add_row(
            stats.source,
            str(stats.queries),
            str(stats.failed_queries),
            str(stats.records),
            str(kept_by_source.get(stats.source, 0)),
        )
    console.print(sources)

    categories = Table(title="Categories")
    categories.add_column("Category")
    categories.add_column("Tools", justify="right")
    for category, count in result.by_category.most_common():
        categories.add_row(category, str(count))
    console.print(categories)

    console.print(
        "[bold]Pipeline summary[/bold]: "
        f"collected={result.collected}, normalized={result.normalized}, "
        f"deduplicated={result.deduplicated}, kept={len(result.tools)}"
    )


def summary_dict(result: PipelineResult) -> dict:
    """Plain-data view of a run, written next to the artifacts."""
    return {
        "collected": result.collected,
        "normalized": result.normalized,
        "deduplicated": result.deduplicated,
        "kept": len(result.tools),
        "sources": [asdict(stats) for stats in result.source_stats],
        "by_category": dict(result.by_category),
        "by_source": dict(result.by_source),
    }
