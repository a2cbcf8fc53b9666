"""
Command-line interface for the tool catalog pipeline.

Uses Typer to provide three commands: ``collect`` runs the full ingestion
pipeline, ``seed`` re-renders the SQL seed from an existing clean list, and
``rebuild-db`` recreates the local SQLite database from schema and seed.
Supports loading .env files for the optional GitHub token.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import AppConfig, load_config
from .db.store import rebuild_database
from .errors import SeedError, SetupError
from .runner import regenerate_seed, run_pipeline
from .sources.factory import available_sources
from .utils.logging import setup_logging

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, log_level: str | None) -> AppConfig:
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    return cfg


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=1)


@app.command()
def collect(
    output: Path = typer.Option(Path("data"), "--output", "-o", help="Data directory for raw and clean JSON."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    seed: Path | None = typer.Option(None, "--seed", help="Override the seed script path."),
    source: list[str] | None = typer.Option(
        None,
        "--source",
        "-s",
        help="Run only these sources (repeatable). Defaults to every enabled source.",
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Collect tools from every source and write the clean list and SQL seed.

    Args:
        output: Directory receiving raw dumps and the clean list
        config: Optional path to YAML config file
        seed: Seed script path (defaults to output.seed_path)
        source: Restrict the run to the named sources
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    cfg = _load(config, log_level)
    if seed is not None:
        cfg.output.seed_path = str(seed)
    if source:
        _select_sources(cfg, source)

    try:
        result = run_pipeline(output, cfg, show_progress=progress, console=console)
    except (SetupError, SeedError) as exc:
        _fail(exc)
    console.print(f"Seed generated: {result.seed_path} ({len(result.tools)} tools)")


@app.command()
def seed(
    output: Path = typer.Option(Path("data"), "--output", "-o", help="Data directory holding the clean list."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    seed_path: Path | None = typer.Option(None, "--seed", help="Override the seed script path."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Re-render the SQL seed from an existing clean tool list (no network)."""
    cfg = _load(config, log_level)
    clean_path = output / cfg.output.clean_dirname / cfg.output.clean_filename
    target = seed_path or Path(cfg.output.seed_path)
    try:
        count, path = regenerate_seed(clean_path, target, cfg)
    except (SetupError, SeedError) as exc:
        _fail(exc)
    console.print(f"Seed generated: {path} ({count} tools)")


@app.command("rebuild-db")
def rebuild_db(
    db: Path | None = typer.Option(None, "--db", help="SQLite database file."),
    seed_path: Path | None = typer.Option(None, "--seed", help="Seed script to apply."),
    schema: Path | None = typer.Option(None, "--schema", help="Schema script; bundled schema by default."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Recreate the local SQLite database from the schema and the seed script."""
    cfg = _load(config, log_level)
    logger = setup_logging(cfg.logging, None)
    schema_path = schema or (Path(cfg.database.schema_path) if cfg.database.schema_path else None)
    try:
        result = rebuild_database(
            db or Path(cfg.database.path),
            seed_path or Path(cfg.output.seed_path),
            schema_path=schema_path,
            logger=logger,
        )
    except SetupError as exc:
        _fail(exc)

    errors = result.schema.errors + result.seed.errors
    counts = ", ".join(f"{table}={count}" for table, count in result.counts.items())
    console.print(f"Database rebuilt: {result.db_path} ({counts}, errors={errors})")


def _select_sources(cfg: AppConfig, names: list[str]) -> None:
    wanted = {name.lower().strip() for name in names}
    unknown = wanted - set(available_sources())
    if unknown:
        supported = ", ".join(available_sources())
        raise typer.BadParameter(f"Unknown source(s): {', '.join(sorted(unknown))}. Supported: {supported}")
    for name in available_sources():
        getattr(cfg.sources, name).enabled = name in wanted


if __name__ == "__main__":
    app()
