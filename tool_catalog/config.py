"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP client settings shared by all sources
- SourcesConfig: Per-source enable flag, request delay and page size
- DedupConfig: Deduplication settings
- QualityConfig: Quality filter thresholds
- OutputConfig: Artifact locations
- DatabaseConfig: Local SQLite database used by rebuild-db
- SeedUserConfig: Catalog bot account that owns scraped tools
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Search queries are compiled into the source modules and are not configurable.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
import os
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for HTTP requests to external catalogs.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        github_token_env: Environment variable holding an optional GitHub token
    """

    timeout_seconds: float = 20.0
    retries: int = 1
    trust_env: bool = True
    user_agent: str = "ToolCatalog-DataCollector/1.0"
    github_token_env: str = "GITHUB_TOKEN"


@dataclass
class SourceConfig:
    """Configuration for a single source adapter.

    Attributes:
        enabled: Whether the adapter runs
        delay_seconds: Fixed sleep between requests to respect rate limits
        page_size: Results requested per query
    """

    enabled: bool = True
    delay_seconds: float = 1.0
    page_size: int = 50


@dataclass
class ManualSourceConfig:
    """Configuration for the hand-curated manual catalog.

    Attributes:
        enabled: Whether manual entries are loaded
        path: YAML file with a list of manual tool entries
        delay_seconds: Unused for local files, kept for the shared query loop
    """

    enabled: bool = False
    path: str = "manual_tools.yaml"
    delay_seconds: float = 0.0


@dataclass
class SourcesConfig:
    github: SourceConfig = field(default_factory=lambda: SourceConfig(delay_seconds=2.0, page_size=100))
    vscode: SourceConfig = field(default_factory=lambda: SourceConfig(delay_seconds=1.5, page_size=30))
    npm: SourceConfig = field(default_factory=lambda: SourceConfig(delay_seconds=1.0, page_size=50))
    curated: SourceConfig = field(default_factory=lambda: SourceConfig(delay_seconds=2.0, page_size=0))
    manual: ManualSourceConfig = field(default_factory=ManualSourceConfig)


@dataclass
class DedupConfig:
    """Configuration for candidate deduplication.

    Attributes:
        enabled: Whether to perform deduplication
        name_similarity_threshold: Fuzzy match threshold (0-100) for normalized names.
                                   100 requires identical normalized names.
    """

    enabled: bool = True
    name_similarity_threshold: int = 100


@dataclass
class QualityConfig:
    """Thresholds a candidate must meet to survive the quality filter.

    Attributes:
        min_name_length: Minimum display name length
        min_description_length: Minimum description length
        min_repo_stars: Minimum stars for GitHub repositories
        min_extension_installs: Minimum installs for an unrated VS Code extension
    """

    min_name_length: int = 2
    min_description_length: int = 10
    min_repo_stars: int = 2
    min_extension_installs: int = 5


@dataclass
class OutputConfig:
    """Configuration for output artifacts.

    Attributes:
        raw_dirname: Subfolder of the data dir for per-source raw dumps
        clean_dirname: Subfolder of the data dir for the cleaned list
        clean_filename: File name of the cleaned candidate list
        seed_path: Path of the generated SQL seed script
    """

    raw_dirname: str = "raw"
    clean_dirname: str = "clean"
    clean_filename: str = "tools-clean.json"
    seed_path: str = "db/seed.sql"


@dataclass
class DatabaseConfig:
    """Configuration for the local SQLite database.

    Attributes:
        path: SQLite database file
        schema_path: Schema script; the bundled schema is used when unset
    """

    path: str = "catalog.db"
    schema_path: str | None = None


@dataclass
class SeedUserConfig:
    """The bot account recorded as creator of every scraped tool."""

    username: str = "winterline_bot"
    email: str = "bot@winterline.dev"
    # "!" never matches a password hash, so the account cannot log in
    password_hash: str = "!"
    bio: str = "Automated data collection bot"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    quality: QualityConfig = field(default_factory=QualityConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    seed_user: SeedUserConfig = field(default_factory=SeedUserConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: Any, raw: dict[str, Any]) -> Any:
    """Merge raw YAML mapping into a config dataclass, section by section.

    Unknown keys are ignored so old config files keep loading.
    """
    updates: dict[str, Any] = {}
    known = {f.name for f in fields(base)}
    for key, value in raw.items():
        if key not in known:
            continue
        current = getattr(base, key)
        if is_dataclass(current) and isinstance(value, dict):
            updates[key] = _merge_config(current, value)
        else:
            updates[key] = value
    return replace(base, **updates)


def get_github_token(cfg: FetchConfig) -> str | None:
    """Get the GitHub token from the configured environment variable."""
    if not cfg.github_token_env:
        return None
    return os.getenv(cfg.github_token_env) or None
