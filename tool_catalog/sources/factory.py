"""Source factory and registry; registration order is run order."""

from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

from ..config import AppConfig
from .base import Source
from .curated import CuratedListSource
from .github import GitHubSource
from .manual import ManualSource
from .npm import NpmSource
from .vscode import VSCodeSource


SourceBuilder = type[Source]

_SOURCE_REGISTRY: dict[str, SourceBuilder] = {
    "github": GitHubSource,
    "vscode": VSCodeSource,
    "npm": NpmSource,
    "curated": CuratedListSource,
    "manual": ManualSource,
}


def available_sources() -> list[str]:
    """Return registered source names in run order."""
    return list(_SOURCE_REGISTRY.keys())


def create_source(
    name: str,
    client: httpx.Client,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Source:
    """Build a source adapter instance from runtime config."""
    key = name.lower().strip()
    builder = _SOURCE_REGISTRY.get(key)
    if builder is None:
        supported = ", ".join(available_sources())
        raise ValueError(f"Unsupported source: {name}. Supported: {supported}")
    return builder(client, cfg.fetch, getattr(cfg.sources, key), logger=logger, sleep=sleep)


def enabled_sources(
    client: httpx.Client,
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> list[Source]:
    """Build every source whose config section is enabled, in run order."""
    return [
        create_source(name, client, cfg, logger=logger, sleep=sleep)
        for name in available_sources()
        if getattr(cfg.sources, name).enabled
    ]
