"""
Hand-curated manual catalog source.

Reads tool entries maintained by hand in a YAML file, e.g.:

    - name: Claude Dev
      category: VS Code Extension
      description: Claude AI coding assistant for VS Code
      github: saoudrizwan/claude-dev
      stars: 3200
      installs: 45000
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from ..core.types import ManualEntry, ToolSource
from ..errors import SourceError
from ..utils.logging import log_event
from .base import Source


class ManualSource(Source):
    """Loads manual entries from the configured YAML file; no network access."""

    kind = ToolSource.MANUAL

    @property
    def queries(self) -> tuple[str, ...]:
        return (self.source_cfg.path,)

    def search(self, query: str) -> list[ManualEntry]:
        return load_manual_entries(Path(query), self.logger)

    def identity(self, record: ManualEntry) -> str:
        return record.name.lower()


def load_manual_entries(path: Path, logger: logging.Logger | None = None) -> list[ManualEntry]:
    """Load entries from a manual catalog file.

    Entries without a name or with a non-numeric count are logged and
    skipped; the rest of the file still loads.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except (OSError, yaml.YAMLError) as exc:
        raise SourceError(f"Cannot read manual catalog {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise SourceError(f"Manual catalog {path} must be a list of entries")

    entries: list[ManualEntry] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or not item.get("name"):
            continue
        try:
            stars = int(item.get("stars") or 0)
            installs = int(item.get("installs") or 0)
        except (TypeError, ValueError) as exc:
            log_event(
                logger,
                f"manual: skipping entry {item['name']!r}: {exc}",
                level=logging.WARNING,
                event="manual_entry_invalid",
                source="manual",
                path=str(path),
                index=index,
                error=f"{type(exc).__name__}: {exc}",
            )
            continue
        entries.append(
            ManualEntry(
                name=str(item["name"]),
                category=str(item.get("category") or ""),
                description=str(item.get("description") or item.get("desc") or ""),
                github=str(item.get("github") or ""),
                stars=stars,
                installs=installs,
                website=str(item.get("website") or ""),
            )
        )
    return entries
