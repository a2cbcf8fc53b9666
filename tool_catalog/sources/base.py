"""
Abstract base class for catalog source adapters.

New sources should inherit from Source, set ``kind`` and ``queries``, and
implement ``search`` and ``identity``. The base class owns the query loop:
the fixed delay between requests, within-source de-duplication, and turning
a failed query into an empty contribution.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import time
from typing import Any, Callable, Sequence

import httpx

from ..config import FetchConfig, ManualSourceConfig, SourceConfig
from ..core.types import RawRecord, ToolSource
from ..errors import SourceError
from ..fetch import request_json
from ..utils.logging import log_event


@dataclass
class CollectStats:
    """Statistics for one adapter run.

    Attributes:
        source: Source kind value (e.g. "github")
        queries: Number of queries attempted
        failed_queries: Queries that failed and contributed nothing
        fetched: Records returned across all queries, before de-duplication
        records: Unique records kept after post-filtering
    """

    source: str
    queries: int = 0
    failed_queries: int = 0
    fetched: int = 0
    records: int = 0


class Source(ABC):
    """Abstract base class for source adapters.

    Defines the per-query search interface. Concrete implementations
    (e.g., GitHubSource) must implement ``search`` and ``identity``.
    """

    kind: ToolSource
    queries: Sequence[str] = ()

    def __init__(
        self,
        client: httpx.Client,
        fetch_cfg: FetchConfig,
        source_cfg: SourceConfig | ManualSourceConfig,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.fetch_cfg = fetch_cfg
        self.source_cfg = source_cfg
        self.logger = logger or logging.getLogger("tool_catalog")
        self._sleep = sleep
        self.stats = CollectStats(source=self.kind.value)

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def search(self, query: str) -> list[RawRecord]:
        """Fetch the raw records for one query.

        Args:
            query: Search text (or list identifier) to fetch

        Returns:
            Raw records in source order

        Raises:
            SourceError: If the request fails or the payload is malformed
        """
        raise NotImplementedError

    @abstractmethod
    def identity(self, record: RawRecord) -> str:
        """Return the source-native key (URL or ID) used to drop repeats."""
        raise NotImplementedError

    def post_filter(self, records: list[RawRecord]) -> list[RawRecord]:
        return records

    def collect(self) -> list[RawRecord]:
        """Run every query in order and return unique records.

        A failing query is logged and contributes nothing; the loop always
        runs to completion.
        """
        self.stats = CollectStats(source=self.name)
        seen: set[str] = set()
        collected: list[RawRecord] = []

        for index, query in enumerate(self.queries):
            if index and self.source_cfg.delay_seconds > 0:
                # Rate limit: fixed wait between requests
                self._sleep(self.source_cfg.delay_seconds)
            self.stats.queries += 1
            try:
                records = self.search(query)
            except Exception as exc:  # noqa: BLE001
                self.stats.failed_queries += 1
                log_event(
                    self.logger,
                    f"{self.name}: query {query!r} failed: {exc}",
                    level=logging.WARNING,
                    event="source_query_failed",
                    source=self.name,
                    query=query,
                    error=f"{type(exc).__name__}: {exc}",
                )
                continue

            self.stats.fetched += len(records)
            for record in records:
                key = self.identity(record)
                if key in seen:
                    continue
                seen.add(key)
                collected.append(record)
            log_event(
                self.logger,
                f"{self.name}: {query!r} returned {len(records)} ({len(collected)} unique total)",
                event="source_query_complete",
                source=self.name,
                query=query,
                found=len(records),
                unique_total=len(collected),
            )

        kept = self.post_filter(collected)
        self.stats.records = len(kept)
        return kept

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request through the shared client, raising SourceError on failure."""
        result = request_json(self.client, method, url, self.fetch_cfg.retries, sleep=self._sleep, **kwargs)
        if result.error:
            raise SourceError(result.error, status_code=result.status_code)
        return result.data
