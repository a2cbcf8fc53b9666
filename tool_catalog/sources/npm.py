"""npm registry search source."""

from __future__ import annotations

from typing import Any

from ..core.types import PackageRecord, ToolSource
from ..errors import SourceError
from .base import Source

NPM_SEARCH_URL = "https://registry.npmjs.org/-/v1/search"

NPM_QUERIES = (
    "claude",
    "anthropic",
    "mcp-server",
    "claude-ai",
    "model-context-protocol",
)


class NpmSource(Source):
    """Plain text search against the npm registry, one page per query."""

    kind = ToolSource.PACKAGE_REGISTRY
    queries = NPM_QUERIES

    def search(self, query: str) -> list[PackageRecord]:
        data = self._request(
            "GET",
            NPM_SEARCH_URL,
            params={"text": query, "size": self.source_cfg.page_size},
        )
        if not isinstance(data, dict) or not isinstance(data.get("objects"), list):
            raise SourceError("npm search response has no objects list")
        return [parse_package(obj["package"], query) for obj in data["objects"]]

    def identity(self, record: PackageRecord) -> str:
        return record.name


def parse_package(pkg: dict[str, Any], query: str) -> PackageRecord:
    links = pkg.get("links") or {}
    return PackageRecord(
        name=pkg["name"],
        npm_url=links.get("npm") or f"https://www.npmjs.com/package/{pkg['name']}",
        description=pkg.get("description") or "",
        version=pkg.get("version") or "",
        author=_author_name(pkg),
        homepage=links.get("homepage") or links.get("repository") or "",
        repository=links.get("repository") or "",
        keywords=list(pkg.get("keywords") or []),
        license=pkg.get("license") or "",
        date=pkg.get("date") or "",
        search_query=query,
    )


def _author_name(pkg: dict[str, Any]) -> str:
    author = pkg.get("author")
    if isinstance(author, str):
        return author
    if isinstance(author, dict) and author.get("name"):
        return author["name"]
    return (pkg.get("publisher") or {}).get("username") or ""
