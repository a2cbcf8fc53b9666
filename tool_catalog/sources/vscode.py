"""VS Code Marketplace gallery source."""

from __future__ import annotations

from typing import Any

from ..core.types import ExtensionRecord, ToolSource
from ..errors import SourceError
from .base import Source

GALLERY_URL = "https://marketplace.visualstudio.com/_apis/public/gallery/extensionquery"
LISTING_URL = "https://marketplace.visualstudio.com/items?itemName={publisher}.{extension}"

VSCODE_QUERIES = (
    "Claude",
    "Anthropic",
    "Claude AI",
    "Claude coding",
    "AI assistant",
    "code completion AI",
    "MCP",
)

# Gallery query constants
FILTER_TARGET = 8
FILTER_SEARCH_TEXT = 10
SORT_BY_INSTALLS = 4
SORT_DESCENDING = 2
FLAGS_WITH_STATISTICS = 914


def build_query_payload(query: str, page_size: int) -> dict[str, Any]:
    return {
        "filters": [
            {
                "criteria": [
                    {"filterType": FILTER_TARGET, "value": "Microsoft.VisualStudio.Code"},
                    {"filterType": FILTER_SEARCH_TEXT, "value": query},
                ],
                "pageNumber": 1,
                "pageSize": page_size,
                "sortBy": SORT_BY_INSTALLS,
                "sortOrder": SORT_DESCENDING,
            }
        ],
        "assetTypes": [],
        "flags": FLAGS_WITH_STATISTICS,
    }


class VSCodeSource(Source):
    """Queries the marketplace gallery API, most installed first."""

    kind = ToolSource.EXTENSION_GALLERY
    queries = VSCODE_QUERIES

    def search(self, query: str) -> list[ExtensionRecord]:
        data = self._request(
            "POST",
            GALLERY_URL,
            json_body=build_query_payload(query, self.source_cfg.page_size),
            headers={"Accept": "application/json;api-version=3.0-preview.1"},
        )
        try:
            extensions = data["results"][0]["extensions"]
        except (KeyError, IndexError, TypeError) as exc:
            raise SourceError(f"Gallery response has no extensions: {exc}") from exc
        return [parse_extension(ext, query) for ext in extensions or []]

    def identity(self, record: ExtensionRecord) -> str:
        return record.extension_id


def flatten_statistics(statistics: list[dict[str, Any]] | None) -> dict[str, float]:
    """Turn the gallery's ``[{statisticName, value}]`` list into a flat map."""
    stats: dict[str, float] = {}
    for item in statistics or []:
        name = item.get("statisticName")
        if name:
            stats[name] = item.get("value") or 0
    return stats


def parse_extension(ext: dict[str, Any], query: str) -> ExtensionRecord:
    publisher = ext.get("publisher") or {}
    publisher_name = publisher.get("publisherName", "")
    stats = flatten_statistics(ext.get("statistics"))
    versions = ext.get("versions") or []
    latest = versions[0] if versions else {}
    return ExtensionRecord(
        extension_id=ext["extensionId"],
        name=ext["extensionName"],
        publisher=publisher_name,
        url=LISTING_URL.format(publisher=publisher_name, extension=ext["extensionName"]),
        display_name=ext.get("displayName") or "",
        publisher_display_name=publisher.get("displayName") or "",
        short_description=ext.get("shortDescription") or "",
        installs=round(stats.get("install", 0)),
        rating=round(stats.get("averagerating", 0), 1),
        rating_count=round(stats.get("ratingcount", 0)),
        version=latest.get("version", ""),
        last_updated=latest.get("lastUpdated", ""),
        search_query=query,
    )
