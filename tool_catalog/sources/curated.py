"""
Curated awesome-list source.

Fetches a list repository's README through the GitHub API, decodes it and
pulls out markdown links that point at GitHub or npm. Lists that do not
follow the usual ``- [title](url) - description`` layout simply yield fewer
links.
"""

from __future__ import annotations

import base64
import binascii
import re

from ..core.types import CuratedLink, ToolSource
from ..errors import SourceError
from ..fetch import github_headers
from .base import Source

README_URL = "https://api.github.com/repos/{repo}/readme"

CURATED_LISTS = (
    "awesome-claude-dev/awesome-claude",
    "punkpeye/awesome-mcp-servers",
    "modelcontextprotocol/servers",
)

ALLOWED_DOMAINS = ("github.com", "npmjs.com")
CONTEXT_CHARS = 200
MAX_DESCRIPTION = 200

LINK_RE = re.compile(r"\[([^\]]+)\]\((https?://[^)]+)\)")
BULLET_RE = re.compile(r"[-•]\s*([^-•\n]+)")


class CuratedListSource(Source):
    """Extracts tool links from curated README files."""

    kind = ToolSource.CURATED_LIST
    queries = CURATED_LISTS

    def search(self, query: str) -> list[CuratedLink]:
        data = self._request(
            "GET",
            README_URL.format(repo=query),
            headers=github_headers(self.fetch_cfg),
        )
        if not isinstance(data, dict) or not data.get("content"):
            raise SourceError(f"README response for {query} has no content")
        return extract_links(decode_readme(data["content"]), query)

    def identity(self, record: CuratedLink) -> str:
        return record.url


def decode_readme(content: str) -> str:
    try:
        return base64.b64decode(content).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as exc:
        raise SourceError(f"README content is not valid base64: {exc}") from exc


def extract_links(markdown: str, source_repo: str) -> list[CuratedLink]:
    """Pull allow-listed ``[title](url)`` links out of README markdown.

    The description is the first bullet fragment found within
    CONTEXT_CHARS characters around the link, falling back to the title.
    """
    links: list[CuratedLink] = []
    seen: set[str] = set()
    for match in LINK_RE.finditer(markdown):
        title, url = match.group(1), match.group(2)
        if url in seen or not any(domain in url for domain in ALLOWED_DOMAINS):
            continue
        seen.add(url)
        start = max(0, match.start() - CONTEXT_CHARS)
        end = min(len(markdown), match.start() + CONTEXT_CHARS)
        bullet = BULLET_RE.search(markdown[start:end])
        description = bullet.group(1).strip() if bullet else title
        links.append(
            CuratedLink(
                name=title,
                url=url,
                description=description[:MAX_DESCRIPTION],
                source_repo=source_repo,
            )
        )
    return links
