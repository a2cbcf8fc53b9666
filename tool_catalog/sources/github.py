"""GitHub repository search source."""

from __future__ import annotations

from typing import Any

from ..core.types import RepoRecord, ToolSource
from ..errors import SourceError
from ..fetch import github_headers
from .base import Source

GITHUB_SEARCH_URL = "https://api.github.com/search/repositories"

GITHUB_QUERIES = (
    "Claude API",
    "Claude coding assistant",
    "Claude VS Code extension",
    "Anthropic Claude integration",
    "Claude AI tool",
    "Claude MCP server",
    "Claude Code skill",
    "Anthropic API wrapper",
    "MCP server",
    "Model Context Protocol",
    "Claude SDK",
    "Claude plugin",
    "Claude assistant",
    "Claude automation",
    "Anthropic SDK",
    "Claude AI integration",
    "Claude developer tool",
    "Claude API client",
    "Claude chatbot",
    "Claude agent",
    "Anthropic API client",
    "Claude CLI",
)


class GitHubSource(Source):
    """Searches GitHub repositories sorted by stars.

    Unauthenticated search allows about 10 requests per minute, hence the
    default two second delay. Set GITHUB_TOKEN for higher limits.
    """

    kind = ToolSource.REPO_SEARCH
    queries = GITHUB_QUERIES

    def search(self, query: str) -> list[RepoRecord]:
        data = self._request(
            "GET",
            GITHUB_SEARCH_URL,
            params={
                "q": query,
                "sort": "stars",
                "order": "desc",
                "per_page": self.source_cfg.page_size,
            },
            headers=github_headers(self.fetch_cfg),
        )
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise SourceError("GitHub search response has no items list")
        return [parse_repo(item, query) for item in data["items"]]

    def identity(self, record: RepoRecord) -> str:
        return record.url

    def post_filter(self, records: list[RepoRecord]) -> list[RepoRecord]:
        # Drop archived repositories and those nobody starred
        return [repo for repo in records if not repo.archived and repo.stars > 0]


def parse_repo(item: dict[str, Any], query: str) -> RepoRecord:
    license_info = item.get("license") or {}
    owner = item.get("owner") or {}
    return RepoRecord(
        name=item["name"],
        full_name=item["full_name"],
        url=item["html_url"],
        owner=owner.get("login", ""),
        description=item.get("description") or "",
        stars=item.get("stargazers_count") or 0,
        forks=item.get("forks_count") or 0,
        language=item.get("language") or "",
        license=license_info.get("spdx_id") or "",
        topics=list(item.get("topics") or []),
        last_updated=item.get("updated_at") or "",
        created_at=item.get("created_at") or "",
        homepage=item.get("homepage") or "",
        open_issues=item.get("open_issues_count") or 0,
        watchers=item.get("watchers_count") or 0,
        default_branch=item.get("default_branch") or "",
        archived=bool(item.get("archived")),
        search_query=query,
    )
