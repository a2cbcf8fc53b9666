import pytest

from tool_catalog.core.dedup import dedupe
from tool_catalog.core.normalize import build_tags, normalize, normalize_all, popularity_rating
from tool_catalog.core.types import (
    CuratedLink,
    ExtensionRecord,
    ManualEntry,
    PackageRecord,
    RepoRecord,
    ToolSource,
)


def _repo(**overrides) -> RepoRecord:
    values = dict(
        name="claude-dev",
        full_name="x/claude-dev",
        url="https://github.com/x/claude-dev",
        owner="x",
        description="Autonomous coding agent right in your IDE",
        stars=99,
        language="TypeScript",
        license="MIT",
        topics=["claude", "agent"],
        last_updated="2024-05-01T00:00:00Z",
    )
    values.update(overrides)
    return RepoRecord(**values)


def test_repo_record_maps_to_candidate():
    tool = normalize(_repo(), ToolSource.REPO_SEARCH)

    assert tool.name == "Claude Dev"
    assert tool.slug == "claude-dev"
    assert tool.source == "github"
    assert tool.source_id == "x/claude-dev"
    assert tool.github_url == "https://github.com/x/claude-dev"
    assert tool.website_url == "https://github.com/x/claude-dev"
    assert tool.icon_url == "https://github.com/x.png?size=64"
    assert tool.stars == 99
    assert tool.download_count == 0
    assert tool.rating == pytest.approx(4.0)
    assert tool.tags == ["claude", "agent", "typescript"]
    assert tool.category == "AI Agent"
    assert tool.problem_solved.startswith("Enables building autonomous AI agents")


def test_repo_without_description_gets_placeholder():
    tool = normalize(_repo(description=""), ToolSource.REPO_SEARCH)
    assert tool.description == "A Claude AI tool by x"
    assert tool.full_description == ""


def test_short_desc_is_description_prefix_for_every_source():
    long_text = "Claude helper " * 30
    records = [
        (_repo(description=long_text), ToolSource.REPO_SEARCH),
        (
            ExtensionRecord(
                extension_id="id-1",
                name="claude-ext",
                publisher="pub",
                url="https://marketplace.visualstudio.com/items?itemName=pub.claude-ext",
                short_description=long_text,
            ),
            ToolSource.EXTENSION_GALLERY,
        ),
        (
            PackageRecord(name="claude-pkg", npm_url="https://www.npmjs.com/package/claude-pkg", description=long_text),
            ToolSource.PACKAGE_REGISTRY,
        ),
        (CuratedLink(name="Claude List", url="https://github.com/a/b", description=long_text), ToolSource.CURATED_LIST),
        (ManualEntry(name="Claude Manual", description=long_text), ToolSource.MANUAL),
    ]
    for record, source in records:
        tool = normalize(record, source)
        assert tool.short_desc == tool.description[:150]
        assert len(tool.short_desc) == 150


def test_extension_keeps_marketplace_rating_and_installs():
    record = ExtensionRecord(
        extension_id="ext-guid",
        name="claude-dev",
        publisher="saoudrizwan",
        url="https://marketplace.visualstudio.com/items?itemName=saoudrizwan.claude-dev",
        display_name="Claude Dev",
        publisher_display_name="Saoud Rizwan",
        short_description="Autonomous coding agent",
        installs=5000,
        rating=4.3,
        version="2.0.0",
    )
    tool = normalize(record, ToolSource.EXTENSION_GALLERY)

    assert tool.name == "Claude Dev"
    assert tool.category == "VS Code Extension"
    assert tool.rating == 4.3
    assert tool.install_count == 5000
    assert tool.extension_store_url == record.url
    assert tool.github_url == ""
    assert tool.creator_name == "Saoud Rizwan"
    assert tool.setup_difficulty == "beginner"
    assert tool.version == "2.0.0"


def test_unrated_extension_keeps_zero_rating():
    record = ExtensionRecord(extension_id="e", name="x-tool", publisher="p", url="https://m/x")
    tool = normalize(record, ToolSource.EXTENSION_GALLERY)
    assert tool.rating == 0.0
    assert tool.description == "VS Code extension by p"


def test_package_defaults():
    record = PackageRecord(
        name="claude-mcp-bridge",
        npm_url="https://www.npmjs.com/package/claude-mcp-bridge",
        description="Bridge for MCP servers",
        keywords=["mcp", "claude", "bridge", "ai", "llm", "extra"],
        repository="https://github.com/y/claude-mcp-bridge",
    )
    tool = normalize(record, ToolSource.PACKAGE_REGISTRY)

    assert tool.name == "Claude Mcp Bridge"
    assert tool.rating == 3.5
    assert tool.creator_name == "Unknown"
    assert tool.extension_store_url == record.npm_url
    assert tool.github_url == record.repository
    assert tool.tags == ["mcp", "claude", "bridge", "ai", "npm"]
    assert tool.category == "MCP Server"


def test_curated_link_only_sets_github_url_for_github_links():
    on_github = normalize(CuratedLink(name="Tool", url="https://github.com/a/tool"), ToolSource.CURATED_LIST)
    on_npm = normalize(CuratedLink(name="Pkg", url="https://www.npmjs.com/package/pkg"), ToolSource.CURATED_LIST)

    assert on_github.github_url == "https://github.com/a/tool"
    assert on_npm.github_url == ""
    assert on_npm.description == "Pkg"
    assert on_npm.rating == 4.0
    assert on_npm.source == "awesome-list"


def test_manual_entry_keeps_known_category_and_infers_unknown():
    known = normalize(
        ManualEntry(name="postgres", category="MCP Server", description="PostgreSQL via MCP", github="a/servers", stars=800),
        ToolSource.MANUAL,
    )
    unknown = normalize(
        ManualEntry(name="thing", category="Gadgets", description="Terminal helper"),
        ToolSource.MANUAL,
    )

    assert known.category == "MCP Server"
    assert known.github_url == "https://github.com/a/servers"
    assert known.stars == 800
    assert known.source == "manual"
    assert unknown.category == "CLI Tool"


def test_normalize_rejects_unknown_source():
    with pytest.raises(ValueError):
        normalize(_repo(), "gitlab")


def test_normalize_all_preserves_order():
    tools = normalize_all([_repo(name="b-tool"), _repo(name="a-tool")], ToolSource.REPO_SEARCH)
    assert [tool.slug for tool in tools] == ["b-tool", "a-tool"]


def test_popularity_rating_is_clamped():
    assert popularity_rating(0) == 3.0
    assert popularity_rating(99) == pytest.approx(4.0)
    assert popularity_rating(10**6) == 5.0


def test_build_tags_deduplicates_and_caps():
    assert build_tags(["a", "b", "a"], ["c", "", "d", "e", "f"]) == ["a", "b", "c", "d", "e"]


def test_extension_slug_follows_display_name():
    first = ExtensionRecord(extension_id="a", name="claude-dev", publisher="p", url="https://m/a", display_name="Claude Dev")
    second = ExtensionRecord(extension_id="b", name="cline", publisher="q", url="https://m/b", display_name="Claude Dev")

    slugs = {normalize(record, ToolSource.EXTENSION_GALLERY).slug for record in (first, second)}

    assert slugs == {"claude-dev"}


def test_curated_npm_link_merges_with_package_by_url():
    url = "https://www.npmjs.com/package/@acme/mcp-kit"
    package = normalize(
        PackageRecord(name="@acme/mcp-kit", npm_url=url, description="MCP toolkit for Claude"),
        ToolSource.PACKAGE_REGISTRY,
    )
    curated = normalize(CuratedLink(name="MCP Kit (Acme)x", url=url), ToolSource.CURATED_LIST)

    assert curated.extension_store_url == url
    assert curated.github_url == ""
    assert dedupe([package, curated]) == [package]
