from tool_catalog.core.dedup import dedupe
from tool_catalog.core.types import CandidateTool


def _tool(name: str, source: str = "github", **overrides) -> CandidateTool:
    values = dict(
        name=name,
        slug=name.lower().replace(" ", "-"),
        category="Other",
        source=source,
        description=f"{name} description",
    )
    values.update(overrides)
    return CandidateTool(**values)


def test_same_normalized_name_merges_urls_and_installs():
    repo = _tool("Claude Dev", github_url="https://github.com/x/claude-dev", stars=100)
    ext = _tool(
        "claude dev",
        source="vscode",
        slug="claude-dev-ext",
        extension_store_url="https://marketplace.visualstudio.com/items?itemName=x.claude-dev",
        install_count=5000,
    )

    result = dedupe([repo, ext])

    assert len(result) == 1
    merged = result[0]
    assert merged is repo
    assert merged.install_count == 5000
    assert merged.github_url == "https://github.com/x/claude-dev"
    assert merged.extension_store_url == "https://marketplace.visualstudio.com/items?itemName=x.claude-dev"


def test_more_stars_takes_over_as_canonical():
    first = _tool("Alpha", source="awesome-list", github_url="https://github.com/a/alpha", install_count=40)
    second = _tool("Alpha Tool", github_url="https://github.com/a/alpha", stars=50, download_count=7)

    result = dedupe([first, second])

    assert result == [second]
    assert second.install_count == 40
    assert second.download_count == 7


def test_star_tie_keeps_first_seen():
    first = _tool("Beta", stars=5, website_url="first")
    second = _tool("beta", stars=5, website_url="second", install_count=9)

    result = dedupe([first, second])

    assert len(result) == 1
    assert result[0] is first
    assert result[0].install_count == 9


def test_three_way_tie_keeps_first_seen():
    tools = [_tool("Gamma", stars=3, website_url=str(i)) for i in range(3)]
    result = dedupe(tools)
    assert result == [tools[0]]


def test_merge_never_loses_popularity_counts():
    a = _tool("Delta", install_count=10, download_count=500, stars=1)
    b = _tool("DELTA", install_count=700, download_count=20, stars=2)
    before = (max(a.install_count, b.install_count), max(a.download_count, b.download_count))

    [merged] = dedupe([a, b])

    assert merged.install_count >= before[0]
    assert merged.download_count >= before[1]


def test_source_id_and_slug_matches():
    a = _tool("Epsilon", source="npm", source_id="epsilon")
    b = _tool("Epsilon Package", source="npm", source_id="epsilon", slug="epsilon-package")
    c = _tool("Zeta", slug="shared")
    d = _tool("Eta", slug="shared")

    result = dedupe([a, b, c, d])

    assert [tool.name for tool in result] == ["Epsilon", "Zeta"]


def test_distinct_tools_are_kept_in_first_seen_order():
    tools = [_tool("One"), _tool("Two"), _tool("Three")]
    assert dedupe(tools) == tools


def test_dedupe_is_idempotent():
    tools = [
        _tool("Claude Dev", github_url="https://github.com/x/claude-dev", stars=100),
        _tool("claude-dev", source="vscode", slug="claude-dev-vscode", extension_store_url="https://m/claude-dev"),
        _tool("Other Tool", extension_store_url="https://m/claude-dev", install_count=3),
        _tool("Fresh", stars=4),
        _tool("fresh", source="npm", slug="fresh-npm"),
    ]
    once = dedupe(tools)
    twice = dedupe(once)

    assert [id(tool) for tool in twice] == [id(tool) for tool in once]
    assert len(once) == 2


def test_fuzzy_threshold_below_100():
    a = _tool("Claude Dev")
    b = _tool("Claude Devs")

    assert len(dedupe([a, b])) == 2
    assert len(dedupe([_tool("Claude Dev"), _tool("Claude Devs")], name_threshold=90)) == 1
