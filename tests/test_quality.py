from tool_catalog.config import QualityConfig
from tool_catalog.core.quality import passes, popularity_score, quality_filter
from tool_catalog.core.types import CandidateTool


def _tool(name: str = "Tool", source: str = "npm", description: str = "A useful tool", **overrides) -> CandidateTool:
    values = dict(name=name, slug=name.lower(), category="Other", source=source, description=description)
    values.update(overrides)
    return CandidateTool(**values)


def test_nine_character_description_is_dropped_regardless_of_popularity():
    short = _tool(description="123456789", stars=10_000, install_count=10**6)
    ok = _tool(name="Ok", description="1234567890")

    assert quality_filter([short, ok]) == [ok]


def test_repo_star_threshold():
    one = _tool(name="One", source="github", stars=1)
    two = _tool(name="Two", source="github", stars=2)

    assert quality_filter([one, two]) == [two]


def test_star_threshold_only_applies_to_repos():
    assert passes(_tool(source="npm", stars=0), QualityConfig())
    assert passes(_tool(source="awesome-list", stars=0), QualityConfig())


def test_unrated_extension_needs_installs():
    cfg = QualityConfig()
    assert not passes(_tool(source="vscode", install_count=3, rating=0.0), cfg)
    assert passes(_tool(source="vscode", install_count=3, rating=4.0), cfg)
    assert passes(_tool(source="vscode", install_count=5, rating=0.0), cfg)


def test_name_length_rule():
    assert not passes(_tool(name="X"), QualityConfig())
    assert not passes(_tool(name=""), QualityConfig())


def test_custom_thresholds():
    cfg = QualityConfig(min_repo_stars=50)
    assert not passes(_tool(source="github", stars=49), cfg)


def test_output_is_sorted_subset_of_same_objects():
    tools = [
        _tool(name="Low", stars=1),
        _tool(name="Dropped", description="short"),
        _tool(name="High", install_count=500, stars=10),
        _tool(name="Mid", download_count=50),
    ]

    result = quality_filter(tools)

    assert [tool.name for tool in result] == ["High", "Mid", "Low"]
    assert all(any(tool is item for item in tools) for tool in result)
    scores = [popularity_score(tool) for tool in result]
    assert scores == sorted(scores, reverse=True)


def test_equal_scores_keep_input_order():
    tools = [_tool(name=f"Tie {i}", stars=3) for i in range(4)]
    assert quality_filter(tools) == tools
