from pathlib import Path

import pytest

from tool_catalog.config import SeedUserConfig
from tool_catalog.core.types import CandidateTool
from tool_catalog.errors import SeedError
from tool_catalog.output.seed import collect_categories, render_seed, sql_literal, write_seed

GENERATED_AT = "2024-01-01T00:00:00+00:00"


def _tool(name: str, category: str = "CLI Tool", **overrides) -> CandidateTool:
    values = dict(
        name=name,
        slug=name.lower().replace(" ", "-").replace("'", ""),
        category=category,
        source="github",
        description=f"{name} does things",
    )
    values.update(overrides)
    return CandidateTool(**values)


def test_sql_literal_escapes_quotes_and_leaves_numbers_bare():
    assert sql_literal("O'Reilly's tool") == "'O''Reilly''s tool'"
    assert sql_literal(42) == "42"
    assert sql_literal(1.5) == "1.5"
    assert sql_literal(None) == "''"


def test_render_seed_directive_layout():
    tools = [
        _tool("Claude CLI", rating=4.0, stars=120, tags=["cli", "claude"]),
        _tool("Bob's Agent", category="AI Agent", rating=3.14159),
        _tool("Shell Helper"),
    ]

    sql = render_seed(tools, SeedUserConfig(), generated_at=GENERATED_AT)
    lines = sql.splitlines()

    category_lines = [line for line in lines if line.startswith("INSERT OR IGNORE INTO categories")]
    assert category_lines == [
        "INSERT OR IGNORE INTO categories (name, slug, icon) VALUES ('CLI Tool', 'cli-tool', '');",
        "INSERT OR IGNORE INTO categories (name, slug, icon) VALUES ('AI Agent', 'ai-agent', '');",
    ]
    assert sum(line.startswith("INSERT OR IGNORE INTO users") for line in lines) == 1

    tool_lines = [line for line in lines if line.startswith("INSERT INTO tools")]
    assert len(tool_lines) == 3
    assert "'Claude CLI'" in tool_lines[0]
    assert ", 4.0, " in tool_lines[0]
    assert "'[\"cli\",\"claude\"]'" in tool_lines[0]
    assert "'Bob''s Agent'" in tool_lines[1]
    assert ", 3.1, " in tool_lines[1]
    assert "(SELECT id FROM users WHERE username = 'winterline_bot')" in tool_lines[2]
    assert f"-- Generated: {GENERATED_AT}" in lines
    assert "-- Total tools: 3" in lines


def test_rendering_twice_is_byte_identical():
    tools = [_tool("A Tool", category="Writing"), _tool("B Tool"), _tool("C Tool", category="Writing")]

    first = render_seed(tools, SeedUserConfig(), generated_at=GENERATED_AT)
    second = render_seed(tools, SeedUserConfig(), generated_at=GENERATED_AT)

    assert first == second
    assert [c.name for c in collect_categories(tools)] == ["Writing", "CLI Tool"]


def test_missing_category_raises_seed_error():
    with pytest.raises(SeedError, match="category"):
        render_seed([_tool("No Category", category="")], SeedUserConfig())


def test_write_seed_creates_parent_dirs(tmp_path: Path):
    path = write_seed([_tool("Solo")], tmp_path / "db" / "seed.sql", SeedUserConfig(), generated_at=GENERATED_AT)

    text = path.read_text(encoding="utf-8")
    assert path == tmp_path / "db" / "seed.sql"
    assert text.startswith("-- Auto-generated seed data")
    assert text.endswith("\n")
