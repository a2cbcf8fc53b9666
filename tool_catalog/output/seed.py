"""
SQL seed generation for the marketplace database.

Renders the final candidate list into a SQLite script using a Jinja2
template: categories and the catalog bot user are inserted with
``INSERT OR IGNORE`` so re-applying the script never duplicates them,
followed by one ``INSERT INTO tools`` per candidate.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from ..config import SeedUserConfig
from ..core.text import slugify
from ..core.types import CandidateTool, Category
from ..errors import SeedError

REQUIRED_FIELDS = ("name", "slug", "category")

TOOL_COLUMNS = (
    "name",
    "slug",
    "description",
    "short_desc",
    "full_description",
    "category",
    "version",
    "creator_id",
    "creator_name",
    "icon_url",
    "website_url",
    "github_url",
    "extension_store_url",
    "source",
    "source_id",
    "rating",
    "download_count",
    "install_count",
    "stars",
    "tags",
    "license",
    "pricing_model",
    "last_updated",
    "problem_solved",
    "target_audience",
    "setup_difficulty",
    "best_for",
    "alternatives",
)


def sql_literal(value: Any) -> str:
    """Render a Python value as a SQLite literal.

    Strings are single-quoted with embedded quotes doubled; numbers are
    emitted bare; None becomes an empty string literal.
    """
    if value is None:
        return "''"
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def collect_categories(tools: list[CandidateTool]) -> list[Category]:
    """Distinct categories of ``tools`` in first-seen order."""
    seen: dict[str, Category] = {}
    for tool in tools:
        if tool.category not in seen:
            seen[tool.category] = Category(name=tool.category, slug=slugify(tool.category))
    return list(seen.values())


def tool_values(tool: CandidateTool, creator_username: str) -> list[str]:
    """SQL literals for one tool row, in TOOL_COLUMNS order."""
    missing = [name for name in REQUIRED_FIELDS if not getattr(tool, name)]
    if missing:
        raise SeedError(
            f"Tool {tool.name or tool.source_id or '<unnamed>'!r} is missing required fields: "
            f"{', '.join(missing)}"
        )

    values: dict[str, str] = {
        name: sql_literal(getattr(tool, name))
        for name in TOOL_COLUMNS
        if name not in ("creator_id", "rating", "tags")
    }
    values["creator_id"] = f"(SELECT id FROM users WHERE username = {sql_literal(creator_username)})"
    values["rating"] = f"{tool.rating:.1f}"
    values["tags"] = sql_literal(json.dumps(tool.tags, separators=(",", ":"), ensure_ascii=False))
    return [values[name] for name in TOOL_COLUMNS]


def render_seed(
    tools: list[CandidateTool],
    seed_user: SeedUserConfig,
    generated_at: str | None = None,
) -> str:
    """Render the seed script for ``tools``.

    Args:
        tools: Final, filtered candidates in ranking order
        seed_user: Catalog bot account recorded as creator of every tool
        generated_at: Timestamp for the header; defaults to now (UTC)

    Returns:
        The SQL script text

    Raises:
        SeedError: If any tool lacks a name, slug or category
    """
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["sql"] = sql_literal
    template = env.get_template("seed.sql.j2")

    rows = [tool_values(tool, seed_user.username) for tool in tools]
    return template.render(
        generated_at=generated_at or datetime.now(timezone.utc).isoformat(),
        categories=collect_categories(tools),
        user=seed_user,
        columns=TOOL_COLUMNS,
        tools=rows,
    )


def write_seed(
    tools: list[CandidateTool],
    output_path: Path,
    seed_user: SeedUserConfig,
    generated_at: str | None = None,
) -> Path:
    sql = render_seed(tools, seed_user, generated_at=generated_at)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sql, encoding="utf-8")
    return output_path
