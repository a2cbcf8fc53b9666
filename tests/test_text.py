import re

from tool_catalog.core.text import normalize_name, short_description, slugify, title_from_identifier

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def test_slugify_collapses_separators():
    assert slugify("Claude Dev: AI Assistant!") == "claude-dev-ai-assistant"
    assert slugify("  --Hello__World--  ") == "hello-world"


def test_slugify_falls_back_for_symbol_only_names():
    assert slugify("!!!") == "untitled"
    assert slugify("") == "untitled"


def test_slugify_shape_and_length_hold_for_awkward_names():
    names = [
        "Claude Dev",
        "@anthropic-ai/sdk",
        "A" * 200,
        "x " * 60,
        "MCP Server: PostgreSQL (read-only)",
        "日本語 tool",
    ]
    for name in names:
        slug = slugify(name)
        assert SLUG_RE.match(slug), slug
        assert len(slug) <= 80
        assert slugify(name) == slug


def test_slugify_truncation_does_not_leave_trailing_hyphen():
    slug = slugify("a" * 79 + " tail")
    assert slug == "a" * 79


def test_title_from_identifier():
    assert title_from_identifier("claude-dev") == "Claude Dev"
    assert title_from_identifier("mcp-server-git") == "Mcp Server Git"


def test_normalize_name_strips_everything_but_alphanumerics():
    assert normalize_name("Claude Dev") == "claudedev"
    assert normalize_name("claude-dev!") == "claudedev"


def test_short_description_is_a_prefix():
    text = "x" * 400
    assert short_description(text) == text[:150]
    assert short_description("short") == "short"
