"""Text helpers shared by the normalizer, deduplicator and seed emitter."""

from __future__ import annotations

import re

SLUG_MAX_LENGTH = 80
SHORT_DESC_LENGTH = 150

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_WORD_START_RE = re.compile(r"\b\w")


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Convert text to URL-safe slug.

    Args:
        text: The text to slugify
        max_length: Maximum slug length

    Returns:
        A lowercase, hyphenated slug of at most ``max_length`` characters
    """
    # Replace non-alphanumeric runs with a single hyphen
    slug = _NON_SLUG_RE.sub("-", text.lower()).strip("-")
    # Fallback for names made only of special characters
    if not slug:
        slug = "untitled"
    # Truncation may cut right after a hyphen
    return slug[:max_length].strip("-")


def title_from_identifier(identifier: str) -> str:
    """Turn a machine name like ``claude-dev`` into ``Claude Dev``."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), identifier.replace("-", " "))


def normalize_name(name: str) -> str:
    """Lowercase a name and strip every non-alphanumeric character."""
    return _NON_ALNUM_RE.sub("", name.lower())


def short_description(description: str) -> str:
    return description[:SHORT_DESC_LENGTH]
