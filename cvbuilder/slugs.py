"""Anchor identifiers derived from display text."""

from __future__ import annotations

import re
from typing import Any

from .text import resolve_text

DISALLOWED_PATTERN = re.compile(r"[^a-z0-9\s-]")
WHITESPACE_PATTERN = re.compile(r"\s+")
HYPHEN_RUN_PATTERN = re.compile(r"-+")


def slugify(text: str) -> str:
    """Convert arbitrary text into a URL-fragment-safe slug.

    Uniqueness is not enforced: identical titles yield identical slugs.
    """
    if not text:
        return ""
    slug = DISALLOWED_PATTERN.sub("", text.lower())
    slug = WHITESPACE_PATTERN.sub("-", slug)
    slug = HYPHEN_RUN_PATTERN.sub("-", slug)
    return slug.strip("-")


def section_slug(title: Any, language: str) -> str:
    """Slug for a section title. Both the outline and the section anchor use this."""
    return slugify(resolve_text(title, language))
