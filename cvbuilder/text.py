"""Localized text resolution and inline markup helpers."""

from __future__ import annotations

import re
from typing import Any, Mapping

BOLD_RE = re.compile(r"\{\{bold\('([^']+)'\)\}\}")
UNDERLINE_RE = re.compile(r"\{\{underline\('([^']+)'\)\}\}")
TAG_RE = re.compile(r"<[^>]*>")

DEFAULT_LANGUAGE = "en"


def resolve_text(value: Any, language: str = DEFAULT_LANGUAGE) -> str:
    """Pick the display string of a localized text value for ``language``.

    Plain strings are returned verbatim. Mappings return the entry for
    ``language`` when it is non-empty, otherwise the entry of the first key in
    insertion order. Anything else resolves to an empty string.
    """
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        preferred = value.get(language)
        if preferred:
            return str(preferred)
        for candidate in value.values():
            return "" if candidate is None else str(candidate)
    return ""


def apply_markup(text: str) -> str:
    """Expand ``{{bold('...')}}`` and ``{{underline('...')}}`` into HTML tags.

    The result is raw markup. Author data is trusted, so nothing is escaped.
    """
    if not text or not isinstance(text, str):
        return ""
    processed = BOLD_RE.sub(r"<strong>\1</strong>", text)
    return UNDERLINE_RE.sub(r"<u>\1</u>", processed)


def format_text(value: Any, language: str = DEFAULT_LANGUAGE) -> str:
    """Resolve a localized value and expand its inline markup."""
    return apply_markup(resolve_text(value, language))


def strip_tags(text: str) -> str:
    """Remove HTML tags, e.g. to build a plain page title from formatted text."""
    return TAG_RE.sub("", text).strip()
