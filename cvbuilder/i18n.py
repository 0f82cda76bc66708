"""Language discovery and display helpers."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from .content import TEXT_FIELDS, BlockError, CVDocument, HeaderBlock, has_text, parse_block
from .text import format_text, strip_tags

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "vi": "Vietnamese",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
}


def language_display_name(code: str) -> str:
    """Return a human-readable name for a language code."""
    return LANGUAGE_NAMES.get(code, code.upper())


def available_languages(document: CVDocument) -> list[str]:
    """List every language code used by the document, in first-seen order."""
    seen: dict[str, None] = {}
    for code in _iter_language_codes(document.blocks):
        seen.setdefault(code, None)
    return list(seen)


def _iter_language_codes(blocks: Iterable[Any]) -> Iterator[str]:
    pending = [iter(blocks)]
    while pending:
        for block in pending[-1]:
            if not isinstance(block, Mapping):
                continue
            for key, value in block.items():
                if key in TEXT_FIELDS:
                    yield from _codes_of(value)
                elif key == "contact" and isinstance(value, Mapping):
                    for field_value in value.values():
                        yield from _codes_of(field_value)
                elif key == "items" and isinstance(value, list):
                    for item in value:
                        yield from _codes_of(item)
            children = block.get("blocks")
            if isinstance(children, list):
                pending.append(iter(children))
                break
        else:
            pending.pop()


def _codes_of(value: Any) -> Iterator[str]:
    if isinstance(value, Mapping):
        for code in value:
            if isinstance(code, str):
                yield code


def document_title(document: CVDocument, language: str) -> str | None:
    """Build a plain page title from the first header block's name."""
    for block in document.blocks:
        if not isinstance(block, Mapping) or block.get("type") != "header":
            continue
        try:
            header = parse_block(block)
        except BlockError:
            continue
        if not isinstance(header, HeaderBlock) or not has_text(header.name):
            return None
        name = strip_tags(format_text(header.name, language))
        return f"{name} - CV" if name else None
    return None
