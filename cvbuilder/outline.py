"""Table of contents built from top-level sections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .content import BlockError, SectionBlock, has_text, parse_block
from .nodes import Element
from .slugs import section_slug
from .text import DEFAULT_LANGUAGE, resolve_text

DEFAULT_TOC_TITLE = "Table of Contents"


@dataclass(frozen=True, slots=True)
class OutlineEntry:
    """A single table of contents link."""

    label: str
    anchor_href: str


@dataclass(frozen=True, slots=True)
class Outline:
    """Ordered section links for one language."""

    title: str
    entries: tuple[OutlineEntry, ...] = ()

    def to_element(self) -> Element:
        container = Element.create("div", "cv-toc")
        heading = Element.create("h3", "toc-title")
        heading.append(self.title)
        container.append(heading)

        links = Element.create("ul", "toc-list")
        for entry in self.entries:
            item = Element.create("li", "toc-item")
            link = Element.create("a", "toc-link", href=entry.anchor_href)
            link.append(entry.label)
            item.append(link)
            links.append(item)
        container.append(links)
        return container


def build_outline(
    blocks: Iterable[Any] | None,
    language: str = DEFAULT_LANGUAGE,
    *,
    title: Any = DEFAULT_TOC_TITLE,
) -> Outline | None:
    """Collect titled top-level sections; nested sections are not listed.

    Returns None only when ``blocks`` is missing. Duplicate titles produce
    duplicate anchors.
    """
    if blocks is None:
        return None

    entries: list[OutlineEntry] = []
    for block in blocks:
        try:
            parsed = parse_block(block)
        except BlockError:
            continue
        if not isinstance(parsed, SectionBlock) or not has_text(parsed.title):
            continue
        label = resolve_text(parsed.title, language)
        entries.append(OutlineEntry(label=label, anchor_href=f"#{section_slug(parsed.title, language)}"))

    return Outline(title=resolve_text(title, language) or DEFAULT_TOC_TITLE, entries=tuple(entries))
