"""Render CV blocks into element trees."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator

from .content import (
    CONTACT_KEYS,
    Block,
    BlockError,
    Contact,
    DividerBlock,
    HeaderBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    SectionBlock,
    SubsectionBlock,
    UnsupportedBlockError,
    has_text,
    parse_block,
)
from .nodes import Element, markup_element
from .slugs import section_slug
from .text import DEFAULT_LANGUAGE, format_text, resolve_text

logger = logging.getLogger(__name__)

HEADING_CLASSES = {1: "cv-name", 2: "cv-title", 3: "cv-contact"}
CONTACT_LABELS = {"email": "Email", "phone": "Phone", "location": "Location"}
CONTACT_SEPARATOR = " | "


class BlockRenderer:
    """Map typed blocks to elements, descending into container blocks.

    The renderer holds no per-pass state; the target language is passed to
    every call. Nested containers are walked with an explicit stack, so
    nesting depth is not bounded by the interpreter's recursion limit.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, Callable[[Any, str], Element]] = {
            HeaderBlock: self._render_header,
            HeadingBlock: self._render_heading,
            ParagraphBlock: self._render_paragraph,
            SectionBlock: self._render_section,
            SubsectionBlock: self._render_subsection,
            ListBlock: self._render_list,
            DividerBlock: self._render_divider,
        }

    def render(self, block: Any, language: str = DEFAULT_LANGUAGE) -> Element | None:
        """Render one block and its descendants, or None when it cannot be displayed."""
        rendered = self._render_one(block, language)
        if rendered is None:
            return None
        root, children = rendered

        pending: list[tuple[Iterator[Any], Element]] = [(iter(children), root)]
        while pending:
            blocks, parent = pending[-1]
            for child in blocks:
                rendered = self._render_one(child, language)
                if rendered is None:
                    continue
                element, grandchildren = rendered
                parent.append(element)
                if grandchildren:
                    pending.append((iter(grandchildren), element))
                    break
            else:
                pending.pop()
        return root

    def render_all(self, blocks: Iterable[Any], language: str = DEFAULT_LANGUAGE) -> list[Element]:
        """Render a block sequence in order, dropping blocks that produce nothing."""
        rendered: list[Element] = []
        for block in blocks:
            element = self.render(block, language)
            if element is not None:
                rendered.append(element)
        return rendered

    def _render_one(self, block: Any, language: str) -> tuple[Element, list[Any]] | None:
        """Render a single block without its children.

        Returns the element together with the child blocks still to be placed
        inside it.
        """
        try:
            parsed = parse_block(block)
        except UnsupportedBlockError as exc:
            logger.warning("Unknown block type: %s", exc.block_type)
            return None
        except BlockError as exc:
            logger.warning("Skipping block: %s", exc)
            return None

        handler = self._handlers.get(type(parsed))
        if handler is None:
            logger.warning("No renderer registered for %s.", type(parsed).__name__)
            return None
        try:
            element = handler(parsed, language)
        except Exception:
            logger.exception("Failed to render '%s' block.", getattr(parsed, "type", "?"))
            return None
        children = parsed.blocks if isinstance(parsed, (SectionBlock, SubsectionBlock)) else []
        return element, children

    def _render_header(self, block: HeaderBlock, language: str) -> Element:
        header = Element.create("div", "cv-header")
        if has_text(block.name):
            header.append(markup_element("h1", format_text(block.name, language), "cv-name"))
        if has_text(block.title):
            header.append(markup_element("h2", format_text(block.title, language), "cv-title"))
        if block.contact is not None:
            header.append(self._render_contact(block.contact, language))
        return header

    def _render_contact(self, contact: Contact, language: str) -> Element:
        items: list[str] = []
        for field_name in CONTACT_KEYS:
            value = resolve_text(getattr(contact, field_name), language)
            if value:
                items.append(f"{CONTACT_LABELS[field_name]}: {value}")
        element = Element.create("div", "cv-contact")
        element.append(CONTACT_SEPARATOR.join(items))
        return element

    def _render_heading(self, block: HeadingBlock, language: str) -> Element:
        return markup_element(
            f"h{block.level}",
            format_text(block.text, language),
            HEADING_CLASSES.get(block.level),
        )

    def _render_paragraph(self, block: ParagraphBlock, language: str) -> Element:
        return markup_element("p", format_text(block.text, language), "cv-paragraph")

    def _render_section(self, block: SectionBlock, language: str) -> Element:
        section = Element.create("div", "cv-section")
        if has_text(block.title):
            title_text = resolve_text(block.title, language)
            slug = section_slug(block.title, language)
            if slug:
                section.attributes["id"] = slug

            title = markup_element("h2", format_text(block.title, language), "section-title")
            hash_link = Element.create(
                "a",
                "section-hash-link",
                href=f"#{slug}",
                title=f"Link to {title_text}",
            )
            hash_link.append("#")
            title.append(hash_link)
            section.append(title)
        return section

    def _render_subsection(self, block: SubsectionBlock, language: str) -> Element:
        subsection = Element.create("div", "cv-subsection")
        if has_text(block.title):
            subsection.append(
                markup_element("h3", format_text(block.title, language), "subsection-title")
            )
        return subsection

    def _render_list(self, block: ListBlock, language: str) -> Element:
        container = Element.create("div", "cv-list")
        if has_text(block.title):
            container.append(markup_element("div", format_text(block.title, language), "list-title"))
        if block.items:
            items = Element.create("ul")
            for item in block.items:
                items.append(markup_element("li", format_text(item, language)))
            container.append(items)
        return container

    def _render_divider(self, block: DividerBlock, language: str) -> Element:
        return Element.create("div", "cv-divider")


_default_renderer = BlockRenderer()


def render_block(block: Block | dict[str, Any], language: str = DEFAULT_LANGUAGE) -> Element | None:
    """Render a single block with the shared renderer."""
    return _default_renderer.render(block, language)
