"""Assemble a complete render pass: table of contents plus document content."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .content import CVDocument, validate_document
from .nodes import Element
from .outline import DEFAULT_TOC_TITLE, Outline, build_outline
from .renderer import BlockRenderer
from .text import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderedOutput:
    """Result of one render pass. A new pass always builds a new instance."""

    outline: Outline | None
    content: Element
    language: str = DEFAULT_LANGUAGE

    @property
    def toc(self) -> Element | None:
        if self.outline is None:
            return None
        return self.outline.to_element()

    def to_html(self) -> str:
        """Serialize the table of contents followed by the content."""
        parts: list[str] = []
        toc = self.toc
        if toc is not None:
            parts.append(str(toc.to_html()))
        parts.append(str(self.content.to_html()))
        return "\n".join(parts)


class DocumentAssembler:
    """Coordinate the outline builder and block renderer for a document."""

    def __init__(self, renderer: BlockRenderer | None = None, *, toc_title: Any = DEFAULT_TOC_TITLE) -> None:
        self._renderer = renderer or BlockRenderer()
        self._toc_title = toc_title

    def render(self, document: CVDocument | dict[str, Any], language: str = DEFAULT_LANGUAGE) -> RenderedOutput:
        """Render every top-level block; raises InvalidDocumentError for a bad root."""
        cv = validate_document(document)
        outline = build_outline(cv.blocks, language, title=self._toc_title)

        container = Element.create("div", "cv-document")
        for element in self._renderer.render_all(cv.blocks, language):
            container.append(element)

        logger.debug(
            "Rendered %d of %d top-level block(s) for language '%s'.",
            len(container.children),
            len(cv.blocks),
            language,
        )
        return RenderedOutput(outline=outline, content=container, language=language)


def render_document(
    document: CVDocument | dict[str, Any],
    language: str = DEFAULT_LANGUAGE,
    *,
    toc_title: Any = DEFAULT_TOC_TITLE,
) -> RenderedOutput:
    """Render a CV document for ``language``."""
    return DocumentAssembler(toc_title=toc_title).render(document, language)
