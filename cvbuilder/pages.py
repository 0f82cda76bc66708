"""Render complete CV pages, one per published language."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .assembler import DocumentAssembler
from .config import Config
from .content import CVDocument, load_document
from .i18n import available_languages, document_title, language_display_name

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
PAGE_TEMPLATE = "page.html"
DEFAULT_PAGE_TITLE = "CV"
LANGUAGE_CODE_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class PageTemplateError(RuntimeError):
    """Raised when the page template cannot be loaded."""


@dataclass(frozen=True, slots=True)
class LanguageLink:
    """Entry in the language switcher."""

    code: str
    label: str
    href: str
    current: bool = False


def page_path(language: str, default_language: str) -> Path:
    """Relative output path of the page for ``language``."""
    if language == default_language:
        return Path("index.html")
    return Path(language) / "index.html"


def publish_languages(config: Config, document: CVDocument) -> list[str]:
    """Languages to render, default language first."""
    candidates = config.languages or available_languages(document)
    ordered: list[str] = [config.default_language]
    for code in candidates:
        if code in ordered:
            continue
        if not LANGUAGE_CODE_RE.match(code):
            logger.warning("Skipping language code '%s'; it is not usable as a directory name.", code)
            continue
        ordered.append(code)
    return ordered


class SitePageRenderer:
    """Render the page template around a document render pass."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._assembler = DocumentAssembler(toc_title=config.toc_title)
        self._environment = self._build_environment()
        try:
            self._template = self._environment.get_template(PAGE_TEMPLATE)
        except TemplateNotFound as exc:
            raise PageTemplateError(f"Page template '{PAGE_TEMPLATE}' could not be found.") from exc

    def _build_environment(self) -> Environment:
        search_paths = [PACKAGE_TEMPLATES_DIR]
        templates_dir = self._config.templates_dir
        if templates_dir is not None:
            if templates_dir.exists():
                search_paths.insert(0, templates_dir)
            else:
                logger.warning("Templates directory %s not found; using packaged template.", templates_dir)
        return Environment(
            loader=FileSystemLoader([str(path) for path in search_paths]),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, document: CVDocument, language: str, languages: Sequence[str]) -> str:
        depth = len(page_path(language, self._config.default_language).parts) - 1
        output = self._assembler.render(document, language)
        context: dict[str, Any] = {
            "page": {
                "title": document_title(document, language) or self._config.project_name or DEFAULT_PAGE_TITLE,
                "language": language,
                "styles": [self._asset_href(href, depth=depth) for href in self._config.stylesheets],
                "pdf_href": self._asset_href(self._config.pdf_path, depth=depth) if self._config.pdf_path else None,
            },
            "languages": self._language_links(language, languages, depth=depth),
            "toc": output.toc,
            "content": output.content,
        }
        return self._template.render(**context)

    def _language_links(self, current: str, languages: Sequence[str], *, depth: int) -> list[LanguageLink]:
        links: list[LanguageLink] = []
        for code in languages:
            target = page_path(code, self._config.default_language).as_posix()
            links.append(
                LanguageLink(
                    code=code,
                    label=language_display_name(code),
                    href=self._asset_href(target, depth=depth),
                    current=code == current,
                )
            )
        return links

    @staticmethod
    def _asset_href(path: str, *, depth: int) -> str:
        if path.startswith(("http://", "https://", "//")):
            return path
        normalized = path.lstrip("/")
        prefix = "./" if depth == 0 else "../" * depth
        return f"{prefix}{normalized}"


def write_site(config: Config, document: CVDocument | None = None) -> list[Path]:
    """Render every published language into the output directory."""
    cv = document if document is not None else load_document(config.data_file)
    renderer = SitePageRenderer(config)
    languages = publish_languages(config, cv)

    written: list[Path] = []
    for language in languages:
        html = renderer.render(cv, language, languages)
        destination = config.output_dir / page_path(language, config.default_language)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(html, encoding="utf-8")
        written.append(destination)
    return written
