"""Schema validation helpers and lint diagnostics for CV data files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence, cast

from jsonschema import Draft202012Validator

from .content import (
    BLOCK_MODELS,
    CONTACT_KEYS,
    TEXT_FIELDS,
    CVDocument,
    DocumentLoadError,
    InvalidDocumentError,
    load_document,
)

SCHEMA_PACKAGE = "cvbuilder.schemas"
DOCUMENT_SCHEMA_NAME = "cv_document.schema.json"


class IssueSeverity(Enum):
    """Severity level for lint issues."""

    ERROR = auto()
    WARNING = auto()


@dataclass(slots=True)
class DocumentIssue:
    """Represents a lint finding for a CV data file."""

    source_path: str
    message: str
    severity: IssueSeverity
    pointer: str | None = None


@dataclass(slots=True)
class LintReport:
    """Aggregate lint results for a CV data file."""

    issues: list[DocumentIssue] = field(default_factory=list)
    block_count: int = 0

    def add(self, issue: DocumentIssue) -> None:
        self.issues.append(issue)

    def extend(self, issues: Iterable[DocumentIssue]) -> None:
        self.issues.extend(issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.WARNING)


def lint_file(path: str | Path, languages: Sequence[str] | None = None) -> LintReport:
    """Load a CV data file and lint it."""
    source_path = str(path)
    try:
        document = load_document(path)
    except (DocumentLoadError, InvalidDocumentError) as exc:
        report = LintReport()
        report.add(DocumentIssue(source_path=source_path, message=str(exc), severity=IssueSeverity.ERROR))
        return report
    return lint_document(document, source_path=source_path, languages=languages)


def lint_document(
    document: CVDocument | Mapping[str, Any],
    *,
    source_path: str = "<memory>",
    languages: Sequence[str] | None = None,
) -> LintReport:
    """Run schema, vocabulary, and translation checks against a document."""
    data = document.model_dump(mode="json") if isinstance(document, CVDocument) else dict(document)
    report = LintReport()
    blocks = data.get("blocks")
    report.block_count = _count_blocks(blocks) if isinstance(blocks, list) else 0

    validator = _get_document_validator()
    for error in sorted(validator.iter_errors(data), key=lambda err: tuple(str(elem) for elem in err.path)):
        pointer = "/".join(str(elem) for elem in error.path)
        report.add(
            DocumentIssue(
                source_path=source_path,
                message=error.message,
                severity=IssueSeverity.ERROR,
                pointer=pointer or None,
            )
        )

    if isinstance(blocks, list):
        report.extend(_lint_blocks(blocks, "blocks", source_path, tuple(languages or ())))
    return report


def _lint_blocks(
    blocks: list[Any],
    pointer: str,
    source_path: str,
    languages: tuple[str, ...],
) -> Iterator[DocumentIssue]:
    for index, block in enumerate(blocks):
        location = f"{pointer}/{index}"
        if not isinstance(block, Mapping):
            continue
        block_type = block.get("type")
        if isinstance(block_type, str) and block_type and block_type not in BLOCK_MODELS:
            yield DocumentIssue(
                source_path=source_path,
                message=f"Unknown block type '{block_type}' will not be rendered.",
                severity=IssueSeverity.WARNING,
                pointer=location,
            )
            continue

        if languages:
            for key in TEXT_FIELDS:
                yield from _lint_translation(block.get(key), f"{location}/{key}", source_path, languages)
            contact = block.get("contact")
            if isinstance(contact, Mapping):
                for key in CONTACT_KEYS:
                    yield from _lint_translation(
                        contact.get(key), f"{location}/contact/{key}", source_path, languages
                    )
            items = block.get("items")
            if isinstance(items, list):
                for item_index, item in enumerate(items):
                    yield from _lint_translation(
                        item, f"{location}/items/{item_index}", source_path, languages
                    )

        children = block.get("blocks")
        if isinstance(children, list):
            yield from _lint_blocks(children, f"{location}/blocks", source_path, languages)


def _lint_translation(
    value: Any,
    pointer: str,
    source_path: str,
    languages: tuple[str, ...],
) -> Iterator[DocumentIssue]:
    # Plain strings are language-neutral.
    if not isinstance(value, Mapping) or not value:
        return
    missing = [code for code in languages if not value.get(code)]
    if missing:
        yield DocumentIssue(
            source_path=source_path,
            message=f"Missing translation(s) for {', '.join(missing)}; the first available language is shown.",
            severity=IssueSeverity.WARNING,
            pointer=pointer,
        )


def _count_blocks(blocks: list[Any]) -> int:
    total = 0
    for block in blocks:
        total += 1
        if isinstance(block, Mapping) and isinstance(block.get("blocks"), list):
            total += _count_blocks(block["blocks"])
    return total


@lru_cache(maxsize=1)
def _get_document_validator() -> Draft202012Validator:
    schema = _load_schema(DOCUMENT_SCHEMA_NAME)
    return Draft202012Validator(schema)


def _load_schema(name: str) -> dict[str, Any]:
    with resources.files(SCHEMA_PACKAGE).joinpath(name).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Schema '{name}' must be a JSON object.")
    return cast(dict[str, Any], payload)
