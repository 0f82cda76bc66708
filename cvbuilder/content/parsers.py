"""Load CV data files into `CVDocument` instances."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import CVDocument

YAML_SUFFIXES = {".yml", ".yaml"}


class InvalidDocumentError(ValueError):
    """Raised when CV data does not carry a ``blocks`` list."""


class DocumentLoadError(ValueError):
    """Raised when a CV data file cannot be read or decoded."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def load_document(path: str | Path) -> CVDocument:
    """Read a JSON (or YAML) CV data file and check its shape."""
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Unable to read {source_path}: {exc}", path=source_path) from exc

    try:
        if source_path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DocumentLoadError(f"Unable to decode {source_path}: {exc}", path=source_path) from exc

    return validate_document(data)


def validate_document(data: Any) -> CVDocument:
    """Return a `CVDocument` or raise `InvalidDocumentError` for a malformed root."""
    if isinstance(data, CVDocument):
        return data
    if not isinstance(data, dict):
        raise InvalidDocumentError("Invalid CV data structure: expected an object with 'blocks'.")
    if "blocks" not in data:
        raise InvalidDocumentError("Invalid CV data structure: 'blocks' is missing.")
    try:
        return CVDocument.model_validate(data)
    except ValidationError as exc:
        raise InvalidDocumentError("Invalid CV data structure: 'blocks' must be a list.") from exc


def is_valid_document(data: Any) -> bool:
    """Check the minimal document shape without raising."""
    try:
        validate_document(data)
    except InvalidDocumentError:
        return False
    return True
