"""Create a starter CV project on disk."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .config import CONFIG_FILENAME


class ScaffoldError(RuntimeError):
    """Raised when scaffolding cannot continue."""


@dataclass(slots=True)
class ScaffoldResult:
    """Details about filesystem writes performed during scaffolding."""

    created: list[Path] = field(default_factory=list)
    updated: list[Path] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def record(self, path: Path, existed: bool) -> None:
        if existed:
            self.updated.append(path)
        else:
            self.created.append(path)


def scaffold_project(target: Path, *, name: str = "Your Name", force: bool = False) -> ScaffoldResult:
    """Write a config file and a sample bilingual CV into ``target``."""
    target.mkdir(parents=True, exist_ok=True)
    result = ScaffoldResult()

    config_path = target / CONFIG_FILENAME
    result.record(config_path, _write_text(config_path, _render_config(name), force=force))

    data_path = target / "data.json"
    result.record(data_path, _write_json(data_path, sample_document(name), force=force))

    result.notes.append(f"Edit {data_path.as_posix()} and run 'cvbuilder build' to publish the site.")
    return result


def sample_document(name: str) -> dict[str, object]:
    """A small CV exercising every block type."""
    return {
        "blocks": [
            {
                "type": "header",
                "name": name,
                "title": {"en": "Software Engineer", "fr": "Ingénieur logiciel"},
                "contact": {
                    "email": "you@example.com",
                    "location": {"en": "Paris, France", "fr": "Paris, France"},
                },
            },
            {"type": "divider"},
            {
                "type": "section",
                "title": {"en": "Summary", "fr": "Résumé"},
                "blocks": [
                    {
                        "type": "paragraph",
                        "text": {
                            "en": "Engineer with {{bold('ten years')}} of experience.",
                            "fr": "Ingénieur avec {{bold('dix ans')}} d'expérience.",
                        },
                    }
                ],
            },
            {
                "type": "section",
                "title": {"en": "Work Experience", "fr": "Expérience professionnelle"},
                "blocks": [
                    {
                        "type": "subsection",
                        "title": "Example Corp",
                        "blocks": [
                            {
                                "type": "list",
                                "items": [
                                    {"en": "Built the {{underline('billing')}} platform.", "fr": "Plateforme de facturation."},
                                    {"en": "Led a team of five.", "fr": "Direction d'une équipe de cinq."},
                                ],
                            }
                        ],
                    }
                ],
            },
        ]
    }


def _render_config(name: str) -> str:
    payload = {
        "project_name": f"{name} - CV",
        "data_file": "data.json",
        "output_dir": "site",
        "default_language": "en",
        "languages": [],
        "toc_title": {"en": "Table of Contents", "fr": "Sommaire"},
    }
    return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)


def _write_text(path: Path, content: str, *, force: bool) -> bool:
    path.parent.mkdir(parents=True, exist_ok=True)
    existed = path.exists()
    if existed and not force:
        raise ScaffoldError(f"Path already exists: {path}")
    path.write_text(content, encoding="utf-8")
    return existed


def _write_json(path: Path, payload: dict[str, object], *, force: bool) -> bool:
    path.parent.mkdir(parents=True, exist_ok=True)
    existed = path.exists()
    if existed and not force:
        raise ScaffoldError(f"Path already exists: {path}")
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
        handle.write("\n")
    return existed
