from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cvbuilder.config import load_config


def _write_project_config(root: Path) -> Path:
    config_text = (
        "project_name: Jane Doe\n"
        "data_file: content/cv.yml\n"
        "output_dir: public\n"
        "templates_dir: web\n"
        "default_language: fr\n"
        "languages: [fr, en, fr, ' ']\n"
        "toc_title:\n"
        "  en: Contents\n"
        "  fr: Sommaire\n"
        "pdf_path: docs/cv.pdf\n"
    )
    cfg_path = root / "cvbuilder.yml"
    cfg_path.write_text(config_text, encoding="utf-8")
    return cfg_path


def test_load_config_resolves_paths_relative_to_config_directory(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    _write_project_config(project)

    cfg = load_config(project)

    assert cfg.data_file == (project / "content" / "cv.yml").resolve()
    assert cfg.output_dir == (project / "public").resolve()
    assert cfg.templates_dir == (project / "web").resolve()
    assert cfg.default_language == "fr"
    assert cfg.languages == ["fr", "en"]
    assert cfg.toc_title == {"en": "Contents", "fr": "Sommaire"}
    # pdf_path is an href, not a filesystem path
    assert cfg.pdf_path == "docs/cv.pdf"


def test_load_config_accepts_config_file_path(tmp_path: Path) -> None:
    project = tmp_path / "cvproj"
    project.mkdir()
    config_file = _write_project_config(project)

    cfg = load_config(config_file)
    assert cfg.output_dir == (project / "public").resolve()


def test_load_config_uses_defaults_when_directory_has_no_config(tmp_path: Path) -> None:
    project = tmp_path / "emptyproj"
    project.mkdir()

    cfg = load_config(project)

    assert cfg.data_file == (project / "data.json").resolve()
    assert cfg.output_dir == (project / "site").resolve()
    assert cfg.templates_dir is None
    assert cfg.default_language == "en"
    assert cfg.languages == []
    assert cfg.toc_title == "Table of Contents"


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_load_config_rejects_empty_default_language(tmp_path: Path) -> None:
    path = tmp_path / "cvbuilder.yml"
    path.write_text("default_language: '  '\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)
