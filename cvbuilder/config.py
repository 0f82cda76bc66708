"""Project configuration loaded from ``cvbuilder.yml``."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .content import LocalizedText

CONFIG_FILENAME = "cvbuilder.yml"


class Config(BaseModel):
    project_name: str = Field(default="CV")
    data_file: Path = Field(default=Path("data.json"), description="JSON or YAML CV data file.")
    output_dir: Path = Field(default=Path("site"))
    templates_dir: Path | None = Field(
        default=None,
        description="Optional directory whose templates override the packaged page template.",
    )
    default_language: str = Field(default="en", description="Language rendered at the site root.")
    languages: list[str] = Field(
        default_factory=list,
        description="Languages to publish; empty means every language found in the data file.",
    )
    toc_title: LocalizedText = Field(default="Table of Contents")
    pdf_path: str | None = Field(
        default=None,
        description="Href of a downloadable PDF version of the CV, relative to the site root.",
    )
    stylesheets: list[str] = Field(
        default_factory=list,
        description="Stylesheet hrefs, relative to the site root, linked from every page.",
    )

    @field_validator("data_file", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("templates_dir", mode="before")
    def _ensure_optional_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)

    @field_validator("default_language")
    def _normalize_language(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("default_language cannot be empty")
        return cleaned

    @field_validator("languages")
    def _dedupe_languages(cls, value: list[str]) -> list[str]:
        ordered: dict[str, None] = {}
        for code in value:
            cleaned = code.strip()
            if cleaned:
                ordered.setdefault(cleaned, None)
        return list(ordered)


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/cv/cvbuilder.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file uses defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            with config_file.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        with candidate.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        base_dir = candidate.parent.resolve()

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {candidate} must be a mapping.")

    cfg = Config(**data)

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.data_file = _abs(cfg.data_file)
    cfg.output_dir = _abs(cfg.output_dir)
    if cfg.templates_dir is not None:
        cfg.templates_dir = _abs(cfg.templates_dir)
    return cfg
