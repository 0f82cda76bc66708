from __future__ import annotations

from cvbuilder.slugs import section_slug, slugify


def test_slugify_strips_punctuation() -> None:
    assert slugify("Work Experience!!") == "work-experience"


def test_slugify_whitespace_only_is_empty() -> None:
    assert slugify("  ") == ""
    assert slugify("") == ""
    assert slugify("!!!") == ""


def test_slugify_collapses_hyphens() -> None:
    assert slugify("A -- B") == "a-b"


def test_slugify_trims_edge_hyphens() -> None:
    assert slugify("-- Skills --") == "skills"


def test_slugify_drops_non_ascii_letters() -> None:
    assert slugify("Expérience Pro") == "exprience-pro"


def test_section_slug_uses_resolved_title() -> None:
    title = {"en": "Education", "fr": "Formation"}
    assert section_slug(title, "fr") == "formation"
    assert section_slug(title, "de") == "education"
