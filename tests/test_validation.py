from __future__ import annotations

import json
from pathlib import Path

from cvbuilder.validation import IssueSeverity, lint_document, lint_file


def test_clean_document_has_no_issues() -> None:
    report = lint_document(
        {
            "blocks": [
                {"type": "header", "name": "Jane", "contact": {"email": "jane@example.com"}},
                {"type": "section", "title": "Skills", "blocks": [{"type": "list", "items": ["Python"]}]},
            ]
        }
    )
    assert report.issues == []
    assert report.block_count == 3


def test_schema_errors_carry_pointers() -> None:
    report = lint_document(
        {"blocks": [{"type": "heading", "text": "Title", "level": 9}, {"type": "paragraph"}]}
    )

    assert report.error_count == 2
    pointers = {issue.pointer for issue in report.issues}
    assert "blocks/0/level" in pointers
    assert "blocks/1" in pointers


def test_unknown_types_are_warnings() -> None:
    report = lint_document(
        {"blocks": [{"type": "section", "blocks": [{"type": "timeline"}]}]}
    )

    assert report.error_count == 0
    assert report.warning_count == 1
    issue = report.issues[0]
    assert issue.severity is IssueSeverity.WARNING
    assert issue.pointer == "blocks/0/blocks/0"
    assert "timeline" in issue.message


def test_missing_translations_are_reported() -> None:
    report = lint_document(
        {
            "blocks": [
                {"type": "header", "name": "Jane", "contact": {"location": {"en": "Paris"}}},
                {"type": "list", "items": [{"en": "Python", "fr": "Python"}, {"en": "Rust"}]},
            ]
        },
        languages=["en", "fr"],
    )

    pointers = [issue.pointer for issue in report.issues]
    assert pointers == ["blocks/0/contact/location", "blocks/1/items/1"]
    assert all("fr" in issue.message for issue in report.issues)


def test_duplicate_titles_are_not_reported() -> None:
    report = lint_document(
        {
            "blocks": [
                {"type": "section", "title": "Skills"},
                {"type": "section", "title": "Skills"},
            ]
        }
    )
    assert report.issues == []


def test_lint_file_reports_unloadable_data(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"blocks": "nope"}), encoding="utf-8")

    report = lint_file(path)

    assert report.error_count == 1
    assert report.issues[0].source_path == str(path)
