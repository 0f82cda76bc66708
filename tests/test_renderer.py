from __future__ import annotations

import logging
import sys

import pytest
from markupsafe import Markup

from cvbuilder.assembler import render_document
from cvbuilder.content import ParagraphBlock
from cvbuilder.nodes import Element
from cvbuilder.renderer import BlockRenderer, render_block


def _render(block: object, language: str = "en") -> Element:
    element = render_block(block, language)  # type: ignore[arg-type]
    assert element is not None
    return element


def test_header_renders_name_title_and_contact_line() -> None:
    element = _render(
        {
            "type": "header",
            "name": "Jane {{bold('Doe')}}",
            "title": {"en": "Engineer", "fr": "Ingénieure"},
            "contact": {"email": "jane@example.com", "phone": "+33 1 23", "location": {"fr": "Paris"}},
        },
        "fr",
    )

    assert element.tag == "div" and element.class_name == "cv-header"
    name, title, contact = element.child_elements()
    assert (name.tag, name.class_name) == ("h1", "cv-name")
    assert str(name.to_html()) == '<h1 class="cv-name">Jane <strong>Doe</strong></h1>'
    assert (title.tag, title.class_name, title.text_content()) == ("h2", "cv-title", "Ingénieure")
    assert contact.class_name == "cv-contact"
    assert contact.text_content() == "Email: jane@example.com | Phone: +33 1 23 | Location: Paris"


def test_contact_line_omits_absent_fields() -> None:
    element = _render({"type": "header", "name": "Jane", "contact": {"location": "Berlin"}})
    contact = element.find("cv-contact")
    assert contact is not None
    assert contact.text_content() == "Location: Berlin"
    assert "Email" not in str(contact.to_html())


def test_contact_line_is_escaped_text() -> None:
    element = _render({"type": "header", "contact": {"email": "<b>x</b>"}})
    contact = element.find("cv-contact")
    assert contact is not None
    assert "&lt;b&gt;" in str(contact.to_html())


def test_header_without_contact_has_no_contact_line() -> None:
    element = _render({"type": "header", "name": "Jane"})
    assert element.find("cv-contact") is None


@pytest.mark.parametrize(
    ("level", "tag", "class_name"),
    [
        (None, "h1", "cv-name"),
        (1, "h1", "cv-name"),
        (2, "h2", "cv-title"),
        (3, "h3", "cv-contact"),
        (5, "h5", None),
    ],
)
def test_heading_levels_map_to_weight_classes(level: int | None, tag: str, class_name: str | None) -> None:
    block: dict[str, object] = {"type": "heading", "text": "Title"}
    if level is not None:
        block["level"] = level
    element = _render(block)
    assert element.tag == tag
    assert element.class_name == class_name
    assert element.text_content() == "Title"


def test_heading_level_out_of_range_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="cvbuilder.renderer"):
        assert render_block({"type": "heading", "text": "x", "level": 9}) is None
    assert "Skipping block" in caplog.text


def test_paragraph_applies_markup() -> None:
    element = _render({"type": "paragraph", "text": {"en": "I {{underline('ship')}}"}})
    assert str(element.to_html()) == '<p class="cv-paragraph">I <u>ship</u></p>'


def test_section_has_anchor_and_hash_link() -> None:
    element = _render(
        {
            "type": "section",
            "title": {"en": "Work Experience!", "fr": "Expérience"},
            "blocks": [{"type": "paragraph", "text": "Body"}],
        }
    )

    assert element.class_name == "cv-section"
    assert element.id == "work-experience"
    title = element.find("section-title")
    assert title is not None and title.tag == "h2"
    link = title.find("section-hash-link")
    assert link is not None
    assert link.attributes["href"] == "#work-experience"
    assert link.attributes["title"] == "Link to Work Experience!"
    assert link.text_content() == "#"
    assert [child.class_name for child in element.child_elements()] == ["section-title", "cv-paragraph"]


def test_untitled_section_still_renders_children() -> None:
    element = _render({"type": "section", "blocks": [{"type": "paragraph", "text": "Body"}]})
    assert element.id is None
    assert element.find("section-title") is None
    assert [child.class_name for child in element.child_elements()] == ["cv-paragraph"]


def test_nested_blocks_keep_order_and_depth() -> None:
    element = _render(
        {
            "type": "section",
            "title": "Experience",
            "blocks": [
                {
                    "type": "subsection",
                    "title": "Acme",
                    "blocks": [
                        {"type": "paragraph", "text": "First"},
                        {"type": "paragraph", "text": "Second"},
                    ],
                },
                {"type": "divider"},
            ],
        }
    )

    _, subsection, divider = element.child_elements()
    assert subsection.class_name == "cv-subsection"
    assert divider.class_name == "cv-divider"
    heading, first, second = subsection.child_elements()
    assert (heading.tag, heading.class_name, heading.text_content()) == ("h3", "subsection-title", "Acme")
    assert heading.find("section-hash-link") is None
    assert [first.text_content(), second.text_content()] == ["First", "Second"]


def test_nesting_depth_is_not_limited(caplog: pytest.LogCaptureFixture) -> None:
    depth = 3 * sys.getrecursionlimit()
    block: dict[str, object] = {"type": "paragraph", "text": "Leaf"}
    for index in range(depth):
        block = {"type": "subsection" if index % 2 else "section", "blocks": [block]}

    with caplog.at_level(logging.WARNING):
        element = _render(block)

    assert caplog.records == []
    leaves = element.find_all("cv-paragraph")
    assert [leaf.text_content() for leaf in leaves] == ["Leaf"]
    assert element.text_content() == "Leaf"
    html = str(element.to_html())
    assert html.count("<div class=\"cv-subsection\">") == depth // 2
    assert html.endswith("<p class=\"cv-paragraph\">Leaf</p>" + "</div>" * depth)


def _paragraph(text: str) -> dict[str, str]:
    return {"type": "paragraph", "text": text}


def test_nested_children_keep_document_order() -> None:
    element = _render(
        {
            "type": "section",
            "blocks": [
                {"type": "subsection", "blocks": [_paragraph("A"), _paragraph("B")]},
                _paragraph("C"),
                {"type": "subsection", "blocks": [{"type": "subsection", "blocks": [_paragraph("D")]}]},
                {"type": "divider"},
            ],
        }
    )

    assert [child.class_name for child in element.child_elements()] == [
        "cv-subsection",
        "cv-paragraph",
        "cv-subsection",
        "cv-divider",
    ]
    assert [leaf.text_content() for leaf in element.find_all("cv-paragraph")] == ["A", "B", "C", "D"]


def test_list_renders_title_and_items() -> None:
    element = _render(
        {
            "type": "list",
            "title": "Skills",
            "items": ["Python", {"en": "{{bold('Rust')}}", "fr": "Rouille"}],
        }
    )

    title, items = element.child_elements()
    assert (title.tag, title.class_name, title.text_content()) == ("div", "list-title", "Skills")
    assert items.tag == "ul"
    assert [str(item.to_html()) for item in items.child_elements()] == [
        "<li>Python</li>",
        "<li><strong>Rust</strong></li>",
    ]


def test_empty_list_renders_title_only() -> None:
    element = _render({"type": "list", "title": "Skills", "items": []})
    assert [child.class_name for child in element.child_elements()] == ["list-title"]
    assert all(child.tag != "ul" for child in element.iter_elements())


def test_divider_is_empty() -> None:
    element = _render({"type": "divider"})
    assert str(element.to_html()) == '<div class="cv-divider"></div>'


def test_unknown_type_renders_nothing_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="cvbuilder.renderer"):
        assert render_block({"type": "timeline", "events": []}) is None
    assert "Unknown block type: timeline" in caplog.text


@pytest.mark.parametrize("block", [None, "paragraph", {"text": "no type"}, {"type": ""}])
def test_shapeless_blocks_render_nothing(block: object) -> None:
    assert render_block(block) is None  # type: ignore[arg-type]


def test_bad_child_does_not_affect_siblings() -> None:
    element = _render(
        {
            "type": "section",
            "title": "Mixed",
            "blocks": [
                {"type": "timeline"},
                {"type": "heading", "text": "x", "level": "high"},
                {"type": "paragraph", "text": "Kept"},
            ],
        }
    )
    assert [child.class_name for child in element.child_elements()] == ["section-title", "cv-paragraph"]


def test_render_all_skips_missing_output() -> None:
    renderer = BlockRenderer()
    rendered = renderer.render_all([{"type": "timeline"}, {"type": "divider"}], "en")
    assert [element.class_name for element in rendered] == ["cv-divider"]


def test_parsed_models_are_accepted() -> None:
    element = _render(ParagraphBlock(text="Typed"))
    assert element.children == [Markup("Typed")]


def test_numeric_text_is_coerced() -> None:
    element = _render({"type": "header", "contact": {"phone": 5551234}})
    contact = element.find("cv-contact")
    assert contact is not None
    assert contact.text_content() == "Phone: 5551234"


def test_null_translation_keeps_section_and_children() -> None:
    element = _render(
        {
            "type": "section",
            "title": {"en": "Skills", "fr": None},
            "blocks": [{"type": "paragraph", "text": "Python"}],
        },
        "fr",
    )

    assert element.id == "skills"
    title = element.find("section-title")
    assert title is not None
    assert title.text_content() == "Skills#"
    assert [leaf.text_content() for leaf in element.find_all("cv-paragraph")] == ["Python"]


def test_null_translation_keeps_outline_entry() -> None:
    output = render_document(
        {
            "blocks": [
                {
                    "type": "section",
                    "title": {"en": "Skills", "fr": None},
                    "blocks": [{"type": "paragraph", "text": "Python"}],
                }
            ]
        },
        "en",
    )

    assert output.outline is not None
    assert [(entry.label, entry.anchor_href) for entry in output.outline.entries] == [("Skills", "#skills")]
    assert len(output.content.children) == 1


def test_null_list_items_are_dropped() -> None:
    element = _render({"type": "list", "items": ["Python", None, {"en": "Rust", "fr": None}, 3]})

    (items,) = element.child_elements()
    assert items.tag == "ul"
    assert [item.text_content() for item in items.child_elements()] == ["Python", "Rust", "3"]


@pytest.mark.parametrize("contact", ["jane@example.com", ["jane@example.com"], 42])
def test_non_mapping_contact_is_ignored(contact: object) -> None:
    element = _render({"type": "header", "name": "Jane", "contact": contact})

    assert [child.class_name for child in element.child_elements()] == ["cv-name"]


def test_unusable_text_values_render_empty() -> None:
    element = _render({"type": "paragraph", "text": ["not", "text"]})
    assert str(element.to_html()) == '<p class="cv-paragraph"></p>'
