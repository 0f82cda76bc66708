"""Minimal element tree used as the presentational output of a render pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from markupsafe import Markup, escape

from .text import TAG_RE

Node = Union["Element", Markup, str]


@dataclass(slots=True)
class Element:
    """An HTML element with attributes and ordered children.

    ``str`` children are escaped on output; ``Markup`` children are emitted verbatim.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @classmethod
    def create(cls, tag: str, class_name: str | None = None, **attributes: str) -> "Element":
        attrs: dict[str, str] = {}
        if class_name:
            attrs["class"] = class_name
        attrs.update(attributes)
        return cls(tag=tag, attributes=attrs)

    @property
    def class_name(self) -> str | None:
        return self.attributes.get("class")

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")

    def append(self, child: Node) -> "Element":
        self.children.append(child)
        return self

    def child_elements(self) -> list["Element"]:
        return [child for child in self.children if isinstance(child, Element)]

    def iter_elements(self) -> Iterator["Element"]:
        """Yield this element and every descendant element, depth first."""
        stack: list[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.child_elements()))

    def find_all(self, class_name: str) -> list["Element"]:
        return [element for element in self.iter_elements() if element.class_name == class_name]

    def find(self, class_name: str) -> "Element | None":
        for element in self.iter_elements():
            if element.class_name == class_name:
                return element
        return None

    def text_content(self) -> str:
        parts: list[str] = []
        pending: list[Iterator[Node]] = [iter(self.children)]
        while pending:
            for child in pending[-1]:
                if isinstance(child, Element):
                    pending.append(iter(child.children))
                    break
                if isinstance(child, Markup):
                    parts.append(TAG_RE.sub("", str(child)))
                else:
                    parts.append(child)
            else:
                pending.pop()
        return "".join(parts)

    def to_html(self) -> Markup:
        parts: list[str] = [self._open_tag()]
        pending: list[tuple[Element, Iterator[Node]]] = [(self, iter(self.children))]
        while pending:
            element, children = pending[-1]
            for child in children:
                if isinstance(child, Element):
                    parts.append(child._open_tag())
                    pending.append((child, iter(child.children)))
                    break
                parts.append(str(child) if isinstance(child, Markup) else str(escape(child)))
            else:
                parts.append(f"</{element.tag}>")
                pending.pop()
        return Markup("".join(parts))

    def _open_tag(self) -> str:
        attrs = "".join(f' {name}="{escape(value)}"' for name, value in self.attributes.items())
        return f"<{self.tag}{attrs}>"

    def __html__(self) -> str:
        return str(self.to_html())


def markup_element(tag: str, html_text: str, class_name: str | None = None) -> Element:
    """Create an element whose content is already-formatted, trusted markup."""
    element = Element.create(tag, class_name)
    if html_text:
        element.append(Markup(html_text))
    return element
