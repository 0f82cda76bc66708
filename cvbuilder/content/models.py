"""Typed representations of CV documents and their content blocks."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

LocalizedText = Union[str, dict[str, str]]

# Block keys holding LocalizedText values.
TEXT_FIELDS = ("name", "title", "text")
CONTACT_KEYS = ("email", "phone", "location")


class BlockError(ValueError):
    """Raised when a block cannot be interpreted."""


class UnsupportedBlockError(BlockError):
    """Raised for a block whose ``type`` is not part of the block vocabulary."""

    def __init__(self, block_type: Any) -> None:
        super().__init__(f"Unknown block type: {block_type}")
        self.block_type = block_type


def has_text(value: Any) -> bool:
    """Return True when a localized text value carries something to display."""
    if isinstance(value, str):
        return bool(value)
    if isinstance(value, Mapping):
        return bool(value)
    return False


def normalize_text(value: Any) -> Any:
    """Coerce loosely typed author text into a LocalizedText value or None.

    Numbers become strings, ``None`` translations are dropped, and any other
    shape is treated as missing text.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        normalized: dict[str, str] = {}
        for code, text in value.items():
            scalar = _scalar_text(text)
            if scalar is not None:
                normalized[str(code)] = scalar
        return normalized
    return _scalar_text(value)


def _scalar_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


OptionalText = Annotated[Optional[LocalizedText], BeforeValidator(normalize_text)]


class _BlockModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)


class Contact(_BlockModel):
    """Contact details shown under the header name."""

    email: OptionalText = Field(default=None)
    phone: OptionalText = Field(default=None)
    location: OptionalText = Field(default=None)


class HeaderBlock(_BlockModel):
    """Top-of-page identity block: name, job title, and contact line."""

    type: Literal["header"] = "header"
    name: OptionalText = Field(default=None)
    title: OptionalText = Field(default=None)
    contact: Optional[Contact] = Field(default=None)

    @field_validator("contact", mode="before")
    def _contact_mapping(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, (Mapping, Contact)):
            logger.warning("Ignoring non-mapping 'contact' value of type %s.", type(value).__name__)
            return None
        if isinstance(value, Mapping):
            return dict(value)
        return value


class HeadingBlock(_BlockModel):
    type: Literal["heading"] = "heading"
    text: OptionalText = Field(default=None)
    level: int = Field(default=1, ge=1, le=6)

    @field_validator("level", mode="before")
    def _default_level(cls, value: Any) -> Any:
        if value is None or value == 0 or value == "":
            return 1
        return value


class ParagraphBlock(_BlockModel):
    type: Literal["paragraph"] = "paragraph"
    text: OptionalText = Field(default=None)


class _ContainerBlock(_BlockModel):
    title: OptionalText = Field(default=None)
    blocks: list[Any] = Field(
        default_factory=list,
        description="Child blocks, parsed lazily so one bad child cannot sink its siblings.",
    )

    @field_validator("blocks", mode="before")
    def _ensure_sequence(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            logger.warning("Ignoring non-list 'blocks' value of type %s.", type(value).__name__)
            return []
        return value


class SectionBlock(_ContainerBlock):
    """Anchored top-level grouping; titled sections appear in the table of contents."""

    type: Literal["section"] = "section"


class SubsectionBlock(_ContainerBlock):
    type: Literal["subsection"] = "subsection"


class ListBlock(_BlockModel):
    type: Literal["list"] = "list"
    title: OptionalText = Field(default=None)
    items: list[LocalizedText] = Field(default_factory=list)

    @field_validator("items", mode="before")
    def _ensure_items(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            logger.warning("Ignoring non-list 'items' value of type %s.", type(value).__name__)
            return []
        items = (normalize_text(item) for item in value)
        return [item for item in items if item is not None]


class DividerBlock(_BlockModel):
    type: Literal["divider"] = "divider"


Block = Union[
    HeaderBlock,
    HeadingBlock,
    ParagraphBlock,
    SectionBlock,
    SubsectionBlock,
    ListBlock,
    DividerBlock,
]

BLOCK_MODELS: dict[str, type[_BlockModel]] = {
    "header": HeaderBlock,
    "heading": HeadingBlock,
    "paragraph": ParagraphBlock,
    "section": SectionBlock,
    "subsection": SubsectionBlock,
    "list": ListBlock,
    "divider": DividerBlock,
}


def parse_block(data: Any) -> Block:
    """Validate raw block data into its typed model."""
    if isinstance(data, _BlockModel):
        return data  # type: ignore[return-value]
    if not isinstance(data, Mapping):
        raise BlockError(f"Block must be an object, got {type(data).__name__}.")
    block_type = data.get("type")
    if not block_type:
        raise BlockError("Block is missing a 'type'.")
    model = BLOCK_MODELS.get(block_type) if isinstance(block_type, str) else None
    if model is None:
        raise UnsupportedBlockError(block_type)
    try:
        return model.model_validate(dict(data))  # type: ignore[return-value]
    except ValidationError as exc:
        raise BlockError(
            f"Invalid '{block_type}' block ({exc.error_count()} error(s)): {exc.errors()[0]['msg']}"
        ) from exc


class CVDocument(BaseModel):
    """A whole CV: an ordered sequence of top-level blocks."""

    model_config = ConfigDict(extra="allow", frozen=True)

    blocks: list[Any] = Field(description="Top-level blocks in display order.")
