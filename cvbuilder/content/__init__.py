"""Document model and loaders for CV data."""

from .models import (
    BLOCK_MODELS,
    CONTACT_KEYS,
    TEXT_FIELDS,
    Block,
    BlockError,
    Contact,
    CVDocument,
    DividerBlock,
    HeaderBlock,
    HeadingBlock,
    ListBlock,
    LocalizedText,
    ParagraphBlock,
    SectionBlock,
    SubsectionBlock,
    UnsupportedBlockError,
    has_text,
    normalize_text,
    parse_block,
)
from .parsers import (
    DocumentLoadError,
    InvalidDocumentError,
    is_valid_document,
    load_document,
    validate_document,
)

__all__ = [
    "BLOCK_MODELS",
    "CONTACT_KEYS",
    "TEXT_FIELDS",
    "Block",
    "BlockError",
    "Contact",
    "CVDocument",
    "DividerBlock",
    "DocumentLoadError",
    "HeaderBlock",
    "HeadingBlock",
    "InvalidDocumentError",
    "ListBlock",
    "LocalizedText",
    "ParagraphBlock",
    "SectionBlock",
    "SubsectionBlock",
    "UnsupportedBlockError",
    "has_text",
    "is_valid_document",
    "load_document",
    "normalize_text",
    "parse_block",
    "validate_document",
]
