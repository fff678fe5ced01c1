"""drafthtml -- bidirectional converter between editor content and HTML.

Public re-exports
-----------------

* **Conversion:** :func:`convert_to_html`, :func:`convert_from_html`,
  :class:`HtmlExporter`, :class:`HtmlImporter`
* **Configuration:** :class:`ConverterConfig`, :class:`ToolbarConfig`,
  :data:`TOOLBAR_DEFAULTS`
* **Errors:** Every :class:`DraftHtmlError` subclass and :class:`ErrorCode`
* **Models:** :class:`ContentState`, :class:`Block`, ranges and entities

Usage::

    from drafthtml import convert_from_html, convert_to_html

    html = convert_to_html({"blocks": [{"type": "unstyled", "text": "Hi"}]})
    state = convert_from_html(html)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from drafthtml.config import ConverterConfig

# ── Conversion ──────────────────────────────────────────────────────────
from drafthtml.converter import (
    HtmlExporter,
    HtmlImporter,
    clean_html,
    convert_entity,
    convert_from_html,
    convert_inline,
    convert_to_html,
)

# ── Errors ──────────────────────────────────────────────────────────────
from drafthtml.errors import (
    ConfigurationError,
    ConversionError,
    DraftHtmlError,
    EntityNotFoundError,
    ErrorCode,
    MalformedEntityDataError,
    UnrecognizedEntityError,
    UnrecognizedStyleError,
)

# ── Models ──────────────────────────────────────────────────────────────
from drafthtml.models import (
    Block,
    BlockType,
    ContentState,
    ConversionWarning,
    Entity,
    EntityRange,
    Mutability,
    StyleRange,
)
from drafthtml.toolbar import TOOLBAR_DEFAULTS, Kind, KindConfig, ToolbarConfig

__all__ = [
    # Conversion
    "convert_to_html",
    "convert_from_html",
    "convert_inline",
    "convert_entity",
    "clean_html",
    "HtmlExporter",
    "HtmlImporter",
    # Configuration
    "ConverterConfig",
    "ToolbarConfig",
    "KindConfig",
    "Kind",
    "TOOLBAR_DEFAULTS",
    # Errors
    "DraftHtmlError",
    "ErrorCode",
    "ConfigurationError",
    "ConversionError",
    "UnrecognizedStyleError",
    "UnrecognizedEntityError",
    "MalformedEntityDataError",
    "EntityNotFoundError",
    # Models
    "ContentState",
    "Block",
    "BlockType",
    "StyleRange",
    "EntityRange",
    "Entity",
    "Mutability",
    "ConversionWarning",
]
