"""HTML <-> content-state conversion pipeline.

Public API:

- :class:`HtmlExporter` / :func:`convert_to_html` -- content state -> HTML.
- :class:`HtmlImporter` / :func:`convert_from_html` -- HTML -> content state.
- :func:`convert_inline` -- style id -> wrapping ``<span>``.
- :func:`convert_entity` -- entity -> markup.
- :func:`clean_html` -- export cleanup pass.
- :func:`classify`, :func:`convert_to_block`, :func:`convert_to_inline`,
  :func:`convert_to_entity` -- import-side node classification.
"""

from drafthtml.converter.classify import (
    Classification,
    NodeKind,
    classify,
    convert_to_block,
    convert_to_entity,
    convert_to_inline,
)
from drafthtml.converter.cleanup import clean_html
from drafthtml.converter.entities import convert_entity, entity_fragment
from drafthtml.converter.fragments import Fragment
from drafthtml.converter.from_html import HtmlImporter, convert_from_html
from drafthtml.converter.inline import convert_inline
from drafthtml.converter.to_html import HtmlExporter, convert_to_html

__all__ = [
    "Classification",
    "Fragment",
    "HtmlExporter",
    "HtmlImporter",
    "NodeKind",
    "classify",
    "clean_html",
    "convert_entity",
    "convert_from_html",
    "convert_inline",
    "convert_to_block",
    "convert_to_entity",
    "convert_to_html",
    "convert_to_inline",
    "entity_fragment",
]
