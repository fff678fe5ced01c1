"""Import-side node classification.

Every element met while walking an HTML tree is classified as exactly one
of:

* ``BLOCK`` -- opens a block (``<figure>`` opens an atomic block),
* ``ENTITY`` -- creates an entity (link, file, photo, rich, divider, table),
* ``STYLE`` -- adds style ids to the running style set,
* ``IGNORE`` -- carries no meaning of its own; its children are walked.

Rules, first match wins:

1. ``<figure>``                         -> atomic block
2. ``<table>``                          -> table entity (rows/cells are read by
                                           :mod:`drafthtml.converter.tables`)
3. ``<a class="file-name">``            -> file entity; any other ``<a>`` -> link
4. ``<img>`` inside a ``<figure>``      -> photo entity
5. ``<iframe>`` inside a ``<figure>``   -> rich entity
6. ``<hr>``                             -> divider entity
7. inline style (``text-align``, ``font-weight``, ``<strong>``, ...) -> style
8. anything else                        -> ignore

Text-level block tags (``p``, ``h1``..``h6``, ``li``, ...) are classified as
blocks after rule 6; a block tag may also carry styles (``<p
style="text-align:center">``).

Missing attributes never fail classification; entity data fields default
to ``""``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from bs4 import Tag

from drafthtml.models import BlockType, ContentState, Mutability
from drafthtml.toolbar import TOOLBAR_DEFAULTS, Kind, ToolbarConfig

from .tables import build_table_data


class NodeKind(str, Enum):
    BLOCK = "block"
    STYLE = "style"
    ENTITY = "entity"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one element."""

    kind: NodeKind
    block_type: str | None = None
    entity_kind: Kind | None = None
    styles: frozenset[str] = frozenset()


_IGNORE = Classification(NodeKind.IGNORE)

_HEADING_TYPES: dict[str, str] = {
    "h1": BlockType.HEADER_ONE.value,
    "h2": BlockType.HEADER_TWO.value,
    "h3": BlockType.HEADER_THREE.value,
    "h4": BlockType.HEADER_FOUR.value,
    "h5": BlockType.HEADER_FIVE.value,
    "h6": BlockType.HEADER_SIX.value,
}

_TEXT_BLOCK_TYPES: dict[str, str] = {
    "p": BlockType.UNSTYLED.value,
    "div": BlockType.UNSTYLED.value,
    "blockquote": BlockType.BLOCKQUOTE.value,
    "pre": BlockType.CODE_BLOCK.value,
    **_HEADING_TYPES,
}

_MARK_TAGS: dict[str, Kind] = {
    "strong": Kind.BOLD,
    "b": Kind.BOLD,
    "em": Kind.ITALIC,
    "i": Kind.ITALIC,
    "u": Kind.UNDERLINE,
    "ins": Kind.UNDERLINE,
    "s": Kind.STRIKETHROUGH,
    "del": Kind.STRIKETHROUGH,
    "strike": Kind.STRIKETHROUGH,
    "code": Kind.CODE,
}

_NUMERIC_WEIGHT_RE = re.compile(r"^\d+$")


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def attr(node: Tag, name: str) -> str:
    """Return attribute *name* as a string, ``""`` when absent."""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def has_class(node: Tag, class_name: str) -> bool:
    return class_name in attr(node, "class").split()


def in_figure(node: Tag) -> bool:
    """True when *node* has an enclosing ``<figure>``."""
    return node.find_parent("figure") is not None


def parse_style(value: str) -> dict[str, str]:
    """Parse an inline ``style`` attribute into ``{property: value}``.

    Property names and values are lower-cased; malformed declarations are
    skipped.

    >>> parse_style("Text-Align: Center; color")
    {'text-align': 'center'}
    """
    declarations: dict[str, str] = {}
    for declaration in value.split(";"):
        prop, sep, val = declaration.partition(":")
        if not sep:
            continue
        prop, val = prop.strip().lower(), val.strip().lower()
        if prop and val:
            declarations[prop] = val.replace("!important", "").strip()
    return declarations


# ---------------------------------------------------------------------------
# Classifier helpers
# ---------------------------------------------------------------------------

def convert_to_block(tag: str, node: Tag) -> str | None:
    """Return the block type *node* opens, or ``None``.

    Tables are rendered by the table entity, so ``<table>`` returns ``None``.
    """
    tag = tag.lower()
    if tag == "figure":
        return BlockType.ATOMIC.value
    if tag == "li":
        parent = node.find_parent(["ul", "ol"])
        if parent is not None and parent.name == "ol":
            return BlockType.ORDERED_LIST_ITEM.value
        return BlockType.UNORDERED_LIST_ITEM.value
    return _TEXT_BLOCK_TYPES.get(tag)


def list_depth(node: Tag) -> int:
    """Nesting depth of a list item: the number of enclosing lists minus one."""
    return max(len(node.find_parents(["ul", "ol"])) - 1, 0)


def _style_ids(tag: str, node: Tag, toolbar: ToolbarConfig) -> set[str]:
    found: set[str] = set()

    def add(kind: Kind) -> None:
        style_id = toolbar.id_of(kind)
        if style_id is not None:
            found.add(style_id)

    mark = _MARK_TAGS.get(tag)
    if mark is not None and not (mark is Kind.CODE and node.find_parent("pre") is not None):
        add(mark)

    declarations = parse_style(attr(node, "style"))

    alignment = declarations.get("text-align")
    if alignment:
        style_id = toolbar.alignment_style(alignment)
        if style_id is not None:
            found.add(style_id)

    weight = declarations.get("font-weight", "")
    if weight in ("bold", "bolder") or (_NUMERIC_WEIGHT_RE.match(weight) and int(weight) >= 600):
        add(Kind.BOLD)

    if declarations.get("font-style") in ("italic", "oblique"):
        add(Kind.ITALIC)

    decoration = declarations.get("text-decoration", "") + " " + declarations.get(
        "text-decoration-line", ""
    )
    if "underline" in decoration:
        add(Kind.UNDERLINE)
    if "line-through" in decoration:
        add(Kind.STRIKETHROUGH)

    if "monospace" in declarations.get("font-family", ""):
        add(Kind.CODE)

    return found


def convert_to_inline(
    tag: str,
    node: Tag,
    current_style: frozenset[str],
    toolbar: ToolbarConfig = TOOLBAR_DEFAULTS,
) -> frozenset[str]:
    """Return *current_style* plus any styles *node* contributes.

    The input set is never modified; adding a style that is already
    present is a no-op.
    """
    return current_style | _style_ids(tag.lower(), node, toolbar)


def entity_kind_of(tag: str, node: Tag) -> Kind | None:
    """Entity kind *node* creates under rules 2-6, or ``None``."""
    tag = tag.lower()
    if tag == "table":
        return Kind.TABLE
    if tag == "a":
        return Kind.FILE if has_class(node, "file-name") else Kind.LINK
    if tag == "img" and in_figure(node):
        return Kind.PHOTO
    if tag == "iframe" and in_figure(node):
        return Kind.RICH
    if tag == "hr":
        return Kind.DIVIDER
    return None


def classify(node: Tag, toolbar: ToolbarConfig = TOOLBAR_DEFAULTS) -> Classification:
    """Classify *node* by the rules in the module docstring."""
    tag = node.name.lower()

    if tag == "figure":
        return Classification(NodeKind.BLOCK, block_type=BlockType.ATOMIC.value)

    kind = entity_kind_of(tag, node)
    if kind is not None:
        return Classification(NodeKind.ENTITY, entity_kind=kind)

    styles = frozenset(_style_ids(tag, node, toolbar))
    block_type = convert_to_block(tag, node)
    if block_type is not None:
        return Classification(NodeKind.BLOCK, block_type=block_type, styles=styles)
    if styles:
        return Classification(NodeKind.STYLE, styles=styles)
    return _IGNORE


# ---------------------------------------------------------------------------
# Entity data
# ---------------------------------------------------------------------------

def entity_data(kind: Kind, node: Tag) -> dict[str, Any]:
    """Read the data dict for an entity of *kind* from *node*."""
    if kind is Kind.LINK:
        data: dict[str, Any] = {"url": attr(node, "href")}
        if attr(node, "target") == "_blank":
            data["external"] = True
        return data
    if kind is Kind.FILE:
        return {
            "src": attr(node, "href"),
            "name": attr(node, "download") or node.get_text(),
        }
    if kind is Kind.PHOTO:
        data = {"src": attr(node, "src")}
        if attr(node, "alt"):
            data["alt"] = attr(node, "alt")
        return data
    if kind is Kind.RICH:
        return {"src": attr(node, "src")}
    if kind is Kind.TABLE:
        return build_table_data(node)
    return {}


def convert_to_entity(
    tag: str,
    node: Tag,
    content: ContentState,
    toolbar: ToolbarConfig = TOOLBAR_DEFAULTS,
) -> int | None:
    """Register the entity *node* describes on *content* and return its key.

    Returns ``None`` when *node* does not create an entity.
    """
    kind = entity_kind_of(tag, node)
    if kind is None:
        return None
    mutability = Mutability.MUTABLE if kind is Kind.LINK else Mutability.IMMUTABLE
    return content.create_entity(toolbar[kind].id, mutability, entity_data(kind, node))
