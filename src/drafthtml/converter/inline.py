"""Inline style export: style id to an empty wrapping ``<span>``.

Alignment styles render as ``display:block;text-align:<value>;`` because
alignment is a block-level effect that cannot be expressed as a character
style.  Only the three configured alignment kinds take that branch; every
other style is a plain inline declaration.
"""

from __future__ import annotations

from drafthtml.errors import UnrecognizedStyleError
from drafthtml.toolbar import ALIGNMENT_VALUES, TOOLBAR_DEFAULTS, Kind, ToolbarConfig

from .fragments import Fragment, open_tag

_MARK_DECLARATIONS: dict[Kind, str] = {
    Kind.BOLD: "font-weight:bold;",
    Kind.ITALIC: "font-style:italic;",
    Kind.UNDERLINE: "text-decoration:underline;",
    Kind.STRIKETHROUGH: "text-decoration:line-through;",
    Kind.CODE: "font-family:monospace;",
}


def style_declaration(kind: Kind) -> str:
    """Return the CSS declaration block for a style kind."""
    if kind in ALIGNMENT_VALUES:
        return f"display:block;text-align:{ALIGNMENT_VALUES[kind]};"
    return _MARK_DECLARATIONS[kind]


def convert_inline(style_id: str, toolbar: ToolbarConfig = TOOLBAR_DEFAULTS) -> Fragment:
    """Return the empty ``<span>`` wrapper for *style_id*.

    Parameters
    ----------
    style_id:
        Style identifier as stored in a block's inline style ranges.
    toolbar:
        Recognized-kinds table the id is resolved against.

    Returns
    -------
    Fragment
        ``str(convert_inline("ALIGN_RIGHT"))`` is
        ``'<span style="display:block;text-align:right;"></span>'``.

    Raises
    ------
    UnrecognizedStyleError
        If *style_id* is not a style in *toolbar*.
    """
    kind = toolbar.style_kind(style_id)
    if kind is None:
        raise UnrecognizedStyleError(
            message=f"Unrecognized inline style: {style_id!r}",
            context={"style_id": style_id},
        )
    return Fragment(start=open_tag("span", [("style", style_declaration(kind))]), end="</span>")
