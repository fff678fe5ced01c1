"""Per-kind entity renderers.

Each renderer turns an entity's ``data`` dict into a :class:`Fragment`.
Media kinds (photo, file, rich embed, table) are wrapped in a custom-block
figure::

    <figure class="content-editor__custom-block photo"><img src="..."/></figure>

Links wrap the text they are attached to and dividers are a bare ``<hr/>``.
Required fields raise :class:`MalformedEntityDataError` when absent; an
empty string counts as present, because that is what the import pipeline
substitutes for missing attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from drafthtml.errors import MalformedEntityDataError
from drafthtml.toolbar import Kind

from .fragments import Fragment, escape_text, open_tag

CUSTOM_BLOCK_CLASS = "content-editor__custom-block"


@dataclass(frozen=True)
class RenderContext:
    """Per-call rendering inputs that do not come from the entity itself."""

    kind: Kind
    css_class: str
    external_rel: str = "noopener noreferrer"


Renderer = Callable[[dict[str, Any], RenderContext], Fragment]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(data: dict[str, Any], field: str, ctx: RenderContext) -> Any:
    value = data.get(field)
    if value is None:
        raise MalformedEntityDataError(
            message=f"{ctx.kind.value} entity is missing required field {field!r}",
            context={"entity_type": ctx.kind.value, "field": field},
        )
    return value


def _custom_block(inner: str, data: dict[str, Any], ctx: RenderContext) -> Fragment:
    classes = f"{CUSTOM_BLOCK_CLASS} {ctx.css_class}"
    caption = data.get("caption")
    if caption:
        classes += " with-caption"
        inner += f'<figcaption class="caption">{escape_text(str(caption))}</figcaption>'
    return Fragment(start=f"{open_tag('figure', [('class', classes)])}{inner}</figure>")


def is_external(data: dict[str, Any]) -> bool:
    return bool(data.get("external")) or data.get("target") == "_blank"


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def render_link(data: dict[str, Any], ctx: RenderContext) -> Fragment:
    url = data.get("url")
    if url is None:
        url = data.get("href")
    if url is None:
        raise MalformedEntityDataError(
            message="link entity is missing required field 'url'",
            context={"entity_type": ctx.kind.value, "field": "url"},
        )
    external = is_external(data)
    attrs = [
        ("class", f"{CUSTOM_BLOCK_CLASS} {ctx.css_class}"),
        ("href", url),
        ("target", "_blank" if external else "_self"),
        ("rel", ctx.external_rel if external else ""),
    ]
    return Fragment(start=open_tag("a", attrs), end="</a>")


def render_photo(data: dict[str, Any], ctx: RenderContext) -> Fragment:
    attrs: list[tuple[str, object]] = [("src", _require(data, "src", ctx))]
    if data.get("alt"):
        attrs.append(("alt", data["alt"]))
    return _custom_block(open_tag("img", attrs, void=True), data, ctx)


def render_file(data: dict[str, Any], ctx: RenderContext) -> Fragment:
    src = _require(data, "src", ctx)
    name = str(_require(data, "name", ctx))
    anchor = open_tag("a", [("class", "file-name"), ("href", src), ("download", name)])
    return _custom_block(f"{anchor}{escape_text(name)}</a>", data, ctx)


def render_rich(data: dict[str, Any], ctx: RenderContext) -> Fragment:
    iframe = open_tag("iframe", [
        ("src", _require(data, "src", ctx)),
        ("frameborder", "0"),
        ("allowfullscreen", ""),
    ])
    inner = f'<div class="rich-media-wrapper">{iframe}</iframe></div>'
    return _custom_block(inner, data, ctx)


def render_divider(data: dict[str, Any], ctx: RenderContext) -> Fragment:
    return Fragment(start="<hr/>")


def render_table(data: dict[str, Any], ctx: RenderContext) -> Fragment:
    rows = _require(data, "rows", ctx)
    if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
        raise MalformedEntityDataError(
            message="table entity 'rows' must be a list of lists",
            context={"entity_type": ctx.kind.value, "field": "rows"},
        )
    header = bool(data.get("header", True)) and bool(rows)
    head_rows, body_rows = (rows[:1], rows[1:]) if header else ([], rows)

    parts = ["<table>"]
    if head_rows:
        parts.append("<thead>")
        parts.extend(_table_row(row, "th") for row in head_rows)
        parts.append("</thead>")
    if body_rows:
        parts.append("<tbody>")
        parts.extend(_table_row(row, "td") for row in body_rows)
        parts.append("</tbody>")
    parts.append("</table>")
    return _custom_block("".join(parts), data, ctx)


def _table_row(cells: list[Any], cell_tag: str) -> str:
    rendered = "".join(
        f"<{cell_tag}>{escape_text('' if cell is None else str(cell))}</{cell_tag}>"
        for cell in cells
    )
    return f"<tr>{rendered}</tr>"


# ------------------------------------------------------------------
# Dispatch table
# ------------------------------------------------------------------

ENTITY_RENDERERS: dict[Kind, Renderer] = {
    Kind.LINK: render_link,
    Kind.PHOTO: render_photo,
    Kind.FILE: render_file,
    Kind.RICH: render_rich,
    Kind.DIVIDER: render_divider,
    Kind.TABLE: render_table,
}
