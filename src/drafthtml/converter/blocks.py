"""Block-level export: content state to (uncleaned) HTML.

Block tags::

    unstyled, paragraph      -> <p>
    header-one .. header-six -> <h1> .. <h6>
    blockquote               -> <blockquote>
    code-block               -> <pre>
    *-list-item              -> <li> inside <ul>/<ol>, nested by depth
    atomic                   -> <figure class="atomic <css>-block">entity</figure>

Inside a text block, style ranges and link entities become nested wrappers.
They are kept on a range stack: at every point where the set of active
ranges changes, wrappers that end are closed (along with anything opened
after them, which is re-opened if it continues) and new wrappers are opened
outermost first, ordered by how far they extend.  A link is always one
element: a style that began before the link and ends inside it is split
at the link's start instead.

A run of N >= 2 empty ``unstyled`` blocks renders as ``<p></p>`` followed
by N - 1 ``<br>`` tags; N empty paragraphs would collapse visually.
"""

from __future__ import annotations

from drafthtml.errors import (
    ConversionError,
    DraftHtmlError,
    EntityNotFoundError,
    MalformedEntityDataError,
)
from drafthtml.models import Block, BlockType, ContentState, ConversionWarning, Entity
from drafthtml.toolbar import ToolbarConfig
from drafthtml.utils.utf16 import to_char_index, utf16_boundaries

from .entities import entity_fragment
from .fragments import Fragment, escape_text
from .inline import convert_inline

_BLOCK_TAGS: dict[str, str] = {
    BlockType.UNSTYLED.value: "p",
    BlockType.PARAGRAPH.value: "p",
    BlockType.HEADER_ONE.value: "h1",
    BlockType.HEADER_TWO.value: "h2",
    BlockType.HEADER_THREE.value: "h3",
    BlockType.HEADER_FOUR.value: "h4",
    BlockType.HEADER_FIVE.value: "h5",
    BlockType.HEADER_SIX.value: "h6",
    BlockType.BLOCKQUOTE.value: "blockquote",
    BlockType.CODE_BLOCK.value: "pre",
}

_LIST_TAGS: dict[str, str] = {
    BlockType.UNORDERED_LIST_ITEM.value: "ul",
    BlockType.ORDERED_LIST_ITEM.value: "ol",
}

# Range-stack identifiers: ("style", style_id) or ("entity", range_index).
_Ident = tuple[str, object]


class BlockRenderer:
    """Render the blocks of one :class:`ContentState` to HTML.

    A renderer is bound to a single content state; warnings collected while
    rendering are available on :attr:`warnings` afterwards.

    Parameters
    ----------
    content:
        The document to render.
    toolbar:
        Recognized-kinds table.
    collapse_blank_lines:
        Apply the blank-line folding rule.
    external_rel:
        ``rel`` value for external links.
    unknown_block_policy:
        ``"paragraph"`` or ``"raise"`` for block types with no tag.
    """

    def __init__(
        self,
        content: ContentState,
        toolbar: ToolbarConfig,
        *,
        collapse_blank_lines: bool = True,
        external_rel: str = "noopener noreferrer",
        unknown_block_policy: str = "paragraph",
    ) -> None:
        self._content = content
        self._toolbar = toolbar
        self._collapse_blank_lines = collapse_blank_lines
        self._external_rel = external_rel
        self._unknown_block_policy = unknown_block_policy
        self.warnings: list[ConversionWarning] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Render every block in order and return the concatenated HTML."""
        parts: list[str] = []
        open_lists: list[tuple[str, int]] = []
        previous_blank = False

        for block in self._content.blocks:
            list_tag = _LIST_TAGS.get(block.type)
            if list_tag is not None:
                self._render_list_item(block, list_tag, open_lists, parts)
                previous_blank = False
                continue

            while open_lists:
                _close_list(open_lists, parts)

            blank = block.type == BlockType.UNSTYLED.value and block.text == ""
            if blank and previous_blank and self._collapse_blank_lines:
                parts.append("<br>")
            elif block.type == BlockType.ATOMIC.value:
                parts.append(self._render_atomic(block))
            else:
                parts.append(self._render_text_block(block))
            previous_blank = blank

        while open_lists:
            _close_list(open_lists, parts)

        return "".join(parts)

    def render_inline(self, block: Block, *, preformatted: bool = False) -> str:
        """Render the text of *block* with its style and entity ranges."""
        text = block.text
        if not text:
            return ""
        n = len(text)
        boundaries = utf16_boundaries(text)

        def char_span(offset: int, length: int) -> tuple[int, int]:
            start = to_char_index(boundaries, offset)
            return start, max(start, to_char_index(boundaries, offset + length))

        # Styles, in first-declared order.
        style_fragments: dict[str, Fragment] = {}
        styles_at: list[frozenset[str]] = [frozenset()] * n
        for style_range in block.inline_style_ranges:
            if style_range.style not in style_fragments:
                style_fragments[style_range.style] = self._style_fragment(
                    style_range.style, block
                )
            start, end = char_span(style_range.offset, style_range.length)
            for i in range(start, end):
                styles_at[i] = styles_at[i] | {style_range.style}
        style_order = {style: i for i, style in enumerate(style_fragments)}

        # Entities; the first range claiming a character wins.
        entities: list[tuple[int, int, Fragment]] = []
        entity_at: list[int | None] = [None] * n
        for entity_range in block.entity_ranges:
            fragment = self._entity_fragment(entity_range.key, block)
            start, end = char_span(entity_range.offset, entity_range.length)
            index = len(entities)
            entities.append((start, end, fragment))
            for i in range(start, end):
                if entity_at[i] is None:
                    entity_at[i] = index

        def fragment_of(ident: _Ident) -> Fragment:
            if ident[0] == "entity":
                return entities[ident[1]][2]
            return style_fragments[ident[1]]

        def run_end(ident: _Ident, pos: int) -> int:
            if ident[0] == "entity":
                return entities[ident[1]][1]
            while pos < n and ident[1] in styles_at[pos]:
                pos += 1
            return pos

        def open_order(ident: _Ident, pos: int) -> tuple[int, int, int]:
            if ident[0] == "entity":
                return (-run_end(ident, pos), 0, ident[1])
            return (-run_end(ident, pos), 1, style_order[ident[1]])

        parts: list[str] = []
        stack: list[_Ident] = []
        i = 0
        while i < n:
            j = i + 1
            while j < n and styles_at[j] == styles_at[i] and entity_at[j] == entity_at[i]:
                j += 1

            entity_index = entity_at[i]
            replaces = entity_index is not None and not entities[entity_index][2].wraps
            wanted: list[_Ident] = [("style", s) for s in styles_at[i]]
            if entity_index is not None and not replaces:
                wanted.append(("entity", entity_index))

            keep = 0
            while keep < len(stack) and stack[keep] in wanted:
                keep += 1
            # A wrapping entity is never split: styles that end inside it are
            # closed here and re-opened within the entity.
            for ident in wanted:
                if ident[0] != "entity" or ident in stack:
                    continue
                entity_end = run_end(ident, i)
                for k in range(keep):
                    if stack[k][0] == "style" and run_end(stack[k], i) < entity_end:
                        keep = k
                        break
            for ident in reversed(stack[keep:]):
                parts.append(fragment_of(ident).end)
            del stack[keep:]

            opening = sorted(
                (ident for ident in wanted if ident not in stack),
                key=lambda ident: open_order(ident, i),
            )
            for ident in opening:
                parts.append(fragment_of(ident).start)
                stack.append(ident)

            if replaces:
                if i == 0 or entity_at[i - 1] != entity_index:
                    parts.append(entities[entity_index][2].start)
            else:
                parts.append(_escape_segment(text[i:j], preformatted))
            i = j

        for ident in reversed(stack):
            parts.append(fragment_of(ident).end)
        return "".join(parts)

    # ------------------------------------------------------------------
    # Block type renderers
    # ------------------------------------------------------------------

    def _render_text_block(self, block: Block) -> str:
        tag = _BLOCK_TAGS.get(block.type)
        if tag is None:
            tag = self._unknown_block_tag(block)
        inner = self.render_inline(block, preformatted=tag == "pre")
        return f"<{tag}>{inner}</{tag}>"

    def _render_list_item(
        self,
        block: Block,
        list_tag: str,
        open_lists: list[tuple[str, int]],
        parts: list[str],
    ) -> None:
        depth = block.depth
        while open_lists and (
            open_lists[-1][1] > depth
            or (open_lists[-1][1] == depth and open_lists[-1][0] != list_tag)
        ):
            _close_list(open_lists, parts)

        if open_lists and open_lists[-1][1] == depth:
            parts.append("</li>")
        else:
            # A deeper item nests its list inside the still-open parent <li>.
            parts.append(f"<{list_tag}>")
            open_lists.append((list_tag, depth))
        parts.append(f"<li>{self.render_inline(block)}")

    def _render_atomic(self, block: Block) -> str:
        if not block.entity_ranges:
            raise MalformedEntityDataError(
                message="atomic block carries no entity",
                context={"block_key": block.key, "field": "entityRanges"},
            )
        key = block.entity_ranges[0].key
        entity = self._lookup_entity(key, block)
        fragment = self._entity_fragment(key, block)
        if fragment.wraps:
            # Import only reads media entities out of a figure.
            raise MalformedEntityDataError(
                message=f"{entity.type} entity cannot fill an atomic block",
                context={"block_key": block.key, "entity_type": entity.type, "field": "type"},
            )
        kind = self._toolbar.entity_kind(entity.type)
        # entity_fragment has already rejected unknown types.
        css_class = self._toolbar[kind].css_class
        return f'<figure class="atomic {css_class}-block">{fragment}</figure>'

    def _unknown_block_tag(self, block: Block) -> str:
        if self._unknown_block_policy == "raise":
            raise ConversionError(
                message=f"No HTML mapping for block type: {block.type}",
                context={"block_key": block.key, "block_type": block.type},
            )
        self.warnings.append(ConversionWarning(
            code="UNKNOWN_BLOCK_TYPE",
            message=f"Block type {block.type!r} rendered as a paragraph",
            context={"block_key": block.key, "block_type": block.type},
        ))
        return "p"

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _style_fragment(self, style_id: str, block: Block) -> Fragment:
        try:
            return convert_inline(style_id, self._toolbar)
        except DraftHtmlError as exc:
            exc.context.setdefault("block_key", block.key)
            raise

    def _lookup_entity(self, key: int | str, block: Block) -> Entity:
        entity = self._content.get_entity(key)
        if entity is None:
            raise EntityNotFoundError(
                message=f"Entity {key!r} is not in the entity map",
                context={"entity_key": key, "block_key": block.key},
            )
        return entity

    def _entity_fragment(self, key: int | str, block: Block) -> Fragment:
        entity = self._lookup_entity(key, block)
        try:
            return entity_fragment(entity, self._toolbar, external_rel=self._external_rel)
        except DraftHtmlError as exc:
            exc.context.setdefault("block_key", block.key)
            raise


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _close_list(open_lists: list[tuple[str, int]], parts: list[str]) -> None:
    tag, _ = open_lists.pop()
    parts.append(f"</li></{tag}>")


def _escape_segment(segment: str, preformatted: bool) -> str:
    escaped = escape_text(segment)
    if preformatted:
        return escaped
    return escaped.replace("\n", "<br>")
