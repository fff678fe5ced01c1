"""HTML to content state import pipeline.

:class:`HtmlImporter` parses an HTML fragment with BeautifulSoup and walks
it depth first.  The walk keeps:

* the block currently being filled (or none),
* the running style set, an immutable ``frozenset`` passed down the
  recursion so each subtree sees exactly the styles of its ancestors,
* the entity map and the output block list of the :class:`ContentState`
  under construction.

Text is buffered as chunks tagged with their style set and link entity;
when a block closes the chunks are folded into style and entity ranges
measured in UTF-16 code units.

Import never fails on sparse or hand-edited markup: unknown elements are
walked through, missing attributes become ``""``, and anything dropped is
reported as a :class:`ConversionWarning`.
"""

from __future__ import annotations

import dataclasses
import json
import sys
import time
from dataclasses import dataclass, field

from bs4 import NavigableString, Tag

from drafthtml.config import ConverterConfig
from drafthtml.models import (
    Block,
    BlockType,
    ContentState,
    ConversionWarning,
    EntityRange,
    StyleRange,
)
from drafthtml.observability import NoopMetricsHook, get_logger
from drafthtml.toolbar import Kind, ToolbarConfig
from drafthtml.utils.utf16 import utf16_length

from .classify import (
    NodeKind,
    classify,
    convert_to_entity,
    convert_to_inline,
    list_depth,
)
from .cleanup import parse_fragment

log = get_logger("drafthtml.converter")

ATOMIC_PLACEHOLDER = " "

# Elements whose content is never document text.
_SKIPPED_TAGS: frozenset[str] = frozenset({
    "script",
    "style",
    "head",
    "title",
    "template",
    "noscript",
})


@dataclass
class _Chunk:
    text: str
    styles: frozenset[str]
    entity: int | None


@dataclass
class _BlockBuffer:
    """Text and ranges of the block being filled."""

    type: str
    depth: int = 0
    chunks: list[_Chunk] = field(default_factory=list)

    def append(self, text: str, styles: frozenset[str], entity: int | None) -> None:
        if text:
            self.chunks.append(_Chunk(text, styles, entity))

    def is_empty(self) -> bool:
        return not self.chunks

    def to_block(self, key: str) -> Block:
        text = "".join(c.text for c in self.chunks)
        style_ranges: list[StyleRange] = []
        entity_ranges: list[EntityRange] = []
        open_styles: dict[str, int] = {}
        open_entity: tuple[int, int] | None = None
        pos = 0

        for chunk in self.chunks:
            for style in [s for s in open_styles if s not in chunk.styles]:
                start = open_styles.pop(style)
                style_ranges.append(StyleRange(style, start, pos - start))
            for style in sorted(chunk.styles - open_styles.keys()):
                open_styles[style] = pos

            if open_entity is not None and open_entity[0] != chunk.entity:
                entity_ranges.append(EntityRange(open_entity[0], open_entity[1], pos - open_entity[1]))
                open_entity = None
            if chunk.entity is not None and open_entity is None:
                open_entity = (chunk.entity, pos)

            pos += utf16_length(chunk.text)

        for style, start in open_styles.items():
            style_ranges.append(StyleRange(style, start, pos - start))
        if open_entity is not None:
            entity_ranges.append(EntityRange(open_entity[0], open_entity[1], pos - open_entity[1]))

        style_ranges.sort(key=lambda r: (r.offset, r.style))
        return Block(
            type=self.type,
            text=text,
            depth=self.depth,
            inline_style_ranges=style_ranges,
            entity_ranges=entity_ranges,
            key=key,
        )


@dataclass
class _FigureState:
    """What has been collected inside an atomic ``<figure>``."""

    entity: int | None = None
    caption: list[str] = field(default_factory=list)
    text: list[str] = field(default_factory=list)


class _TreeWalker:
    """Single-use walker; one instance per :meth:`HtmlImporter.convert` call."""

    def __init__(self, toolbar: ToolbarConfig, warnings: list[ConversionWarning]) -> None:
        self._toolbar = toolbar
        self._warnings = warnings
        self.content = ContentState()
        self._current: _BlockBuffer | None = None
        self._figure: _FigureState | None = None
        # Link keys that ended up holding at least one character.
        self._linked: set[int] = set()

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def walk(self, root: Tag) -> ContentState:
        self._visit_children(root, frozenset(), None)
        self._flush()
        if not self.content.blocks:
            self._emit(Block(type=BlockType.UNSTYLED.value))
        return self.content

    def _visit_children(self, node: Tag, styles: frozenset[str], link: int | None) -> None:
        for child in list(node.children):
            if isinstance(child, Tag):
                self._visit_element(child, styles, link)
            elif type(child) is NavigableString:
                self._visit_text(str(child), styles, link)

    def _visit_text(self, text: str, styles: frozenset[str], link: int | None) -> None:
        if self._figure is not None:
            self._figure.text.append(text)
            return
        if self._current is None:
            if not text.strip():
                return
            self._current = _BlockBuffer(type=BlockType.UNSTYLED.value)
        self._current.append(text, styles, link)
        if text and link is not None:
            self._linked.add(link)

    def _visit_element(self, node: Tag, styles: frozenset[str], link: int | None) -> None:
        tag = node.name.lower()
        if tag in _SKIPPED_TAGS:
            return
        if self._figure is not None:
            self._visit_in_figure(node, tag)
            return
        if tag == "br":
            self._line_break(styles, link)
            return

        classification = classify(node, self._toolbar)

        if classification.kind is NodeKind.BLOCK:
            if classification.block_type == BlockType.ATOMIC.value:
                self._visit_figure(node)
                return
            depth = list_depth(node) if tag == "li" else 0
            self._open(classification.block_type, depth)
            self._visit_children(node, styles | classification.styles, None)
            self._flush()
            return

        if classification.kind is NodeKind.ENTITY:
            if classification.entity_kind is Kind.LINK:
                key = convert_to_entity(tag, node, self.content, self._toolbar)
                self._visit_children(node, styles, key)
                if key is not None and key not in self._linked:
                    # An anchor with no text leaves no range to hold its entity.
                    del self.content.entity_map[key]
            else:
                # A media entity outside a figure still gets its own atomic block.
                self._flush()
                key = convert_to_entity(tag, node, self.content, self._toolbar)
                self._emit_atomic(key)
            return

        if classification.kind is NodeKind.STYLE:
            self._visit_children(node, convert_to_inline(tag, node, styles, self._toolbar), link)
            return

        self._visit_children(node, styles, link)

    # ------------------------------------------------------------------
    # Atomic figures
    # ------------------------------------------------------------------

    def _visit_figure(self, node: Tag) -> None:
        self._flush()
        self._figure = _FigureState()
        try:
            self._visit_figure_children(node)
            state = self._figure
        finally:
            self._figure = None

        if state.entity is None:
            text = "".join(state.text + state.caption).strip()
            self._warnings.append(ConversionWarning(
                code="FIGURE_WITHOUT_ENTITY",
                message="<figure> holds no recognized entity; kept as plain text",
                context={"text": text},
            ))
            if text:
                buffer = _BlockBuffer(type=BlockType.UNSTYLED.value)
                buffer.append(text, frozenset(), None)
                self._emit(buffer.to_block(self._next_block_key()))
            return

        caption = "".join(state.caption).strip()
        if caption:
            entity = self.content.get_entity(state.entity)
            if entity is not None:
                entity.data["caption"] = caption
        self._emit_atomic(state.entity)

    def _visit_figure_children(self, node: Tag) -> None:
        for child in list(node.children):
            if isinstance(child, Tag):
                self._visit_in_figure(child, child.name.lower())
            elif type(child) is NavigableString:
                self._figure.text.append(str(child))

    def _visit_in_figure(self, node: Tag, tag: str) -> None:
        if tag in _SKIPPED_TAGS:
            return
        if tag == "figcaption":
            self._figure.caption.append(node.get_text())
            return

        classification = classify(node, self._toolbar)
        if classification.kind is NodeKind.ENTITY and classification.entity_kind is not Kind.LINK:
            if self._figure.entity is None:
                self._figure.entity = convert_to_entity(tag, node, self.content, self._toolbar)
            else:
                self._warnings.append(ConversionWarning(
                    code="EXTRA_ATOMIC_ENTITY",
                    message=f"Ignored <{tag}>: atomic block already has an entity",
                    context={"tag": tag},
                ))
            return

        self._visit_figure_children(node)

    # ------------------------------------------------------------------
    # Block buffer management
    # ------------------------------------------------------------------

    def _open(self, block_type: str, depth: int) -> None:
        current = self._current
        if current is not None and current.is_empty():
            # An empty wrapper (<li><p>..</p></li>, <div><h2>..</h2></div>)
            # becomes the inner block; generic inner tags keep the outer type.
            if block_type != BlockType.UNSTYLED.value:
                current.type = block_type
                current.depth = depth
            return
        self._flush()
        self._current = _BlockBuffer(type=block_type, depth=depth)

    def _flush(self) -> None:
        if self._current is None:
            return
        buffer, self._current = self._current, None
        self._emit(buffer.to_block(self._next_block_key()))

    def _line_break(self, styles: frozenset[str], link: int | None) -> None:
        if self._current is None:
            # A <br> between blocks is a blank line.
            self._emit(Block(type=BlockType.UNSTYLED.value, key=self._next_block_key()))
            return
        self._current.append("\n", styles, link)
        if link is not None:
            self._linked.add(link)

    def _emit_atomic(self, entity_key: int) -> None:
        self._emit(Block(
            type=BlockType.ATOMIC.value,
            text=ATOMIC_PLACEHOLDER,
            entity_ranges=[EntityRange(entity_key, 0, utf16_length(ATOMIC_PLACEHOLDER))],
            key=self._next_block_key(),
        ))

    def _emit(self, block: Block) -> None:
        if not block.key:
            block.key = self._next_block_key()
        self.content.blocks.append(block)

    def _next_block_key(self) -> str:
        return f"b{len(self.content.blocks):04x}"


class HtmlImporter:
    """Convert HTML fragments to content states.

    Warnings from the most recent :meth:`convert` call are available on
    :attr:`warnings`.

    Parameters
    ----------
    config:
        Converter configuration.  Defaults to ``ConverterConfig()``.

    Examples
    --------
    >>> state = HtmlImporter().convert("<p>Hello</p>")
    >>> state.blocks[0].type, state.blocks[0].text
    ('unstyled', 'Hello')
    """

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self._config = config or ConverterConfig()
        self._metrics = self._config.metrics or NoopMetricsHook()
        self.warnings: list[ConversionWarning] = []

    def convert(self, html: str) -> ContentState:
        """Parse *html* and build a :class:`ContentState`.

        The result always holds at least one block; an empty fragment
        yields a single empty ``unstyled`` block.
        """
        started = time.perf_counter()
        self.warnings = []

        if self._config.debug_dump_html:
            print("[drafthtml] Imported HTML:", html, file=sys.stderr)

        root = parse_fragment(html or "", self._config.html_parser)
        content = _TreeWalker(self._config.toolbar, self.warnings).walk(root)

        if self._config.debug_dump_model:
            print(
                "[drafthtml] Content model:",
                json.dumps(content.to_raw(), indent=2, ensure_ascii=False, default=str),
                file=sys.stderr,
            )

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._metrics.increment("drafthtml.blocks_imported_total", len(content.blocks))
        self._metrics.increment("drafthtml.entities_imported_total", len(content.entity_map))
        self._metrics.timing("drafthtml.import_duration_ms", elapsed_ms)
        if self.warnings:
            self._metrics.increment(
                "drafthtml.conversion_warnings_total",
                len(self.warnings),
                tags={"direction": "import"},
            )
        log.debug(
            "import complete",
            extra={"extra_fields": {
                "op": "convert_from_html",
                "html_length": len(html or ""),
                "blocks": len(content.blocks),
                "entities": len(content.entity_map),
                "warnings": len(self.warnings),
            }},
        )
        return content


def convert_from_html(
    html: str,
    toolbar: ToolbarConfig | None = None,
    config: ConverterConfig | None = None,
) -> ContentState:
    """Import *html* into a :class:`ContentState`.

    *toolbar*, when given, overrides the table held by *config*.
    """
    config = config or ConverterConfig()
    if toolbar is not None:
        config = dataclasses.replace(config, toolbar=toolbar)
    return HtmlImporter(config).convert(html)
