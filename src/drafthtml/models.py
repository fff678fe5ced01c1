"""Document model types for drafthtml.

The model mirrors the editor's raw content format: an ordered list of
:class:`Block` values plus an entity map.  Range offsets and lengths count
UTF-16 code units, matching the editor's string model; see
:mod:`drafthtml.utils.utf16`.

All types are plain dataclasses.  :meth:`ContentState.from_raw` and
:meth:`ContentState.to_raw` translate to and from the camelCase JSON shape::

    {
        "blocks": [
            {"key": "a1", "type": "unstyled", "text": "Hi", "depth": 0,
             "inlineStyleRanges": [{"style": "BOLD", "offset": 0, "length": 2}],
             "entityRanges": [], "data": {}}
        ],
        "entityMap": {"0": {"type": "LINK", "mutability": "MUTABLE",
                            "data": {"url": "https://example.com"}}}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Mutability(str, Enum):
    """How the editor treats the text an entity is attached to."""

    IMMUTABLE = "IMMUTABLE"
    MUTABLE = "MUTABLE"
    SEGMENTED = "SEGMENTED"


class BlockType(str, Enum):
    """Block types with a defined HTML mapping."""

    UNSTYLED = "unstyled"
    PARAGRAPH = "paragraph"
    HEADER_ONE = "header-one"
    HEADER_TWO = "header-two"
    HEADER_THREE = "header-three"
    HEADER_FOUR = "header-four"
    HEADER_FIVE = "header-five"
    HEADER_SIX = "header-six"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code-block"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    ATOMIC = "atomic"


# ---------------------------------------------------------------------------
# Ranges, entities, blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StyleRange:
    """One inline style applied to ``length`` code units from ``offset``."""

    style: str
    offset: int
    length: int


@dataclass(frozen=True)
class EntityRange:
    """An entity reference covering ``length`` code units from ``offset``."""

    key: int | str
    offset: int
    length: int


@dataclass
class Entity:
    """A non-text payload (link, photo, file, ...) referenced by key."""

    type: str
    mutability: Mutability = Mutability.IMMUTABLE
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Block:
    """One structural unit of the document, in reading order."""

    type: str = BlockType.UNSTYLED.value
    text: str = ""
    depth: int = 0
    inline_style_ranges: list[StyleRange] = field(default_factory=list)
    entity_ranges: list[EntityRange] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)
    key: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.type, BlockType):
            self.type = self.type.value
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")


@dataclass
class ContentState:
    """A complete document: ordered blocks plus the entity map.

    The entity map is append-only while a document is being built;
    :meth:`create_entity` hands out monotonically increasing integer keys.
    """

    blocks: list[Block] = field(default_factory=list)
    entity_map: dict[int | str, Entity] = field(default_factory=dict)

    def create_entity(
        self,
        type: str,
        mutability: Mutability = Mutability.IMMUTABLE,
        data: dict[str, Any] | None = None,
    ) -> int:
        """Register a new entity and return its key."""
        key = self._next_key()
        self.entity_map[key] = Entity(type=type, mutability=mutability, data=dict(data or {}))
        return key

    def get_entity(self, key: int | str) -> Entity | None:
        """Look up an entity, treating ``1`` and ``"1"`` as the same key."""
        if key in self.entity_map:
            return self.entity_map[key]
        if isinstance(key, int):
            return self.entity_map.get(str(key))
        if key.isdigit():
            return self.entity_map.get(int(key))
        return None

    def _next_key(self) -> int:
        numeric = [int(k) for k in self.entity_map if str(k).isdigit()]
        return max(numeric) + 1 if numeric else 0

    # ------------------------------------------------------------------
    # Raw (JSON) form
    # ------------------------------------------------------------------

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> ContentState:
        """Build a content state from the editor's raw JSON dict."""
        blocks = [
            Block(
                type=b.get("type", BlockType.UNSTYLED.value),
                text=b.get("text", ""),
                depth=b.get("depth", 0),
                inline_style_ranges=[
                    StyleRange(style=r["style"], offset=r["offset"], length=r["length"])
                    for r in b.get("inlineStyleRanges", [])
                ],
                entity_ranges=[
                    EntityRange(key=r["key"], offset=r["offset"], length=r["length"])
                    for r in b.get("entityRanges", [])
                ],
                data=dict(b.get("data") or {}),
                key=b.get("key", ""),
            )
            for b in raw.get("blocks", [])
        ]
        entity_map: dict[int | str, Entity] = {}
        for key, e in (raw.get("entityMap") or {}).items():
            entity_map[int(key) if str(key).isdigit() else key] = Entity(
                type=e["type"],
                mutability=Mutability(e.get("mutability", Mutability.IMMUTABLE.value)),
                data=dict(e.get("data") or {}),
            )
        return cls(blocks=blocks, entity_map=entity_map)

    def to_raw(self) -> dict[str, Any]:
        """Return the editor's raw JSON dict for this content state."""
        return {
            "blocks": [
                {
                    "key": b.key,
                    "type": b.type,
                    "text": b.text,
                    "depth": b.depth,
                    "inlineStyleRanges": [
                        {"style": r.style, "offset": r.offset, "length": r.length}
                        for r in b.inline_style_ranges
                    ],
                    "entityRanges": [
                        {"key": r.key, "offset": r.offset, "length": r.length}
                        for r in b.entity_ranges
                    ],
                    "data": dict(b.data),
                }
                for b in self.blocks
            ],
            "entityMap": {
                str(key): {
                    "type": e.type,
                    "mutability": Mutability(e.mutability).value,
                    "data": dict(e.data),
                }
                for key, e in self.entity_map.items()
            },
        }


# ---------------------------------------------------------------------------
# Conversion warnings
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNKNOWN_BLOCK_TYPE"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)
