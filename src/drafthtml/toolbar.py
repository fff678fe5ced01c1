"""Recognized-kinds table shared by the export and import pipelines.

The editor toolbar defines which entity kinds (link, photo, file, ...) and
which inline styles (alignment, bold, ...) exist, and under which ``id`` the
document model stores them.  The converter never invents a kind that is not
listed here.

A :class:`ToolbarConfig` is resolved once from a plain mapping::

    toolbar = ToolbarConfig.from_mapping({
        "link": {"id": "LINK", "cssClass": "link"},
        ...
    })

Resolution rejects unknown kind names, requires every kind the converter
depends on, and checks that ids are unique inside the entity namespace and
inside the style namespace.  After that, lookups are plain dict hits.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from drafthtml.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------

class Kind(str, Enum):
    """Closed set of semantic kinds the converter understands."""

    LINK = "link"
    PHOTO = "photo"
    FILE = "file"
    DIVIDER = "divider"
    RICH = "rich"
    TABLE = "table"
    ALIGN_LEFT = "alignLeft"
    ALIGN_CENTER = "alignCenter"
    ALIGN_RIGHT = "alignRight"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"


ENTITY_KINDS: frozenset[Kind] = frozenset({
    Kind.LINK,
    Kind.PHOTO,
    Kind.FILE,
    Kind.DIVIDER,
    Kind.RICH,
    Kind.TABLE,
})

ALIGNMENT_KINDS: frozenset[Kind] = frozenset({
    Kind.ALIGN_LEFT,
    Kind.ALIGN_CENTER,
    Kind.ALIGN_RIGHT,
})

MARK_KINDS: frozenset[Kind] = frozenset({
    Kind.BOLD,
    Kind.ITALIC,
    Kind.UNDERLINE,
    Kind.STRIKETHROUGH,
    Kind.CODE,
})

STYLE_KINDS: frozenset[Kind] = ALIGNMENT_KINDS | MARK_KINDS

# Inline marks are optional: a toolbar without "bold" simply has no bold.
REQUIRED_KINDS: frozenset[Kind] = ENTITY_KINDS | ALIGNMENT_KINDS

# CSS ``text-align`` value for each alignment kind.
ALIGNMENT_VALUES: dict[Kind, str] = {
    Kind.ALIGN_LEFT: "left",
    Kind.ALIGN_CENTER: "center",
    Kind.ALIGN_RIGHT: "right",
}


@dataclass(frozen=True)
class KindConfig:
    """Identifier and CSS class for one toolbar kind."""

    id: str
    css_class: str


# ---------------------------------------------------------------------------
# Resolved table
# ---------------------------------------------------------------------------

class ToolbarConfig:
    """Validated, read-only recognized-kinds table.

    Entries are reachable by :class:`Kind` (``toolbar[Kind.PHOTO]``) or by
    attribute using the kind name (``toolbar.photo``, ``toolbar.alignCenter``).
    Instances are immutable and safe to share between conversions.

    Raises
    ------
    ConfigurationError
        If a kind name is unknown, a required kind is missing, or two kinds
        share an id within the same namespace.
    """

    def __init__(self, kinds: Mapping[Kind | str, KindConfig]) -> None:
        resolved: dict[Kind, KindConfig] = {}
        for name, entry in kinds.items():
            try:
                kind = Kind(name)
            except ValueError as exc:
                raise ConfigurationError(
                    message=f"Unknown toolbar kind: {name!r}",
                    context={"kind": str(name)},
                    cause=exc,
                ) from exc
            if not entry.id:
                raise ConfigurationError(
                    message=f"Toolbar kind {kind.value!r} has an empty id",
                    context={"kind": kind.value},
                )
            resolved[kind] = entry

        missing = sorted(k.value for k in REQUIRED_KINDS - resolved.keys())
        if missing:
            raise ConfigurationError(
                message=f"Toolbar configuration is missing kinds: {', '.join(missing)}",
                context={"kind": missing},
            )

        self._kinds: Mapping[Kind, KindConfig] = MappingProxyType(resolved)
        self._entities_by_id = self._index(ENTITY_KINDS, "entity")
        self._styles_by_id = self._index(STYLE_KINDS, "style")
        self._alignments_by_value = {
            value: resolved[kind].id for kind, value in ALIGNMENT_VALUES.items()
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping[str, str]]) -> ToolbarConfig:
        """Build a table from the editor's ``{name: {"id", "cssClass"}}`` shape."""
        kinds: dict[str, KindConfig] = {}
        for name, entry in mapping.items():
            kinds[name] = KindConfig(
                id=str(entry.get("id", "")),
                css_class=str(entry.get("cssClass", entry.get("css_class", ""))),
            )
        return cls(kinds)

    def _index(self, namespace: frozenset[Kind], label: str) -> dict[str, Kind]:
        index: dict[str, Kind] = {}
        for kind, entry in self._kinds.items():
            if kind not in namespace:
                continue
            if entry.id in index:
                raise ConfigurationError(
                    message=(
                        f"Duplicate {label} id {entry.id!r} shared by "
                        f"{index[entry.id].value!r} and {kind.value!r}"
                    ),
                    context={"id": entry.id, "namespace": label},
                )
            index[entry.id] = kind
        return index

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __getitem__(self, kind: Kind | str) -> KindConfig:
        return self._kinds[Kind(kind)]

    def __getattr__(self, name: str) -> KindConfig:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._kinds[Kind(name)]
        except (ValueError, KeyError):
            raise AttributeError(name) from None

    def __contains__(self, kind: object) -> bool:
        try:
            return Kind(kind) in self._kinds
        except ValueError:
            return False

    def __iter__(self) -> Iterator[Kind]:
        return iter(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:
        entries = ", ".join(f"{k.value}={v.id!r}" for k, v in self._kinds.items())
        return f"ToolbarConfig({entries})"

    def entity_kind(self, entity_type: str) -> Kind | None:
        """Return the entity :class:`Kind` registered under *entity_type*."""
        return self._entities_by_id.get(entity_type)

    def style_kind(self, style_id: str) -> Kind | None:
        """Return the style :class:`Kind` registered under *style_id*."""
        return self._styles_by_id.get(style_id)

    def alignment_style(self, value: str) -> str | None:
        """Map a CSS ``text-align`` value to the alignment style id."""
        return self._alignments_by_value.get(value.strip().lower())

    def id_of(self, kind: Kind) -> str | None:
        """Return the configured id for *kind*, or ``None`` if absent."""
        entry = self._kinds.get(kind)
        return entry.id if entry is not None else None


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

TOOLBAR_DEFAULTS: ToolbarConfig = ToolbarConfig({
    Kind.LINK: KindConfig(id="LINK", css_class="link"),
    Kind.PHOTO: KindConfig(id="photo", css_class="photo"),
    Kind.FILE: KindConfig(id="document", css_class="document"),
    Kind.DIVIDER: KindConfig(id="divider", css_class="divider"),
    Kind.RICH: KindConfig(id="rich", css_class="rich"),
    Kind.TABLE: KindConfig(id="table", css_class="table"),
    Kind.ALIGN_LEFT: KindConfig(id="ALIGN_LEFT", css_class="align-left"),
    Kind.ALIGN_CENTER: KindConfig(id="ALIGN_CENTER", css_class="align-center"),
    Kind.ALIGN_RIGHT: KindConfig(id="ALIGN_RIGHT", css_class="align-right"),
    Kind.BOLD: KindConfig(id="BOLD", css_class="bold"),
    Kind.ITALIC: KindConfig(id="ITALIC", css_class="italic"),
    Kind.UNDERLINE: KindConfig(id="UNDERLINE", css_class="underline"),
    Kind.STRIKETHROUGH: KindConfig(id="STRIKETHROUGH", css_class="strikethrough"),
    Kind.CODE: KindConfig(id="CODE", css_class="code"),
})
"""Toolbar table used when a caller does not supply one."""
