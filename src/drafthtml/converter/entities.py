"""Entity export: dispatch an entity to its kind's renderer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from drafthtml.errors import UnrecognizedEntityError
from drafthtml.models import Entity
from drafthtml.toolbar import TOOLBAR_DEFAULTS, ToolbarConfig

from .fragments import Fragment
from .renderers import ENTITY_RENDERERS, RenderContext


def entity_fragment(
    entity: Entity | Mapping[str, Any],
    toolbar: ToolbarConfig = TOOLBAR_DEFAULTS,
    *,
    external_rel: str = "noopener noreferrer",
) -> Fragment:
    """Render *entity* to a :class:`Fragment`.

    *entity* may be an :class:`Entity` or a ``{"type", "data"}`` mapping.

    Raises
    ------
    UnrecognizedEntityError
        If the entity type is not an entity kind in *toolbar*.
    MalformedEntityDataError
        If the kind's renderer is missing a required data field.
    """
    if isinstance(entity, Entity):
        entity_type, data = entity.type, entity.data
    else:
        entity_type, data = entity.get("type", ""), entity.get("data") or {}

    kind = toolbar.entity_kind(entity_type)
    if kind is None:
        raise UnrecognizedEntityError(
            message=f"Unrecognized entity type: {entity_type!r}",
            context={"entity_type": entity_type},
        )
    ctx = RenderContext(
        kind=kind,
        css_class=toolbar[kind].css_class,
        external_rel=external_rel,
    )
    return ENTITY_RENDERERS[kind](dict(data), ctx)


def convert_entity(
    entity: Entity | Mapping[str, Any],
    toolbar: ToolbarConfig = TOOLBAR_DEFAULTS,
    *,
    external_rel: str = "noopener noreferrer",
) -> str:
    """Render *entity* to a markup string.

    >>> convert_entity({"type": "document", "data": {"src": "test.com", "name": "test"}})
    '<figure class="content-editor__custom-block document"><a class="file-name" href="test.com" download="test">test</a></figure>'
    """
    return str(entity_fragment(entity, toolbar, external_rel=external_rel))
