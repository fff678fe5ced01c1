"""Content state to HTML export pipeline.

:class:`HtmlExporter` runs the two export stages:

1. **Render** -- :class:`BlockRenderer` walks the blocks and produces raw
   HTML, applying the blank-line folding rule.
2. **Clean** -- :func:`clean_html` strips stray text next to nested figures
   and normalizes void elements.

Usage::

    from drafthtml import convert_to_html

    html = convert_to_html({"blocks": [...], "entityMap": {...}})
"""

from __future__ import annotations

import dataclasses
import json
import sys
import time
from typing import Any

from drafthtml.config import ConverterConfig
from drafthtml.models import ContentState, ConversionWarning
from drafthtml.observability import NoopMetricsHook, get_logger
from drafthtml.toolbar import ToolbarConfig

from .blocks import BlockRenderer
from .cleanup import clean_html

log = get_logger("drafthtml.converter")


class HtmlExporter:
    """Convert content states to HTML strings.

    Warnings from the most recent :meth:`convert` call are available on
    :attr:`warnings`.

    Parameters
    ----------
    config:
        Converter configuration.  Defaults to ``ConverterConfig()``.

    Examples
    --------
    >>> exporter = HtmlExporter()
    >>> exporter.convert({"blocks": [{"type": "unstyled", "text": ""},
    ...                              {"type": "unstyled", "text": ""}]})
    '<p></p><br>'
    """

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self._config = config or ConverterConfig()
        self._metrics = self._config.metrics or NoopMetricsHook()
        self.warnings: list[ConversionWarning] = []

    def convert(self, content: ContentState | dict[str, Any]) -> str:
        """Full pipeline: render blocks -> clean.

        Parameters
        ----------
        content:
            A :class:`ContentState` or the editor's raw JSON dict.

        Returns
        -------
        str
            The HTML fragment, without ``<html>``/``<body>`` wrappers.

        Raises
        ------
        UnrecognizedStyleError, UnrecognizedEntityError,
        MalformedEntityDataError, EntityNotFoundError, ConversionError
            When the document references something the toolbar cannot
            render.
        """
        started = time.perf_counter()
        if isinstance(content, dict):
            content = ContentState.from_raw(content)

        if self._config.debug_dump_model:
            print(
                "[drafthtml] Content model:",
                json.dumps(content.to_raw(), indent=2, ensure_ascii=False, default=str),
                file=sys.stderr,
            )

        renderer = BlockRenderer(
            content,
            self._config.toolbar,
            collapse_blank_lines=self._config.collapse_blank_lines,
            external_rel=self._config.external_link_rel,
            unknown_block_policy=self._config.unknown_block_policy,
        )
        html = renderer.render()
        self.warnings = renderer.warnings

        if self._config.debug_dump_html:
            print("[drafthtml] Rendered HTML:", html, file=sys.stderr)

        if self._config.clean_html:
            html = clean_html(html, self._config.html_parser)

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._metrics.increment("drafthtml.blocks_exported_total", len(content.blocks))
        self._metrics.timing("drafthtml.export_duration_ms", elapsed_ms)
        if self.warnings:
            self._metrics.increment(
                "drafthtml.conversion_warnings_total",
                len(self.warnings),
                tags={"direction": "export"},
            )
        log.debug(
            "export complete",
            extra={"extra_fields": {
                "op": "convert_to_html",
                "blocks": len(content.blocks),
                "entities": len(content.entity_map),
                "html_length": len(html),
                "warnings": len(self.warnings),
            }},
        )
        return html


def convert_to_html(
    content: ContentState | dict[str, Any],
    toolbar: ToolbarConfig | None = None,
    config: ConverterConfig | None = None,
) -> str:
    """Export *content* to HTML.

    *toolbar*, when given, overrides the table held by *config*.
    """
    config = config or ConverterConfig()
    if toolbar is not None:
        config = dataclasses.replace(config, toolbar=toolbar)
    return HtmlExporter(config).convert(content)
