"""Runtime configuration for drafthtml.

:class:`ConverterConfig` captures every tuneable knob of the export and
import pipelines.  Instances are passed to both :class:`HtmlExporter` and
:class:`HtmlImporter`.  The recognized-kinds table itself lives in
:mod:`drafthtml.toolbar`; the config only points at one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from drafthtml.toolbar import TOOLBAR_DEFAULTS, ToolbarConfig

# Parsers BeautifulSoup can drive.  ``lxml`` and ``html5lib`` must be
# installed separately.
SUPPORTED_PARSERS: tuple[str, ...] = ("html.parser", "lxml", "html5lib")


@dataclass
class ConverterConfig:
    """Complete configuration for a drafthtml converter.

    Every parameter has a sensible default, so ``ConverterConfig()`` is a
    valid configuration.

    Parameters
    ----------
    toolbar:
        Recognized-kinds table.  Defaults to
        :data:`~drafthtml.toolbar.TOOLBAR_DEFAULTS`.
    collapse_blank_lines:
        On export, render runs of empty ``unstyled`` blocks as one
        ``<p></p>`` followed by ``<br>`` tags instead of N empty paragraphs.
    clean_html:
        On export, run the cleanup pass that strips stray text siblings of a
        nested ``<figure>`` and normalizes void elements.
    external_link_rel:
        ``rel`` attribute value for links marked external.
    html_parser:
        BeautifulSoup parser used on import and by the cleanup pass.
    unknown_block_policy:
        On export, how to render a block type with no tag mapping.

        * ``"paragraph"`` -- render as ``<p>`` and record a warning.
        * ``"raise"`` -- raise :class:`~drafthtml.errors.ConversionError`.
    metrics:
        Optional :class:`~drafthtml.observability.MetricsHook` backend.
    debug_dump_model:
        Write the content model (raw JSON) to *stderr* on each conversion.
    debug_dump_html:
        Write the HTML (before cleanup on export) to *stderr*.
    """

    # ── Kinds ───────────────────────────────────────────────────────────
    toolbar: ToolbarConfig = field(default_factory=lambda: TOOLBAR_DEFAULTS)

    # ── Export ──────────────────────────────────────────────────────────
    collapse_blank_lines: bool = True

    clean_html: bool = True

    external_link_rel: str = "noopener noreferrer"

    unknown_block_policy: Literal["paragraph", "raise"] = "paragraph"

    # ── Import ──────────────────────────────────────────────────────────
    html_parser: str = "html.parser"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_model: bool = False

    debug_dump_html: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.toolbar, ToolbarConfig):
            raise ValueError(
                f"toolbar must be a ToolbarConfig, got {type(self.toolbar).__name__}"
            )
        if self.html_parser not in SUPPORTED_PARSERS:
            raise ValueError(
                f"html_parser must be one of {', '.join(SUPPORTED_PARSERS)}, "
                f"got {self.html_parser!r}"
            )
        if self.unknown_block_policy not in ("paragraph", "raise"):
            raise ValueError(
                "unknown_block_policy must be 'paragraph' or 'raise', "
                f"got {self.unknown_block_policy!r}"
            )
        if not self.external_link_rel.strip():
            raise ValueError("external_link_rel must not be empty")
