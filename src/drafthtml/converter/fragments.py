"""Markup fragments and escaping helpers for the export pipeline.

A :class:`Fragment` is an opening/closing markup pair.  Wrapping kinds
(inline styles, links) put the text between ``start`` and ``end``; the
other entity kinds are complete markup held in ``start`` with an empty
``end``.  ``str(fragment)`` is the fragment with nothing inside it.
"""

from __future__ import annotations

import html
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Fragment:
    """An opening/closing markup pair."""

    start: str
    end: str = ""

    @property
    def wraps(self) -> bool:
        """True when text is meant to be nested between start and end."""
        return bool(self.end)

    def wrap(self, inner: str) -> str:
        return f"{self.start}{inner}{self.end}"

    def __str__(self) -> str:
        return self.start + self.end


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` in text content."""
    return html.escape(text, quote=False)


def escape_attr(value: object) -> str:
    """Escape an attribute value for use inside double quotes."""
    return html.escape(str(value), quote=True)


def open_tag(tag: str, attrs: Iterable[tuple[str, object]] = (), *, void: bool = False) -> str:
    """Build an opening tag; attribute order follows *attrs*.

    >>> open_tag("img", [("src", "a.png")], void=True)
    '<img src="a.png"/>'
    """
    rendered = "".join(f' {name}="{escape_attr(value)}"' for name, value in attrs)
    return f"<{tag}{rendered}{'/' if void else ''}>"
