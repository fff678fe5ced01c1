"""Whole-document cleanup pass run at the end of export.

Some custom blocks put a nested ``<figure>`` with a ``<figcaption>`` inside
the outer atomic ``<figure>``.  When caption text leaks into the outer
wrapper it shows up as a raw text node next to the nested figure::

    <figure class="atomic"><figure><figcaption>Hi</figcaption></figure>Hi</figure>

:func:`clean_html` removes those text nodes, so the outer figure's only
content is the nested figure.  The pass works on the parsed tree rather
than on the string, so text that merely looks like a figure is never
touched.  Serialization writes void elements without a closing slash
(``<img src="x">``, ``<br>``), keeps attributes in source order and escapes
only ``&``, ``<`` and ``>``; running the pass on its own output returns the
same string.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter


class SourceOrderFormatter(HTMLFormatter):
    """HTML formatter that writes attributes in their parsed order.

    The stock formatters sort attributes alphabetically, which would
    rewrite every tag in the document.
    """

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


HTML_FORMATTER = SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def parse_fragment(html: str, parser: str = "html.parser") -> Tag:
    """Parse an HTML fragment and return the tag holding its top-level nodes.

    ``lxml`` and ``html5lib`` wrap fragments in ``<html><body>``; the body is
    returned in that case so callers see the same tree for every parser.
    """
    soup = BeautifulSoup(html, parser)
    if parser != "html.parser" and soup.body is not None:
        return soup.body
    return soup


def strip_stray_figure_text(root: Tag) -> int:
    """Remove text children of every figure that directly holds a figure.

    Returns the number of text nodes removed.
    """
    removed = 0
    for figure in root.find_all("figure"):
        if figure.find("figure", recursive=False) is None:
            continue
        for child in list(figure.children):
            # Comments and other NavigableString subclasses are kept.
            if type(child) is NavigableString:
                child.extract()
                removed += 1
    return removed


def clean_html(html: str, parser: str = "html.parser") -> str:
    """Return *html* with stray figure text removed and markup normalized."""
    root = parse_fragment(html, parser)
    strip_stray_figure_text(root)
    return root.decode_contents(formatter=HTML_FORMATTER)
