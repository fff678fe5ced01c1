"""Tests for converter/inline.py: style id to wrapping span."""

import pytest

from drafthtml.converter.inline import convert_inline, style_declaration
from drafthtml.errors import ErrorCode, UnrecognizedStyleError
from drafthtml.toolbar import TOOLBAR_DEFAULTS, Kind, KindConfig, ToolbarConfig


def _toolbar_with(**overrides):
    kinds = {kind: TOOLBAR_DEFAULTS[kind] for kind in TOOLBAR_DEFAULTS}
    for name, entry in overrides.items():
        kinds[Kind(name)] = entry
    return ToolbarConfig(kinds)


class TestAlignment:
    @pytest.mark.parametrize("style_id, value", [
        ("ALIGN_LEFT", "left"),
        ("ALIGN_CENTER", "center"),
        ("ALIGN_RIGHT", "right"),
    ])
    def test_alignment_renders_block_span(self, style_id, value):
        fragment = convert_inline(style_id)
        assert str(fragment) == f'<span style="display:block;text-align:{value};"></span>'

    def test_fragment_wraps_text(self):
        fragment = convert_inline("ALIGN_CENTER")
        assert fragment.wraps
        assert fragment.wrap("Hi") == '<span style="display:block;text-align:center;">Hi</span>'

    def test_custom_alignment_id(self):
        toolbar = _toolbar_with(alignCenter=KindConfig(id="CENTERED", css_class="c"))
        fragment = convert_inline("CENTERED", toolbar)
        assert "text-align:center;" in fragment.start

    def test_default_id_not_recognized_after_override(self):
        toolbar = _toolbar_with(alignCenter=KindConfig(id="CENTERED", css_class="c"))
        with pytest.raises(UnrecognizedStyleError):
            convert_inline("ALIGN_CENTER", toolbar)


class TestMarks:
    @pytest.mark.parametrize("style_id, declaration", [
        ("BOLD", "font-weight:bold;"),
        ("ITALIC", "font-style:italic;"),
        ("UNDERLINE", "text-decoration:underline;"),
        ("STRIKETHROUGH", "text-decoration:line-through;"),
        ("CODE", "font-family:monospace;"),
    ])
    def test_mark_declaration(self, style_id, declaration):
        assert convert_inline(style_id).start == f'<span style="{declaration}">'

    @pytest.mark.parametrize("kind", [
        Kind.BOLD, Kind.ITALIC, Kind.UNDERLINE, Kind.STRIKETHROUGH, Kind.CODE,
    ])
    def test_non_alignment_never_display_block(self, kind):
        assert "display:block" not in style_declaration(kind)


class TestUnknownStyle:
    def test_unknown_id_raises(self):
        with pytest.raises(UnrecognizedStyleError) as exc_info:
            convert_inline("SHOUTY")
        assert exc_info.value.code == ErrorCode.UNRECOGNIZED_STYLE
        assert exc_info.value.context["style_id"] == "SHOUTY"

    def test_entity_id_is_not_a_style(self):
        with pytest.raises(UnrecognizedStyleError):
            convert_inline("LINK")

    def test_optional_mark_absent_from_toolbar(self):
        kinds = {k: TOOLBAR_DEFAULTS[k] for k in TOOLBAR_DEFAULTS if k is not Kind.BOLD}
        with pytest.raises(UnrecognizedStyleError):
            convert_inline("BOLD", ToolbarConfig(kinds))
