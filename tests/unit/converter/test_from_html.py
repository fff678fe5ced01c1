"""Tests for converter/from_html.py: HTML to content state."""

import pytest

from drafthtml.config import ConverterConfig
from drafthtml.converter.from_html import HtmlImporter, convert_from_html
from drafthtml.models import EntityRange, Mutability, StyleRange
from drafthtml.toolbar import TOOLBAR_DEFAULTS, Kind, KindConfig, ToolbarConfig


def _types(state):
    return [b.type for b in state.blocks]


def _texts(state):
    return [b.text for b in state.blocks]


class TestTextBlocks:
    def test_paragraph(self):
        state = convert_from_html("<p>Hello</p>")
        assert _types(state) == ["unstyled"]
        assert _texts(state) == ["Hello"]

    @pytest.mark.parametrize("html, block_type", [
        ("<h1>x</h1>", "header-one"),
        ("<h3>x</h3>", "header-three"),
        ("<blockquote>x</blockquote>", "blockquote"),
        ("<pre>x</pre>", "code-block"),
        ("<div>x</div>", "unstyled"),
    ])
    def test_block_types(self, html, block_type):
        assert _types(convert_from_html(html)) == [block_type]

    def test_sequence(self):
        state = convert_from_html("<h2>Title</h2><p>a</p><p>b</p>")
        assert _types(state) == ["header-two", "unstyled", "unstyled"]
        assert _texts(state) == ["Title", "a", "b"]

    def test_br_inside_block(self):
        assert _texts(convert_from_html("<p>a<br>b</p>")) == ["a\nb"]

    def test_pre_keeps_newlines(self):
        state = convert_from_html("<pre>a\nb</pre>")
        assert _texts(state) == ["a\nb"]

    def test_code_inside_pre_has_no_style(self):
        state = convert_from_html("<pre><code>x</code></pre>")
        assert state.blocks[0].inline_style_ranges == []

    def test_wrapper_takes_inner_block_type(self):
        assert _types(convert_from_html("<div><h2>x</h2></div>")) == ["header-two"]

    def test_loose_text_becomes_paragraph(self):
        state = convert_from_html("hello<p>x</p>")
        assert _texts(state) == ["hello", "x"]

    def test_whitespace_between_blocks_dropped(self):
        state = convert_from_html("<p>a</p>\n  \n<p>b</p>")
        assert _texts(state) == ["a", "b"]

    def test_text_is_unescaped(self):
        assert _texts(convert_from_html("<p>a &lt; b &amp; c</p>")) == ["a < b & c"]

    def test_script_and_style_skipped(self):
        state = convert_from_html("<style>p{}</style><script>x()</script><p>a</p>")
        assert _texts(state) == ["a"]

    def test_block_keys_unique(self):
        state = convert_from_html("<p>a</p><p>b</p><p>c</p>")
        keys = [b.key for b in state.blocks]
        assert len(set(keys)) == 3
        assert all(keys)


class TestBlankLines:
    def test_empty_input(self):
        state = convert_from_html("")
        assert _types(state) == ["unstyled"]
        assert _texts(state) == [""]

    def test_folded_blank_lines_expand(self):
        state = convert_from_html("<p></p><br><br>")
        assert _types(state) == ["unstyled"] * 3
        assert _texts(state) == [""] * 3


class TestInlineStyles:
    def test_alignment_span(self):
        state = convert_from_html('<p><span style="text-align:center">Hi</span></p>')
        assert state.blocks[0].inline_style_ranges == [StyleRange("ALIGN_CENTER", 0, 2)]

    def test_styled_block_tag(self):
        state = convert_from_html('<p style="text-align:right">Hi</p>')
        assert state.blocks[0].inline_style_ranges == [StyleRange("ALIGN_RIGHT", 0, 2)]

    def test_nested_marks(self):
        state = convert_from_html("<p>a<strong>b<em>c</em></strong>d</p>")
        assert state.blocks[0].text == "abcd"
        assert state.blocks[0].inline_style_ranges == [
            StyleRange("BOLD", 1, 2),
            StyleRange("ITALIC", 2, 1),
        ]

    def test_style_does_not_leak_to_sibling(self):
        html = '<p><span style="text-align:center"><b>a</b></span><i>b</i></p>'
        state = convert_from_html(html)
        assert state.blocks[0].inline_style_ranges == [
            StyleRange("ALIGN_CENTER", 0, 1),
            StyleRange("BOLD", 0, 1),
            StyleRange("ITALIC", 1, 1),
        ]

    def test_adjacent_runs_merge(self):
        state = convert_from_html("<p><b>a</b><b>b</b></p>")
        assert state.blocks[0].inline_style_ranges == [StyleRange("BOLD", 0, 2)]

    def test_offsets_in_utf16_units(self):
        state = convert_from_html("<p>\U0001f600<b>x</b></p>")
        assert state.blocks[0].inline_style_ranges == [StyleRange("BOLD", 2, 1)]

    def test_styled_loose_text(self):
        state = convert_from_html('<span style="font-weight:700">b</span>')
        assert state.blocks[0].inline_style_ranges == [StyleRange("BOLD", 0, 1)]


class TestLinks:
    def test_link_in_paragraph(self):
        state = convert_from_html('<p>Go <a href="x.com">here</a></p>')
        block = state.blocks[0]
        assert block.text == "Go here"
        assert block.entity_ranges == [EntityRange(0, 3, 4)]
        entity = state.entity_map[0]
        assert entity.type == "LINK"
        assert entity.mutability is Mutability.MUTABLE
        assert entity.data == {"url": "x.com"}

    def test_attribute_order_does_not_matter(self):
        a = convert_from_html('<p><a target="_blank" href="u">t</a></p>')
        b = convert_from_html('<p><a href="u" target="_blank">t</a></p>')
        assert a.entity_map[0].data == b.entity_map[0].data == {"url": "u", "external": True}

    def test_two_links_get_sequential_keys(self):
        state = convert_from_html('<p><a href="1">a</a><a href="2">b</a></p>')
        assert state.blocks[0].entity_ranges == [EntityRange(0, 0, 1), EntityRange(1, 1, 1)]
        assert state.entity_map[1].data == {"url": "2"}

    def test_loose_link(self):
        state = convert_from_html('<a href="x">x</a>')
        assert _types(state) == ["unstyled"]
        assert state.blocks[0].entity_ranges == [EntityRange(0, 0, 1)]

    def test_styles_inside_link(self):
        state = convert_from_html('<p><a href="x">a<b>b</b></a></p>')
        block = state.blocks[0]
        assert block.entity_ranges == [EntityRange(0, 0, 2)]
        assert block.inline_style_ranges == [StyleRange("BOLD", 1, 1)]

    def test_empty_anchor_registers_no_entity(self):
        state = convert_from_html('<p><a href="x"></a>text</p>')
        assert _texts(state) == ["text"]
        assert state.blocks[0].entity_ranges == []
        assert state.entity_map == {}

    def test_whitespace_anchor_between_blocks(self):
        state = convert_from_html('<p>a</p><a href="x"> </a><p>b</p>')
        assert _texts(state) == ["a", "b"]
        assert state.entity_map == {}

    def test_key_reused_after_empty_anchor(self):
        state = convert_from_html('<p><a href="1"></a><a href="2">b</a></p>')
        assert state.blocks[0].entity_ranges == [EntityRange(0, 0, 1)]
        assert list(state.entity_map) == [0]
        assert state.entity_map[0].data == {"url": "2"}


class TestLists:
    def test_nested_list(self):
        state = convert_from_html("<ul><li>a</li><li>b<ul><li>c</li></ul></li></ul>")
        assert _types(state) == ["unordered-list-item"] * 3
        assert _texts(state) == ["a", "b", "c"]
        assert [b.depth for b in state.blocks] == [0, 0, 1]

    def test_ordered_list(self):
        assert _types(convert_from_html("<ol><li>x</li></ol>")) == ["ordered-list-item"]

    def test_paragraph_inside_list_item(self):
        state = convert_from_html("<ul><li><p>x</p></li></ul>")
        assert _types(state) == ["unordered-list-item"]
        assert _texts(state) == ["x"]


class TestAtomicBlocks:
    def test_photo(self):
        html = (
            '<figure class="atomic photo-block">'
            '<figure class="content-editor__custom-block photo"><img src="test.com"></figure>'
            "</figure>"
        )
        state = convert_from_html(html)
        block = state.blocks[0]
        assert block.type == "atomic"
        assert block.text == " "
        assert block.entity_ranges == [EntityRange(0, 0, 1)]
        assert state.entity_map[0].type == "photo"
        assert state.entity_map[0].data == {"src": "test.com"}

    def test_caption(self):
        html = (
            '<figure class="atomic photo-block">'
            '<figure class="content-editor__custom-block photo with-caption">'
            '<img src="a.png"><figcaption class="caption"> Sunset </figcaption>'
            "</figure></figure>"
        )
        state = convert_from_html(html)
        assert state.entity_map[0].data == {"src": "a.png", "caption": "Sunset"}

    def test_rich(self):
        html = (
            '<figure class="atomic rich-block"><figure class="content-editor__custom-block rich">'
            '<div class="rich-media-wrapper"><iframe src="v.com" frameborder="0" '
            'allowfullscreen=""></iframe></div></figure></figure>'
        )
        state = convert_from_html(html)
        assert state.entity_map[0].type == "rich"
        assert state.entity_map[0].data == {"src": "v.com"}

    def test_file_in_figure(self):
        html = (
            '<figure class="atomic document-block">'
            '<figure class="content-editor__custom-block document">'
            '<a class="file-name" href="f.pdf" download="Report">Report</a>'
            "</figure></figure>"
        )
        state = convert_from_html(html)
        assert _types(state) == ["atomic"]
        assert state.entity_map[0].type == "document"
        assert state.entity_map[0].data == {"src": "f.pdf", "name": "Report"}

    def test_divider(self):
        state = convert_from_html('<figure class="atomic divider-block"><hr></figure>')
        assert _types(state) == ["atomic"]
        assert state.entity_map[0].type == "divider"

    def test_loose_divider_gets_atomic_block(self):
        state = convert_from_html("<p>a</p><hr><p>b</p>")
        assert _types(state) == ["unstyled", "atomic", "unstyled"]

    def test_loose_table(self):
        html = (
            "<table><thead><tr><th>A</th><th>B</th></tr></thead>"
            "<tbody><tr><td>1</td></tr></tbody></table>"
        )
        state = convert_from_html(html)
        assert _types(state) == ["atomic"]
        assert state.entity_map[0].type == "table"
        assert state.entity_map[0].data == {"rows": [["A", "B"], ["1", ""]], "header": True}

    def test_loose_img_ignored(self):
        state = convert_from_html('<img src="x">')
        assert _types(state) == ["unstyled"]
        assert state.entity_map == {}

    def test_extra_entity_warns(self):
        importer = HtmlImporter()
        state = importer.convert('<figure><img src="a"><img src="b"></figure>')
        assert len(state.entity_map) == 1
        assert state.entity_map[0].data == {"src": "a"}
        assert [w.code for w in importer.warnings] == ["EXTRA_ATOMIC_ENTITY"]

    def test_figure_without_entity_degrades(self):
        importer = HtmlImporter()
        state = importer.convert("<figure><figcaption>Only text</figcaption></figure>")
        assert _types(state) == ["unstyled"]
        assert _texts(state) == ["Only text"]
        assert [w.code for w in importer.warnings] == ["FIGURE_WITHOUT_ENTITY"]

    def test_stray_figure_text_not_in_document(self):
        html = '<figure class="atomic"><figure><img src="a"></figure>junk</figure>'
        state = convert_from_html(html)
        assert _texts(state) == [" "]


class TestImporterOptions:
    def test_custom_toolbar(self):
        kinds = {k: TOOLBAR_DEFAULTS[k] for k in TOOLBAR_DEFAULTS}
        kinds[Kind.PHOTO] = KindConfig(id="IMAGE", css_class="image")
        state = convert_from_html('<figure><img src="x"></figure>', toolbar=ToolbarConfig(kinds))
        assert state.entity_map[0].type == "IMAGE"

    def test_warnings_reset_between_calls(self, importer):
        importer.convert("<figure></figure>")
        assert importer.warnings
        importer.convert("<p>x</p>")
        assert importer.warnings == []

    def test_debug_dumps_to_stderr(self, capsys):
        config = ConverterConfig(debug_dump_html=True, debug_dump_model=True)
        HtmlImporter(config).convert("<p>x</p>")
        err = capsys.readouterr().err
        assert "[drafthtml] Imported HTML: <p>x</p>" in err
        assert "[drafthtml] Content model:" in err
