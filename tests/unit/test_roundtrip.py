"""Round-trip tests: content state → HTML → content state.

Import of exported HTML must preserve block types, text and entity
kind/data for every block.  The HTML itself is not compared, and entity
keys may be renumbered.
"""

import pytest

from drafthtml.converter.from_html import convert_from_html
from drafthtml.converter.to_html import convert_to_html
from drafthtml.models import ContentState


def _roundtrip(raw: dict) -> ContentState:
    return convert_from_html(convert_to_html(raw))


def _summary(content: ContentState) -> list[tuple]:
    """Block types, texts and the (type, data) of each block's entities."""
    rows = []
    for block in content.blocks:
        entities = []
        for entity_range in block.entity_ranges:
            entity = content.get_entity(entity_range.key)
            entities.append((entity.type, entity.data, entity_range.offset, entity_range.length))
        rows.append((block.type, block.text, block.depth, entities))
    return rows


def _atomic(key):
    return {"type": "atomic", "text": " ", "entityRanges": [{"key": key, "offset": 0, "length": 1}]}


class TestTextRoundTrip:
    @pytest.mark.parametrize("block_type", [
        "unstyled", "header-one", "header-two", "header-six", "blockquote", "code-block",
    ])
    def test_block_types(self, block_type):
        raw = {"blocks": [{"type": block_type, "text": "Some text"}]}
        assert _summary(_roundtrip(raw)) == _summary(ContentState.from_raw(raw))

    def test_special_characters(self):
        raw = {"blocks": [{"type": "unstyled", "text": "a < b && \"c\" > 'd'"}]}
        assert _roundtrip(raw).blocks[0].text == "a < b && \"c\" > 'd'"

    def test_line_breaks(self):
        raw = {"blocks": [{"type": "unstyled", "text": "one\ntwo\n"}]}
        assert _roundtrip(raw).blocks[0].text == "one\ntwo\n"

    def test_blank_lines(self):
        raw = {"blocks": [
            {"type": "unstyled", "text": "a"},
            {"type": "unstyled", "text": ""},
            {"type": "unstyled", "text": ""},
            {"type": "unstyled", "text": ""},
            {"type": "unstyled", "text": "b"},
        ]}
        assert [b.text for b in _roundtrip(raw).blocks] == ["a", "", "", "", "b"]

    def test_lists(self):
        raw = {"blocks": [
            {"type": "ordered-list-item", "text": "one"},
            {"type": "ordered-list-item", "text": "one.a", "depth": 1},
            {"type": "ordered-list-item", "text": "two"},
            {"type": "unordered-list-item", "text": "dot"},
        ]}
        assert _summary(_roundtrip(raw)) == _summary(ContentState.from_raw(raw))


class TestStyleRoundTrip:
    def test_alignment(self):
        raw = {"blocks": [{
            "type": "unstyled",
            "text": "Centered",
            "inlineStyleRanges": [{"style": "ALIGN_CENTER", "offset": 0, "length": 8}],
        }]}
        ranges = _roundtrip(raw).blocks[0].inline_style_ranges
        assert [(r.style, r.offset, r.length) for r in ranges] == [("ALIGN_CENTER", 0, 8)]

    def test_overlapping_marks(self):
        raw = {"blocks": [{
            "type": "unstyled",
            "text": "\U0001f600 bold both italic",
            "inlineStyleRanges": [
                {"style": "BOLD", "offset": 3, "length": 9},
                {"style": "ITALIC", "offset": 8, "length": 11},
            ],
        }]}
        ranges = _roundtrip(raw).blocks[0].inline_style_ranges
        assert [(r.style, r.offset, r.length) for r in ranges] == [
            ("BOLD", 3, 9),
            ("ITALIC", 8, 11),
        ]


class TestEntityRoundTrip:
    @pytest.mark.parametrize("entity", [
        {"type": "photo", "data": {"src": "test.com"}},
        {"type": "photo", "data": {"src": "a.png", "alt": "A", "caption": "Cap"}},
        {"type": "document", "data": {"src": "f.pdf", "name": "Report"}},
        {"type": "rich", "data": {"src": "video.com/embed"}},
        {"type": "divider", "data": {}},
        {"type": "table", "data": {"rows": [["A", "B"], ["1", "2"]], "header": True}},
        {"type": "table", "data": {"rows": [["1", "2"]], "header": False}},
    ])
    def test_atomic_entities(self, entity):
        raw = {"blocks": [_atomic(0)], "entityMap": {"0": entity}}
        assert _summary(_roundtrip(raw)) == _summary(ContentState.from_raw(raw))

    @pytest.mark.parametrize("data", [
        {"url": "x.com"},
        {"url": "x.com", "external": True},
    ])
    def test_links(self, data):
        raw = {
            "blocks": [{
                "type": "unstyled",
                "text": "Go here now",
                "entityRanges": [{"key": 0, "offset": 3, "length": 4}],
            }],
            "entityMap": {"0": {"type": "LINK", "mutability": "MUTABLE", "data": data}},
        }
        assert _summary(_roundtrip(raw)) == _summary(ContentState.from_raw(raw))

    def test_mixed_document(self):
        raw = {
            "blocks": [
                {"type": "header-one", "text": "Title"},
                {"type": "unstyled", "text": "See link",
                 "entityRanges": [{"key": 3, "offset": 4, "length": 4}]},
                _atomic(5),
                {"type": "unstyled", "text": ""},
                {"type": "unstyled", "text": ""},
                _atomic(7),
            ],
            "entityMap": {
                "3": {"type": "LINK", "mutability": "MUTABLE", "data": {"url": "x"}},
                "5": {"type": "photo", "data": {"src": "p.png"}},
                "7": {"type": "divider", "data": {}},
            },
        }
        result = _roundtrip(raw)
        assert _summary(result) == _summary(ContentState.from_raw(raw))
        assert sorted(result.entity_map) == [0, 1, 2]

    @pytest.mark.parametrize("bold", [(0, 2), (1, 3), (0, 4), (2, 2)])
    def test_link_overlapping_style_stays_one_entity(self, bold):
        raw = {
            "blocks": [{
                "type": "unstyled",
                "text": "abcd",
                "inlineStyleRanges": [{"style": "BOLD", "offset": bold[0], "length": bold[1]}],
                "entityRanges": [{"key": 0, "offset": 1, "length": 2}],
            }],
            "entityMap": {"0": {"type": "LINK", "mutability": "MUTABLE", "data": {"url": "x.com"}}},
        }
        result = _roundtrip(raw)
        block = result.blocks[0]
        assert len(result.entity_map) == 1
        assert [(r.offset, r.length) for r in block.entity_ranges] == [(1, 2)]
        assert [(r.style, r.offset, r.length) for r in block.inline_style_ranges] == [
            ("BOLD", bold[0], bold[1]),
        ]
