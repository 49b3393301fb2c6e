"""Tests for the JBB parser and serializer."""

from __future__ import annotations

import pytest

from beadrope.engine.document import DEFAULT_PALETTE, create_empty_document
from beadrope.jbb import JbbParseError, parse_jbb, serialize_jbb
from tests.conftest import ESCAPED_JBB, MINIMAL_JBB, SMALL_JBB, UNKNOWN_TOOL_JBB


class TestParse:
    def test_small_document(self):
        doc = parse_jbb(SMALL_JBB)
        assert doc.width == 5
        assert doc.height == 6
        assert doc.author == "Ada"
        assert doc.organization == "Bead Club"
        assert doc.notes == "two stripes"
        assert doc.rows()[2] == [2, 2, 2, 2, 2]
        assert doc.rows()[5] == [1, 1, 1, 1, 1]

    def test_view(self):
        view = parse_jbb(SMALL_JBB).view
        assert not view.simulation_visible
        assert view.corrected_visible
        assert view.symbols == "·abc"
        assert view.selected_tool == "line"
        assert view.selected_color == 2
        assert view.zoom == 3
        assert view.shift == 1

    def test_missing_sections_use_defaults(self):
        doc = parse_jbb(MINIMAL_JBB)
        assert doc.rows() == [[1, 2, 3], [4, 5, 6]]
        assert doc.palette == DEFAULT_PALETTE
        assert doc.view == create_empty_document().view
        assert doc.author == ""

    def test_missing_model_uses_default_grid(self):
        doc = parse_jbb('(jbb (author "x"))')
        assert (doc.width, doc.height) == (15, 120)

    def test_short_palette_is_padded_in_place(self):
        doc = parse_jbb("(jbb (colors (rgb 1 2 3 4) (rgb 5 6 7)))")
        assert len(doc.palette) == len(DEFAULT_PALETTE)
        assert len(doc.palette) >= 32
        assert doc.palette[0] == (1, 2, 3, 4)
        assert doc.palette[1] == (5, 6, 7, 255)
        assert doc.palette[2:] == DEFAULT_PALETTE[2:]

    def test_long_palette_is_kept(self):
        colors = " ".join(f"(rgb {i} {i} {i} 255)" for i in range(40))
        doc = parse_jbb(f"(jbb (colors {colors}))")
        assert len(doc.palette) == 40
        assert doc.palette[39] == (39, 39, 39, 255)

    def test_unknown_tool_falls_back_to_pencil(self):
        assert parse_jbb(UNKNOWN_TOOL_JBB).view.selected_tool == "pencil"

    def test_escaped_strings(self):
        doc = parse_jbb(ESCAPED_JBB)
        assert doc.author == 'say "hi"'
        assert doc.notes == "back\\slash"

    def test_ragged_rows_are_padded(self):
        doc = parse_jbb("(jbb (model (row 1 2 3) (row 4)))")
        assert doc.rows() == [[1, 2, 3], [4, 0, 0]]

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "(jbb",
            ")",
            "jbb",
            "(model (row 1))",
            '(jbb (author "unterminated))',
            "()",
        ],
    )
    def test_malformed_input_raises(self, text):
        with pytest.raises(JbbParseError):
            parse_jbb(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_jbb("(nope)")

    def test_deep_nesting_is_a_parse_error(self):
        text = "(jbb " + "(" * 5000 + ")" * 5000 + ")"
        with pytest.raises(JbbParseError, match="nesting deeper"):
            parse_jbb(text)

    def test_moderate_nesting_in_unknown_sections_is_ignored(self):
        text = "(jbb (extra " + "(" * 20 + ")" * 20 + ") (model (row 1 2) (row 3 4)))"
        assert parse_jbb(text).rows() == [[1, 2], [3, 4]]

    def test_trailing_tokens_after_root_are_ignored(self):
        assert parse_jbb("(jbb (model (row 5))) trailing (junk)").rows() == [[5]]


class TestSerialize:
    def test_round_trip(self):
        doc = parse_jbb(SMALL_JBB)
        again = parse_jbb(serialize_jbb(doc))
        assert again == doc

    def test_round_trip_escapes(self):
        doc = parse_jbb(ESCAPED_JBB)
        assert parse_jbb(serialize_jbb(doc)).author == 'say "hi"'
        assert parse_jbb(serialize_jbb(doc)).notes == "back\\slash"

    def test_layout(self):
        text = serialize_jbb(parse_jbb(MINIMAL_JBB))
        lines = text.splitlines()
        assert lines[0] == "(jbb"
        assert lines[1] == "  (version 1)"
        assert lines[2] == '  (author "")'
        assert lines[5] == "  (colors"
        assert lines[6] == "    (rgb 240 240 240 255)"
        assert "    (selected-tool \"pencil\")" in lines
        assert lines[-4:] == ["    (row 1 2 3)", "    (row 4 5 6)", "  )", ")"]
        assert text.endswith(")\n")

    def test_serialized_text_is_stable(self):
        text = serialize_jbb(parse_jbb(SMALL_JBB))
        assert serialize_jbb(parse_jbb(text)) == text
