"""Tests for the vertical layout cursor."""

import pytest

from nexusview.ui.constants import TOP_PADDING
from nexusview.ui.layout import INCREMENTS, LayoutCursor


class TestLayoutCursor:
    def test_starts_at_top_padding(self):
        cursor = LayoutCursor()
        assert cursor.offset == TOP_PADDING
        assert cursor.content_height() == TOP_PADDING

    def test_increments(self):
        assert INCREMENTS["row"] == 28
        assert INCREMENTS["subrow"] == 28
        assert INCREMENTS["header"] == 38
        assert INCREMENTS["gap"] == 5
        assert INCREMENTS["section"] == 25
        assert INCREMENTS["empty"] == 100

    def test_advance_returns_new_offset(self):
        cursor = LayoutCursor(0)
        assert cursor.advance(10) == 10
        assert cursor.advance_for("header") == 48
        assert cursor.steps == [("", 10), ("header", 38)]

    def test_zero_advance_allowed(self):
        cursor = LayoutCursor(8)
        assert cursor.advance(0) == 8

    def test_negative_advance_rejected(self):
        cursor = LayoutCursor(8)
        with pytest.raises(ValueError):
            cursor.advance(-1)
        assert cursor.offset == 8

    def test_unknown_kind(self):
        with pytest.raises(KeyError):
            LayoutCursor().advance_for("banner")

    def test_find_node_at_y(self):
        cursor = LayoutCursor(8)
        assert cursor.find_node_at_y(50) == -1

        for kind in ("header", "row", "row"):
            cursor.mark()
            cursor.advance_for(kind)

        assert cursor.marks == [8, 46, 74]
        assert cursor.find_node_at_y(0) == -1
        assert cursor.find_node_at_y(8) == 0
        assert cursor.find_node_at_y(45) == 0
        assert cursor.find_node_at_y(46) == 1
        assert cursor.find_node_at_y(500) == 2

    def test_reset(self):
        cursor = LayoutCursor(8)
        cursor.mark()
        cursor.advance_for("row")
        cursor.reset()
        assert cursor.offset == 8
        assert cursor.marks == []
        assert cursor.steps == []
