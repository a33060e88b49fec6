"""Tests for flipgrid.core.errors – error hierarchy and messages."""

from __future__ import annotations

from flipgrid.core.errors import (
    EmptyExport,
    FlipGridError,
    IndexOutOfBounds,
    InvalidLevelDocument,
    LevelDocumentError,
    NoValidLevels,
)


class TestHierarchy:
    def test_document_errors_are_value_errors(self):
        for cls in (InvalidLevelDocument, NoValidLevels, EmptyExport):
            assert issubclass(cls, LevelDocumentError)
            assert issubclass(cls, ValueError)
            assert issubclass(cls, FlipGridError)

    def test_index_error(self):
        assert issubclass(IndexOutOfBounds, IndexError)
        assert issubclass(IndexOutOfBounds, FlipGridError)


class TestMessages:
    def test_no_valid_levels(self):
        e = NoValidLevels(3)
        assert e.rejected_count == 3
        assert "3 rejected" in str(e)

    def test_empty_export(self):
        assert "no levels" in str(EmptyExport())

    def test_index_out_of_bounds(self):
        e = IndexOutOfBounds(12, 9)
        assert (e.index, e.size) == (12, 9)
        assert "0..8" in str(e)
