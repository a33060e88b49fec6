"""Error kinds raised by the flip-grid core.

All of them carry a message meant to be shown to the person running the
competition. None of them is fatal: the UI catches ``FlipGridError`` and
stays interactive.
"""

from __future__ import annotations


class FlipGridError(Exception):
    """Base class for every user-facing error in the core."""


class LevelDocumentError(FlipGridError, ValueError):
    """Problem with an imported or exported level document."""


class InvalidLevelDocument(LevelDocumentError):
    """The document could not be parsed, or is not an object/list of objects."""


class NoValidLevels(LevelDocumentError):
    """None of the entries in an import batch passed validation."""

    def __init__(self, rejected_count: int) -> None:
        super().__init__(
            f"No valid levels found ({rejected_count} rejected); "
            "each level needs an 'initialState' list of 9 booleans"
        )
        self.rejected_count = rejected_count


class EmptyExport(LevelDocumentError):
    """Export was requested while the level list is empty."""

    def __init__(self) -> None:
        super().__init__("There are no levels to export")


class IndexOutOfBounds(FlipGridError, IndexError):
    """A cell index outside the grid was passed to the grid engine."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Cell index {index} is outside the grid (0..{size - 1})")
        self.index = index
        self.size = size
