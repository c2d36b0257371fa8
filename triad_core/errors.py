from __future__ import annotations


class TriadError(Exception):
    """Base class for the loud failures of the game core."""


class OutOfBoundsError(TriadError, IndexError):
    """Raised when a board coordinate lies outside the 3x3 grid."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Out of bounds: ({row}, {col})")
        self.row = row
        self.col = col


class EmptyCellError(TriadError, LookupError):
    """Raised when the owner of an unoccupied cell is requested."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Cell ({row}, {col}) holds no card")
        self.row = row
        self.col = col


class CardGenerationError(TriadError, ValueError):
    """Raised when a card is requested with a target sum outside the allowed range."""
