"""
Cell colors and moves shared by both board representations.
"""

from __future__ import annotations
from enum import IntEnum
from typing import NamedTuple

BOARD_SIZE = 8


class Color(IntEnum):
    """State of a single cell. BLACK moves first."""
    EMPTY = 0
    WHITE = 1
    BLACK = 2

    def opposite(self) -> Color:
        """Return the opposing color (EMPTY has no opponent and maps to itself)."""
        if self is Color.WHITE:
            return Color.BLACK
        if self is Color.BLACK:
            return Color.WHITE
        return Color.EMPTY

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {Color.EMPTY: '.', Color.WHITE: 'W', Color.BLACK: 'B'}


class IllegalMoveError(ValueError):
    """Raised when a move is applied without being legal for the mover."""


class Move(NamedTuple):
    """A placement at (row, col), row 0 being the top of the board."""
    row: int
    col: int

    @property
    def square(self) -> int:
        """Bit index of this move (row * 8 + col)."""
        return self.row * BOARD_SIZE + self.col

    @classmethod
    def from_square(cls, sq: int) -> Move:
        return cls(sq // BOARD_SIZE, sq % BOARD_SIZE)

    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE
