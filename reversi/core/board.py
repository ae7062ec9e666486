"""
Cell-array Reversi board.

This is the reference implementation of the rules: 64 cells in row-major
order, one Color each. The bitboard in `bitboard.py` must agree with it on
every position reachable by legal play.
"""

from __future__ import annotations
from typing import Iterable, Optional
import numpy as np

from .types import BOARD_SIZE, Color, IllegalMoveError, Move

NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# Up, down, left, right, then the four diagonals
DIRECTIONS = (
    (-1, 0), (1, 0), (0, -1), (0, 1),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Board:
    """
    Reversi position as a flat list of 64 cells.

    Rule queries never raise; `apply_move` raises IllegalMoveError for a move
    that is not legal and leaves the board untouched.
    """

    __slots__ = ('cells',)

    def __init__(self, cells: Optional[Iterable[Color]] = None):
        if cells is None:
            self.cells = [Color.EMPTY] * NUM_CELLS
            self.cells[3 * BOARD_SIZE + 3] = Color.WHITE
            self.cells[4 * BOARD_SIZE + 4] = Color.WHITE
            self.cells[3 * BOARD_SIZE + 4] = Color.BLACK
            self.cells[4 * BOARD_SIZE + 3] = Color.BLACK
        else:
            self.cells = [Color(c) for c in cells]
            if len(self.cells) != NUM_CELLS:
                raise ValueError(f"Board needs {NUM_CELLS} cells, got {len(self.cells)}")

    @classmethod
    def new_game(cls) -> Board:
        """Create a board in the starting position."""
        return cls()

    @classmethod
    def empty(cls) -> Board:
        """Create a board with no discs (for hand-built positions)."""
        return cls([Color.EMPTY] * NUM_CELLS)

    def get(self, row: int, col: int) -> Color:
        return self.cells[row * BOARD_SIZE + col]

    def set(self, row: int, col: int, color: Color) -> None:
        self.cells[row * BOARD_SIZE + col] = Color(color)

    def color_at(self, sq: int) -> Color:
        return self.cells[sq]

    def _flips(self, row: int, col: int, color: Color) -> list[int]:
        """Squares flipped by `color` playing at (row, col)."""
        opp = color.opposite()
        flipped: list[int] = []
        for dr, dc in DIRECTIONS:
            run = []
            r, c = row + dr, col + dc
            while _on_board(r, c) and self.get(r, c) == opp:
                run.append(r * BOARD_SIZE + c)
                r += dr
                c += dc
            if run and _on_board(r, c) and self.get(r, c) == color:
                flipped.extend(run)
        return flipped

    def is_move_valid(self, move: Move, color: Color) -> bool:
        row, col = move
        if color == Color.EMPTY or not _on_board(row, col):
            return False
        if self.get(row, col) != Color.EMPTY:
            return False
        opp = color.opposite()
        for dr, dc in DIRECTIONS:
            r, c = row + dr, col + dc
            seen = False
            while _on_board(r, c) and self.get(r, c) == opp:
                seen = True
                r += dr
                c += dc
            if seen and _on_board(r, c) and self.get(r, c) == color:
                return True
        return False

    def apply_move(self, move: Move, color: Color) -> int:
        """
        Place a disc for `color` at `move` and flip every flanked run.

        Returns the number of flipped discs. Raises IllegalMoveError if the
        move is not legal for `color`.
        """
        if not self.is_move_valid(move, color):
            raise IllegalMoveError(f"{tuple(move)} is not a legal move for {Color(color).name}")
        row, col = move
        flipped = self._flips(row, col, color)
        self.cells[row * BOARD_SIZE + col] = color
        for sq in flipped:
            self.cells[sq] = color
        return len(flipped)

    def valid_moves(self, color: Color) -> list[Move]:
        """Legal moves in row-major order."""
        return [
            Move(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.is_move_valid(Move(row, col), color)
        ]

    def has_moves(self, color: Color) -> bool:
        return any(
            self.is_move_valid(Move(row, col), color)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
        )

    def mobility(self, color: Color) -> int:
        return len(self.valid_moves(color))

    def score(self, color: Color) -> int:
        return self.cells.count(color)

    def is_terminal(self) -> bool:
        """True when neither side has a legal move."""
        return not self.has_moves(Color.BLACK) and not self.has_moves(Color.WHITE)

    def clone(self) -> Board:
        board = Board.__new__(Board)
        board.cells = self.cells.copy()
        return board

    @property
    def signature(self) -> bytes:
        """Content-only memoization key (one byte per cell)."""
        return bytes(self.cells)

    def to_array(self) -> np.ndarray:
        """8x8 int8 array of color values."""
        return np.array(self.cells, dtype=np.int8).reshape(BOARD_SIZE, BOARD_SIZE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        lines = []
        for row in range(BOARD_SIZE):
            cells = ' '.join(self.get(row, col).symbol for col in range(BOARD_SIZE))
            lines.append(f"{row + 1} {cells}")
        lines.append("  " + " ".join("abcdefgh"))
        return '\n'.join(lines)
