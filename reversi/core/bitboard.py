"""
Bitboard utilities and the bit-parallel Reversi board.

Board layout (8 rows x 8 cols = 64 squares, one bit per square):

  1 |  0  1  2  3  4  5  6  7
  2 |  8  9 10 11 12 13 14 15
  3 | 16 17 18 19 20 21 22 23
  4 | 24 25 26 27 28 29 30 31
  5 | 32 33 34 35 36 37 38 39
  6 | 40 41 42 43 44 45 46 47
  7 | 48 49 50 51 52 53 54 55
  8 | 56 57 58 59 60 61 62 63
    +------------------------
       a  b  c  d  e  f  g  h

Square index = row * 8 + col (row 0 = rank 1, col 0 = file a)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Union
import numpy as np

from .types import BOARD_SIZE, Color, IllegalMoveError, Move

if TYPE_CHECKING:
    from .board import Board

# Board dimensions
ROWS = BOARD_SIZE
COLS = BOARD_SIZE
NUM_SQUARES = ROWS * COLS  # 64

# All 64 bits; Python ints are unbounded so every left shift is truncated here
FULL_MASK = (1 << NUM_SQUARES) - 1

FILE_A = 0x0101010101010101
FILE_H = 0x8080808080808080
NOT_FILE_A = FULL_MASK ^ FILE_A  # 0xFEFEFEFEFEFEFEFE
NOT_FILE_H = FULL_MASK ^ FILE_H  # 0x7F7F7F7F7F7F7F7F

CORNER_SQUARES = (0, 7, 56, 63)
CORNER_MASK = (1 << 0) | (1 << 7) | (1 << 56) | (1 << 63)

# Starting discs: d4/e5 white, e4/d5 black
WHITE_START = (1 << 27) | (1 << 36)
BLACK_START = (1 << 28) | (1 << 35)

# Longest run of opponent discs that can be flanked on an 8-wide board
MAX_SLIDES = 6

# (shift, mask applied before each step). Positive shifts move toward higher
# squares. Any step with a horizontal component must drop the column it would
# wrap from.
DIRECTIONS = (
    (1, NOT_FILE_H),    # E
    (-1, NOT_FILE_A),   # W
    (8, FULL_MASK),     # S (+1 row)
    (-8, FULL_MASK),    # N (-1 row)
    (9, NOT_FILE_H),    # SE
    (-9, NOT_FILE_A),   # NW
    (7, NOT_FILE_A),    # SW
    (-7, NOT_FILE_H),   # NE
)


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)  # Handle numpy integers
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits, lowest first."""
    bb = int(bb)
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB


def bb_to_squares(bb: int) -> list[int]:
    """Convert bitboard to list of square indices."""
    return list(iter_bits(bb))


def shift(bb: int, step: int) -> int:
    """Shift a bitboard by `step` squares, truncated to 64 bits."""
    if step > 0:
        return (bb << step) & FULL_MASK
    return bb >> -step


def valid_moves_mask(my: int, opp: int) -> int:
    """Destinations where `my` flanks at least one run of `opp` discs."""
    empty = ~(my | opp) & FULL_MASK
    moves = 0
    for step, edge in DIRECTIONS:
        candidates = shift(my & edge, step) & opp
        for _ in range(MAX_SLIDES):
            candidates |= shift(candidates & edge, step) & opp
        moves |= shift(candidates & edge, step) & empty
    return moves


def flips_for_move(my: int, opp: int, sq: int) -> int:
    """Opponent discs flipped by `my` playing at `sq` (0 if none)."""
    placed = bit(sq)
    flipped = 0
    for step, edge in DIRECTIONS:
        run = 0
        runner = shift(placed & edge, step)
        while runner & opp:
            run |= runner
            runner = shift(runner & edge, step)
        if runner & my:
            flipped |= run
    return flipped


def mask_to_array(bb: int) -> np.ndarray:
    """Unpack a bitboard into a flat uint8 array of 64 cells (index = square)."""
    raw = np.array([bb], dtype='<u8').view(np.uint8)
    return np.unpackbits(raw, bitorder='little')


def _square_of(move: Union[Move, int]) -> int:
    """Square index of a move, or -1 when it lies off the board."""
    if isinstance(move, Move):
        return move.square if move.in_bounds() else -1
    return move if 0 <= move < NUM_SQUARES else -1


@dataclass
class BitBoard:
    """
    Reversi position as two disjoint 64-bit masks.

    Cloning copies two ints, which makes this the representation of choice
    for deep search. Rules match `Board` exactly for every position reachable
    by legal play.

    Attributes:
        black: Bitboard of black discs
        white: Bitboard of white discs
    """
    black: int = BLACK_START
    white: int = WHITE_START

    @classmethod
    def new_game(cls) -> BitBoard:
        """Create a board in the starting position."""
        return cls()

    @classmethod
    def from_board(cls, board: Board) -> BitBoard:
        """Convert a cell-array board into masks."""
        black = white = 0
        for sq, cell in enumerate(board.cells):
            if cell == Color.BLACK:
                black |= bit(sq)
            elif cell == Color.WHITE:
                white |= bit(sq)
        return cls(black, white)

    def to_board(self) -> Board:
        """Convert back to a cell-array board."""
        from .board import Board
        return Board(self.color_at(sq) for sq in range(NUM_SQUARES))

    def mask(self, color: Color) -> int:
        """Bitboard of discs of `color`."""
        if color == Color.BLACK:
            return self.black
        if color == Color.WHITE:
            return self.white
        return ~(self.black | self.white) & FULL_MASK

    def _sides(self, color: Color) -> tuple[int, int]:
        if color == Color.BLACK:
            return self.black, self.white
        if color == Color.WHITE:
            return self.white, self.black
        raise ValueError(f"No side to move for {color!r}")

    def color_at(self, sq: int) -> Color:
        if self.black & bit(sq):
            return Color.BLACK
        if self.white & bit(sq):
            return Color.WHITE
        return Color.EMPTY

    def valid_moves_mask(self, color: Color) -> int:
        """Bitboard of legal destinations for `color`."""
        my, opp = self._sides(color)
        return valid_moves_mask(my, opp)

    def valid_moves(self, color: Color) -> list[Move]:
        """Legal moves in ascending square order (same order as `Board`)."""
        return [Move.from_square(sq) for sq in iter_bits(self.valid_moves_mask(color))]

    def has_moves(self, color: Color) -> bool:
        return self.valid_moves_mask(color) != 0

    def mobility(self, color: Color) -> int:
        return popcount(self.valid_moves_mask(color))

    def is_move_valid(self, move: Union[Move, int], color: Color) -> bool:
        sq = _square_of(move)
        if sq < 0 or color == Color.EMPTY:
            return False
        return bool(self.valid_moves_mask(color) & bit(sq))

    def apply_move(self, move: Union[Move, int], color: Color) -> int:
        """
        Place a disc for `color` and flip flanked runs. Modifies the board in-place.

        Accepts a `Move` or a square index. Returns the number of flipped discs.
        Raises IllegalMoveError if the square is occupied or nothing would flip.
        """
        sq = _square_of(move)
        if sq < 0 or (self.black | self.white) & bit(sq):
            raise IllegalMoveError(f"Square {sq} is not playable for {color.name}")

        my, opp = self._sides(color)
        flipped = flips_for_move(my, opp, sq)
        if not flipped:
            raise IllegalMoveError(f"Square {sq} flips nothing for {color.name}")

        my |= bit(sq) | flipped
        opp &= ~flipped
        if color == Color.BLACK:
            self.black, self.white = my, opp
        else:
            self.white, self.black = my, opp
        return popcount(flipped)

    def score(self, color: Color) -> int:
        return popcount(self.mask(color))

    def is_terminal(self) -> bool:
        """True when neither side has a legal move."""
        return valid_moves_mask(self.black, self.white) == 0 and \
            valid_moves_mask(self.white, self.black) == 0

    def clone(self) -> BitBoard:
        return BitBoard(self.black, self.white)

    @property
    def signature(self) -> tuple[int, int]:
        """Content-only memoization key."""
        return self.black, self.white

    def to_array(self) -> np.ndarray:
        """8x8 int8 array of color values."""
        cells = mask_to_array(self.black).astype(np.int8) * int(Color.BLACK)
        cells += mask_to_array(self.white).astype(np.int8) * int(Color.WHITE)
        return cells.reshape(ROWS, COLS)

    def __repr__(self) -> str:
        return self.to_board().__repr__()
