"""Core game logic: colors and moves, the cell board, the bitboard and notation."""

from .types import BOARD_SIZE, Color, Move, IllegalMoveError
from .board import Board
from .bitboard import BitBoard
