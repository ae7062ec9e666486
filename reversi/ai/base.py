"""
Common contract for move-selection strategies.

A strategy receives a board it may freely read (it must clone before applying
moves) and the color to move, and returns a legal move or None to pass.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from ..core.board import Board
from ..core.bitboard import BitBoard
from ..core.types import Color, Move

AnyBoard = Union[Board, BitBoard]


def to_bitboard(board: AnyBoard) -> BitBoard:
    """Private BitBoard copy of either board representation."""
    if isinstance(board, BitBoard):
        return board.clone()
    return BitBoard.from_board(board)


class Strategy(ABC):
    """
    Base class for all bots.

    Subclasses set `name` and `config_class` and implement `_search`, which
    is only called when there are at least two legal moves.
    """

    name: str = ""
    config_class: Any = None

    def __init__(self, config: Any = None):
        if config is None and self.config_class is not None:
            config = self.config_class()
        self.config = config

    def choose_move(self, board: AnyBoard, color: Color) -> Optional[Move]:
        """Pick a move for `color`, or None when it has no legal move."""
        moves = board.valid_moves(color)
        if not moves:
            return None
        if len(moves) == 1:
            return moves[0]
        return self._search(board, color, moves)

    @abstractmethod
    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        """Choose among `moves` (two or more, in board order)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"
