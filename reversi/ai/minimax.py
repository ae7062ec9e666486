"""
Depth-limited minimax with alpha-beta pruning.

Two variants share the same root logic:

- AlphaBetaStrategy searches on the cell-array `Board` with the
  mobility/corners/pieces evaluation.
- FastAlphaBetaStrategy converts to a `BitBoard` once and searches on masks
  with the positional/mobility evaluation. Positions where neither side can
  move are scored at `terminal_multiplier` times the static value.

The root keeps the first move whose value is strictly greater than the best
so far, so ties go to the earlier move in board order. With `prune=False` the
same tree is searched without cutoffs, which is how the pruning is tested.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import math

from ..core.bitboard import BitBoard, iter_bits
from ..core.board import Board
from ..core.types import Color, Move
from .base import AnyBoard, Strategy, to_bitboard
from .evaluator import ALPHA_BETA_WEIGHTS, FAST_ALPHA_BETA_WEIGHTS, Evaluator

logger = logging.getLogger(__name__)


@dataclass
class MinimaxConfig:
    """Configuration for minimax search."""
    depth: int = 8
    prune: bool = True
    terminal_multiplier: int = 2  # BitBoard variant only


class AlphaBetaStrategy(Strategy):
    """Alpha-beta on the cell-array board."""

    name = "alphabeta"
    config_class = MinimaxConfig
    default_weights = ALPHA_BETA_WEIGHTS

    def __init__(self, config: Optional[MinimaxConfig] = None, evaluator: Optional[Evaluator] = None):
        super().__init__(config)
        self.evaluator = evaluator if evaluator is not None else Evaluator(self.default_weights)
        self.nodes = 0

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        move, _ = self.search(board, color)
        return move

    def _root(self, board) -> AnyBoard:
        return board

    def search(self, board: AnyBoard, color: Color) -> tuple[Optional[Move], float]:
        """
        Search the position and return (best move, its minimax value).

        Returns (None, static value) when `color` has no legal move.
        """
        self.nodes = 0
        root = self._root(board)
        moves = root.valid_moves(color)
        if not moves:
            return None, self.evaluator.evaluate(root, color)

        best_move: Optional[Move] = None
        best_value = -math.inf
        alpha, beta = -math.inf, math.inf
        for move in moves:
            child = root.clone()
            child.apply_move(move, color)
            value = self._minimax(child, self.config.depth - 1, alpha, beta, False, color)
            if value > best_value:
                best_value = value
                best_move = move
            if self.config.prune:
                alpha = max(alpha, value)

        logger.debug(
            f"{self.name}: {color.name} plays {tuple(best_move)} "
            f"value={best_value} nodes={self.nodes} evals={self.evaluator.total_evals}"
        )
        return best_move, best_value

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 maximizing: bool, me: Color) -> float:
        self.nodes += 1
        if depth <= 0 or board.is_terminal():
            return self.evaluator.evaluate(board, me)

        to_move = me if maximizing else me.opposite()
        moves = board.valid_moves(to_move)
        if not moves:
            # Pass: same position, other side, one ply used
            return self._minimax(board, depth - 1, alpha, beta, not maximizing, me)

        if maximizing:
            value = -math.inf
            for move in moves:
                child = board.clone()
                child.apply_move(move, to_move)
                value = max(value, self._minimax(child, depth - 1, alpha, beta, False, me))
                if self.config.prune:
                    alpha = max(alpha, value)
                    if beta <= alpha:
                        break
            return value

        value = math.inf
        for move in moves:
            child = board.clone()
            child.apply_move(move, to_move)
            value = min(value, self._minimax(child, depth - 1, alpha, beta, True, me))
            if self.config.prune:
                beta = min(beta, value)
                if beta <= alpha:
                    break
        return value


class FastAlphaBetaStrategy(AlphaBetaStrategy):
    """Alpha-beta on bitboards."""

    name = "alphabeta-fast"
    default_weights = FAST_ALPHA_BETA_WEIGHTS

    def _root(self, board) -> BitBoard:
        return to_bitboard(board)

    def _minimax(self, board: BitBoard, depth: int, alpha: float, beta: float,
                 maximizing: bool, me: Color) -> float:
        self.nodes += 1
        if depth <= 0:
            return self.evaluator.evaluate(board, me)

        to_move = me if maximizing else me.opposite()
        moves = board.valid_moves_mask(to_move)
        if not moves:
            if not board.valid_moves_mask(to_move.opposite()):
                return self.evaluator.evaluate(board, me) * self.config.terminal_multiplier
            return self._minimax(board, depth - 1, alpha, beta, not maximizing, me)

        if maximizing:
            value = -math.inf
            for sq in iter_bits(moves):
                child = board.clone()
                child.apply_move(sq, to_move)
                value = max(value, self._minimax(child, depth - 1, alpha, beta, False, me))
                if self.config.prune:
                    alpha = max(alpha, value)
                    if beta <= alpha:
                        break
            return value

        value = math.inf
        for sq in iter_bits(moves):
            child = board.clone()
            child.apply_move(sq, to_move)
            value = min(value, self._minimax(child, depth - 1, alpha, beta, True, me))
            if self.config.prune:
                beta = min(beta, value)
                if beta <= alpha:
                    break
        return value
