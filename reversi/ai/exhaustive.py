"""
Exhaustive fixed-depth lookahead without pruning.

Every line of play is expanded to `max_depth` plies (a pass uses a ply) and
each root move is valued by the best leaf in its subtree. Both players are
treated as cooperating, so this is an optimistic search rather than minimax.
Leaves score the disc difference, or +/-1000 (0 for a draw) once the game
is over. A root move that immediately wins is played at once.

BFSStrategy walks the tree level by level with a deque, DFSStrategy
recursively. They visit the same leaves and pick the same move.
"""

from __future__ import annotations
from abc import abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Optional
import logging
import math

from ..core.types import Color, Move
from .base import AnyBoard, Strategy
from .evaluator import PIECE_COUNT_WEIGHTS, Evaluator

logger = logging.getLogger(__name__)


@dataclass
class ExhaustiveConfig:
    """Configuration for exhaustive lookahead."""
    max_depth: int = 6


class _ExhaustiveStrategy(Strategy):
    config_class = ExhaustiveConfig

    def __init__(self, config: Optional[ExhaustiveConfig] = None, evaluator: Optional[Evaluator] = None):
        super().__init__(config)
        self.evaluator = evaluator if evaluator is not None else Evaluator(PIECE_COUNT_WEIGHTS)
        self.nodes = 0

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        self.nodes = 0
        children = []
        for move in moves:
            child = board.clone()
            child.apply_move(move, color)
            if child.is_terminal() and self.evaluator.evaluate(child, color) > 0:
                logger.debug(f"{self.name}: {color.name} wins immediately with {tuple(move)}")
                return move
            children.append(child)

        values = self._root_values(children, color)

        best_move = moves[0]
        best_value = -math.inf
        for move, value in zip(moves, values):
            if value > best_value:
                best_value = value
                best_move = move

        logger.debug(
            f"{self.name}: {color.name} plays {tuple(best_move)} "
            f"value={best_value} nodes={self.nodes}"
        )
        return best_move

    @abstractmethod
    def _root_values(self, children: list[AnyBoard], color: Color) -> list[float]:
        """Best leaf value below each root child, in the same order."""


class DFSStrategy(_ExhaustiveStrategy):
    """Depth-first exhaustive lookahead."""

    name = "dfs"

    def _root_values(self, children: list[AnyBoard], color: Color) -> list[float]:
        depth = self.config.max_depth - 1
        return [self._best_leaf(child, depth, color.opposite(), color) for child in children]

    def _best_leaf(self, board: AnyBoard, depth: int, to_move: Color, me: Color) -> float:
        self.nodes += 1
        if depth <= 0 or board.is_terminal():
            return self.evaluator.evaluate(board, me)

        moves = board.valid_moves(to_move)
        if not moves:
            return self._best_leaf(board, depth - 1, to_move.opposite(), me)

        best = -math.inf
        for move in moves:
            child = board.clone()
            child.apply_move(move, to_move)
            best = max(best, self._best_leaf(child, depth - 1, to_move.opposite(), me))
        return best


class BFSStrategy(_ExhaustiveStrategy):
    """Breadth-first exhaustive lookahead."""

    name = "bfs"

    def _root_values(self, children: list[AnyBoard], color: Color) -> list[float]:
        values = [-math.inf] * len(children)
        # (board, remaining depth, side to move, root index)
        queue = deque(
            (child, self.config.max_depth - 1, color.opposite(), i)
            for i, child in enumerate(children)
        )
        while queue:
            board, depth, to_move, root = queue.popleft()
            self.nodes += 1
            if depth <= 0 or board.is_terminal():
                values[root] = max(values[root], self.evaluator.evaluate(board, color))
                continue

            moves = board.valid_moves(to_move)
            if not moves:
                queue.append((board, depth - 1, to_move.opposite(), root))
                continue

            for move in moves:
                child = board.clone()
                child.apply_move(move, to_move)
                queue.append((child, depth - 1, to_move.opposite(), root))
        return values
