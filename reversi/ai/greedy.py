"""
Greedy one-ply move selection.

Each legal move is scored once, without looking at replies:

  score = flips * flip_weight
        + square value * position_weight
        + (opponent mobility before - after) * mobility_weight
        + win_bonus if the move ends the game with us ahead

The best score is popped from a max-heap; equal scores go to the earlier move.
"""

from __future__ import annotations
from dataclasses import dataclass
import heapq
import logging

from ..core.types import BOARD_SIZE, Color, Move
from .base import AnyBoard, Strategy

logger = logging.getLogger(__name__)


@dataclass
class GreedyConfig:
    """Weights of the greedy heuristic."""
    flip_weight: float = 3.0
    position_weight: float = 2.5
    mobility_weight: float = 1.5
    win_bonus: float = 1000.0


def greedy_position_value(move: Move) -> float:
    """Corner 20, edge 8, central 4x4 block 3, X-square -10, anything else 1."""
    row, col = move
    last = BOARD_SIZE - 1
    if row in (0, last) and col in (0, last):
        return 20.0
    if row in (0, last) or col in (0, last):
        return 8.0
    if 2 <= row <= 5 and 2 <= col <= 5:
        return 3.0
    if row in (1, last - 1) and col in (1, last - 1):
        return -10.0
    return 1.0


class GreedyStrategy(Strategy):
    """Play the move with the best immediate heuristic score."""

    name = "greedy"
    config_class = GreedyConfig

    def score_move(self, board: AnyBoard, color: Color, move: Move) -> float:
        cfg = self.config
        opp = color.opposite()

        after = board.clone()
        flips = after.apply_move(move, color)

        score = flips * cfg.flip_weight
        score += greedy_position_value(move) * cfg.position_weight
        score += (board.mobility(opp) - after.mobility(opp)) * cfg.mobility_weight
        if after.is_terminal() and after.score(color) > after.score(opp):
            score += cfg.win_bonus
        return score

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        heap = [(-self.score_move(board, color, move), i) for i, move in enumerate(moves)]
        heapq.heapify(heap)
        neg_score, index = heapq.heappop(heap)
        logger.debug(f"{self.name}: {color.name} plays {tuple(moves[index])} score={-neg_score}")
        return moves[index]
