"""
A*-flavoured heuristic move selection.

Every legal move gets f = g + h, where g is the concrete benefit of playing
it and h an estimate of the position it leads to. There is no open list:
the highest f wins outright and ties keep the earlier move.

g = flips * 2.5 + stability * 1.8 + mobility change * 1.2 (+15 for a corner)
h = corner potential * 2.0 + edge balance * 1.2 + mobility potential
    + corner-line stability * 1.5 + own-move lookahead * 0.8
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import math

from ..core.types import BOARD_SIZE, Color, Move
from .base import AnyBoard, Strategy

logger = logging.getLogger(__name__)

LAST = BOARD_SIZE - 1
CORNER_MOVES = (Move(0, 0), Move(0, LAST), Move(LAST, 0), Move(LAST, LAST))
NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (-1, 1), (1, -1), (1, 1))


@dataclass
class AStarConfig:
    """Configuration for the A* heuristic."""
    lookahead_depth: int = 4
    lookahead_width: int = 3   # Own moves sampled per lookahead ply
    lookahead_decay: float = 0.7


def _cell(board: AnyBoard, row: int, col: int) -> Color:
    return board.color_at(row * BOARD_SIZE + col)


def _is_edge(row: int, col: int) -> bool:
    return row in (0, LAST) or col in (0, LAST)


class AStarStrategy(Strategy):
    """Pick the move with the best benefit-plus-estimate score."""

    name = "astar"
    config_class = AStarConfig

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        best_move = moves[0]
        best_f = -math.inf
        for move in moves:
            after = board.clone()
            flips = after.apply_move(move, color)
            f = self.actual_benefit(board, after, move, flips, color) + self.estimate(after, color)
            if f > best_f:
                best_f = f
                best_move = move

        logger.debug(f"{self.name}: {color.name} plays {tuple(best_move)} f={best_f:.2f}")
        return best_move

    # -- g ---------------------------------------------------------------

    def actual_benefit(self, before: AnyBoard, after: AnyBoard, move: Move,
                       flips: int, color: Color) -> float:
        opp = color.opposite()
        own_change = after.mobility(color) - before.mobility(color)
        opp_change = after.mobility(opp) - before.mobility(opp)

        g = flips * 2.5
        g += self.placement_stability(after, move, color) * 1.8
        g += (own_change - opp_change) * 1.2
        if move in CORNER_MOVES:
            g += 15.0
        return g

    @staticmethod
    def placement_stability(board: AnyBoard, move: Move, color: Color) -> float:
        row, col = move
        stability = 0.0
        if move in CORNER_MOVES:
            stability += 10.0
        if _is_edge(row, col):
            stability += 4.0
        for dr, dc in NEIGHBOURS:
            r, c = row + dr, col + dc
            if 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and _cell(board, r, c) == color:
                stability += 0.5
        return stability

    # -- h ---------------------------------------------------------------

    def estimate(self, board: AnyBoard, color: Color) -> float:
        h = self.corner_potential(board, color) * 2.0
        h += self.edge_balance(board, color) * 1.2
        h += (board.mobility(color) - board.mobility(color.opposite())) * 0.5
        h += self.corner_line_stability(board, color) * 1.5
        if self.config.lookahead_depth > 0:
            h += self.lookahead(board, color, self.config.lookahead_depth - 1) * 0.8
        return h

    @staticmethod
    def corner_potential(board: AnyBoard, color: Color) -> float:
        """5 per owned corner, 3 per empty corner `color` can take now."""
        potential = 0.0
        for corner in CORNER_MOVES:
            owner = _cell(board, *corner)
            if owner == color:
                potential += 5.0
            elif owner == Color.EMPTY and board.is_move_valid(corner, color):
                potential += 3.0
        return potential

    @staticmethod
    def edge_balance(board: AnyBoard, color: Color) -> float:
        """Own minus opponent discs on the four edges (corners count twice)."""
        opp = color.opposite()
        balance = 0.0
        for i in range(BOARD_SIZE):
            for row, col in ((0, i), (LAST, i), (i, 0), (i, LAST)):
                cell = _cell(board, row, col)
                if cell == color:
                    balance += 1.0
                elif cell == opp:
                    balance -= 1.0
        return balance

    @staticmethod
    def corner_line_stability(board: AnyBoard, color: Color) -> float:
        """0.3 per own disc sharing a row or column with an owned corner."""
        owned = [c for c in CORNER_MOVES if _cell(board, *c) == color]
        if not owned:
            return 0.0
        stability = 0.0
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if _cell(board, row, col) != color:
                    continue
                if any(row == r or col == c for r, c in owned):
                    stability += 0.3
        return stability

    def lookahead(self, board: AnyBoard, color: Color, depth: int) -> float:
        """Best disc-difference trend over our own next few moves."""
        simple = (board.score(color) - board.score(color.opposite())) * 0.1
        if depth <= 0 or board.is_terminal():
            return simple
        moves = board.valid_moves(color)
        if not moves:
            return simple

        best = -math.inf
        for move in moves[:self.config.lookahead_width]:
            after = board.clone()
            after.apply_move(move, color)
            potential = (
                (after.score(color) - after.score(color.opposite())) * 0.1
                + self.lookahead(after, color, depth - 1) * self.config.lookahead_decay
            )
            best = max(best, potential)
        return best
