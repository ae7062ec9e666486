"""
Static position evaluation shared by the search strategies.

A single `Evaluator` computes a weighted sum of classic Reversi features
from one side's point of view:

  positional  sum of the square weights below over own discs minus opponent's
  mobility    own legal move count minus opponent's
  corners     own corners minus opponent's
  pieces      own disc count minus opponent's

Each strategy picks a preset of weights. The evaluator only reads boards
through `to_array`, `color_at`, `mobility` and `score`, so it works the same
on `Board` and `BitBoard`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from ..core.bitboard import CORNER_SQUARES
from ..core.types import BOARD_SIZE, Color

# Row-major square weights: corners are strong, squares next to them are bad.
POSITION_WEIGHTS = (
    100, -20,  10,   5,   5,  10, -20, 100,
    -20, -50,  -2,  -2,  -2,  -2, -50, -20,
     10,  -2,  -1,  -1,  -1,  -1,  -2,  10,
      5,  -2,  -1,  -1,  -1,  -1,  -2,   5,
      5,  -2,  -1,  -1,  -1,  -1,  -2,   5,
     10,  -2,  -1,  -1,  -1,  -1,  -2,  10,
    -20, -50,  -2,  -2,  -2,  -2, -50, -20,
    100, -20,  10,   5,   5,  10, -20, 100,
)

WEIGHT_TABLE = np.array(POSITION_WEIGHTS, dtype=np.int32).reshape(BOARD_SIZE, BOARD_SIZE)


@dataclass(frozen=True)
class EvalWeights:
    """Feature weights. A zero weight skips computing that feature."""

    positional: int = 0
    positional_divisor: int = 1   # positional sum is divided (truncating) by this
    mobility: int = 0
    corners: int = 0
    pieces: int = 0

    # When set, positions where neither side can move score +/- this (0 on a draw)
    terminal_score: Optional[int] = None


ALPHA_BETA_WEIGHTS = EvalWeights(mobility=10, corners=100, pieces=1)
FAST_ALPHA_BETA_WEIGHTS = EvalWeights(positional=1, mobility=15)
BEST_FIRST_WEIGHTS = EvalWeights(
    positional=1, positional_divisor=10, mobility=2, pieces=1, terminal_score=1000
)
FAST_BEST_FIRST_WEIGHTS = EvalWeights(positional=1, mobility=5, pieces=1, terminal_score=10000)
PIECE_COUNT_WEIGHTS = EvalWeights(pieces=1, terminal_score=1000)


def _truncating_div(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // abs(divisor)
    return quotient if (value < 0) == (divisor < 0) else -quotient


def positional_score(board, color: Color) -> int:
    """Sum of square weights over `color`'s discs minus the opponent's."""
    cells = board.to_array()
    own = WEIGHT_TABLE[cells == color].sum()
    opp = WEIGHT_TABLE[cells == color.opposite()].sum()
    return int(own - opp)


class Evaluator:
    """
    Weighted static evaluator.

    Keeps a running count of evaluations in `total_evals` so tests and
    benchmarks can tell how much work a search did.
    """

    def __init__(self, weights: EvalWeights = ALPHA_BETA_WEIGHTS):
        self.weights = weights
        self.total_evals = 0

    def evaluate(self, board, color: Color) -> int:
        """Score `board` from `color`'s point of view (higher is better)."""
        self.total_evals += 1
        w = self.weights
        opp = color.opposite()

        own_mobility = opp_mobility = 0
        if w.mobility or w.terminal_score is not None:
            own_mobility = board.mobility(color)
            opp_mobility = board.mobility(opp)

        if w.terminal_score is not None and own_mobility == 0 and opp_mobility == 0:
            diff = board.score(color) - board.score(opp)
            if diff > 0:
                return w.terminal_score
            if diff < 0:
                return -w.terminal_score
            return 0

        score = 0
        if w.positional:
            score += w.positional * _truncating_div(
                positional_score(board, color), w.positional_divisor
            )
        if w.mobility:
            score += w.mobility * (own_mobility - opp_mobility)
        if w.corners:
            corners = [board.color_at(sq) for sq in CORNER_SQUARES]
            score += w.corners * (corners.count(color) - corners.count(opp))
        if w.pieces:
            score += w.pieces * (board.score(color) - board.score(opp))
        return score

    def reset_stats(self) -> None:
        self.total_evals = 0

    def stats(self) -> dict:
        """Get evaluation statistics."""
        return {'total_evals': self.total_evals}
