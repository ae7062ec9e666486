"""
Flat Monte-Carlo move selection.

Each root move is followed by `num_simulations` random playouts to the end
of the game. The move with the most playouts won by the mover is chosen
(ties keep the earlier move). Playouts run on bitboards; randomness comes
from a seedable numpy Generator, so a fixed seed reproduces the same choice.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import numpy as np

from ..core.bitboard import BitBoard, bb_to_squares
from ..core.types import Color, Move
from .base import AnyBoard, Strategy, to_bitboard

logger = logging.getLogger(__name__)


@dataclass
class MonteCarloConfig:
    """Configuration for Monte-Carlo rollouts."""
    num_simulations: int = 1000  # Playouts per root move
    seed: Optional[int] = None


def random_playout(board: BitBoard, to_move: Color, rng: np.random.Generator) -> BitBoard:
    """
    Play uniformly random legal moves until neither side can move.

    Modifies `board` in-place and returns it. A side without moves is skipped.
    """
    while True:
        moves = board.valid_moves_mask(to_move)
        if not moves:
            if not board.valid_moves_mask(to_move.opposite()):
                return board
        else:
            squares = bb_to_squares(moves)
            board.apply_move(squares[int(rng.integers(len(squares)))], to_move)
        to_move = to_move.opposite()


class MonteCarloStrategy(Strategy):
    """Pick the move with the highest random-playout win count."""

    name = "montecarlo"
    config_class = MonteCarloConfig

    def __init__(self, config: Optional[MonteCarloConfig] = None):
        super().__init__(config)
        self.rng = np.random.default_rng(self.config.seed)
        self.total_playouts = 0

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        root = to_bitboard(board)
        opp = color.opposite()

        best_move = moves[0]
        best_wins = -1
        for move in moves:
            wins = 0
            for _ in range(self.config.num_simulations):
                playout = root.clone()
                playout.apply_move(move, color)
                random_playout(playout, opp, self.rng)
                if playout.score(color) > playout.score(opp):
                    wins += 1
            self.total_playouts += self.config.num_simulations

            if wins > best_wins:
                best_wins = wins
                best_move = move

        logger.debug(
            f"{self.name}: {color.name} plays {tuple(best_move)} "
            f"wins={best_wins}/{self.config.num_simulations}"
        )
        return best_move
