"""Tests for alpha-beta search on both board representations."""

import pytest
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from reversi.core.bitboard import BitBoard
from reversi.core.board import Board
from reversi.core.types import Color, Move
from reversi.ai.evaluator import ALPHA_BETA_WEIGHTS, FAST_ALPHA_BETA_WEIGHTS, Evaluator
from reversi.ai.minimax import AlphaBetaStrategy, FastAlphaBetaStrategy, MinimaxConfig


def random_position(seed: int, plies: int) -> tuple[Board, Color]:
    """Play `plies` random moves from the start; return the board and side to move."""
    rng = np.random.default_rng(seed)
    board = Board.new_game()
    color = Color.BLACK
    for _ in range(plies):
        moves = board.valid_moves(color)
        if moves:
            board.apply_move(moves[int(rng.integers(len(moves)))], color)
        color = color.opposite()
    return board, color


def board_with(black=(), white=()) -> Board:
    board = Board.empty()
    for row, col in black:
        board.set(row, col, Color.BLACK)
    for row, col in white:
        board.set(row, col, Color.WHITE)
    return board


class TestPruningEquivalence:
    @pytest.mark.parametrize("seed", range(4))
    def test_board_variant_matches_brute_force(self, seed):
        board, color = random_position(seed, plies=6 + seed)
        pruned = AlphaBetaStrategy(MinimaxConfig(depth=3))
        brute = AlphaBetaStrategy(MinimaxConfig(depth=3, prune=False))
        assert pruned.search(board, color) == brute.search(board, color)
        assert pruned.evaluator.total_evals <= brute.evaluator.total_evals

    @pytest.mark.parametrize("seed", range(4))
    def test_bitboard_variant_matches_brute_force(self, seed):
        board, color = random_position(seed, plies=10 + seed)
        pruned = FastAlphaBetaStrategy(MinimaxConfig(depth=4))
        brute = FastAlphaBetaStrategy(MinimaxConfig(depth=4, prune=False))
        assert pruned.search(board, color) == brute.search(board, color)
        assert pruned.nodes <= brute.nodes


class TestRootSelection:
    def test_depth_one_is_greedy_on_evaluation(self):
        board, color = random_position(3, plies=8)
        strategy = AlphaBetaStrategy(MinimaxConfig(depth=1))
        ev = Evaluator(ALPHA_BETA_WEIGHTS)

        values = []
        for move in board.valid_moves(color):
            child = board.clone()
            child.apply_move(move, color)
            values.append(ev.evaluate(child, color))
        best = max(values)
        expected = board.valid_moves(color)[values.index(best)]

        assert strategy.search(board, color) == (expected, best)

    def test_ties_keep_first_move(self):
        # All four opening moves are symmetric
        move, _ = FastAlphaBetaStrategy(MinimaxConfig(depth=2)).search(Board.new_game(), Color.BLACK)
        assert move == Move(2, 3)

    def test_no_moves(self):
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        move, _ = AlphaBetaStrategy(MinimaxConfig(depth=2)).search(board, Color.WHITE)
        assert move is None

    def test_accepts_bitboard(self):
        bb = BitBoard.new_game()
        assert FastAlphaBetaStrategy(MinimaxConfig(depth=2)).choose_move(bb, Color.BLACK) in bb.valid_moves(Color.BLACK)
        assert bb == BitBoard.new_game()


class TestTerminalPositions:
    def test_board_variant_evaluates_terminal(self):
        # Black's only move c1 takes the last white disc
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        move, value = AlphaBetaStrategy(MinimaxConfig(depth=3)).search(board, Color.BLACK)
        assert move == Move(0, 2)
        assert value == 100 + 3  # one corner, three discs, no mobility

    def test_bitboard_variant_scales_terminal(self):
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        # positional 100 - 20 + 10 = 90
        _, value = FastAlphaBetaStrategy(MinimaxConfig(depth=3)).search(board, Color.BLACK)
        assert value == 90 * 2
        _, value = FastAlphaBetaStrategy(
            MinimaxConfig(depth=3, terminal_multiplier=10)
        ).search(board, Color.BLACK)
        assert value == 900

    def test_pass_uses_a_ply(self):
        # White has no reply after black's move; black moves again at depth 3
        board = board_with(black=[(0, 0)], white=[(0, 1), (0, 3)])
        move, _ = AlphaBetaStrategy(MinimaxConfig(depth=3)).search(board, Color.BLACK)
        assert move in board.valid_moves(Color.BLACK)
