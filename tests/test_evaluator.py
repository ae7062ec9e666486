"""Tests for static position evaluation."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from reversi.core.bitboard import BitBoard
from reversi.core.board import Board
from reversi.core.types import Color, Move
from reversi.ai.evaluator import (
    POSITION_WEIGHTS, WEIGHT_TABLE,
    ALPHA_BETA_WEIGHTS, FAST_ALPHA_BETA_WEIGHTS, BEST_FIRST_WEIGHTS,
    FAST_BEST_FIRST_WEIGHTS, PIECE_COUNT_WEIGHTS,
    EvalWeights, Evaluator, positional_score, _truncating_div,
)


def board_with(black=(), white=()) -> Board:
    board = Board.empty()
    for row, col in black:
        board.set(row, col, Color.BLACK)
    for row, col in white:
        board.set(row, col, Color.WHITE)
    return board


class TestWeightTable:
    def test_shape_and_symmetry(self):
        assert len(POSITION_WEIGHTS) == 64
        assert WEIGHT_TABLE.shape == (8, 8)
        assert (WEIGHT_TABLE == WEIGHT_TABLE.T).all()
        assert (WEIGHT_TABLE == WEIGHT_TABLE[::-1, ::-1]).all()

    def test_corner_and_x_squares(self):
        assert WEIGHT_TABLE[0, 0] == 100
        assert WEIGHT_TABLE[1, 1] == -50
        assert WEIGHT_TABLE[0, 1] == -20


class TestPositional:
    def test_initial_is_balanced(self):
        assert positional_score(Board.new_game(), Color.BLACK) == 0

    def test_corner_against_x_square(self):
        board = board_with(black=[(0, 0)], white=[(1, 1)])
        assert positional_score(board, Color.BLACK) == 150
        assert positional_score(board, Color.WHITE) == -150

    def test_truncating_division(self):
        assert _truncating_div(155, 10) == 15
        assert _truncating_div(-155, 10) == -15
        assert _truncating_div(-5, 10) == 0


class TestEvaluator:
    def test_initial_position_scores_zero(self):
        for weights in (ALPHA_BETA_WEIGHTS, FAST_ALPHA_BETA_WEIGHTS, BEST_FIRST_WEIGHTS,
                        FAST_BEST_FIRST_WEIGHTS, PIECE_COUNT_WEIGHTS):
            assert Evaluator(weights).evaluate(Board.new_game(), Color.BLACK) == 0

    def test_alpha_beta_weights(self):
        # Black a1, white b1: only black can move (to c1)
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        # mobility: black 1 (c1), white 0; corners 1-0; pieces 1-1
        assert Evaluator(ALPHA_BETA_WEIGHTS).evaluate(board, Color.BLACK) == 10 + 100 + 0
        assert Evaluator(ALPHA_BETA_WEIGHTS).evaluate(board, Color.WHITE) == -110

    def test_fast_alpha_beta_weights(self):
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        # positional 100 - (-20) = 120, mobility (1 - 0) * 15
        assert Evaluator(FAST_ALPHA_BETA_WEIGHTS).evaluate(board, Color.BLACK) == 135

    def test_best_first_divides_positional(self):
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        # 120 // 10 + (1 - 0) * 2 + 0
        assert Evaluator(BEST_FIRST_WEIGHTS).evaluate(board, Color.BLACK) == 14

    def test_terminal_scores(self):
        won = board_with(black=[(0, 0), (0, 1), (0, 2)])
        assert won.is_terminal()
        assert Evaluator(BEST_FIRST_WEIGHTS).evaluate(won, Color.BLACK) == 1000
        assert Evaluator(BEST_FIRST_WEIGHTS).evaluate(won, Color.WHITE) == -1000
        assert Evaluator(FAST_BEST_FIRST_WEIGHTS).evaluate(won, Color.BLACK) == 10000
        assert Evaluator(PIECE_COUNT_WEIGHTS).evaluate(won, Color.WHITE) == -1000

        drawn = Board([Color.BLACK] * 32 + [Color.WHITE] * 32)
        assert Evaluator(PIECE_COUNT_WEIGHTS).evaluate(drawn, Color.BLACK) == 0

    def test_no_terminal_score_without_setting(self):
        won = board_with(black=[(0, 0), (0, 1), (0, 2)])
        # corners 1 * 100 + pieces 3
        assert Evaluator(ALPHA_BETA_WEIGHTS).evaluate(won, Color.BLACK) == 103

    def test_same_on_both_representations(self):
        board = Board.new_game()
        for move, color in [(Move(2, 3), Color.BLACK), (Move(2, 2), Color.WHITE),
                            (Move(3, 2), Color.BLACK), (Move(2, 4), Color.WHITE)]:
            board.apply_move(move, color)
        bb = BitBoard.from_board(board)
        for weights in (ALPHA_BETA_WEIGHTS, FAST_ALPHA_BETA_WEIGHTS, BEST_FIRST_WEIGHTS):
            ev = Evaluator(weights)
            for color in (Color.BLACK, Color.WHITE):
                assert ev.evaluate(board, color) == ev.evaluate(bb, color)

    def test_counts_evaluations(self):
        ev = Evaluator(EvalWeights(pieces=1))
        assert ev.total_evals == 0
        ev.evaluate(Board.new_game(), Color.BLACK)
        ev.evaluate(BitBoard.new_game(), Color.WHITE)
        assert ev.total_evals == 2
        assert ev.stats() == {'total_evals': 2}
        ev.reset_stats()
        assert ev.total_evals == 0
