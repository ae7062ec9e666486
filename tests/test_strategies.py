"""Tests for the strategy contract and the registry, across every strategy."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from reversi.core.bitboard import BitBoard
from reversi.core.board import Board
from reversi.core.types import Color, Move
from reversi.ai import STRATEGIES, Strategy, create_strategy
from reversi.ai.minimax import AlphaBetaStrategy, MinimaxConfig

# Small settings so every strategy answers quickly
FAST_OVERRIDES = {
    'alphabeta': {'depth': 2},
    'alphabeta-fast': {'depth': 2},
    'bfs': {'max_depth': 2},
    'dfs': {'max_depth': 2},
    'montecarlo': {'num_simulations': 2, 'seed': 0},
    'greedy': {},
    'bestfirst': {'max_depth': 2, 'time_budget': None},
    'bestfirst-fast': {'max_depth': 2, 'time_budget': None},
    'astar': {'lookahead_depth': 2},
    'random': {'seed': 0},
}


def board_with(black=(), white=()) -> Board:
    board = Board.empty()
    for row, col in black:
        board.set(row, col, Color.BLACK)
    for row, col in white:
        board.set(row, col, Color.WHITE)
    return board


class TestRegistry:
    def test_all_strategies_registered(self):
        assert set(STRATEGIES) == set(FAST_OVERRIDES)
        for name, cls in STRATEGIES.items():
            assert issubclass(cls, Strategy)
            assert cls.name == name

    def test_create_with_defaults(self):
        strategy = create_strategy('alphabeta')
        assert isinstance(strategy, AlphaBetaStrategy)
        assert strategy.config == MinimaxConfig(depth=8, prune=True, terminal_multiplier=2)

    def test_create_with_overrides(self):
        strategy = create_strategy('AlphaBeta', depth=3, prune=False)
        assert strategy.config.depth == 3
        assert strategy.config.prune is False

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="available"):
            create_strategy('minimax-9000')

    def test_unknown_override(self):
        with pytest.raises(ValueError, match="does not accept"):
            create_strategy('greedy', depth=3)


class TestContract:
    @pytest.mark.parametrize("name", sorted(FAST_OVERRIDES))
    def test_no_moves_returns_none(self, name):
        board = board_with(black=[(0, 0)], white=[(0, 1)])
        strategy = create_strategy(name, **FAST_OVERRIDES[name])
        assert strategy.choose_move(board, Color.WHITE) is None

    @pytest.mark.parametrize("name", sorted(FAST_OVERRIDES))
    def test_single_move_without_searching(self, name, monkeypatch):
        """With one legal move no clone is made and nothing is evaluated."""
        def no_clone(self):
            raise AssertionError("board cloned")

        monkeypatch.setattr(Board, 'clone', no_clone)
        monkeypatch.setattr(BitBoard, 'clone', no_clone)
        monkeypatch.setattr(BitBoard, 'from_board', classmethod(lambda cls, board: no_clone(board)))

        board = board_with(black=[(0, 0)], white=[(0, 1)])
        strategy = create_strategy(name, **FAST_OVERRIDES[name])
        assert strategy.choose_move(board, Color.BLACK) == Move(0, 2)
        evaluator = getattr(strategy, 'evaluator', None)
        if evaluator is not None:
            assert evaluator.total_evals == 0

    @pytest.mark.parametrize("name", sorted(FAST_OVERRIDES))
    def test_legal_move_and_board_untouched(self, name):
        board = Board.new_game()
        board.apply_move(Move(2, 3), Color.BLACK)
        before = board.clone()
        strategy = create_strategy(name, **FAST_OVERRIDES[name])
        move = strategy.choose_move(board, Color.WHITE)
        assert move in before.valid_moves(Color.WHITE)
        assert board == before

    @pytest.mark.parametrize("name", sorted(FAST_OVERRIDES))
    def test_accepts_bitboard(self, name):
        bb = BitBoard.new_game()
        strategy = create_strategy(name, **FAST_OVERRIDES[name])
        move = strategy.choose_move(bb, Color.BLACK)
        assert move in bb.valid_moves(Color.BLACK)
        assert bb == BitBoard.new_game()
