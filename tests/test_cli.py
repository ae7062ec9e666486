"""Tests for the terminal client."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.play import main, strategy_factory, strategy_overrides
from reversi.ai.random_ai import RandomStrategy
from reversi.game import run_match


class TestOverrides:
    @pytest.mark.parametrize("name,expected", [
        ('alphabeta', {'depth': 3}),
        ('dfs', {'max_depth': 3}),
        ('bestfirst', {'max_depth': 3}),
        ('astar', {'lookahead_depth': 3}),
        ('greedy', {}),
    ])
    def test_depth(self, name, expected):
        assert strategy_overrides(name, 3, None) == expected

    def test_seed_only_where_supported(self):
        assert strategy_overrides('random', None, 5) == {'seed': 5}
        assert strategy_overrides('montecarlo', 2, 5) == {'seed': 5}
        assert strategy_overrides('greedy', None, 5) == {}


class TestFactory:
    def test_seed_offset_per_game(self):
        make = strategy_factory('random', {'seed': 1})
        assert [make(game).config.seed for game in range(3)] == [1, 2, 3]
        assert isinstance(make(0), RandomStrategy)

    def test_unseeded_overrides_unchanged(self):
        make = strategy_factory('alphabeta', {'depth': 2})
        assert make(0).config.depth == 2
        assert make(5).config.depth == 2

    def test_seeded_match_plays_different_games(self):
        overrides = strategy_overrides('random', None, 1)
        games = []
        run_match(
            strategy_factory('random', overrides),
            strategy_factory('random', overrides),
            num_games=5,
            on_game=lambda game, result: games.append(tuple(result.moves)),
        )
        assert len(set(games)) > 1

    def test_seeded_match_is_reproducible(self):
        overrides = strategy_overrides('random', None, 4)
        runs = []
        for _ in range(2):
            games = []
            run_match(
                strategy_factory('random', overrides),
                strategy_factory('random', overrides),
                num_games=2,
                on_game=lambda game, result: games.append(tuple(result.moves)),
            )
            runs.append(games)
        assert runs[0] == runs[1]


class TestMain:
    def test_single_game(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'argv', ['play.py', '--black', 'random', '--white', 'greedy', '--seed', '3'])
        main()
        out = capsys.readouterr().out
        assert "random (B) vs greedy (W)" in out
        assert "Game over after" in out
        assert '[Result "' in out

    def test_match(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'argv', ['play.py', '--black', 'random', '--white', 'random',
                                          '--games', '2', '--seed', '1'])
        main()
        out = capsys.readouterr().out
        assert "2 games" in out
        assert "Black wins:" in out

    def test_unknown_strategy_exits(self, monkeypatch):
        monkeypatch.setattr(sys, 'argv', ['play.py', '--black', 'nope'])
        with pytest.raises(SystemExit):
            main()
