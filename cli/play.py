#!/usr/bin/env python3
"""
Terminal Reversi client.

Watch two bots play a game, or run a short match and print the tally.

    python cli/play.py --black alphabeta-fast --white greedy
    python cli/play.py --black montecarlo --white random --games 10 --seed 1
"""

from __future__ import annotations
import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from reversi.core.board import Board
from reversi.core.notation import board_to_text, move_to_algebraic
from reversi.core.types import Color, Move
from reversi.ai.base import Strategy
from reversi.ai.factory import STRATEGIES, create_strategy
from reversi.game import play_game, run_match

# Config fields that --depth sets, in the order they are looked for
DEPTH_FIELDS = ('depth', 'max_depth', 'lookahead_depth')


def strategy_overrides(name: str, depth: Optional[int], seed: Optional[int]) -> dict:
    """Translate the generic --depth/--seed flags to the strategy's own config fields."""
    fields = {f.name for f in dataclasses.fields(STRATEGIES[name].config_class)}
    overrides = {}
    if depth is not None:
        for field_name in DEPTH_FIELDS:
            if field_name in fields:
                overrides[field_name] = depth
                break
    if seed is not None and 'seed' in fields:
        overrides['seed'] = seed
    return overrides


def strategy_factory(name: str, overrides: dict) -> Callable[[int], Strategy]:
    """Build one strategy per game; a seed is offset by the game number."""
    def make(game_num: int) -> Strategy:
        game_overrides = dict(overrides)
        if game_overrides.get('seed') is not None:
            game_overrides['seed'] += game_num
        return create_strategy(name, **game_overrides)
    return make


def print_board(board: Board) -> None:
    """Print the board with disc counts."""
    print()
    print(board_to_text(board))
    print(f"  B {board.score(Color.BLACK)}  W {board.score(Color.WHITE)}")
    print()


def watch_game(black: Strategy, white: Strategy, delay: float = 0.0) -> None:
    """Play one game, printing the board after every ply."""
    print(f"\n=== {black.name} (B) vs {white.name} (W) ===")
    print_board(Board.new_game())

    ply = 0

    def show(color: Color, move: Optional[Move], board: Board) -> None:
        nonlocal ply
        ply += 1
        print(f"Move {ply}, {color.name} plays {move_to_algebraic(move)}")
        print_board(board)
        if delay:
            time.sleep(delay)

    result = play_game(black, white, on_move=show)

    winner = result.winner
    print(f"Game over after {len(result.moves)} plies: "
          f"B {result.black_score} - W {result.white_score}. "
          f"Winner: {winner.name if winner is not None else 'None (draw)'}")
    print(result.to_record(black.name, white.name).to_text())


def main():
    names = sorted(STRATEGIES)
    parser = argparse.ArgumentParser(description='Reversi Terminal Client')
    parser.add_argument('--black', type=str, choices=names, default='alphabeta-fast',
                        help='Strategy playing black (moves first)')
    parser.add_argument('--white', type=str, choices=names, default='greedy',
                        help='Strategy playing white')
    parser.add_argument('--games', type=int, default=1,
                        help='Number of games; more than one prints only the match tally')
    parser.add_argument('--depth', type=int, help='Search depth for strategies that have one')
    parser.add_argument('--seed', type=int, help='Random seed for randomized strategies')
    parser.add_argument('--delay', type=float, default=0.0, help='Pause between plies (seconds)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    black_overrides = strategy_overrides(args.black, args.depth, args.seed)
    white_overrides = strategy_overrides(args.white, args.depth, args.seed)

    if args.games <= 1:
        watch_game(
            create_strategy(args.black, **black_overrides),
            create_strategy(args.white, **white_overrides),
            args.delay,
        )
        return

    match = run_match(
        strategy_factory(args.black, black_overrides),
        strategy_factory(args.white, white_overrides),
        args.games,
    )
    print(f"\n=== {args.black} (B) vs {args.white} (W), {match.total} games ===")
    print(f"Black wins: {match.black_wins} ({match.black_win_rate():.1%})")
    print(f"White wins: {match.white_wins} ({match.white_win_rate():.1%})")
    print(f"Draws:      {match.draws}")
    print(f"Total time: {match.total_time:.1f}s")


if __name__ == '__main__':
    main()
