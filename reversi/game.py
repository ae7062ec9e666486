"""
Game orchestration: play strategies against each other.

The orchestrator owns the only long-lived board. Each turn it hands the side
to move a clone, validates the reply and applies it. The game ends when
neither side can move, after two consecutive passes, or at `max_plies`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import logging
import time

from .core.board import Board
from .core.notation import GameRecord
from .core.types import Color, IllegalMoveError, Move
from .ai.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Outcome of a single game."""
    board: Board
    moves: list[Optional[Move]] = field(default_factory=list)  # None = pass
    black_score: int = 0
    white_score: int = 0
    elapsed: float = 0.0

    @property
    def winner(self) -> Optional[Color]:
        """Color with more discs, or None for a draw."""
        if self.black_score > self.white_score:
            return Color.BLACK
        if self.white_score > self.black_score:
            return Color.WHITE
        return None

    def to_record(self, black: str = "Black", white: str = "White") -> GameRecord:
        return GameRecord(
            black=black,
            white=white,
            result=f"{self.black_score}-{self.white_score}",
            moves=list(self.moves),
        )


def play_game(
    black: Strategy,
    white: Strategy,
    board: Optional[Board] = None,
    max_plies: Optional[int] = None,
    on_move: Optional[Callable[[Color, Optional[Move], Board], None]] = None,
) -> GameResult:
    """
    Play one game, black first.

    Args:
        black: Strategy playing black
        white: Strategy playing white
        board: Starting position (copied; default is the initial position)
        max_plies: Stop after this many plies (None = play to the end)
        on_move: Called after every ply with (color, move or None, board)

    Raises:
        IllegalMoveError: A strategy returned a move that is not legal.
    """
    board = board.clone() if board is not None else Board.new_game()
    players = {Color.BLACK: black, Color.WHITE: white}
    result = GameResult(board=board)

    start = time.perf_counter()
    color = Color.BLACK
    passes = 0
    while not board.is_terminal() and passes < 2:
        if max_plies is not None and len(result.moves) >= max_plies:
            break

        move = players[color].choose_move(board.clone(), color)
        if move is None:
            if board.has_moves(color):
                logger.warning(f"{color.name} ({players[color].name}) passed with legal moves available")
            passes += 1
        else:
            if not board.is_move_valid(move, color):
                raise IllegalMoveError(
                    f"{players[color].name} returned illegal move {tuple(move)} for {color.name}"
                )
            board.apply_move(move, color)
            passes = 0

        result.moves.append(move)
        if on_move is not None:
            on_move(color, move, board)
        color = color.opposite()

    result.elapsed = time.perf_counter() - start
    result.black_score = board.score(Color.BLACK)
    result.white_score = board.score(Color.WHITE)
    logger.debug(
        f"Game over after {len(result.moves)} plies: "
        f"black {result.black_score} - white {result.white_score} ({result.elapsed:.2f}s)"
    )
    return result


@dataclass
class MatchResult:
    """Tally of a series of games with fixed colors."""
    black_wins: int = 0
    white_wins: int = 0
    draws: int = 0
    total_time: float = 0.0

    @property
    def total(self) -> int:
        return self.black_wins + self.white_wins + self.draws

    def black_win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.black_wins / self.total

    def white_win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.white_wins / self.total


def run_match(
    black_factory: Callable[[int], Strategy],
    white_factory: Callable[[int], Strategy],
    num_games: int,
    on_game: Optional[Callable[[int, GameResult], None]] = None,
) -> MatchResult:
    """
    Play `num_games` games and count results.

    Each factory is called with the 0-based game number and must return a
    fresh strategy, so seeded strategies can vary their seed per game.
    `on_game` is called with (game number, result) after every game.
    """
    match = MatchResult()
    for game_num in range(num_games):
        result = play_game(black_factory(game_num), white_factory(game_num))
        if on_game is not None:
            on_game(game_num, result)
        match.total_time += result.elapsed
        if result.winner == Color.BLACK:
            match.black_wins += 1
        elif result.winner == Color.WHITE:
            match.white_wins += 1
        else:
            match.draws += 1
        logger.info(
            f"Game {game_num + 1}/{num_games}: "
            f"{result.black_score}-{result.white_score} in {result.elapsed:.2f}s"
        )
    return match
