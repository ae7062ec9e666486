"""
Notation for Reversi games: algebraic squares, board diagrams and transcripts.

Squares are written file-then-rank, "a1" being row 0 / col 0 and "h8" being
row 7 / col 7. A pass is written "--".

Board diagram (one rank per line, "B" black, "W" white, "." empty; rank
numbers and the file footer are optional when parsing):
```
1 . . . . . . . .
...
4 . . . W B . . .
5 . . . B W . . .
...
  a b c d e f g h
```

Transcript example:
```
[Event "Casual Game"]
[Date "2026.01.18"]
[Black "alphabeta-fast"]
[White "greedy"]
[Result "38-26"]

1. f5 d6 2. c3 d3 3. c4 -- ...
```
Moves alternate strictly starting with black; a pass keeps the alternation.
"""

from __future__ import annotations
import re
from datetime import date
from dataclasses import dataclass, field
from typing import Optional

from .types import BOARD_SIZE, Color, Move
from .board import Board

PASS_TOKEN = '--'
FILES = 'abcdefgh'

_SYMBOL_TO_COLOR = {'.': Color.EMPTY, 'W': Color.WHITE, 'B': Color.BLACK}


def move_to_algebraic(move: Optional[Move]) -> str:
    """Convert a move to "d3" form; None (a pass) becomes "--"."""
    if move is None:
        return PASS_TOKEN
    move = Move(*move)
    if not move.in_bounds():
        raise ValueError(f"Move off the board: {tuple(move)}")
    return f"{FILES[move.col]}{move.row + 1}"


def algebraic_to_move(text: str) -> Optional[Move]:
    """Parse "d3" (case-insensitive) into a Move; "--" parses to None."""
    token = text.strip().lower()
    if token == PASS_TOKEN:
        return None
    if len(token) != 2 or token[0] not in FILES or not token[1].isdigit():
        raise ValueError(f"Invalid square: {text!r}")
    move = Move(int(token[1]) - 1, FILES.index(token[0]))
    if not move.in_bounds():
        raise ValueError(f"Invalid square: {text!r}")
    return move


def board_to_text(board) -> str:
    """Render any board exposing `color_at` as a ranked diagram."""
    lines = []
    for row in range(BOARD_SIZE):
        cells = ' '.join(
            board.color_at(row * BOARD_SIZE + col).symbol for col in range(BOARD_SIZE)
        )
        lines.append(f"{row + 1} {cells}")
    lines.append("  " + " ".join(FILES))
    return '\n'.join(lines)


def parse_board(text: str) -> Board:
    """
    Parse a diagram produced by `board_to_text` (or a bare 8x8 grid).

    Blank lines and the file footer are ignored; leading rank numbers are
    optional. Raises ValueError on anything else.
    """
    cells: list[Color] = []
    for line in text.strip().splitlines():
        tokens = line.split()
        if not tokens or ''.join(tokens) == FILES:
            continue
        if tokens[0].isdigit():
            tokens = tokens[1:]
        if len(tokens) == 1 and len(tokens[0]) == BOARD_SIZE:
            tokens = list(tokens[0])
        if len(tokens) != BOARD_SIZE:
            raise ValueError(f"Bad board row: {line!r}")
        for token in tokens:
            if token.upper() not in _SYMBOL_TO_COLOR:
                raise ValueError(f"Unknown cell symbol {token!r} in row {line!r}")
            cells.append(_SYMBOL_TO_COLOR[token.upper()])
    if len(cells) != BOARD_SIZE * BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(cells) // BOARD_SIZE}")
    return Board(cells)


@dataclass
class GameRecord:
    """Record of a complete or in-progress game."""

    # Metadata (PGN-style tags)
    event: str = "Reversi Game"
    date: str = field(default_factory=lambda: date.today().strftime("%Y.%m.%d"))
    black: str = "Black"
    white: str = "White"
    result: str = "*"  # "*" while ongoing, otherwise "<black>-<white>" disc counts

    # Move history; None marks a pass
    moves: list[Optional[Move]] = field(default_factory=list)

    def to_text(self) -> str:
        """Export to the tagged transcript format."""
        lines = [
            f'[Event "{self.event}"]',
            f'[Date "{self.date}"]',
            f'[Black "{self.black}"]',
            f'[White "{self.white}"]',
            f'[Result "{self.result}"]',
            '',
        ]

        parts = []
        for ply, move in enumerate(self.moves):
            token = move_to_algebraic(move)
            if ply % 2 == 0:
                parts.append(f"{ply // 2 + 1}. {token}")
            else:
                parts.append(token)

        # Word wrap at 80 chars
        current_line = ""
        for word in ' '.join(parts).split(' '):
            if current_line and len(current_line) + len(word) + 1 > 80:
                lines.append(current_line)
                current_line = word
            else:
                current_line = f"{current_line} {word}".strip()
        if current_line:
            lines.append(current_line)

        return '\n'.join(lines)

    @classmethod
    def from_text(cls, text: str) -> GameRecord:
        """Parse the tagged transcript format. Raises ValueError on bad move tokens."""
        record = cls()

        tag_pattern = r'\[(\w+)\s+"([^"]*)"\]'
        for match in re.finditer(tag_pattern, text):
            tag, value = match.groups()
            tag_lower = tag.lower()
            if tag_lower in ('event', 'date', 'black', 'white', 'result'):
                setattr(record, tag_lower, value)

        move_text = re.sub(tag_pattern, '', text)
        for token in move_text.split():
            # Skip move numbers like "1." or "12."
            if re.match(r'^\d+\.$', token):
                continue
            record.moves.append(algebraic_to_move(token))

        return record

    def replay(self, board: Optional[Board] = None) -> Board:
        """
        Replay the moves from the starting position (or `board`).

        Raises IllegalMoveError if a recorded move is illegal.
        """
        board = board.clone() if board is not None else Board.new_game()
        color = Color.BLACK
        for move in self.moves:
            if move is not None:
                board.apply_move(move, color)
            color = color.opposite()
        return board
