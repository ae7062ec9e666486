"""
Best-first (Dijkstra-style) search with memoization.

Positions are nodes in a priority queue ordered by "distance", the negated
advantage of the searching side, so the most promising positions are
expanded first whatever their depth:

1. Each legal root move seeds the queue at depth 1.
2. The lowest-distance node is popped. If a shorter distance has since been
   recorded for its (position, side to move) key, the node is stale and
   skipped.
3. Nodes at `max_depth` or where neither side can move are candidates; the
   candidate with the lowest distance decides the root move.
4. Otherwise every reply is pushed with its own distance. A side with no
   legal move yields a single pass child (same position, other side).

Each key remembers the root move of the first parent that reached it. The
search is anytime: the wall-clock budget is checked at every dequeue and the
best candidate so far (or the first legal move) is returned on expiry.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Hashable, Optional
import heapq
import itertools
import logging
import math
import time

from ..core.types import Color, Move
from .base import AnyBoard, Strategy, to_bitboard
from .evaluator import BEST_FIRST_WEIGHTS, FAST_BEST_FIRST_WEIGHTS, Evaluator
from .time_budget import TimeBudget

logger = logging.getLogger(__name__)


@dataclass
class BestFirstConfig:
    """Configuration for best-first search."""
    max_depth: int = 6
    time_budget: Optional[float] = 1.5  # Seconds per move (None = unlimited)
    max_nodes: Optional[int] = None     # Cap on expanded nodes (None = unlimited)


@dataclass
class FastBestFirstConfig(BestFirstConfig):
    max_depth: int = 5


class BestFirstStrategy(Strategy):
    """Best-first search on the cell-array board."""

    name = "bestfirst"
    config_class = BestFirstConfig
    default_weights = BEST_FIRST_WEIGHTS

    def __init__(
        self,
        config: Optional[BestFirstConfig] = None,
        evaluator: Optional[Evaluator] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        super().__init__(config)
        self.evaluator = evaluator if evaluator is not None else Evaluator(self.default_weights)
        self.clock = clock

        # Statistics of the last search
        self.nodes = 0
        self.timed_out = False

    def _root(self, board: AnyBoard) -> AnyBoard:
        return board

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        cfg = self.config
        root = self._root(board)
        budget = TimeBudget(cfg.time_budget, self.clock).start()

        heap: list = []
        counter = itertools.count()
        distances: dict[Hashable, float] = {}
        origins: dict[Hashable, Move] = {}

        def push(node: AnyBoard, to_move: Color, distance: float, depth: int, origin: Move) -> None:
            key = (node.signature, to_move)
            known = distances.get(key)
            if known is not None and distance >= known:
                return
            distances[key] = distance
            origins.setdefault(key, origin)
            heapq.heappush(heap, (distance, next(counter), node, to_move, depth))

        for move in moves:
            child = root.clone()
            child.apply_move(move, color)
            push(child, color.opposite(), -self.evaluator.evaluate(child, color), 1, move)

        self.nodes = 0
        self.timed_out = False
        best_move: Optional[Move] = None
        best_distance = math.inf

        while heap:
            if budget.expired():
                self.timed_out = True
                break
            if cfg.max_nodes is not None and self.nodes >= cfg.max_nodes:
                break

            distance, _, node, to_move, depth = heapq.heappop(heap)
            key = (node.signature, to_move)
            if distances.get(key, math.inf) < distance:
                continue
            self.nodes += 1
            origin = origins[key]

            if depth >= cfg.max_depth or node.is_terminal():
                if distance < best_distance:
                    best_distance = distance
                    best_move = origin
                continue

            replies = node.valid_moves(to_move)
            if not replies:
                push(node, to_move.opposite(), distance, depth + 1, origin)
                continue

            for reply in replies:
                child = node.clone()
                child.apply_move(reply, to_move)
                push(child, to_move.opposite(), -self.evaluator.evaluate(child, color),
                     depth + 1, origin)

        if best_move is None:
            logger.warning(
                f"{self.name}: no candidate after {self.nodes} nodes "
                f"({budget.elapsed:.3f}s), playing first legal move"
            )
            return moves[0]

        logger.debug(
            f"{self.name}: {color.name} plays {tuple(best_move)} distance={best_distance} "
            f"nodes={self.nodes} memo={len(distances)} timed_out={self.timed_out}"
        )
        return best_move


class FastBestFirstStrategy(BestFirstStrategy):
    """Best-first search on bitboards, with a shallower default depth."""

    name = "bestfirst-fast"
    config_class = FastBestFirstConfig
    default_weights = FAST_BEST_FIRST_WEIGHTS

    def _root(self, board: AnyBoard) -> AnyBoard:
        return to_bitboard(board)
