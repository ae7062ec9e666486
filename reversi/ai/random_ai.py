"""Uniformly random legal moves, mostly as a baseline opponent."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from ..core.types import Color, Move
from .base import AnyBoard, Strategy


@dataclass
class RandomConfig:
    seed: Optional[int] = None


class RandomStrategy(Strategy):
    """Pick any legal move with equal probability."""

    name = "random"
    config_class = RandomConfig

    def __init__(self, config: Optional[RandomConfig] = None):
        super().__init__(config)
        self.rng = np.random.default_rng(self.config.seed)

    def _search(self, board: AnyBoard, color: Color, moves: list[Move]) -> Move:
        return moves[int(self.rng.integers(len(moves)))]
