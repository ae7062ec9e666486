"""
Strategy registry.

Maps the names used on the command line to strategy classes and builds
them with their config dataclass updated by keyword overrides.
"""

from __future__ import annotations
import dataclasses

from .astar import AStarStrategy
from .base import Strategy
from .best_first import BestFirstStrategy, FastBestFirstStrategy
from .exhaustive import BFSStrategy, DFSStrategy
from .greedy import GreedyStrategy
from .minimax import AlphaBetaStrategy, FastAlphaBetaStrategy
from .montecarlo import MonteCarloStrategy
from .random_ai import RandomStrategy

STRATEGIES: dict[str, type[Strategy]] = {
    cls.name: cls
    for cls in (
        AlphaBetaStrategy,
        FastAlphaBetaStrategy,
        BFSStrategy,
        DFSStrategy,
        MonteCarloStrategy,
        GreedyStrategy,
        BestFirstStrategy,
        FastBestFirstStrategy,
        AStarStrategy,
        RandomStrategy,
    )
}


def create_strategy(name: str, **overrides) -> Strategy:
    """
    Create a strategy by registry name.

    Args:
        name: One of STRATEGIES (case-insensitive)
        **overrides: Config fields to change, e.g. depth=4 or seed=1

    Raises:
        ValueError: Unknown name, or an override the config does not have.
    """
    cls = STRATEGIES.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown strategy {name!r}; available: {', '.join(sorted(STRATEGIES))}")

    config = cls.config_class()
    if overrides:
        known = {f.name for f in dataclasses.fields(config)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"{name} does not accept {', '.join(unknown)}; options: {', '.join(sorted(known))}")
        config = dataclasses.replace(config, **overrides)
    return cls(config)
