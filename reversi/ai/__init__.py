"""AI components: evaluation, search strategies and the strategy registry."""

from .base import Strategy
from .evaluator import Evaluator, EvalWeights
from .factory import STRATEGIES, create_strategy
