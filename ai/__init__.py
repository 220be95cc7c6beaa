"""Computer move selection."""

from .evaluator import Evaluator
from .game_tree_evaluator import GameTreeEvaluator
from .random_evaluator import RandomEvaluator
from .rule_based_evaluator import RuleBasedEvaluator
from .scored_position import ScoredPosition
from .strategy import Difficulty, Strategy, create_evaluator

__all__ = [
    "Difficulty",
    "Evaluator",
    "GameTreeEvaluator",
    "RandomEvaluator",
    "RuleBasedEvaluator",
    "ScoredPosition",
    "Strategy",
    "create_evaluator",
]
