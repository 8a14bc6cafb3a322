"""AI implementations for Reversi.

The recommended approach is to use the factory module:

    from reversi.ai import select_move, AIFactory

    # One-shot move for the computer's turn
    move = select_move(board, Cell.WHITE, Difficulty.HARD)

    # Long-lived instance (keeps its RNG stream between moves)
    ai = AIFactory.create_from_difficulty(Difficulty.EASY, Cell.WHITE, rng_seed=7)

Architecture:
- base.py: BaseAI abstract base class
- factory.py: difficulty profiles and AIFactory
- random_ai.py: easy, uniform random legal move
- heuristic_ai.py: medium, fixed cell score map
- minimax_ai.py: hard, alpha-beta minimax search
- evaluation.py / heuristic_weights.py: static evaluator and its weights
"""

from .base import BaseAI
from .factory import (
    DIFFICULTY_PROFILES,
    AIFactory,
    DifficultyProfile,
    get_all_difficulties,
    get_difficulty_description,
    get_difficulty_profile,
    parse_difficulty,
    select_ai_type,
    select_move,
)

# Lazy-load AI implementations
_AI_CLASSES = {
    "HeuristicAI": "reversi.ai.heuristic_ai",
    "MinimaxAI": "reversi.ai.minimax_ai",
    "RandomAI": "reversi.ai.random_ai",
}


def __getattr__(name: str):
    """Lazy loading for AI implementation classes."""
    if name in _AI_CLASSES:
        import importlib
        module = importlib.import_module(_AI_CLASSES[name])
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DIFFICULTY_PROFILES",
    "AIFactory",
    "BaseAI",
    "DifficultyProfile",
    "HeuristicAI",
    "MinimaxAI",
    "RandomAI",
    "get_all_difficulties",
    "get_difficulty_description",
    "get_difficulty_profile",
    "parse_difficulty",
    "select_ai_type",
    "select_move",
]
