"""AI Factory for Reversi.

This module is the single place where a difficulty tier becomes a concrete
AI instance. The game controller, the HTTP service and the self-play tool
all go through it so that every caller agrees on which strategy a tier
means.

Usage:
    from reversi.ai.factory import AIFactory, select_move

    # Create AI from difficulty level
    ai = AIFactory.create_from_difficulty(Difficulty.HARD, Cell.WHITE)

    # One-shot move selection
    move = select_move(board, Cell.WHITE, "medium", rng_seed=42)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypedDict, Union

from ..models import AIConfig, AIType, Cell, Difficulty

if TYPE_CHECKING:
    from ..board_manager import Board, Move
    from .base import BaseAI

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Type definitions
# -----------------------------------------------------------------------------


class DifficultyProfile(TypedDict):
    """Canonical profile for a single difficulty tier."""
    ai_type: AIType
    max_depth: int | None
    description: str


# -----------------------------------------------------------------------------
# Canonical difficulty profiles
# -----------------------------------------------------------------------------

# The visible "thinking" pause before a computer move is service config
# (REVERSI_AI_MOVE_DELAY_MS), the same for every tier.
DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: {
        "ai_type": AIType.RANDOM,
        "max_depth": None,
        "description": "Easy - random legal moves",
    },
    Difficulty.MEDIUM: {
        "ai_type": AIType.HEURISTIC,
        "max_depth": None,
        "description": "Medium - prefers corners, then edges, avoids corner-adjacent cells",
    },
    Difficulty.HARD: {
        "ai_type": AIType.MINIMAX,
        "max_depth": 5,
        "description": "Hard - minimax search with alpha-beta pruning",
    },
}

DEFAULT_DIFFICULTY = Difficulty.MEDIUM


def parse_difficulty(value: Union[Difficulty, str, None]) -> Difficulty:
    """Map a selector value onto a tier.

    Unknown or missing values fall back to medium, the default strategy of
    the browser client, instead of failing the request.
    """
    if isinstance(value, Difficulty):
        return value
    if value is not None:
        try:
            return Difficulty(str(value).strip().lower())
        except ValueError:
            pass
    logger.warning("Unknown difficulty %r, defaulting to %s", value, DEFAULT_DIFFICULTY.value)
    return DEFAULT_DIFFICULTY


def get_difficulty_profile(difficulty: Union[Difficulty, str]) -> DifficultyProfile:
    """Return the difficulty profile for the given tier.

    Args:
        difficulty: Tier or its string name; unknown names map to medium

    Returns:
        DifficultyProfile with ai_type, max_depth, description
    """
    return DIFFICULTY_PROFILES[parse_difficulty(difficulty)]


def select_ai_type(difficulty: Union[Difficulty, str]) -> AIType:
    return get_difficulty_profile(difficulty)["ai_type"]


class AIFactory:
    """Centralized factory for creating AI instances.

    The set of strategies is closed: each difficulty maps to exactly one of
    random, heuristic or minimax.
    """

    # Cache for imported AI classes (lazy loading)
    _class_cache: dict[AIType, type[BaseAI]] = {}

    @classmethod
    def _get_ai_class(cls, ai_type: AIType) -> type[BaseAI]:
        """Get the AI class for a given type, with lazy loading.

        Raises:
            ValueError: If the AI type is not supported
        """
        if ai_type in cls._class_cache:
            return cls._class_cache[ai_type]

        if ai_type == AIType.RANDOM:
            from .random_ai import RandomAI
            ai_class = RandomAI
        elif ai_type == AIType.HEURISTIC:
            from .heuristic_ai import HeuristicAI
            ai_class = HeuristicAI
        elif ai_type == AIType.MINIMAX:
            from .minimax_ai import MinimaxAI
            ai_class = MinimaxAI
        else:
            raise ValueError(f"Unsupported AI type: {ai_type}")

        cls._class_cache[ai_type] = ai_class
        return ai_class

    @classmethod
    def create(cls, ai_type: AIType, player: Cell, config: AIConfig) -> BaseAI:
        """Create an AI instance with explicit type and configuration."""
        ai_class = cls._get_ai_class(ai_type)
        return ai_class(player, config)

    @classmethod
    def create_from_difficulty(
        cls,
        difficulty: Union[Difficulty, str],
        player: Cell,
        *,
        rng_seed: int | None = None,
        max_depth: int | None = None,
    ) -> BaseAI:
        """Create an AI instance from a difficulty tier.

        This is the recommended way to create AIs for normal gameplay.

        Args:
            difficulty: Tier (unknown names fall back to medium)
            player: Colour the AI plays
            rng_seed: Optional RNG seed for reproducibility
            max_depth: Cap on the search depth; overrides the profile's

        Returns:
            Configured AI instance
        """
        tier = parse_difficulty(difficulty)
        profile = DIFFICULTY_PROFILES[tier]
        config = AIConfig(
            difficulty=tier,
            rng_seed=rng_seed,
            max_depth=max_depth if max_depth is not None else profile["max_depth"],
        )
        return cls.create(profile["ai_type"], player, config)

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the class cache. Useful for testing."""
        cls._class_cache.clear()


def select_move(
    board: Board,
    player: Cell,
    difficulty: Union[Difficulty, str],
    rng_seed: int | None = None,
    max_depth: int | None = None,
) -> Move | None:
    """Pick a move for ``player`` at the given difficulty.

    This is the one entry point the controller calls on the computer's
    turn. ``board`` is not modified. Returns None when ``player`` has no
    legal move (a pass).
    """
    ai = AIFactory.create_from_difficulty(
        difficulty, player, rng_seed=rng_seed, max_depth=max_depth
    )
    return ai.select_move(board)


def get_all_difficulties() -> dict[Difficulty, DifficultyProfile]:
    return DIFFICULTY_PROFILES.copy()


def get_difficulty_description(difficulty: Union[Difficulty, str]) -> str:
    return get_difficulty_profile(difficulty)["description"]
