"""
Reversi Error Hierarchy

Unified exception hierarchy for consistent error handling across the service.
All custom exceptions inherit from ReversiError for easy catching and filtering.

Usage:
    from reversi.errors import InvalidMoveError, AIBusyError

    try:
        engine.play_human_move(row, col)
    except InvalidMoveError as e:
        logger.warning(f"Invalid move: {e.message}")
"""

from typing import Any

__all__ = [
    # AI errors
    "AIBusyError",
    "AIError",
    "ConfigurationError",
    "GameNotFoundError",
    "InvalidMoveError",
    "InvalidStateError",
    "NotYourTurnError",
    # Base error
    "ReversiError",
    # Game rules errors
    "RulesViolationError",
]


class ReversiError(Exception):
    """Base exception for all Reversi errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "REVERSI_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Game Rules Errors
# =============================================================================


class RulesViolationError(ReversiError):
    """Move or request that breaks the Reversi rules."""
    code: str = "RULES_VIOLATION"


class InvalidMoveError(RulesViolationError):
    """Move that cannot be applied to the current board.

    Raised for an occupied target, a target that flips nothing, or a
    coordinate off the board. Callers are expected to check
    ``is_valid_move`` first, so reaching this is a caller bug.
    """
    code: str = "INVALID_MOVE"

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        player: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if row is not None and col is not None:
            self.context["position"] = f"{row},{col}"
        if player is not None:
            self.context["player"] = int(player)


class NotYourTurnError(InvalidMoveError):
    """Human input received while the computer is to move or thinking."""
    code: str = "NOT_YOUR_TURN"


class InvalidStateError(ReversiError):
    """Corrupted or unexpected game state.

    Raised for malformed board payloads and for operations on a game that
    is already finished.
    """
    code: str = "INVALID_STATE"


class GameNotFoundError(ReversiError):
    """Unknown game id."""
    code: str = "GAME_NOT_FOUND"

    def __init__(self, game_id: str):
        super().__init__(f"Game {game_id} not found", context={"game_id": game_id})
        self.game_id = game_id


# =============================================================================
# AI Errors
# =============================================================================


class AIError(ReversiError):
    """Base class for AI-related errors."""
    code: str = "AI_ERROR"


class AIBusyError(AIError):
    """A computer move is already being computed for this game."""
    code: str = "AI_BUSY"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ReversiError):
    """Invalid service configuration.

    Attributes:
        setting: Name of the offending environment variable
    """
    code: str = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.setting = setting
        if setting:
            self.context["setting"] = setting
