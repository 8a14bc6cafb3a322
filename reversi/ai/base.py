"""
Base AI Player class for Reversi
Abstract base class that every difficulty strategy inherits from
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
import random

from ..board_manager import Board, Move, get_game_phase, get_opponent, get_valid_moves
from ..models import AIConfig, Cell
from .evaluation import evaluate_board, evaluation_breakdown


def fresh_seed() -> int:
    """
    Draw a new RNG seed from the OS entropy source.

    Used when ``AIConfig.rng_seed`` is not set, so unseeded games and
    requests do not replay the same random stream. Pass an explicit seed for
    reproducible runs.
    """
    return random.SystemRandom().randrange(2**31)


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(self, player: Cell, config: AIConfig):
        """
        Initialize AI player

        Args:
            player: The colour this AI plays
            config: AI configuration settings
        """
        self.player = Cell(player)
        self.opponent = get_opponent(self.player)
        self.config = config
        self.move_count = 0

        # Per-instance RNG used for all stochastic behaviour. An explicit
        # rng_seed from AIConfig makes it reproducible.
        if self.config.rng_seed is not None:
            self.rng_seed: int = int(self.config.rng_seed)
        else:
            self.rng_seed = fresh_seed()
        self.rng: random.Random = random.Random(self.rng_seed)

    def select_move(self, board: Board) -> Optional[Move]:
        """
        Select a move for the current position

        Args:
            board: Current board; never mutated

        Returns:
            Selected (row, col) or None if no valid moves
        """
        valid_moves = self.get_valid_moves(board)
        if not valid_moves:
            return None

        move = self.choose(board, valid_moves)
        self.move_count += 1
        return move

    @abstractmethod
    def choose(self, board: Board, valid_moves: List[Move]) -> Move:
        """
        Pick one move from a non-empty legal move list

        Args:
            board: Current board; never mutated
            valid_moves: Legal moves for this AI in row-major order

        Returns:
            One element of ``valid_moves``
        """
        pass

    def evaluate_position(self, board: Board) -> float:
        """
        Evaluate the position from this AI's perspective

        Args:
            board: Current board

        Returns:
            Evaluation score (positive = good for this AI, negative = bad)
        """
        return evaluate_board(
            board, self.player, self.opponent, get_game_phase(board)
        )

    def get_evaluation_breakdown(self, board: Board) -> Dict[str, float]:
        """
        Get detailed breakdown of position evaluation

        Args:
            board: Current board

        Returns:
            Dictionary with evaluation components and ``"total"``
        """
        return evaluation_breakdown(
            board, self.player, self.opponent, get_game_phase(board)
        )

    def get_valid_moves(self, board: Board) -> List[Move]:
        """
        Get all valid moves for this AI's colour, row-major order.

        Args:
            board: Current board

        Returns:
            List of (row, col) tuples
        """
        return get_valid_moves(board, self.player)

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the per-instance RNG.

        Args:
            items: List of items

        Returns:
            Random item or None if list is empty
        """
        if not items:
            return None
        return self.rng.choice(items)

    def __repr__(self) -> str:
        """String representation of AI"""
        return (
            f"{self.__class__.__name__}"
            f"(player={self.player.name}, "
            f"difficulty={self.config.difficulty.value})"
        )
