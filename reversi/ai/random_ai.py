"""Random AI implementation for Reversi (easy difficulty).

This agent selects uniformly random legal moves using the per-instance RNG on
the :class:`BaseAI`.
"""

from __future__ import annotations

from ..board_manager import Board, Move
from .base import BaseAI


class RandomAI(BaseAI):
    """AI that selects random valid moves."""

    def choose(self, board: Board, valid_moves: list[Move]) -> Move:
        """Pick uniformly among ``valid_moves``.

        A single candidate is returned without touching the RNG, so the
        result does not depend on the random source.
        """
        if len(valid_moves) == 1:
            return valid_moves[0]
        return self.get_random_element(valid_moves)
