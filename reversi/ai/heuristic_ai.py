"""Heuristic AI implementation for Reversi (medium difficulty).

Scores each legal move with :data:`MEDIUM_SCORE_MAP` (corners over edges
over interior, cells touching a corner scored lowest) and plays the best one
without any look-ahead.
"""

from __future__ import annotations

from ..board_manager import Board, Move
from .base import BaseAI
from .heuristic_weights import MEDIUM_SCORE_MAP


def score_move(move: Move) -> int:
    row, col = move
    return MEDIUM_SCORE_MAP[row][col]


class HeuristicAI(BaseAI):
    """AI that plays the highest-scoring cell on a fixed map."""

    def choose(self, board: Board, valid_moves: list[Move]) -> Move:
        # Left fold keeping the first maximum, so ties go to the earliest
        # move in generator (row-major) order.
        best_move = valid_moves[0]
        best_score = score_move(best_move)
        for move in valid_moves[1:]:
            score = score_move(move)
            if score > best_score:
                best_move = move
                best_score = score
        return best_move
