"""Minimax AI implementation for Reversi (hard difficulty).

This agent uses depth-limited minimax with alpha-beta pruning over cloned
boards, scoring leaves with :func:`reversi.ai.evaluation.evaluate_board`.

Search is synchronous and always runs to completion. There is no wall-clock
cutoff; the cost is bounded by :func:`choose_search_depth`, which searches
deeper when fewer moves are available and in the late game. Lowering
``AIConfig.max_depth`` (or ``REVERSI_MAX_SEARCH_DEPTH`` for the service) is
the way to bound response time.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from ..board_manager import (
    Board,
    Move,
    apply_move,
    disc_difference,
    get_game_phase,
    get_valid_moves,
    is_corner,
)
from ..models import AIConfig, Cell, GamePhase
from .base import BaseAI
from .evaluation import evaluate_board
from .heuristic_weights import TERMINAL_SCORE_SCALE

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5


@dataclass
class SearchStats:
    """Counters collected during one search."""
    nodes_visited: int = 0
    leaves_evaluated: int = 0
    cutoffs: int = 0


def choose_search_depth(
    num_moves: int,
    game_phase: GamePhase,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> int:
    """Pick a search depth from the branching factor and game phase.

    Early/mid game searches 2-4 plies, late game 3-5, always deeper when
    fewer moves are available. The result is capped at ``max_depth``.
    """
    if game_phase == GamePhase.LATE:
        if num_moves <= 4:
            depth = 5
        elif num_moves <= 8:
            depth = 4
        else:
            depth = 3
    else:
        if num_moves <= 4:
            depth = 4
        elif num_moves <= 8:
            depth = 3
        else:
            depth = 2
    return max(1, min(depth, max_depth))


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    max_player: Cell,
    min_player: Cell,
    game_phase: GamePhase,
    stats: SearchStats | None = None,
) -> float:
    """
    Alpha-beta minimax score of ``board`` from ``max_player``'s side.

    ``board`` is never mutated; every child is searched on its own copy.
    A finished game scores ``disc_difference * TERMINAL_SCORE_SCALE`` so it
    outweighs any heuristic value. When only the side to move is blocked,
    the turn passes to the other side one ply deeper.
    """
    if stats is not None:
        stats.nodes_visited += 1

    if depth == 0:
        if stats is not None:
            stats.leaves_evaluated += 1
        return evaluate_board(board, max_player, min_player, game_phase)

    mover = max_player if maximizing else min_player
    moves = get_valid_moves(board, mover)

    if not moves:
        other = min_player if maximizing else max_player
        if not get_valid_moves(board, other):
            return float(disc_difference(board, max_player) * TERMINAL_SCORE_SCALE)
        return minimax(
            board,
            depth - 1,
            alpha,
            beta,
            not maximizing,
            max_player,
            min_player,
            game_phase,
            stats,
        )

    if maximizing:
        max_eval = float('-inf')
        for row, col in moves:
            child = board.copy()
            apply_move(child, row, col, mover)
            score = minimax(
                child, depth - 1, alpha, beta, False,
                max_player, min_player, game_phase, stats,
            )
            max_eval = max(max_eval, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return max_eval
    else:
        min_eval = float('inf')
        for row, col in moves:
            child = board.copy()
            apply_move(child, row, col, mover)
            score = minimax(
                child, depth - 1, alpha, beta, True,
                max_player, min_player, game_phase, stats,
            )
            min_eval = min(min_eval, score)
            beta = min(beta, score)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return min_eval


class MinimaxAI(BaseAI):
    """AI that uses minimax with alpha-beta pruning.

    Corners are taken immediately without searching. Otherwise every
    candidate is applied to a copy of the board and searched from the
    opponent's reply (``maximizing=False``); the highest score wins and
    ties keep the first candidate in generator order.
    """

    def __init__(self, player: Cell, config: AIConfig) -> None:
        super().__init__(player, config)
        self.max_depth: int = config.max_depth or DEFAULT_MAX_DEPTH
        self.last_depth: int = 0
        self.last_score: float | None = None
        self.last_stats: SearchStats = SearchStats()

    def choose(self, board: Board, valid_moves: list[Move]) -> Move:
        for move in valid_moves:
            if is_corner(*move):
                self.last_depth = 0
                self.last_score = None
                self.last_stats = SearchStats()
                logger.debug("MinimaxAI(%s): corner %s, search skipped", self.player.name, move)
                return move

        game_phase = get_game_phase(board)
        depth = choose_search_depth(len(valid_moves), game_phase, self.max_depth)
        return self.search(board, valid_moves, depth, game_phase)

    def search(
        self,
        board: Board,
        valid_moves: list[Move],
        depth: int,
        game_phase: GamePhase,
    ) -> Move:
        """Root of the search: score every candidate, keep the first best."""
        start_time = time.time()
        stats = SearchStats()

        best_move = valid_moves[0]
        best_score = float('-inf')
        alpha = float('-inf')
        beta = float('inf')

        for row, col in valid_moves:
            child = board.copy()
            apply_move(child, row, col, self.player)
            score = minimax(
                child,
                depth - 1,
                alpha,
                beta,
                False,
                self.player,
                self.opponent,
                game_phase,
                stats,
            )
            if score > best_score:
                best_score = score
                best_move = (row, col)
            alpha = max(alpha, score)

        self.last_depth = depth
        self.last_score = best_score
        self.last_stats = stats

        logger.debug(
            "MinimaxAI(%s): depth=%d phase=%s moves=%d nodes=%d cutoffs=%d "
            "best=%s score=%.2f time=%.1fms",
            self.player.name,
            depth,
            game_phase.value,
            len(valid_moves),
            stats.nodes_visited,
            stats.cutoffs,
            best_move,
            best_score,
            (time.time() - start_time) * 1000,
        )
        return best_move
