"""
Static evaluation functions for Reversi positions.

Both evaluators are pure functions of ``(board, max_player, min_player)``:
no caches, no module state, so calling them twice on the same inputs gives
the same value. Positive scores favour ``max_player``.
"""

from __future__ import annotations

from ..board_manager import (
    CORNERS,
    DIRECTIONS,
    Board,
    get_valid_moves,
)
from ..models import BOARD_SIZE, Cell, GamePhase
from .heuristic_weights import (
    CORNER_VALUE,
    FLAT_POSITION_WEIGHTS,
    HEURISTIC_WEIGHT_KEYS,
    get_weights,
)

# Border cells in scan order: top row, bottom row, left column, right column.
# Each corner lies on two of those lines and therefore appears twice; the
# tuned edge weights assume this.
_EDGE_SCAN: tuple[tuple[int, int], ...] = tuple(
    pos
    for i in range(BOARD_SIZE)
    for pos in ((0, i), (BOARD_SIZE - 1, i), (i, 0), (i, BOARD_SIZE - 1))
)

_TERM_NAMES = {
    "WEIGHT_PARITY": "parity",
    "WEIGHT_MOBILITY": "mobility",
    "WEIGHT_CORNER": "corner",
    "WEIGHT_POSITION": "position",
    "WEIGHT_EDGE": "edge",
    "WEIGHT_POTENTIAL_MOBILITY": "potential_mobility",
}


def positional_score(board: Board, max_player: Cell, min_player: Cell) -> int:
    """Signed sum of the positional weight table over occupied cells."""
    score = 0
    for value, weight in zip(board.cells, FLAT_POSITION_WEIGHTS):
        if value == max_player:
            score += weight
        elif value == min_player:
            score -= weight
    return score


def disc_parity(board: Board, max_player: Cell, min_player: Cell) -> int:
    return board.cells.count(max_player) - board.cells.count(min_player)


def mobility(board: Board, max_player: Cell, min_player: Cell) -> int:
    """Legal move count for ``max_player`` minus that of ``min_player``."""
    return len(get_valid_moves(board, max_player)) - len(
        get_valid_moves(board, min_player)
    )


def corner_control(board: Board, max_player: Cell, min_player: Cell) -> int:
    score = 0
    for pos in CORNERS:
        value = board[pos]
        if value == max_player:
            score += CORNER_VALUE
        elif value == min_player:
            score -= CORNER_VALUE
    return score


def edge_control(board: Board, max_player: Cell, min_player: Cell) -> int:
    """+1 / -1 per border cell held, corners included (see ``_EDGE_SCAN``)."""
    score = 0
    for pos in _EDGE_SCAN:
        value = board[pos]
        if value == max_player:
            score += 1
        elif value == min_player:
            score -= 1
    return score


def frontier_count(board: Board, player: Cell) -> int:
    """Count empty cells adjacent (8-neighbourhood) to a disc of ``player``."""
    cells = board.cells
    count = 0
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if cells[row * BOARD_SIZE + col] != Cell.EMPTY:
                continue
            for dr, dc in DIRECTIONS:
                r, c = row + dr, col + dc
                if 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and cells[r * BOARD_SIZE + c] == player:
                    count += 1
                    break
    return count


def potential_mobility(board: Board, max_player: Cell, min_player: Cell) -> int:
    """Empty cells next to the opponent's discs, ``max_player`` minus ``min_player``.

    An empty cell touching an opponent disc is a future move candidate, so
    this is a proxy for mobility a few plies ahead.
    """
    return frontier_count(board, min_player) - frontier_count(board, max_player)


def evaluation_terms(
    board: Board, max_player: Cell, min_player: Cell
) -> dict[str, float]:
    """Raw (unweighted) values of the six evaluator terms."""
    return {
        "parity": float(disc_parity(board, max_player, min_player)),
        "mobility": float(mobility(board, max_player, min_player)),
        "corner": float(corner_control(board, max_player, min_player)),
        "position": float(positional_score(board, max_player, min_player)),
        "edge": float(edge_control(board, max_player, min_player)),
        "potential_mobility": float(
            potential_mobility(board, max_player, min_player)
        ),
    }


def evaluation_breakdown(
    board: Board,
    max_player: Cell,
    min_player: Cell,
    game_phase: GamePhase,
) -> dict[str, float]:
    """Per-term weighted contributions plus their ``"total"``."""
    weights = get_weights(game_phase)
    terms = evaluation_terms(board, max_player, min_player)
    breakdown: dict[str, float] = {}
    for key in HEURISTIC_WEIGHT_KEYS:
        name = _TERM_NAMES[key]
        breakdown[name] = weights[key] * terms[name]
    breakdown["total"] = sum(breakdown[_TERM_NAMES[k]] for k in HEURISTIC_WEIGHT_KEYS)
    return breakdown


def evaluate_board(
    board: Board,
    max_player: Cell,
    min_player: Cell,
    game_phase: GamePhase,
) -> float:
    """Composite evaluation used at minimax leaves."""
    weights = get_weights(game_phase)
    score = weights["WEIGHT_PARITY"] * disc_parity(board, max_player, min_player)
    score += weights["WEIGHT_MOBILITY"] * mobility(board, max_player, min_player)
    score += weights["WEIGHT_CORNER"] * corner_control(board, max_player, min_player)
    score += weights["WEIGHT_POSITION"] * positional_score(
        board, max_player, min_player
    )
    score += weights["WEIGHT_EDGE"] * edge_control(board, max_player, min_player)
    if weights["WEIGHT_POTENTIAL_MOBILITY"]:
        score += weights["WEIGHT_POTENTIAL_MOBILITY"] * potential_mobility(
            board, max_player, min_player
        )
    return score
