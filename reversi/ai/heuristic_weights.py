"""Heuristic weight tables for the Reversi AIs.

This module is the single home of every constant the evaluators depend on:

* :data:`POSITION_WEIGHTS`, the 8x8 positional table used by the advanced
  evaluator's position term. AI behaviour depends on the exact values.
* :data:`MEDIUM_SCORE_MAP`, the coarser corner/edge/interior map used by the
  medium difficulty.
* :data:`PHASE_WEIGHT_PROFILES`, the per-phase multipliers for the six terms
  of :func:`reversi.ai.evaluation.evaluate_board`.

Early and mid game reward mobility and corner safety over raw disc count
(discs flip often); late game rewards parity since few reversals remain.
"""

from __future__ import annotations

from ..models import BOARD_SIZE, GamePhase

HeuristicWeights = dict[str, float]


POSITION_WEIGHTS: tuple[tuple[int, ...], ...] = (
    (100, -20, 10,  5,  5, 10, -20, 100),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    ( 10,  -2,  5,  1,  1,  5,  -2,  10),
    (  5,  -2,  1,  0,  0,  1,  -2,   5),
    (  5,  -2,  1,  0,  0,  1,  -2,   5),
    ( 10,  -2,  5,  1,  1,  5,  -2,  10),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    (100, -20, 10,  5,  5, 10, -20, 100),
)

# Flat row-major copy for the evaluator's inner loop.
FLAT_POSITION_WEIGHTS: tuple[int, ...] = tuple(
    w for row in POSITION_WEIGHTS for w in row
)


MEDIUM_CORNER_SCORE = 10
MEDIUM_EDGE_SCORE = 5
MEDIUM_INTERIOR_SCORE = 1
MEDIUM_CORNER_ADJACENT_SCORE = 0


def _build_medium_score_map() -> tuple[tuple[int, ...], ...]:
    last = BOARD_SIZE - 1
    score_map = [[MEDIUM_INTERIOR_SCORE] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    for i in range(1, last):
        score_map[0][i] = MEDIUM_EDGE_SCORE
        score_map[last][i] = MEDIUM_EDGE_SCORE
        score_map[i][0] = MEDIUM_EDGE_SCORE
        score_map[i][last] = MEDIUM_EDGE_SCORE

    for row, col in ((0, 0), (0, last), (last, 0), (last, last)):
        score_map[row][col] = MEDIUM_CORNER_SCORE

    # The three cells touching each corner are applied last so they win
    # over the edge values written above.
    for row, col in (
        (0, 1), (1, 0), (1, 1),
        (0, last - 1), (1, last), (1, last - 1),
        (last - 1, 0), (last, 1), (last - 1, 1),
        (last - 1, last), (last, last - 1), (last - 1, last - 1),
    ):
        score_map[row][col] = MEDIUM_CORNER_ADJACENT_SCORE

    return tuple(tuple(row) for row in score_map)


MEDIUM_SCORE_MAP: tuple[tuple[int, ...], ...] = _build_medium_score_map()


# Points per corner in the corner-control term, before phase weighting.
CORNER_VALUE = 25

# Multiplier on the final disc difference for a finished game, large enough
# to dominate any heuristic score.
TERMINAL_SCORE_SCALE = 1000


# Ordered list of the evaluator's weight keys. Breakdown dictionaries and
# diagnostics tooling use this order.
HEURISTIC_WEIGHT_KEYS: list[str] = [
    "WEIGHT_PARITY",
    "WEIGHT_MOBILITY",
    "WEIGHT_CORNER",
    "WEIGHT_POSITION",
    "WEIGHT_EDGE",
    "WEIGHT_POTENTIAL_MOBILITY",
]


PHASE_WEIGHT_PROFILES: dict[GamePhase, HeuristicWeights] = {
    GamePhase.EARLY: {
        "WEIGHT_PARITY": 0.1,
        "WEIGHT_MOBILITY": 2.5,
        "WEIGHT_CORNER": 4.0,
        "WEIGHT_POSITION": 1.0,
        "WEIGHT_EDGE": 1.5,
        "WEIGHT_POTENTIAL_MOBILITY": 1.0,
    },
    GamePhase.MID: {
        "WEIGHT_PARITY": 0.8,
        "WEIGHT_MOBILITY": 2.0,
        "WEIGHT_CORNER": 3.0,
        "WEIGHT_POSITION": 1.0,
        "WEIGHT_EDGE": 1.0,
        "WEIGHT_POTENTIAL_MOBILITY": 0.5,
    },
    GamePhase.LATE: {
        "WEIGHT_PARITY": 3.5,
        "WEIGHT_MOBILITY": 1.0,
        "WEIGHT_CORNER": 2.0,
        "WEIGHT_POSITION": 0.5,
        "WEIGHT_EDGE": 0.5,
        "WEIGHT_POTENTIAL_MOBILITY": 0.0,
    },
}


def get_weights(phase: GamePhase) -> HeuristicWeights:
    """Return the weight profile for ``phase``."""
    return PHASE_WEIGHT_PROFILES[GamePhase(phase)]
