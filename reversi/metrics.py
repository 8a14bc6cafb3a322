"""Prometheus metrics for the Reversi service.

This module centralises counters and histograms so that the game
endpoints, the stateless /ai/move endpoint and the self-play tool record
telemetry without each caller managing its own metric instances. Exposed
at ``GET /metrics``.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge, Histogram


AI_MOVE_REQUESTS: Final[Counter] = Counter(
    "reversi_ai_moves_total",
    "Total number of computer move selections, labeled by difficulty and outcome.",
    labelnames=("difficulty", "outcome"),
)

AI_MOVE_LATENCY: Final[Histogram] = Histogram(
    "reversi_ai_move_latency_seconds",
    "Time spent selecting a computer move in seconds, labeled by difficulty.",
    labelnames=("difficulty",),
    # Random and heuristic moves land in the first bucket; the upper
    # buckets cover depth-5 late-game searches.
    buckets=(
        0.001,
        0.005,
        0.01,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.0,
        5.0,
    ),
)

AI_SEARCH_NODES: Final[Histogram] = Histogram(
    "reversi_ai_search_nodes",
    "Minimax nodes visited per hard-difficulty move.",
    buckets=(10, 50, 100, 500, 1000, 5000, 10000, 50000, 100000),
)

GAMES_COMPLETED: Final[Counter] = Counter(
    "reversi_games_completed_total",
    "Total finished games, labeled by source (service/selfplay) and outcome.",
    labelnames=("source", "outcome"),
)

ACTIVE_GAMES: Final[Gauge] = Gauge(
    "reversi_active_games",
    "Current number of games held in the service's in-memory store.",
)


def observe_ai_move_start(difficulty: str) -> tuple[str]:
    """Prepare metric label values for a new computer move.

    Exists mainly to keep the label-shape logic in one place.
    """
    return (str(difficulty),)


def record_ai_move(
    difficulty: str,
    outcome: str,
    duration_seconds: float,
    nodes_visited: int | None = None,
) -> None:
    """Record one move selection.

    Args:
        difficulty: Difficulty label (easy/medium/hard)
        outcome: "success", "pass" or "error"
        duration_seconds: Wall time of the selection
        nodes_visited: Minimax node count, when a search ran
    """
    labels = observe_ai_move_start(difficulty)
    AI_MOVE_REQUESTS.labels(*labels, outcome).inc()
    AI_MOVE_LATENCY.labels(*labels).observe(duration_seconds)
    if nodes_visited:
        AI_SEARCH_NODES.observe(nodes_visited)


def record_game_outcome(source: str, outcome: str) -> None:
    """Record a finished game.

    Args:
        source: "service" or "selfplay"
        outcome: "black", "white" or "draw"
    """
    GAMES_COMPLETED.labels(source, outcome).inc()
