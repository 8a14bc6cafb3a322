"""
AI-vs-AI self-play matches between two difficulty tiers.

Usage:
    reversi-selfplay --games 20 --first hard --second medium --seed 42
    python -m reversi.selfplay --games 4 --first easy --second easy --json out.json

Colours alternate between games so neither tier always moves first.
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

from .ai.factory import AIFactory, parse_difficulty
from .ai.minimax_ai import DEFAULT_MAX_DEPTH
from .board_manager import Board, apply_move, count_discs, get_opponent, get_winner, is_game_over
from .logging_config import setup_logging
from .metrics import record_game_outcome
from .models import Cell, Difficulty

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    black: str
    white: str
    winner: str
    black_discs: int
    white_discs: int
    moves: int
    passes: int
    duration_seconds: float


@dataclass
class MatchSummary:
    first: str
    second: str
    games: int = 0
    first_wins: int = 0
    second_wins: int = 0
    draws: int = 0
    total_margin: int = 0
    results: List[GameResult] = field(default_factory=list)

    @property
    def average_margin(self) -> float:
        """Average disc margin from the first tier's side."""
        return self.total_margin / self.games if self.games else 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["average_margin"] = self.average_margin
        return data


def play_game(
    black: Difficulty,
    white: Difficulty,
    seed: Optional[int] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> GameResult:
    """
    Play one full game between two tiers from the starting position.

    Args:
        black: Tier playing Black (moves first)
        white: Tier playing White
        seed: Base RNG seed; each colour gets its own stream
        max_depth: Search depth cap for hard players

    Returns:
        GameResult with the final tally
    """
    start = time.time()
    players = {
        Cell.BLACK: AIFactory.create_from_difficulty(
            black, Cell.BLACK,
            rng_seed=None if seed is None else seed * 2,
            max_depth=max_depth,
        ),
        Cell.WHITE: AIFactory.create_from_difficulty(
            white, Cell.WHITE,
            rng_seed=None if seed is None else seed * 2 + 1,
            max_depth=max_depth,
        ),
    }

    board = Board.initial()
    to_move = Cell.BLACK
    moves = 0
    passes = 0
    while not is_game_over(board):
        move = players[to_move].select_move(board)
        if move is None:
            passes += 1
        else:
            apply_move(board, move[0], move[1], to_move)
            moves += 1
        to_move = get_opponent(to_move)

    counts = count_discs(board)
    winner = get_winner(board)
    outcome = "draw" if winner == Cell.EMPTY else winner.name.lower()
    record_game_outcome("selfplay", outcome)
    return GameResult(
        black=black.value,
        white=white.value,
        winner=outcome,
        black_discs=counts.black,
        white_discs=counts.white,
        moves=moves,
        passes=passes,
        duration_seconds=time.time() - start,
    )


def run_match(
    first: Difficulty,
    second: Difficulty,
    games: int,
    seed: Optional[int] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> MatchSummary:
    """Play ``games`` games, ``first`` taking Black in the even-numbered ones."""
    summary = MatchSummary(first=first.value, second=second.value)
    for index in range(games):
        first_is_black = index % 2 == 0
        black, white = (first, second) if first_is_black else (second, first)
        game_seed = None if seed is None else seed + index
        result = play_game(black, white, seed=game_seed, max_depth=max_depth)

        summary.games += 1
        summary.results.append(result)
        first_colour = "black" if first_is_black else "white"
        margin = result.black_discs - result.white_discs
        summary.total_margin += margin if first_is_black else -margin
        if result.winner == "draw":
            summary.draws += 1
        elif result.winner == first_colour:
            summary.first_wins += 1
        else:
            summary.second_wins += 1

        logger.info(
            "Game %d/%d: %s (B) vs %s (W) -> %s %d-%d in %.2fs",
            index + 1,
            games,
            black.value,
            white.value,
            result.winner,
            result.black_discs,
            result.white_discs,
            result.duration_seconds,
        )
    return summary


def print_summary(summary: MatchSummary) -> None:
    print(f"{summary.first} vs {summary.second}: {summary.games} games")
    print(f"  {summary.first} wins: {summary.first_wins}")
    print(f"  {summary.second} wins: {summary.second_wins}")
    print(f"  draws: {summary.draws}")
    print(f"  average disc margin ({summary.first}): {summary.average_margin:+.2f}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Play AI-vs-AI Reversi matches between two difficulty tiers"
    )
    parser.add_argument(
        "--games", type=int, default=10,
        help="Number of games to play (default: 10)"
    )
    parser.add_argument(
        "--first", default="hard",
        choices=[d.value for d in Difficulty],
        help="First tier, Black in even-numbered games (default: hard)"
    )
    parser.add_argument(
        "--second", default="medium",
        choices=[d.value for d in Difficulty],
        help="Second tier (default: medium)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Base random seed for reproducibility"
    )
    parser.add_argument(
        "--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
        help=f"Search depth cap for hard players (default: {DEFAULT_MAX_DEPTH})"
    )
    parser.add_argument(
        "--json", type=str, default=None,
        help="Write the match summary to this JSON file"
    )
    parser.add_argument(
        "--log-level", default="INFO",
        help="Logging level (default: INFO)"
    )

    args = parser.parse_args(argv)

    if args.games < 1:
        parser.error("--games must be at least 1")
    if not 1 <= args.max_depth <= 10:
        parser.error("--max-depth must be between 1 and 10")

    setup_logging("reversi", level=args.log_level, format_style="compact")

    summary = run_match(
        parse_difficulty(args.first),
        parse_difficulty(args.second),
        games=args.games,
        seed=args.seed,
        max_depth=args.max_depth,
    )
    print_summary(summary)

    if args.json:
        path = Path(args.json)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(summary.to_dict(), f, indent=2)
        logger.info("Match summary saved to %s", path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
