"""Tests for the static evaluator and its weight tables."""

import random

import pytest

from reversi.ai.evaluation import (
    corner_control,
    disc_parity,
    edge_control,
    evaluate_board,
    evaluation_breakdown,
    evaluation_terms,
    frontier_count,
    mobility,
    positional_score,
    potential_mobility,
)
from reversi.ai.heuristic_weights import (
    CORNER_VALUE,
    MEDIUM_SCORE_MAP,
    PHASE_WEIGHT_PROFILES,
    POSITION_WEIGHTS,
    get_weights,
)
from reversi.board_manager import (
    Board,
    apply_move,
    get_game_phase,
    get_opponent,
    get_valid_moves,
    is_game_over,
)
from reversi.models import Cell, GamePhase


def _midgame_boards(seed: int, count: int = 5):
    rng = random.Random(seed)
    boards = []
    board = Board.initial()
    player = Cell.BLACK
    while len(boards) < count and not is_game_over(board):
        moves = get_valid_moves(board, player)
        if moves:
            apply_move(board, *rng.choice(moves), player)
        player = get_opponent(player)
        if rng.random() < 0.3:
            boards.append(board.copy())
    return boards


class TestWeightTables:
    def test_position_weights_exact(self):
        assert POSITION_WEIGHTS[0] == (100, -20, 10, 5, 5, 10, -20, 100)
        assert POSITION_WEIGHTS[1] == (-20, -50, -2, -2, -2, -2, -50, -20)
        assert POSITION_WEIGHTS[2] == (10, -2, 5, 1, 1, 5, -2, 10)
        assert POSITION_WEIGHTS[3] == (5, -2, 1, 0, 0, 1, -2, 5)

    def test_position_weights_symmetric(self):
        for r in range(8):
            for c in range(8):
                w = POSITION_WEIGHTS[r][c]
                assert w == POSITION_WEIGHTS[c][r]
                assert w == POSITION_WEIGHTS[7 - r][c]
                assert w == POSITION_WEIGHTS[r][7 - c]

    def test_medium_score_map(self):
        assert MEDIUM_SCORE_MAP[0][0] == 10
        assert MEDIUM_SCORE_MAP[7][7] == 10
        assert MEDIUM_SCORE_MAP[0][3] == 5
        assert MEDIUM_SCORE_MAP[4][7] == 5
        assert MEDIUM_SCORE_MAP[3][3] == 1
        for r, c in [(0, 1), (1, 0), (1, 1), (6, 7), (7, 6), (6, 6)]:
            assert MEDIUM_SCORE_MAP[r][c] == 0
        zero_cells = sum(row.count(0) for row in MEDIUM_SCORE_MAP)
        assert zero_cells == 12

    def test_phase_weights(self):
        early = get_weights(GamePhase.EARLY)
        late = get_weights(GamePhase.LATE)
        assert early["WEIGHT_MOBILITY"] == 2.5
        assert early["WEIGHT_CORNER"] == 4.0
        assert late["WEIGHT_PARITY"] == 3.5
        assert late["WEIGHT_POTENTIAL_MOBILITY"] == 0.0
        assert set(PHASE_WEIGHT_PROFILES) == set(GamePhase)


class TestTerms:
    def test_start_position_is_balanced(self, initial_board):
        for phase in GamePhase:
            assert evaluate_board(initial_board, Cell.BLACK, Cell.WHITE, phase) == 0

    def test_positional_score(self, make_board):
        board = make_board([
            "B.......",
            ".W......",
        ] + ["........"] * 6)
        assert positional_score(board, Cell.BLACK, Cell.WHITE) == 150
        assert positional_score(board, Cell.WHITE, Cell.BLACK) == -150

    def test_corner_is_counted_twice_on_edges(self, make_board):
        board = make_board(["B......."] + ["........"] * 7)
        assert corner_control(board, Cell.BLACK, Cell.WHITE) == CORNER_VALUE
        # (0,0) lies on the top row and the left column.
        assert edge_control(board, Cell.BLACK, Cell.WHITE) == 2

    def test_edge_cell_counted_once(self, make_board):
        board = make_board(["...W...."] + ["........"] * 7)
        assert edge_control(board, Cell.BLACK, Cell.WHITE) == -1
        assert corner_control(board, Cell.BLACK, Cell.WHITE) == 0

    def test_frontier_count(self, make_board):
        corner = make_board(["B......."] + ["........"] * 7)
        assert frontier_count(corner, Cell.BLACK) == 3
        centre = make_board(["........"] * 3 + ["...B...."] + ["........"] * 4)
        assert frontier_count(centre, Cell.BLACK) == 8
        assert frontier_count(centre, Cell.WHITE) == 0

    def test_potential_mobility_counts_cells_next_to_opponent(self, make_board):
        board = make_board(["........"] * 3 + ["...W...."] + ["........"] * 4)
        assert potential_mobility(board, Cell.BLACK, Cell.WHITE) == 8
        assert potential_mobility(board, Cell.WHITE, Cell.BLACK) == -8

    def test_mobility_and_parity(self, initial_board):
        assert mobility(initial_board, Cell.BLACK, Cell.WHITE) == 0
        apply_move(initial_board, 2, 3, Cell.BLACK)
        assert disc_parity(initial_board, Cell.BLACK, Cell.WHITE) == 3
        white_moves = len(get_valid_moves(initial_board, Cell.WHITE))
        black_moves = len(get_valid_moves(initial_board, Cell.BLACK))
        assert mobility(initial_board, Cell.BLACK, Cell.WHITE) == black_moves - white_moves


class TestEvaluateBoard:
    def test_idempotent(self):
        for board in _midgame_boards(seed=1):
            phase = get_game_phase(board)
            first = evaluate_board(board, Cell.BLACK, Cell.WHITE, phase)
            second = evaluate_board(board, Cell.BLACK, Cell.WHITE, phase)
            assert first == second

    def test_does_not_mutate_board(self):
        for board in _midgame_boards(seed=2):
            before = board.copy()
            evaluate_board(board, Cell.WHITE, Cell.BLACK, get_game_phase(board))
            assert board == before

    def test_antisymmetric(self):
        for board in _midgame_boards(seed=3):
            phase = get_game_phase(board)
            black = evaluate_board(board, Cell.BLACK, Cell.WHITE, phase)
            white = evaluate_board(board, Cell.WHITE, Cell.BLACK, phase)
            assert black == pytest.approx(-white)

    def test_breakdown_sums_to_evaluation(self):
        for board in _midgame_boards(seed=4):
            for phase in GamePhase:
                breakdown = evaluation_breakdown(board, Cell.BLACK, Cell.WHITE, phase)
                assert set(breakdown) == {
                    "parity", "mobility", "corner", "position", "edge",
                    "potential_mobility", "total",
                }
                assert breakdown["total"] == pytest.approx(
                    evaluate_board(board, Cell.BLACK, Cell.WHITE, phase)
                )

    def test_breakdown_applies_phase_weights(self, make_board):
        board = make_board(["B......."] + ["........"] * 7)
        terms = evaluation_terms(board, Cell.BLACK, Cell.WHITE)
        breakdown = evaluation_breakdown(board, Cell.BLACK, Cell.WHITE, GamePhase.EARLY)
        assert breakdown["corner"] == pytest.approx(4.0 * terms["corner"])
        assert breakdown["edge"] == pytest.approx(1.5 * 2)

    def test_late_phase_ignores_potential_mobility(self, make_board):
        board = make_board(["........"] * 3 + ["...W...."] + ["........"] * 4)
        breakdown = evaluation_breakdown(board, Cell.BLACK, Cell.WHITE, GamePhase.LATE)
        assert breakdown["potential_mobility"] == 0
