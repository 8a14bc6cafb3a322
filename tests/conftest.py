"""
Shared pytest fixtures for the Reversi tests.

Boards are written as eight strings of ``B``/``W``/``.``, top row first,
which keeps hand-built positions readable in the test bodies.
"""

from typing import Callable, Sequence

import pytest

from reversi.board_manager import Board
from reversi.models import Cell

_CHARS = {".": Cell.EMPTY, "B": Cell.BLACK, "W": Cell.WHITE}


def board_from_strings(lines: Sequence[str]) -> Board:
    """Parse eight 8-character rows into a Board."""
    assert len(lines) == 8, "need 8 rows"
    cells = []
    for line in lines:
        row = line.replace(" ", "")
        assert len(row) == 8, f"bad row {line!r}"
        cells.extend(_CHARS[ch] for ch in row)
    return Board(cells)


@pytest.fixture
def make_board() -> Callable[[Sequence[str]], Board]:
    return board_from_strings


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def corner_choice_board() -> Board:
    """White can take the (7,7) corner or play the interior cell (2,3)."""
    return board_from_strings([
        "........",
        "........",
        "........",
        "...B....",
        "...W....",
        "........",
        "........",
        ".....WB.",
    ])


@pytest.fixture
def single_move_board() -> Board:
    """White's only legal move is (2,3)."""
    return board_from_strings([
        "........",
        "........",
        "........",
        "...B....",
        "...W....",
        "........",
        "........",
        "........",
    ])


@pytest.fixture
def blocked_board() -> Board:
    """Neither colour has a legal move; Black leads 2-1."""
    return board_from_strings([
        "BB......",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        ".......W",
    ])


@pytest.fixture
def white_blocked_board() -> Board:
    """White has no legal move, Black's only move is (0,2)."""
    return board_from_strings([
        "BW......",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
    ])


@pytest.fixture(autouse=True)
def _reset_factory_cache():
    from reversi.ai.factory import AIFactory

    AIFactory.clear_cache()
    yield
    AIFactory.clear_cache()
