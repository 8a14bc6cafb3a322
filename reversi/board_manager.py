"""Board model and rule functions for the Reversi service.

Everything in this module is a pure function of its arguments: callers pass
the board and the player explicitly and no module-level state is consulted.
The controller owns the canonical live :class:`Board`; search code owns
throwaway copies made with :meth:`Board.copy`.

The rule functions share one notion of a *bracketed run*: walking outward
from an empty target cell, a run is a non-empty sequence of opponent discs
terminated by a disc of the mover's colour. ``count_flips`` counts the discs
in every bracketed run and ``apply_move`` flips exactly those discs.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import InvalidMoveError, InvalidStateError
from .models import BOARD_SIZE, BoardState, Cell, DiscCount, GamePhase

__all__ = [
    "Board",
    "CORNERS",
    "DIRECTIONS",
    "Move",
    "apply_move",
    "count_discs",
    "count_flips",
    "disc_difference",
    "get_game_phase",
    "get_opponent",
    "get_valid_moves",
    "get_winner",
    "has_valid_move",
    "is_corner",
    "is_game_over",
    "is_in_bounds",
    "is_valid_move",
]

Move = tuple[int, int]

NUM_CELLS = BOARD_SIZE * BOARD_SIZE

DIRECTIONS: tuple[Move, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

CORNERS: tuple[Move, ...] = (
    (0, 0),
    (0, BOARD_SIZE - 1),
    (BOARD_SIZE - 1, 0),
    (BOARD_SIZE - 1, BOARD_SIZE - 1),
)

# Phase thresholds on the total disc count: early < 20 <= mid < 50 <= late.
MID_PHASE_MIN_DISCS = 20
LATE_PHASE_MIN_DISCS = 50

_CHAR_MAP = {
    Cell.EMPTY: ".",
    Cell.BLACK: "B",
    Cell.WHITE: "W",
}


class Board:
    """Fixed 8x8 grid of :class:`Cell` values stored as a flat list.

    Cells are addressed with a ``(row, col)`` tuple: ``board[3, 4]``.
    Copying is a flat list copy, which is all the search needs.
    """

    __slots__ = ("cells",)

    def __init__(self, cells: Iterable[int] | None = None) -> None:
        if cells is None:
            self.cells: list[Cell] = [Cell.EMPTY] * NUM_CELLS
            return

        values = list(cells)
        if len(values) != NUM_CELLS:
            raise InvalidStateError(
                f"Board must have {NUM_CELLS} cells",
                context={"cells": len(values)},
            )
        try:
            self.cells = [Cell(v) for v in values]
        except ValueError as e:
            raise InvalidStateError(f"Invalid cell value: {e}") from e

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def initial(cls) -> "Board":
        """Board seeded with the four canonical centre discs."""
        board = cls()
        mid = BOARD_SIZE // 2
        board[mid - 1, mid - 1] = Cell.WHITE
        board[mid - 1, mid] = Cell.BLACK
        board[mid, mid - 1] = Cell.BLACK
        board[mid, mid] = Cell.WHITE
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from an 8x8 row-major matrix."""
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise InvalidStateError(
                f"Board must be a {BOARD_SIZE}x{BOARD_SIZE} matrix",
                context={"rows": len(rows)},
            )
        return cls(v for row in rows for v in row)

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        return cls.from_rows(state.cells)

    def to_rows(self) -> list[list[Cell]]:
        return [
            self.cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]
            for r in range(BOARD_SIZE)
        ]

    def to_state(self) -> BoardState:
        return BoardState(cells=self.to_rows())

    def copy(self) -> "Board":
        board = Board.__new__(Board)
        board.cells = self.cells[:]
        return board

    def __getitem__(self, pos: Move) -> Cell:
        row, col = pos
        return self.cells[row * BOARD_SIZE + col]

    def __setitem__(self, pos: Move, value: Cell) -> None:
        row, col = pos
        self.cells[row * BOARD_SIZE + col] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(tuple(self.cells))

    def __str__(self) -> str:
        lines = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
        for r, row in enumerate(self.to_rows()):
            lines.append(f"{r} " + " ".join(_CHAR_MAP[v] for v in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        counts = count_discs(self)
        return f"Board(black={counts.black}, white={counts.white})"


def get_opponent(player: Cell) -> Cell:
    """Return the other colour."""
    return Cell.WHITE if player == Cell.BLACK else Cell.BLACK


def is_in_bounds(row: int, col: int) -> bool:
    """Return True if both coordinates lie in ``[0, 7]``."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_corner(row: int, col: int) -> bool:
    return (row, col) in CORNERS


def count_flips(board: Board, row: int, col: int, player: Cell) -> int:
    """Count the opponent discs a move at ``(row, col)`` would flip.

    Returns 0 when the target is occupied. Directions that run off the board
    or reach an empty cell before a ``player`` disc contribute nothing.
    """
    cells = board.cells
    if cells[row * BOARD_SIZE + col] != Cell.EMPTY:
        return 0

    opponent = get_opponent(player)
    total = 0
    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        run = 0
        while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and cells[r * BOARD_SIZE + c] == opponent:
            run += 1
            r += dr
            c += dc
        if run and 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and cells[r * BOARD_SIZE + c] == player:
            total += run
    return total


def is_valid_move(board: Board, row: int, col: int, player: Cell) -> bool:
    """A move is legal iff the target is empty and flips at least one disc.

    Off-board coordinates are never legal.
    """
    if not is_in_bounds(row, col):
        return False
    if board[row, col] != Cell.EMPTY:
        return False
    return count_flips(board, row, col, player) > 0


def get_valid_moves(board: Board, player: Cell) -> list[Move]:
    """Return every legal move for ``player`` in row-major order.

    The order matters: strategies break ties by keeping the first move.
    """
    return [
        (row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if is_valid_move(board, row, col, player)
    ]


def has_valid_move(board: Board, player: Cell) -> bool:
    """Return True as soon as one legal move for ``player`` is found."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if is_valid_move(board, row, col, player):
                return True
    return False


def apply_move(board: Board, row: int, col: int, player: Cell) -> list[Move]:
    """Place a ``player`` disc at ``(row, col)`` and flip bracketed runs.

    Mutates ``board`` in place and returns the flipped positions. The move
    must have been validated with :func:`is_valid_move`; an off-board,
    occupied or zero-flip target raises :class:`InvalidMoveError` and leaves
    the board untouched.
    """
    if not is_in_bounds(row, col):
        raise InvalidMoveError(
            "Move is off the board", row=row, col=col, player=player
        )
    if board[row, col] != Cell.EMPTY:
        raise InvalidMoveError(
            "Target cell is occupied", row=row, col=col, player=player
        )

    opponent = get_opponent(player)
    flipped: list[Move] = []
    for dr, dc in DIRECTIONS:
        run: list[Move] = []
        r, c = row + dr, col + dc
        while is_in_bounds(r, c) and board[r, c] == opponent:
            run.append((r, c))
            r += dr
            c += dc
        if run and is_in_bounds(r, c) and board[r, c] == player:
            flipped.extend(run)

    if not flipped:
        raise InvalidMoveError(
            "Move does not flip any disc", row=row, col=col, player=player
        )

    board[row, col] = player
    for pos in flipped:
        board[pos] = player
    return flipped


def count_discs(board: Board) -> DiscCount:
    """Full-board tally of black, white and total discs."""
    black = board.cells.count(Cell.BLACK)
    white = board.cells.count(Cell.WHITE)
    return DiscCount(black=black, white=white, total=black + white)


def disc_difference(board: Board, player: Cell) -> int:
    """Discs held by ``player`` minus discs held by the opponent."""
    return board.cells.count(player) - board.cells.count(get_opponent(player))


def is_game_over(board: Board) -> bool:
    """The game ends when neither colour has a legal move."""
    return not has_valid_move(board, Cell.BLACK) and not has_valid_move(
        board, Cell.WHITE
    )


def get_winner(board: Board) -> Cell:
    """Return the colour with more discs, or ``Cell.EMPTY`` for a tie."""
    diff = disc_difference(board, Cell.BLACK)
    if diff > 0:
        return Cell.BLACK
    if diff < 0:
        return Cell.WHITE
    return Cell.EMPTY


def get_game_phase(board: Board) -> GamePhase:
    """Classify the position by total disc count (early < 20 <= mid < 50)."""
    total = NUM_CELLS - board.cells.count(Cell.EMPTY)
    if total < MID_PHASE_MIN_DISCS:
        return GamePhase.EARLY
    if total < LATE_PHASE_MIN_DISCS:
        return GamePhase.MID
    return GamePhase.LATE
