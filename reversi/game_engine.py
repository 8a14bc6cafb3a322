"""Game controller for the Reversi service.

A :class:`GameSession` is the explicit state object for one game: board,
whose turn it is, which colour the human plays, the selected difficulty
and the controller flags. :class:`GameEngine` wraps one session and
implements the turn sequencing around the pure rule functions in
:mod:`reversi.board_manager`:

- the human plays through :meth:`GameEngine.play_human_move`;
- the computer plays through :meth:`GameEngine.run_computer_turn`, which
  sets the busy flag, waits out the visible "thinking" delay with
  ``asyncio.sleep`` and then runs the (synchronous) strategy;
- :meth:`GameEngine.check_game_state` detects game over and passes the turn
  when the side to move is blocked.

The engine itself never renders or persists anything. Persistence
collaborators round-trip a session through :meth:`GameEngine.to_state` and
:meth:`GameEngine.from_state`.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from .ai.base import BaseAI
from .ai.factory import AIFactory, parse_difficulty
from .ai.minimax_ai import DEFAULT_MAX_DEPTH
from .board_manager import (
    Board,
    Move,
    apply_move,
    count_discs,
    get_opponent,
    get_valid_moves,
    get_winner,
    is_valid_move,
)
from .errors import AIBusyError, InvalidMoveError, InvalidStateError, NotYourTurnError
from .metrics import record_ai_move, record_game_outcome
from .models import Cell, Difficulty, GameState, GameStatus, Position

logger = logging.getLogger(__name__)

STATUS_YOUR_TURN = "Your turn"
STATUS_COMPUTER_TURN = "Computer's turn"
STATUS_THINKING = "Computer is thinking..."
STATUS_TIE = "It's a tie!"
_WIN_MESSAGES = {
    Cell.BLACK: "Black wins!",
    Cell.WHITE: "White wins!",
}


@dataclass(frozen=True)
class Snapshot:
    """Board and turn as they were before a human move."""
    cells: tuple
    current_player: Cell
    consecutive_passes: int


@dataclass
class GameSession:
    """Mutable state of one game, owned by a single GameEngine."""
    id: str
    board: Board
    current_player: Cell = Cell.BLACK
    human_disc: Cell = Cell.BLACK
    computer_disc: Cell = Cell.WHITE
    difficulty: Difficulty = Difficulty.MEDIUM
    game_over: bool = False
    winner: Optional[Cell] = None
    is_computer_thinking: bool = False
    consecutive_passes: int = 0
    rng_seed: Optional[int] = None
    history: List[Snapshot] = field(default_factory=list)


class GameEngine:
    """Turn sequencing for one human-vs-computer game."""

    def __init__(
        self,
        session: GameSession,
        *,
        max_search_depth: int = DEFAULT_MAX_DEPTH,
        metrics_source: str = "service",
    ):
        self.session = session
        self.max_search_depth = max_search_depth
        self.metrics_source = metrics_source
        self._ai: Optional[BaseAI] = None

    @classmethod
    def new_game(
        cls,
        human_disc: Cell = Cell.BLACK,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        *,
        game_id: Optional[str] = None,
        rng_seed: Optional[int] = None,
        max_search_depth: int = DEFAULT_MAX_DEPTH,
        metrics_source: str = "service",
    ) -> "GameEngine":
        """Start a game on the canonical centre position, Black to move.

        Raises:
            InvalidStateError: If ``human_disc`` is not a colour
        """
        human_disc = Cell(human_disc)
        if human_disc == Cell.EMPTY:
            raise InvalidStateError("Human disc must be BLACK or WHITE")
        session = GameSession(
            id=game_id or uuid.uuid4().hex,
            board=Board.initial(),
            current_player=Cell.BLACK,
            human_disc=human_disc,
            computer_disc=get_opponent(human_disc),
            difficulty=parse_difficulty(difficulty),
            rng_seed=rng_seed,
        )
        logger.info(
            "New game %s: human=%s difficulty=%s",
            session.id,
            human_disc.name,
            session.difficulty.value,
        )
        return cls(
            session,
            max_search_depth=max_search_depth,
            metrics_source=metrics_source,
        )

    def restart(self) -> None:
        """Reset to the starting position, keeping colours and difficulty.

        Raises:
            AIBusyError: If a computer move is in progress
        """
        s = self.session
        if s.is_computer_thinking:
            raise AIBusyError("Cannot restart while the computer is thinking")
        s.board = Board.initial()
        s.current_player = Cell.BLACK
        s.game_over = False
        s.winner = None
        s.consecutive_passes = 0
        s.history.clear()
        self._ai = None
        logger.info("Game %s restarted", s.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_human_turn(self) -> bool:
        s = self.session
        return not s.game_over and s.current_player == s.human_disc

    @property
    def is_computer_turn(self) -> bool:
        s = self.session
        return not s.game_over and s.current_player == s.computer_disc

    def human_valid_moves(self) -> List[Move]:
        """Legal cells to highlight; empty unless the human is to move."""
        if not self.is_human_turn:
            return []
        return get_valid_moves(self.session.board, self.session.human_disc)

    def status_message(self) -> str:
        s = self.session
        if s.game_over:
            return _WIN_MESSAGES.get(s.winner, STATUS_TIE)
        if s.is_computer_thinking:
            return STATUS_THINKING
        if s.current_player == s.human_disc:
            return STATUS_YOUR_TURN
        return STATUS_COMPUTER_TURN

    # ------------------------------------------------------------------
    # Turn handling
    # ------------------------------------------------------------------

    def play_human_move(self, row: int, col: int) -> List[Move]:
        """
        Apply the human's move and hand the turn to the computer.

        Args:
            row: Target row
            col: Target column

        Returns:
            Positions flipped by the move

        Raises:
            InvalidStateError: If the game is over
            NotYourTurnError: If the computer is to move or thinking
            InvalidMoveError: If the cell is not a legal move
        """
        s = self.session
        if s.game_over:
            raise InvalidStateError("Game is over", context={"game_id": s.id})
        if s.is_computer_thinking or s.current_player != s.human_disc:
            raise NotYourTurnError(
                "It is not your turn", row=row, col=col, player=s.human_disc
            )
        if not is_valid_move(s.board, row, col, s.human_disc):
            raise InvalidMoveError(
                "Invalid move", row=row, col=col, player=s.human_disc
            )

        s.history.append(
            Snapshot(tuple(s.board.cells), s.current_player, s.consecutive_passes)
        )
        flipped = apply_move(s.board, row, col, s.human_disc)
        s.consecutive_passes = 0
        s.current_player = s.computer_disc
        logger.debug("Game %s: human played (%d, %d), flipped %d", s.id, row, col, len(flipped))
        self.check_game_state()
        return flipped

    def check_game_state(self) -> None:
        """Detect game over, or pass the turn when the side to move is blocked."""
        s = self.session
        human_moves = get_valid_moves(s.board, s.human_disc)
        computer_moves = get_valid_moves(s.board, s.computer_disc)

        if not human_moves and not computer_moves:
            self._finish()
        elif s.current_player == s.human_disc and not human_moves:
            logger.info("Game %s: human has no legal move, passing", s.id)
            s.current_player = s.computer_disc
            s.consecutive_passes += 1
        elif s.current_player == s.computer_disc and not computer_moves:
            logger.info("Game %s: computer has no legal move, passing", s.id)
            s.current_player = s.human_disc
            s.consecutive_passes += 1

    def _finish(self) -> None:
        s = self.session
        if s.game_over:
            return
        s.game_over = True
        s.winner = get_winner(s.board)
        counts = count_discs(s.board)
        outcome = "draw" if s.winner == Cell.EMPTY else s.winner.name.lower()
        record_game_outcome(self.metrics_source, outcome)
        logger.info(
            "Game %s over: black=%d white=%d (%s)",
            s.id,
            counts.black,
            counts.white,
            outcome,
        )

    def _get_ai(self) -> BaseAI:
        if self._ai is None:
            s = self.session
            self._ai = AIFactory.create_from_difficulty(
                s.difficulty,
                s.computer_disc,
                rng_seed=s.rng_seed,
                max_depth=self.max_search_depth,
            )
        return self._ai

    def play_computer_move(self) -> Optional[Move]:
        """
        Let the computer play one move synchronously.

        Returns:
            The move played, or None when it is not the computer's turn or the
            computer had to pass
        """
        s = self.session
        if not self.is_computer_turn:
            return None

        ai = self._get_ai()
        difficulty = s.difficulty.value
        start = time.time()
        try:
            move = ai.select_move(s.board)
        except Exception:
            record_ai_move(difficulty, "error", time.time() - start)
            raise

        if move is None:
            record_ai_move(difficulty, "pass", time.time() - start)
            s.current_player = s.human_disc
            s.consecutive_passes += 1
            self.check_game_state()
            return None

        row, col = move
        apply_move(s.board, row, col, s.computer_disc)
        elapsed = time.time() - start
        nodes = getattr(getattr(ai, "last_stats", None), "nodes_visited", None)
        record_ai_move(difficulty, "success", elapsed, nodes)
        logger.info(
            "Game %s: computer (%s) played (%d, %d) in %.1fms",
            s.id,
            difficulty,
            row,
            col,
            elapsed * 1000,
        )

        s.consecutive_passes = 0
        s.current_player = s.human_disc
        self.check_game_state()
        return move

    async def run_computer_turn(self, delay_s: float = 0.0) -> Optional[Move]:
        """
        Play the computer's move after a visible "thinking" delay.

        The busy flag is held for the whole delay and move, so human input
        and a second computer turn are refused until it clears.

        Raises:
            AIBusyError: If a computer move is already in progress
        """
        s = self.session
        if s.is_computer_thinking:
            raise AIBusyError(
                "Computer move already in progress", context={"game_id": s.id}
            )
        if not self.is_computer_turn:
            return None

        s.is_computer_thinking = True
        try:
            if delay_s > 0:
                await asyncio.sleep(delay_s)
            return self.play_computer_move()
        finally:
            s.is_computer_thinking = False

    async def run_computer_turns(self, delay_s: float = 0.0) -> List[Move]:
        """Keep playing computer moves while the human has to pass."""
        played: List[Move] = []
        while self.is_computer_turn:
            move = await self.run_computer_turn(delay_s)
            if move is None:
                break
            played.append(move)
        return played

    def set_difficulty(self, difficulty: Difficulty | str) -> bool:
        """
        Change the difficulty used for the computer's next move.

        Returns:
            True when the computer is to move and not already thinking, in
            which case the caller should start the computer's turn
        """
        s = self.session
        s.difficulty = parse_difficulty(difficulty)
        self._ai = None
        logger.info("Game %s: difficulty set to %s", s.id, s.difficulty.value)
        return self.is_computer_turn and not s.is_computer_thinking

    def undo(self) -> bool:
        """
        Restore the position before the last human move.

        The computer's reply is undone with it.

        Returns:
            False when there is nothing to undo or the computer is thinking
        """
        s = self.session
        if s.is_computer_thinking or not s.history:
            return False
        snapshot = s.history.pop()
        s.board = Board(snapshot.cells)
        s.current_player = snapshot.current_player
        s.consecutive_passes = snapshot.consecutive_passes
        s.game_over = False
        s.winner = None
        logger.info("Game %s: undo, %d snapshots left", s.id, len(s.history))
        return True

    # ------------------------------------------------------------------
    # Persistence round-trip
    # ------------------------------------------------------------------

    def to_state(self) -> GameState:
        s = self.session
        return GameState(
            id=s.id,
            board=s.board.to_state(),
            current_player=s.current_player,
            human_disc=s.human_disc,
            computer_disc=s.computer_disc,
            difficulty=s.difficulty,
            game_status=GameStatus.FINISHED if s.game_over else GameStatus.ACTIVE,
            winner=s.winner,
            is_computer_thinking=s.is_computer_thinking,
            scores=count_discs(s.board),
            valid_moves=[Position(row=r, col=c) for r, c in self.human_valid_moves()],
            status_message=self.status_message(),
            history_length=len(s.history),
            consecutive_passes=s.consecutive_passes,
        )

    @classmethod
    def from_state(
        cls,
        state: GameState,
        *,
        max_search_depth: int = DEFAULT_MAX_DEPTH,
        metrics_source: str = "service",
    ) -> "GameEngine":
        """Rebuild an engine from a stored GameState.

        Undo history is not persisted, and a restored game is never mid
        computation, so the busy flag starts cleared.

        Raises:
            InvalidStateError: If the board payload or colours are malformed
        """
        if state.human_disc == Cell.EMPTY or state.computer_disc != get_opponent(state.human_disc):
            raise InvalidStateError("Human and computer must play different colours")
        if state.current_player == Cell.EMPTY:
            raise InvalidStateError("Current player must be BLACK or WHITE")
        finished = state.game_status == GameStatus.FINISHED
        board = Board.from_state(state.board)
        session = GameSession(
            id=state.id,
            board=board,
            current_player=state.current_player,
            human_disc=state.human_disc,
            computer_disc=state.computer_disc,
            difficulty=state.difficulty,
            game_over=finished,
            winner=(state.winner if state.winner is not None else get_winner(board))
            if finished else None,
            consecutive_passes=state.consecutive_passes,
        )
        return cls(
            session,
            max_search_depth=max_search_depth,
            metrics_source=metrics_source,
        )
