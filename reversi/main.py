"""
Reversi Service - FastAPI Application
Thin HTTP adapter around the game controller plus stateless AI endpoints
"""

import logging
import threading
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .ai.evaluation import evaluate_board, evaluation_breakdown
from .ai.factory import AIFactory
from .board_manager import (
    Board,
    count_discs,
    get_game_phase,
    get_opponent,
    get_valid_moves,
    is_game_over,
)
from .config import ServiceConfig, load_config
from .errors import (
    AIBusyError,
    GameNotFoundError,
    InvalidStateError,
    NotYourTurnError,
    ReversiError,
    RulesViolationError,
)
from .game_engine import GameEngine
from .logging_config import configure_third_party_loggers, setup_logging
from .metrics import ACTIVE_GAMES, record_ai_move
from .models import (
    Cell,
    CreateGameRequest,
    DifficultyRequest,
    EvaluationRequest,
    EvaluationResponse,
    GameState,
    MoveRequest,
    MoveResponse,
    PlayMoveRequest,
    Position,
    ValidMovesRequest,
    ValidMovesResponse,
)

logger = logging.getLogger(__name__)

service_config: ServiceConfig = load_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging("reversi", level=service_config.log_level)
    configure_third_party_loggers(quiet=True)
    logger.info(
        "Reversi service starting: delay=%dms default_difficulty=%s max_depth=%d",
        service_config.ai_move_delay_ms,
        service_config.default_difficulty.value,
        service_config.max_search_depth,
    )
    yield
    logger.info("Reversi service shutting down, %d games in store", len(game_store))


# Create FastAPI app
app = FastAPI(
    title="Reversi Service",
    description="Reversi game controller and AI move selection service",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(service_config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# In-memory game store
# =============================================================================


@dataclass
class StoredGame:
    engine: GameEngine
    created_at: float
    last_access: float


class GameStore:
    """Games keyed by id, bounded by idle TTL and an LRU size cap."""

    def __init__(self, ttl_sec: int, max_games: int):
        self.ttl_sec = ttl_sec
        self.max_games = max_games
        self._lock = threading.Lock()
        self._games: Dict[str, StoredGame] = {}

    def __len__(self) -> int:
        return len(self._games)

    def _prune(self, now: float) -> None:
        expired = [
            key
            for key, entry in self._games.items()
            if now - entry.last_access > self.ttl_sec
        ]
        for key in expired:
            self._games.pop(key, None)
            logger.debug("Evicted idle game %s", key)

        if len(self._games) > self.max_games:
            # Evict least-recently-used entries.
            entries_by_age = sorted(self._games.items(), key=lambda kv: kv[1].last_access)
            overflow = len(self._games) - self.max_games
            for key, _entry in entries_by_age[:overflow]:
                self._games.pop(key, None)
                logger.debug("Evicted least recently used game %s", key)

        ACTIVE_GAMES.set(len(self._games))

    def get(self, game_id: str) -> GameEngine:
        now = time.time()
        with self._lock:
            self._prune(now)
            entry = self._games.get(game_id)
            if entry is None:
                raise GameNotFoundError(game_id)
            entry.last_access = now
            return entry.engine

    def put(self, engine: GameEngine) -> None:
        now = time.time()
        with self._lock:
            self._games[engine.session.id] = StoredGame(
                engine=engine, created_at=now, last_access=now
            )
            self._prune(now)

    def delete(self, game_id: str) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(game_id)
            ACTIVE_GAMES.set(len(self._games))

    def clear(self) -> None:
        with self._lock:
            self._games.clear()
            ACTIVE_GAMES.set(0)


game_store = GameStore(
    ttl_sec=service_config.game_store_ttl_sec,
    max_games=service_config.game_store_max,
)


def _http_error(e: ReversiError) -> HTTPException:
    """Map a domain error onto an HTTP status."""
    if isinstance(e, GameNotFoundError):
        status_code = 404
    elif isinstance(e, (AIBusyError, NotYourTurnError)):
        status_code = 409
    elif isinstance(e, (RulesViolationError, InvalidStateError)):
        status_code = 400
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail=e.to_dict())


def _board_from_request(cells) -> Board:
    return Board.from_rows(cells)


def _require_colour(player: Cell) -> Cell:
    if player == Cell.EMPTY:
        raise InvalidStateError("Player must be BLACK or WHITE")
    return player


async def _computer_turns(engine: GameEngine) -> None:
    await engine.run_computer_turns(service_config.ai_move_delay_s)


# =============================================================================
# Service endpoints
# =============================================================================


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "service": "Reversi Service",
        "status": "running",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Health check for container orchestration"""
    return {"status": "healthy", "games": len(game_store)}


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


# =============================================================================
# Game endpoints
# =============================================================================


@app.post("/games", response_model=GameState)
async def create_game(request: Optional[CreateGameRequest] = None):
    """
    Start a new game.

    If the computer plays Black it moves first, after the thinking delay.
    """
    request = request or CreateGameRequest()
    try:
        engine = GameEngine.new_game(
            human_disc=request.human_disc,
            difficulty=request.difficulty or service_config.default_difficulty,
            rng_seed=request.seed,
            max_search_depth=service_config.max_search_depth,
        )
        game_store.put(engine)
        await _computer_turns(engine)
        return engine.to_state()
    except ReversiError as e:
        raise _http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Error creating game: %s", str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/games/{game_id}", response_model=GameState)
async def get_game(game_id: str):
    try:
        return game_store.get(game_id).to_state()
    except ReversiError as e:
        raise _http_error(e)


@app.post("/games/{game_id}/moves", response_model=GameState)
async def play_move(game_id: str, request: PlayMoveRequest):
    """
    Play the human's move, then let the computer reply.

    Returns:
        The state once it is the human's turn again or the game is over
    """
    try:
        engine = game_store.get(game_id)
        engine.play_human_move(request.row, request.col)
        await _computer_turns(engine)
        return engine.to_state()
    except ReversiError as e:
        raise _http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Error playing move in game %s: %s", game_id, str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/games/{game_id}/undo", response_model=GameState)
async def undo_move(game_id: str):
    try:
        engine = game_store.get(game_id)
        if engine.session.is_computer_thinking:
            raise AIBusyError("Cannot undo while the computer is thinking")
        if not engine.undo():
            raise InvalidStateError("Nothing to undo", context={"game_id": game_id})
        return engine.to_state()
    except ReversiError as e:
        raise _http_error(e)


@app.post("/games/{game_id}/restart", response_model=GameState)
async def restart_game(game_id: str):
    try:
        engine = game_store.get(game_id)
        engine.restart()
        await _computer_turns(engine)
        return engine.to_state()
    except ReversiError as e:
        raise _http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Error restarting game %s: %s", game_id, str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.put("/games/{game_id}/difficulty", response_model=GameState)
async def set_difficulty(game_id: str, request: DifficultyRequest):
    """Change difficulty; starts the computer's turn if it is waiting to move."""
    try:
        engine = game_store.get(game_id)
        if engine.set_difficulty(request.difficulty):
            await _computer_turns(engine)
        return engine.to_state()
    except ReversiError as e:
        raise _http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Error changing difficulty for game %s: %s", game_id, str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.delete("/games/{game_id}")
async def delete_game(game_id: str):
    try:
        game_store.delete(game_id)
    except ReversiError as e:
        raise _http_error(e)
    return {"deleted": game_id}


# =============================================================================
# Stateless engine endpoints
# =============================================================================


@app.post("/ai/move", response_model=MoveResponse)
async def get_ai_move(request: MoveRequest):
    """
    Get AI-selected move for a board.

    Args:
        request: MoveRequest containing board, player and difficulty

    Returns:
        MoveResponse with selected move (null when the player must pass)
        and the evaluation of the current board for that player
    """
    start_time = time.time()
    difficulty = request.difficulty.value

    try:
        board = _board_from_request(request.board.cells)
        player = _require_colour(request.player)
    except ReversiError as e:
        raise _http_error(e)

    try:
        ai = AIFactory.create_from_difficulty(
            request.difficulty,
            player,
            rng_seed=request.seed,
            max_depth=service_config.max_search_depth,
        )
        move = ai.select_move(board)
        evaluation = ai.evaluate_position(board)

        duration_seconds = time.time() - start_time
        nodes = getattr(getattr(ai, "last_stats", None), "nodes_visited", None)
        record_ai_move(
            difficulty,
            "success" if move is not None else "pass",
            duration_seconds,
            nodes,
        )
        thinking_time = int(duration_seconds * 1000)

        logger.info(
            "AI move: difficulty=%s, move=%s, time=%dms, eval=%.2f, seed=%d",
            difficulty,
            move,
            thinking_time,
            evaluation,
            ai.rng_seed,
        )

        return MoveResponse(
            move=Position(row=move[0], col=move[1]) if move is not None else None,
            evaluation=evaluation,
            thinking_time_ms=thinking_time,
            difficulty=request.difficulty,
        )

    except Exception as e:
        record_ai_move(difficulty, "error", time.time() - start_time)
        logger.error("Error generating AI move: %s", str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/ai/evaluate", response_model=EvaluationResponse)
async def evaluate_position(request: EvaluationRequest):
    """
    Evaluate a board from a player's perspective

    Args:
        request: EvaluationRequest with board and player

    Returns:
        EvaluationResponse with composite score, phase and weighted terms
    """
    try:
        board = _board_from_request(request.board.cells)
        player = _require_colour(request.player)
        opponent = get_opponent(player)
        phase = get_game_phase(board)
        return EvaluationResponse(
            score=evaluate_board(board, player, opponent, phase),
            phase=phase,
            breakdown=evaluation_breakdown(board, player, opponent, phase),
        )
    except ReversiError as e:
        raise _http_error(e)


@app.post("/rules/valid_moves", response_model=ValidMovesResponse)
async def valid_moves(request: ValidMovesRequest):
    """Legal moves for a player, in row-major order."""
    try:
        board = _board_from_request(request.board.cells)
        player = _require_colour(request.player)
        return ValidMovesResponse(
            moves=[Position(row=r, col=c) for r, c in get_valid_moves(board, player)],
            game_over=is_game_over(board),
            scores=count_discs(board),
        )
    except ReversiError as e:
        raise _http_error(e)


def main() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=service_config.service_port)


if __name__ == "__main__":
    main()
