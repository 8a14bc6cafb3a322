"""
Pydantic Models for Reversi Game State
Wire types shared by the HTTP service and the persistence round-trip
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from enum import Enum, IntEnum


BOARD_SIZE = 8


class Cell(IntEnum):
    """Cell occupancy. Values match the browser client's stored boards."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Difficulty(str, Enum):
    """Computer opponent difficulty"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class AIType(str, Enum):
    """AI type enumeration"""
    RANDOM = "random"
    HEURISTIC = "heuristic"
    MINIMAX = "minimax"


class GamePhase(str, Enum):
    """Game phase, derived from the total number of discs on the board"""
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class GameStatus(str, Enum):
    """Game status enumeration"""
    ACTIVE = "active"
    FINISHED = "finished"


class Position(BaseModel):
    """Board coordinate, row-major from the top-left corner"""
    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)

    class Config:
        frozen = True

    def to_tuple(self) -> tuple:
        return (self.row, self.col)

    def to_key(self) -> str:
        """Convert position to string key"""
        return f"{self.row},{self.col}"


class BoardState(BaseModel):
    """8x8 matrix of cells, row-major"""
    cells: List[List[Cell]]


class DiscCount(BaseModel):
    """Full-board disc tally"""
    black: int
    white: int
    total: int


class GameState(BaseModel):
    """Complete controller state for one game.

    This is everything a persistence collaborator needs to restore a game:
    the board matrix plus the whose-turn and disc-assignment scalars.
    """
    id: str
    board: BoardState
    current_player: Cell = Field(alias="currentPlayer")
    human_disc: Cell = Field(Cell.BLACK, alias="humanDisc")
    computer_disc: Cell = Field(Cell.WHITE, alias="computerDisc")
    difficulty: Difficulty = Difficulty.MEDIUM
    game_status: GameStatus = Field(GameStatus.ACTIVE, alias="gameStatus")
    winner: Optional[Cell] = None
    is_computer_thinking: bool = Field(False, alias="isComputerThinking")
    scores: Optional[DiscCount] = None
    valid_moves: List[Position] = Field(default_factory=list, alias="validMoves")
    status_message: str = Field("", alias="statusMessage")
    history_length: int = Field(0, alias="historyLength")
    consecutive_passes: int = Field(0, alias="consecutivePasses")

    class Config:
        populate_by_name = True


class AIConfig(BaseModel):
    """AI configuration"""
    difficulty: Difficulty = Difficulty.MEDIUM
    rng_seed: Optional[int] = Field(None, alias="rngSeed")
    max_depth: Optional[int] = Field(None, ge=1, le=10, alias="maxDepth")

    class Config:
        populate_by_name = True


class CreateGameRequest(BaseModel):
    """Request model for starting a new game"""
    human_disc: Cell = Field(Cell.BLACK, alias="humanDisc")
    difficulty: Optional[Difficulty] = None
    seed: Optional[int] = Field(None, ge=0, le=0x7FFFFFFF)

    class Config:
        populate_by_name = True


class PlayMoveRequest(BaseModel):
    """Request model for a human move"""
    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)


class DifficultyRequest(BaseModel):
    """Request model for changing the selected difficulty"""
    difficulty: Difficulty


class MoveRequest(BaseModel):
    """Request model for stateless AI move selection"""
    board: BoardState
    player: Cell
    difficulty: Difficulty = Difficulty.MEDIUM
    seed: Optional[int] = Field(
        None,
        ge=0,
        le=0x7FFFFFFF,
        description="Optional RNG seed for deterministic AI behavior"
    )


class MoveResponse(BaseModel):
    """Response model for stateless AI move selection"""
    move: Optional[Position]
    evaluation: float
    thinking_time_ms: int
    difficulty: Difficulty


class EvaluationRequest(BaseModel):
    """Request model for position evaluation"""
    board: BoardState
    player: Cell


class EvaluationResponse(BaseModel):
    """Response model for position evaluation"""
    score: float
    phase: GamePhase
    breakdown: Dict[str, float]


class ValidMovesRequest(BaseModel):
    """Request model for legal move enumeration"""
    board: BoardState
    player: Cell


class ValidMovesResponse(BaseModel):
    """Response model for legal move enumeration"""
    moves: List[Position]
    game_over: bool
    scores: DiscCount
