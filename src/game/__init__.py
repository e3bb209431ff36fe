"""
Minesweeper game module.

Provides the board-state engine: board generation, reveal and flag
rules, win detection and snapshot persistence.
"""
from .cell import Cell, CellState
from .board import (
    Board, BoardConfig, GameState, DEFAULT, BEGINNER, INTERMEDIATE, EXPERT,
)
from .errors import (
    MinesweeperError, InvalidDimensions, DeserializationError, NoActiveSession,
)
from .session import GameSession
from .engine import BoardEngine
from .persistence import StateStore, MemoryStateStore, JsonFileStateStore
from .serialization import (
    session_to_dict, session_from_dict, dumps_state, loads_state,
)

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "DEFAULT",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperError",
    "InvalidDimensions",
    "DeserializationError",
    "NoActiveSession",
    "GameSession",
    "BoardEngine",
    "StateStore",
    "MemoryStateStore",
    "JsonFileStateStore",
    "session_to_dict",
    "session_from_dict",
    "dumps_state",
    "loads_state",
]
