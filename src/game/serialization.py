"""
Snapshot codec for Minesweeper sessions.

A snapshot is a plain dict that survives ``json.dumps``/``json.loads``
unchanged and has this shape, keys in this order::

    {"boardData": [[{"isMine", "isRevealed", "isFlagged", "adjacentMines"}]],
     "gameOver": bool, "won": bool, "lost": bool,
     "minesLeft": int, "cols": int, "rows": int, "mines": int}

Restoring only checks structure. Game-rule consistency (for example that
``adjacentMines`` matches the mines around a cell) is trusted.
"""
import json
from typing import Any, Dict, List, Mapping

from .board import Board, GameState
from .cell import Cell
from .errors import DeserializationError, InvalidDimensions
from .session import GameSession


CELL_FIELDS = ("isMine", "isRevealed", "isFlagged", "adjacentMines")
STATE_FIELDS = (
    "boardData", "gameOver", "won", "lost", "minesLeft", "cols", "rows", "mines",
)


# ============================================================================
# Encoding
# ============================================================================

def cell_to_dict(cell: Cell) -> Dict[str, Any]:
    return {
        "isMine": cell.is_mine,
        "isRevealed": cell.is_revealed,
        "isFlagged": cell.is_flagged,
        "adjacentMines": cell.adjacent_mines,
    }


def session_to_dict(session: GameSession) -> Dict[str, Any]:
    """Convert a session to its snapshot dict."""
    return {
        "boardData": [
            [cell_to_dict(cell) for cell in line]
            for line in session.board.grid
        ],
        "gameOver": session.is_over,
        "won": session.is_won,
        "lost": session.is_lost,
        "minesLeft": session.mines_remaining,
        "cols": session.cols,
        "rows": session.rows,
        "mines": session.mine_count,
    }


def dumps_state(state: Mapping[str, Any]) -> str:
    return json.dumps(state)


# ============================================================================
# Decoding
# ============================================================================

def _require_fields(data: Any, fields, what: str) -> None:
    if not isinstance(data, Mapping):
        raise DeserializationError(f"{what} must be an object")
    missing = [name for name in fields if name not in data]
    if missing:
        raise DeserializationError(f"{what} is missing {', '.join(missing)}")


def _require_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise DeserializationError(f"{name} must be a boolean")
    return value


def _require_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeserializationError(f"{name} must be an integer")
    return value


def cell_from_dict(data: Any) -> Cell:
    """Build a Cell from its snapshot dict."""
    _require_fields(data, CELL_FIELDS, "cell")
    return Cell(
        is_mine=_require_bool(data["isMine"], "isMine"),
        is_revealed=_require_bool(data["isRevealed"], "isRevealed"),
        is_flagged=_require_bool(data["isFlagged"], "isFlagged"),
        adjacent_mines=_require_int(data["adjacentMines"], "adjacentMines"),
    )


def _grid_from_list(data: Any, rows: int, cols: int) -> List[List[Cell]]:
    if not isinstance(data, list) or len(data) != rows:
        raise DeserializationError(f"boardData must be a list of {rows} rows")
    grid = []
    for index, line in enumerate(data):
        if not isinstance(line, list) or len(line) != cols:
            raise DeserializationError(
                f"boardData row {index} must be a list of {cols} cells"
            )
        grid.append([cell_from_dict(item) for item in line])
    return grid


def _phase_from_flags(won: bool, lost: bool) -> GameState:
    if lost:
        return GameState.LOST
    if won:
        return GameState.WON
    return GameState.PLAYING


def session_from_dict(state: Any) -> GameSession:
    """
    Build a session from a snapshot dict.

    Args:
        state: Dict previously produced by session_to_dict (possibly
            round-tripped through JSON).

    Returns:
        A new, independent session.

    Raises:
        DeserializationError: If fields are missing, have the wrong type,
            or the grid does not match rows x cols.
    """
    _require_fields(state, STATE_FIELDS, "state")
    rows = _require_int(state["rows"], "rows")
    cols = _require_int(state["cols"], "cols")
    mines = _require_int(state["mines"], "mines")
    mines_left = _require_int(state["minesLeft"], "minesLeft")
    _require_bool(state["gameOver"], "gameOver")
    won = _require_bool(state["won"], "won")
    lost = _require_bool(state["lost"], "lost")

    try:
        grid = _grid_from_list(state["boardData"], rows, cols)
        board = Board.from_grid(grid, mines)
    except InvalidDimensions as exc:
        raise DeserializationError(f"Invalid board in snapshot: {exc}") from exc

    return GameSession(
        board=board,
        mine_count=mines,
        mines_remaining=mines_left,
        phase=_phase_from_flags(won, lost),
    )


def loads_state(text: str) -> Dict[str, Any]:
    """
    Parse a JSON snapshot.

    Raises:
        DeserializationError: If the text is not a JSON object.
    """
    try:
        state = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise DeserializationError(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(state, dict):
        raise DeserializationError("Snapshot must be a JSON object")
    return state
