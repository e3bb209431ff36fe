"""
Engine module for Minesweeper game.

BoardEngine owns the current GameSession and is the only thing that
mutates it. A presentation layer calls the operations below in response
to user input and renders ``engine.session.board`` afterwards.
"""
import logging
import random
from typing import Any, Dict, Iterable, List, Optional

from .board import Board, BoardConfig, GameState, Position, DEFAULT
from .errors import DeserializationError, InvalidDimensions, NoActiveSession
from .persistence import StateStore
from .session import GameSession
from . import serialization

logger = logging.getLogger(__name__)


# ============================================================================
# Board Engine
# ============================================================================

class BoardEngine:
    """
    Minesweeper rules over a single owned session.

    Every mutating operation works in place and returns the session so
    callers can chain or re-render. When a store is attached the engine
    saves a snapshot after each operation that changed something.
    """

    def __init__(
        self,
        store: Optional[StateStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            store: Persistence port to save snapshots to (optional).
            rng: Random source for mine placement (default: unseeded).
        """
        self.store = store
        self.rng = rng or random.Random()
        self.session: Optional[GameSession] = None

    # ========================================================================
    # Session Lifecycle
    # ========================================================================

    def initialize(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        mines: Optional[Iterable[Position]] = None,
    ) -> GameSession:
        """
        Start a new game, replacing the current one.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mine_count: Number of mines to place.
            mines: Explicit mine positions instead of random placement.
                Must contain exactly ``mine_count`` distinct positions.

        Returns:
            The new session.

        Raises:
            InvalidDimensions: If the size, count or layout is invalid.
        """
        config = BoardConfig(rows, cols, mine_count)
        board = Board(config)
        if mines is None:
            board.place_random_mines(mine_count, self.rng)
        else:
            positions = set(mines)
            if len(positions) != mine_count:
                raise InvalidDimensions(
                    f"Expected {mine_count} mine positions, got {len(positions)}"
                )
            board.place_mines_at(positions)
        board.calculate_adjacent_mines()

        self.session = GameSession(
            board=board,
            mine_count=mine_count,
            mines_remaining=mine_count,
        )
        logger.info("New game %dx%d with %d mines", rows, cols, mine_count)
        self._save()
        return self.session

    def new_game(
        self,
        rows: int = DEFAULT.rows,
        cols: int = DEFAULT.cols,
        mine_count: int = DEFAULT.num_mines,
    ) -> GameSession:
        """Start a new game with the default 10x10 board and 15 mines."""
        return self.initialize(rows, cols, mine_count)

    def _require_session(self) -> GameSession:
        if self.session is None:
            raise NoActiveSession("No game has been started")
        return self.session

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> GameSession:
        """
        Reveal a cell at the given position.

        Hidden mines end the game and every mine is shown. A cell with no
        adjacent mines floods outward through its zero-count neighbors,
        also revealing the numbered cells bordering that region.

        Does nothing if the game is over, the position is off the board,
        or the cell is already revealed or flagged.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The current session.
        """
        session = self._require_session()
        if not session.is_playing:
            return session
        cell = session.board.get_cell(row, col)
        if cell is None or not cell.reveal():
            return session

        if cell.is_mine:
            session.phase = GameState.LOST
            shown = session.board.reveal_all_mines()
            logger.info(
                "Mine hit at (%d, %d); game lost, %d more mines shown",
                row, col, shown,
            )
            self._save()
            return session

        if cell.adjacent_mines == 0:
            opened = self._flood_fill(session.board, row, col)
            logger.debug("Flood fill from (%d, %d) opened %d cells", row, col, opened)

        self.check_win()
        self._save()
        return session

    def _flood_fill(self, board: Board, row: int, col: int) -> int:
        """
        Reveal the zero-count region around an already revealed cell.

        Uses an explicit stack; the revealed check keeps every cell from
        being visited twice.

        Returns:
            Number of cells revealed, not counting the starting cell.
        """
        opened = 0
        stack: List[Position] = list(board.get_neighbors(row, col))
        while stack:
            neighbor_row, neighbor_col = stack.pop()
            neighbor = board.grid[neighbor_row][neighbor_col]
            if neighbor.is_mine or not neighbor.reveal():
                continue
            opened += 1
            if neighbor.adjacent_mines == 0:
                stack.extend(board.get_neighbors(neighbor_row, neighbor_col))
        return opened

    def toggle_flag(self, row: int, col: int) -> GameSession:
        """
        Toggle flag on a cell.

        Does nothing if the game is over, the position is off the board,
        or the cell is revealed.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The current session.
        """
        session = self._require_session()
        if not session.is_playing:
            return session
        cell = session.board.get_cell(row, col)
        if cell is None or not cell.toggle_flag():
            return session

        session.mines_remaining += -1 if cell.is_flagged else 1
        self.check_win()
        self._save()
        return session

    def check_win(self) -> bool:
        """
        Check if all non-mine cells are revealed.

        Moves a game that is still being played to WON. A lost game
        stays lost.

        Returns:
            True if every safe cell is revealed.
        """
        session = self._require_session()
        won = session.board.all_safe_cells_revealed()
        if won and session.phase == GameState.PLAYING:
            session.phase = GameState.WON
            logger.info("Game won with %d mines", session.mine_count)
        return won

    # ========================================================================
    # Persistence
    # ========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """Serialize the current session to a plain JSON-ready dict."""
        return serialization.session_to_dict(self._require_session())

    def restore(self, state: Dict[str, Any]) -> GameSession:
        """
        Replace the current session with one read from a snapshot.

        Raises:
            DeserializationError: If the snapshot is malformed. The
                current session is left as it was.
        """
        self.session = serialization.session_from_dict(state)
        logger.info(
            "Restored %dx%d game in phase %s",
            self.session.rows, self.session.cols, self.session.phase.name,
        )
        self._save()
        return self.session

    def load(self) -> Optional[GameSession]:
        """
        Restore the session saved in the attached store.

        Returns:
            The restored session, or None if there is no store or
            nothing has been saved.
        """
        if self.store is None:
            return None
        try:
            state = self.store.load()
            if state is None:
                return None
            return self.restore(state)
        except DeserializationError:
            logger.warning("Saved game is corrupt; leaving engine unchanged")
            raise

    def _save(self) -> None:
        if self.store is not None and self.session is not None:
            self.store.save(self.snapshot())
