"""
Session module for Minesweeper game.

Holds the state of one game: the board plus the counters and phase
that the engine updates as the player moves.
"""
from dataclasses import dataclass

from .board import Board, GameState


# ============================================================================
# Game Session
# ============================================================================

@dataclass
class GameSession:
    """
    A single game in progress or finished.

    Attributes:
        board: The grid of cells.
        mine_count: Mines placed at the start of the game.
        mines_remaining: mine_count minus placed flags. Not clamped, so
            over-flagging drives it negative.
        phase: PLAYING until a mine is hit (LOST) or every safe cell is
            revealed (WON).
    """

    board: Board
    mine_count: int
    mines_remaining: int
    phase: GameState = GameState.PLAYING

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.phase == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.phase == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.phase == GameState.LOST

    @property
    def is_over(self) -> bool:
        return self.phase != GameState.PLAYING

