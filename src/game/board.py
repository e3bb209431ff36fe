"""
Board module for Minesweeper game.

Implements the grid of cells with mine placement, adjacency counts
and neighbor queries. Game rules live in the engine module.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .errors import InvalidDimensions

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 10
    cols: int = 10
    num_mines: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidDimensions("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidDimensions("Number of mines cannot be negative")
        max_mines = self.rows * self.cols
        if self.num_mines > max_mines:
            raise InvalidDimensions(f"Too many mines (max {max_mines})")


# Preset sizes; DEFAULT is what a plain "new game" uses
DEFAULT = BoardConfig(10, 10, 15)
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Rectangular Minesweeper grid.

    Cells are stored row-major and addressed by 0-indexed (row, col).
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._init_grid()

    @classmethod
    def from_grid(cls, grid: List[List[Cell]], num_mines: int) -> "Board":
        """Wrap an existing rectangular grid without touching its cells."""
        cols = len(grid[0]) if grid else 0
        config = BoardConfig(len(grid), cols, num_mines)
        return cls(config=config, _grid=grid)

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def grid(self) -> List[List[Cell]]:
        return self._grid

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.cols)]
            for _ in range(self.rows)
        ]

    def place_random_mines(
        self, count: int, rng: Optional[random.Random] = None
    ) -> None:
        """
        Place mines by rejection sampling.

        Draws uniformly random cells and keeps the ones that are not
        mines yet until ``count`` mines are down. Any cell may receive a
        mine, including the one the player clicks first.

        Args:
            count: Number of mines to place.
            rng: Random source (default: a fresh unseeded ``random.Random``).
        """
        rng = rng or random.Random()
        placed = 0
        draws = 0
        while placed < count:
            row = rng.randrange(self.rows)
            col = rng.randrange(self.cols)
            draws += 1
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
        logger.debug("Placed %d mines in %d draws", placed, draws)

    def place_mines_at(self, positions: Iterable[Position]) -> None:
        """
        Place mines at explicit positions.

        Args:
            positions: (row, col) tuples to mark as mines.

        Raises:
            InvalidDimensions: If a position is outside the board.
        """
        for row, col in positions:
            if not self.is_valid_position(row, col):
                raise InvalidDimensions(
                    f"Mine position ({row}, {col}) is off the board"
                )
            self._grid[row][col].is_mine = True

    def calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row, col in self.iter_positions():
            if not self._grid[row][col].is_mine:
                count = self._count_adjacent_mines(row, col)
                self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def iter_positions(self) -> Iterator[Position]:
        """Yield every (row, col) in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    # ========================================================================
    # Queries (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def count_mines(self) -> int:
        return sum(cell.is_mine for line in self._grid for cell in line)

    def count_flags(self) -> int:
        return sum(cell.is_flagged for line in self._grid for cell in line)

    def all_safe_cells_revealed(self) -> bool:
        """Check if every non-mine cell is revealed."""
        for line in self._grid:
            for cell in line:
                if not cell.is_mine and not cell.is_revealed:
                    return False
        return True

    def reveal_all_mines(self) -> int:
        """Reveal every mine, flagged or not. Returns how many were hidden."""
        newly_revealed = 0
        for line in self._grid:
            for cell in line:
                if cell.is_mine and not cell.is_revealed:
                    cell.is_revealed = True
                    newly_revealed += 1
        return newly_revealed

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array for presentation layers.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row, col in self.iter_positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def mine_mask(self) -> np.ndarray:
        """Boolean array that is True where a mine sits."""
        mask = np.zeros((self.rows, self.cols), dtype=bool)
        for row, col in self.iter_positions():
            mask[row, col] = self._grid[row][col].is_mine
        return mask
