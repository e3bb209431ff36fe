"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import (
    Board,
    BoardConfig,
    BoardEngine,
    Cell,
    GameSession,
    MemoryStateStore,
)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with no mines placed yet."""
    return Board()


@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with a single mine at (2, 2)."""
    board = Board(BoardConfig(3, 3, 1))
    board.place_mines_at([(2, 2)])
    board.calculate_adjacent_mines()
    return board


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine() -> BoardEngine:
    """Create an engine with a seeded random source."""
    return BoardEngine(rng=random.Random(1234))


@pytest.fixture
def memory_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def stored_engine(memory_store: MemoryStateStore) -> BoardEngine:
    """Create an engine that saves to an in-memory store."""
    return BoardEngine(store=memory_store, rng=random.Random(1234))


@pytest.fixture
def corner_mine_session(engine: BoardEngine) -> GameSession:
    """3x3 game with one mine in the bottom-right corner."""
    return engine.initialize(3, 3, 1, mines=[(2, 2)])


@pytest.fixture
def two_mine_session(engine: BoardEngine) -> GameSession:
    """4x4 game with mines at (0, 0) and (3, 3)."""
    return engine.initialize(4, 4, 2, mines=[(0, 0), (3, 3)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell
