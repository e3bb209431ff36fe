"""
Exception types raised by the Minesweeper engine.

Normal gameplay never raises: double reveals, double flags and moves after
the game is over are silent no-ops.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidDimensions(MinesweeperError, ValueError):
    """Board dimensions, mine count or mine layout are out of range."""


class DeserializationError(MinesweeperError, ValueError):
    """A persisted snapshot could not be turned back into a session."""


class NoActiveSession(MinesweeperError, RuntimeError):
    """A gameplay operation was called before any game was started."""
