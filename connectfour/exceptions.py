"""
exceptions.py - Error taxonomy for Connect Four

Board errors are raised by the board, wrapped into InvalidMove by the
engine, and every ConnectFourException ends a game at the coordinator.
"""

from typing import Optional


class ConnectFourException(Exception):
    """Base exception for everything this package raises."""

    pass


class BoardError(ConnectFourException):
    """A piece could not be placed."""

    def __init__(self, column: int, message: str):
        self.column = column
        super().__init__(message)


class InvalidColumn(BoardError):
    """Raised when a column lies outside the board."""

    def __init__(self, column: int):
        super().__init__(column, f"Invalid column: {column}")


class ColumnFull(BoardError):
    """Raised when the top cell of a column is occupied."""

    def __init__(self, column: int):
        super().__init__(column, f"Column full: {column}")


class InvalidMove(ConnectFourException):
    """Raised by the engine when a move cannot be applied."""

    def __init__(self, column: int, message: Optional[str] = None):
        self.column = column
        super().__init__(message or f"Invalid move: {column}")


class ProtocolViolation(ConnectFourException):
    """
    Raised when a peer's message does not match the expected grammar.
    
    The offending text is kept on ``raw`` for diagnostics.
    """

    def __init__(self, raw: str, message: Optional[str] = None):
        self.raw = raw
        if message is None:
            message = f"Invalid player response: {raw}"
        super().__init__(message)


class ConnectionLost(ConnectFourException):
    """Raised when the transport fails, closes or times out during a read."""

    def __init__(self, message: str = "Connection lost"):
        super().__init__(message)
