"""
rules.py - Win/tie detection and the game engine for Connect Four

This module provides:
1. has_winning_line / is_tied: pure checks over a Board
2. GameEngine: owns the board and the turn, applies moves and publishes events
"""

from typing import NamedTuple

from connectfour.config import GameConfig
from connectfour.debug import DebugManager, debug as default_debug
from connectfour.exceptions import BoardError, InvalidMove
from connectfour.game.board import Board
from connectfour.game.events import EventChannel, MoveApplied, StatusChanged, TurnGranted
from connectfour.utils import DIRECTIONS, WIN_LEN, GameStatus, Player


def _line_from(board: Board, row: int, col: int, d_col: int, d_row: int, length: int) -> bool:
    """True if `length` cells from (row, col) stepping (d_col, d_row) match the start."""
    end_row = row + (length - 1) * d_row
    end_col = col + (length - 1) * d_col
    if not board.in_bounds(end_row, end_col):
        return False
    
    here = board.grid[row, col]
    for step in range(1, length):
        if board.grid[row + step * d_row, col + step * d_col] != here:
            return False
    return True


def has_winning_line(board: Board, length: int = WIN_LEN) -> bool:
    """
    Check the whole board for a line of `length` equal, non-empty cells.
    
    Every occupied cell is tried as the start of a line in all eight
    directions; the first complete line found ends the scan.
    
    Args:
        board: The board to scan
        length: Number of aligned pieces needed
    
    Returns:
        True if any line exists, False otherwise
    """
    for row in range(board.rows):
        for col in range(board.cols):
            if board.grid[row, col] == Player.EMPTY.value:
                continue
            for d_col, d_row in DIRECTIONS:
                if _line_from(board, row, col, d_col, d_row, length):
                    return True
    return False


def is_tied(board: Board, length: int = WIN_LEN) -> bool:
    """True if the board is full and holds no winning line."""
    return board.is_full() and not has_winning_line(board, length)


class MoveOutcome(NamedTuple):
    """Where an applied move landed and who made it."""
    column: int
    row: int
    mover: Player


class GameEngine:
    """
    Owns the board, the turn and the recorded status of one game.
    
    The engine only applies moves; deciding whether a move won or tied is
    left to the caller through has_winning_line / is_tied, which then
    records the outcome with finish().
    """
    
    def __init__(self, config: GameConfig = None, debug: DebugManager = None):
        self.config = config or GameConfig()
        self.debug = debug or default_debug
        self.board = Board(self.config.rows, self.config.cols, debug=self.debug)
        self.current_player = Player.ONE
        self.status = GameStatus.in_progress()
        self.events = EventChannel()
    
    @property
    def moves_applied(self) -> int:
        return len(self.board.moves_made)
    
    def apply_move(self, column: int) -> MoveOutcome:
        """
        Drop the current player's piece and pass the turn.
        
        Raises:
            InvalidMove: If the board rejects the column
        """
        mover = self.current_player
        try:
            row = self.board.drop(column, mover)
        except BoardError as e:
            raise InvalidMove(column, str(e)) from e
        
        self.current_player = mover.other()
        self.debug.debug(f"{mover.name} dropped in column {column}, landed on row {row}", "engine")
        self.events.publish(MoveApplied(column, row, mover))
        self.events.publish(TurnGranted(self.current_player))
        return MoveOutcome(column, row, mover)
    
    def has_winning_line(self) -> bool:
        return has_winning_line(self.board, self.config.win_len)
    
    def is_tied(self) -> bool:
        return is_tied(self.board, self.config.win_len)
    
    def finish(self, status: GameStatus) -> None:
        """Record the terminal status of the game."""
        if self.status.is_terminal():
            self.debug.warning(f"Ignoring {status}: game already ended as {self.status}", "engine")
            return
        self.status = status
        self.events.publish(StatusChanged(status))
