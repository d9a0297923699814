"""
board.py - Board representation for Connect Four

This module implements the Board class: a rows x cols grid addressed as
(row, col) with row 0 at the top. Pieces only ever enter through drop(),
which lets them fall to the lowest empty row of a column.
"""

import numpy as np
from typing import List

from connectfour.debug import DebugManager, debug as default_debug
from connectfour.exceptions import ColumnFull, InvalidColumn
from connectfour.utils import ROWS, COLS, Player


class Board:
    """
    Represents a Connect Four game board.
    
    The grid holds Player values; Player.EMPTY marks a free cell.
    """
    
    def __init__(self, rows: int = ROWS, cols: int = COLS, debug: DebugManager = None):
        """Initialize an empty board of the given size."""
        self.rows = rows
        self.cols = cols
        self.debug = debug or default_debug
        self.grid = np.zeros((rows, cols), dtype=int)
        self.moves_made: List[int] = []
        self.debug.trace(f"Initialized {rows}x{cols} board", "board")
    
    def in_bounds(self, row: int, col: int) -> bool:
        """Check if a position is within the board boundaries."""
        return 0 <= row < self.rows and 0 <= col < self.cols
    
    def is_valid_move(self, column: int) -> bool:
        """Check if a piece can be dropped in a column."""
        return 0 <= column < self.cols and self.grid[0, column] == Player.EMPTY.value
    
    def drop(self, column: int, player: Player) -> int:
        """
        Drop a piece into a column.
        
        Args:
            column: The column to place a piece (0-indexed)
            player: The piece to place
            
        Returns:
            The row the piece landed in
            
        Raises:
            InvalidColumn: If the column is outside the board
            ColumnFull: If the top cell of the column is occupied
        """
        if not 0 <= column < self.cols:
            self.debug.debug(f"Rejected drop: column {column} out of bounds", "board")
            raise InvalidColumn(column)
        
        if self.grid[0, column] != Player.EMPTY.value:
            self.debug.debug(f"Rejected drop: column {column} is full", "board")
            raise ColumnFull(column)
        
        # Find the lowest empty row in the column
        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                self.grid[row, column] = player.value
                self.moves_made.append(column)
                self.debug.trace(f"Placed {player.name} at ({row}, {column})", "board")
                return row
        
        # The top cell was empty, so the loop always places the piece
        raise ColumnFull(column)
    
    def is_full(self) -> bool:
        """True when no cell is empty."""
        return not np.any(self.grid == Player.EMPTY.value)
    
    def contents_at(self, row: int, col: int) -> Player:
        """Get the piece at a position."""
        return Player(int(self.grid[row, col]))
