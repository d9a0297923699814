"""
utils.py - Constants, enumerations and game status for Connect Four

This module provides the board constants, the cell/player enumeration,
the game status value shared by the server and client, and the direction
vectors used for win checking.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

# Game constants
ROWS = 6
COLS = 7
WIN_LEN = 4  # Number of pieces in a line to win

class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player
    
    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY


class GameResult(Enum):
    """Enumeration representing the kind of game status."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()
    ABORTED = auto()
    
    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


@dataclass(frozen=True)
class GameStatus:
    """
    Status of one game: in progress, won by a player, tied, or aborted.
    
    Use the constructors below rather than building instances by hand.
    """
    result: GameResult
    winner: Optional[Player] = None
    reason: Optional[str] = None
    
    @classmethod
    def in_progress(cls) -> 'GameStatus':
        return cls(GameResult.IN_PROGRESS)
    
    @classmethod
    def won_by(cls, player: Player) -> 'GameStatus':
        return cls(GameResult.WON, winner=player)
    
    @classmethod
    def tied(cls) -> 'GameStatus':
        return cls(GameResult.TIED)
    
    @classmethod
    def aborted(cls, reason: str) -> 'GameStatus':
        return cls(GameResult.ABORTED, reason=reason)
    
    def is_terminal(self) -> bool:
        return self.result.is_game_over()
    
    def __str__(self) -> str:
        if self.result == GameResult.WON:
            return f"WON_BY({self.winner.name})"
        if self.result == GameResult.ABORTED:
            return f"ABORTED({self.reason})"
        return self.result.name


# Unit steps (d_col, d_row): every axis in both signs
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)
