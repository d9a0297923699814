"""
board.py - The client's local view of a networked game

ClientBoard mirrors the server's board from the MOVE_MADE broadcasts and
tracks whose turn it is and how the game ended for this client. Only the
consuming side (the front end) mutates it.
"""

from enum import Enum, auto
from typing import Optional

from connectfour.config import GameConfig
from connectfour.game.board import Board
from connectfour.utils import Player


class ClientStatus(Enum):
    NOT_OVER = auto()
    I_WON = auto()
    I_LOST = auto()
    TIE = auto()
    ERROR = auto()


class ClientBoard:
    """Local copy of the game board as seen by one player."""
    
    def __init__(self, config: GameConfig = None):
        self.config = config or GameConfig()
        self.board = Board(self.config.rows, self.config.cols)
        self.moves_left = self.config.rows * self.config.cols
        self.status = ClientStatus.NOT_OVER
        self.error_message: Optional[str] = None
        # Never our turn until the server asks; player one always moves first
        self.my_turn = False
        self.current_piece = Player.ONE
    
    @property
    def rows(self) -> int:
        return self.config.rows
    
    @property
    def cols(self) -> int:
        return self.config.cols
    
    def is_over(self) -> bool:
        return self.status != ClientStatus.NOT_OVER
    
    def contents_at(self, row: int, col: int) -> Player:
        return self.board.contents_at(row, col)
    
    def is_valid_move(self, col: int) -> bool:
        return self.board.is_valid_move(col)
    
    def make_move(self) -> None:
        """The server asked this client for a move."""
        self.my_turn = True
    
    def did_my_turn(self) -> None:
        self.my_turn = False
    
    def move_made(self, col: int) -> None:
        """Apply a move announced by the server, whoever made it."""
        self.board.drop(col, self.current_piece)
        self.moves_left -= 1
        self.current_piece = self.current_piece.other()
        self.my_turn = False
    
    def game_won(self) -> None:
        self.status = ClientStatus.I_WON
    
    def game_lost(self) -> None:
        self.status = ClientStatus.I_LOST
    
    def game_tied(self) -> None:
        self.status = ClientStatus.TIE
    
    def error(self, message: str) -> None:
        self.status = ClientStatus.ERROR
        self.error_message = message
        self.my_turn = False
