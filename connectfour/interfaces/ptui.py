"""
ptui.py - Plain-text front end for a networked Connect Four client

This module renders the client's board to a text stream and prompts the
user for a column whenever the server asks for a move.
"""

import sys
from typing import Callable, Optional, TextIO

from connectfour import protocol
from connectfour.client.board import ClientBoard, ClientStatus
from connectfour.client.network import NetworkClient, apply_message
from connectfour.exceptions import ConnectionLost
from connectfour.utils import Player

SYMBOLS = {
    Player.ONE: 'O',
    Player.TWO: 'X',
    Player.EMPTY: '.',
}

END_MESSAGES = {
    ClientStatus.I_WON: "You won. Yay!",
    ClientStatus.I_LOST: "You lost. Boo!",
    ClientStatus.TIE: "Tie game. Meh.",
}


def render_board(board: ClientBoard) -> str:
    """
    Render the board as text with column numbers on top and row numbers
    down the left side.
    """
    lines = [" " + "".join(f" {c} " for c in range(board.cols))]
    for r in range(board.rows):
        cells = "".join(f"[{SYMBOLS[board.contents_at(r, c)]}]" for c in range(board.cols))
        lines.append(f"{r}{cells}")
    return "\n".join(lines)


class ConnectFourPTUI:
    """Text front end: draws the board and reads moves from the user."""
    
    def __init__(self, client: NetworkClient, board: ClientBoard = None,
                 user_in: Callable[[str], str] = input, user_out: TextIO = None):
        self.client = client
        self.board = board or ClientBoard()
        self.user_in = user_in
        self.user_out = user_out or sys.stdout
    
    def show(self, text: str = "") -> None:
        print(text, file=self.user_out, flush=True)
    
    def refresh(self) -> None:
        """Draw the board, or the final message once the game is over."""
        self.show(render_board(self.board))
        self.show(f"{self.board.moves_left} moves left.")
        if self.board.status == ClientStatus.ERROR:
            self.show(f"{protocol.ERROR}: {self.board.error_message}")
        elif self.board.status in END_MESSAGES:
            self.show(END_MESSAGES[self.board.status])
        else:
            self.show()
    
    def get_column(self) -> Optional[int]:
        """Prompt until the user enters a column that can take a piece."""
        while True:
            try:
                user_input = self.user_in("Enter column: ").strip()
            except EOFError:
                return None
            try:
                col = int(user_input)
            except ValueError:
                self.show("Please enter a column number.")
                continue
            if self.board.is_valid_move(col):
                return col
            self.show(f"Column {col} cannot take a piece.")
    
    def run(self) -> ClientStatus:
        """
        Play until the server ends the game.
        
        Returns:
            How the game ended for this client
        """
        self.client.start_listener()
        self.refresh()
        try:
            while not self.board.is_over():
                message = self.client.messages.get()
                apply_message(self.board, message)
                if self.board.my_turn:
                    col = self.get_column()
                    if col is None:
                        self.board.error("Input closed.")
                        break
                    self.client.send_move(col)
                    self.board.did_my_turn()
                else:
                    self.refresh()
        except ConnectionLost as e:
            self.board.error(str(e))
            self.refresh()
        finally:
            self.client.close()
        return self.board.status
