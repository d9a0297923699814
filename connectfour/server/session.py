"""
session.py - Server-side proxy for one connected player

A PlayerSession speaks the wire protocol over a connected socket. It has
no authority over the game: it sends requests, reads and validates the
single reply to MAKE_MOVE, and reports what the client chose.
"""

import socket
from enum import Enum, auto

from connectfour import protocol
from connectfour.debug import DebugManager, debug as default_debug
from connectfour.exceptions import ConnectionLost


class SessionState(Enum):
    AWAITING_CONNECT = auto()
    READY = auto()
    MOVE_REQUESTED = auto()
    MOVE_RECEIVED = auto()
    TERMINATED = auto()


class PlayerSession:
    """Manages the requests and responses to a single client."""
    
    def __init__(self, sock: socket.socket, name: str = "player", debug: DebugManager = None):
        """
        Args:
            sock: A connected stream socket; any timeout set on it bounds reads
            name: Label used in log messages
            debug: Logging collaborator
        """
        self.sock = sock
        self.name = name
        self.debug = debug or default_debug
        self.state = SessionState.AWAITING_CONNECT
        self._reader = sock.makefile('r', encoding=protocol.ENCODING, errors='replace', newline='\n')
    
    def _send(self, keyword: str, *args) -> None:
        line = protocol.encode(keyword, *args)
        self.debug.trace(f"{self.name} <- {line.rstrip()}", "session")
        self.sock.sendall(line.encode(protocol.ENCODING))
    
    def _send_quietly(self, keyword: str, *args) -> None:
        """Best-effort send; transport errors are logged and dropped."""
        if self.state == SessionState.TERMINATED:
            return
        try:
            self._send(keyword, *args)
        except OSError as e:
            self.debug.warning(f"Could not send {keyword} to {self.name}: {e}", "session")
    
    def connect(self) -> None:
        """Send the CONNECT handshake. No reply is expected."""
        if self.state != SessionState.AWAITING_CONNECT:
            return
        self._send_quietly(protocol.CONNECT)
        self.state = SessionState.READY
    
    def request_move(self) -> int:
        """
        Send MAKE_MOVE and block for the client's reply.
        
        Returns:
            The column the client chose (not yet validated against the board)
        
        Raises:
            ProtocolViolation: If the reply is not exactly ``MOVE <int>`` or is too long
            ConnectionLost: If the connection fails, closes or times out
        """
        try:
            self._send(protocol.MAKE_MOVE)
            self.state = SessionState.MOVE_REQUESTED
            line = protocol.read_line(self._reader)
        except (OSError, ValueError) as e:
            raise ConnectionLost(f"Lost connection to {self.name}: {e}") from e
        
        if not line:
            raise ConnectionLost(f"Lost connection to {self.name}")
        
        self.debug.trace(f"{self.name} -> {line.rstrip()}", "session")
        column = protocol.parse_move(line)
        self.state = SessionState.MOVE_RECEIVED
        return column
    
    def notify_move_made(self, column: int) -> None:
        self._send_quietly(protocol.MOVE_MADE, column)
    
    def notify_won(self) -> None:
        self._send_quietly(protocol.GAME_WON)
    
    def notify_lost(self) -> None:
        self._send_quietly(protocol.GAME_LOST)
    
    def notify_tied(self) -> None:
        self._send_quietly(protocol.GAME_TIED)
    
    def notify_error(self, message: str) -> None:
        self._send_quietly(protocol.ERROR, message)
    
    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self.state == SessionState.TERMINATED:
            return
        self.state = SessionState.TERMINATED
        for closeable in (self._reader, self.sock):
            try:
                closeable.close()
            except OSError as e:
                self.debug.warning(f"Error closing {self.name}: {e}", "session")
        self.debug.debug(f"Closed {self.name}", "session")
