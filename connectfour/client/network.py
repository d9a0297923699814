"""
network.py - Client connection to a Connect Four server

The NetworkClient waits for the CONNECT handshake, then a listener thread
reads server lines and pushes decoded messages onto a queue. A single
consumer drains the queue and applies each message with apply_message(),
so the client board is only ever touched by that consumer.
"""

import queue
import socket
import threading

from connectfour import protocol
from connectfour.client.board import ClientBoard
from connectfour.debug import DebugManager, debug as default_debug
from connectfour.exceptions import ConnectFourException, ConnectionLost, ProtocolViolation
from connectfour.protocol import Message

LOST_CONNECTION = "Lost connection to server."

# Messages after which the server closes the connection
FINAL_MESSAGES = frozenset(
    [protocol.GAME_WON, protocol.GAME_LOST, protocol.GAME_TIED, protocol.ERROR])


class NetworkClient:
    """Connection to the server plus the thread that listens on it."""
    
    def __init__(self, host: str, port: int, timeout: float = None,
                 debug: DebugManager = None):
        """
        Connect and block until the server sends CONNECT.
        
        Raises:
            ConnectionLost: If the server cannot be reached or hangs up
            ProtocolViolation: If the first message is not CONNECT or is too long
        """
        self.debug = debug or default_debug
        self.messages: "queue.Queue[Message]" = queue.Queue()
        self._closed = threading.Event()
        self._listener = None
        
        try:
            self.sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise ConnectionLost(f"Could not connect to {host}:{port}: {e}") from e
        self._reader = self.sock.makefile('r', encoding=protocol.ENCODING, errors='replace',
                                          newline='\n')
        
        try:
            line = protocol.read_line(self._reader)
        except OSError as e:
            self.close()
            raise ConnectionLost(f"Lost connection during handshake: {e}") from e
        except ProtocolViolation:
            self.close()
            raise
        if not line:
            self.close()
            raise ConnectionLost("Server closed the connection during handshake")
        if protocol.decode(line).keyword != protocol.CONNECT:
            self.close()
            raise ProtocolViolation(line.rstrip("\r\n"), "Expected CONNECT from server")
        # The timeout only bounds connecting and the handshake
        self.sock.settimeout(None)
        self.debug.info(f"Connected to server {host}:{port}", "client")
    
    def start_listener(self) -> threading.Thread:
        """Start reading server messages onto the queue."""
        self._listener = threading.Thread(target=self._listen, name="server-listener", daemon=True)
        self._listener.start()
        return self._listener
    
    def _listen(self) -> None:
        while not self._closed.is_set():
            try:
                line = protocol.read_line(self._reader)
            except ProtocolViolation as e:
                self.debug.error(f"Bad line from server: {e}", "client")
                self.messages.put(Message(protocol.ERROR, str(e)))
                return
            except (OSError, ValueError) as e:
                if not self._closed.is_set():
                    self.debug.warning(f"Read failed: {e}", "client")
                    self.messages.put(Message(protocol.ERROR, LOST_CONNECTION))
                return
            
            if not line:
                if not self._closed.is_set():
                    self.messages.put(Message(protocol.ERROR, LOST_CONNECTION))
                return
            
            message = protocol.decode(line)
            self.debug.trace(f"Net message in = {line.rstrip()!r}", "client")
            if message.keyword not in protocol.SERVER_MESSAGES or message.keyword == protocol.CONNECT:
                self.debug.error(f"Unrecognized request: {message.keyword}", "client")
                self.messages.put(Message(protocol.ERROR, f"Unrecognized request: {line.strip()}"))
                return
            
            self.messages.put(message)
            if message.keyword in FINAL_MESSAGES:
                return
    
    def send_move(self, col: int) -> None:
        """Answer MAKE_MOVE with a column."""
        try:
            self.sock.sendall(protocol.encode(protocol.MOVE, col).encode(protocol.ENCODING))
        except OSError as e:
            raise ConnectionLost(f"Could not send move: {e}") from e
    
    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._closed.is_set():
            return
        self._closed.set()
        try:
            # Wakes the listener if it is blocked in a read
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            self.debug.trace(f"Shutdown: {e}", "client")
        for closeable in (self._reader, self.sock):
            try:
                closeable.close()
            except OSError as e:
                self.debug.warning(f"Error closing connection: {e}", "client")


def apply_message(board: ClientBoard, message: Message) -> bool:
    """
    Apply one server message to the local board.
    
    Returns:
        True once the game is over for this client
    """
    keyword = message.keyword
    try:
        if keyword == protocol.MAKE_MOVE:
            board.make_move()
        elif keyword == protocol.MOVE_MADE:
            board.move_made(protocol.parse_column(message.arguments))
        elif keyword == protocol.GAME_WON:
            board.game_won()
        elif keyword == protocol.GAME_LOST:
            board.game_lost()
        elif keyword == protocol.GAME_TIED:
            board.game_tied()
        elif keyword == protocol.ERROR:
            board.error(message.arguments)
        else:
            board.error(f"Unrecognized request: {keyword}")
    except ConnectFourException as e:
        board.error(str(e))
    return board.is_over()
