"""
protocol.py - Line-oriented wire protocol shared by server and client

Every message is one newline-terminated line: a keyword optionally followed
by space-separated arguments.

    CONNECT            server -> client   handshake
    MAKE_MOVE          server -> client   client must answer with MOVE
    MOVE <col>         client -> server   answer to MAKE_MOVE
    MOVE_MADE <col>    server -> client   broadcast after an accepted move
    GAME_WON           server -> client   the receiver's move won
    GAME_LOST          server -> client   the opponent's move won
    GAME_TIED          server -> client   board full with no line
    ERROR <message>    server -> client   game aborted, connection closes
"""

import re
from typing import NamedTuple, Optional, TextIO

from connectfour.exceptions import ProtocolViolation

ENCODING = "utf-8"

# Longest line either side will read, newline included
MAX_LINE = 1024

INTEGER = re.compile(r"[+-]?[0-9]+")

CONNECT = "CONNECT"
MAKE_MOVE = "MAKE_MOVE"
MOVE = "MOVE"
MOVE_MADE = "MOVE_MADE"
GAME_WON = "GAME_WON"
GAME_LOST = "GAME_LOST"
GAME_TIED = "GAME_TIED"
ERROR = "ERROR"

SERVER_MESSAGES = frozenset(
    [CONNECT, MAKE_MOVE, MOVE_MADE, GAME_WON, GAME_LOST, GAME_TIED, ERROR])


class Message(NamedTuple):
    """A decoded line: the keyword and the raw remainder."""
    keyword: str
    arguments: str = ""


def encode(keyword: str, *args) -> str:
    """Build one protocol line, including its trailing newline."""
    return " ".join([keyword] + [str(arg) for arg in args]) + "\n"


def decode(line: str) -> Message:
    """Split a line into its keyword and argument text."""
    parts = line.strip().split(None, 1)
    if not parts:
        return Message("")
    if len(parts) == 1:
        return Message(parts[0])
    return Message(parts[0], parts[1].strip())


def _parse_int(token: str) -> Optional[int]:
    """The value of a plain ASCII decimal token, or None."""
    if not INTEGER.fullmatch(token):
        return None
    return int(token)


def parse_move(line: str) -> int:
    """
    Parse a client's answer to MAKE_MOVE.
    
    Args:
        line: The raw line read from the client (newline optional)
    
    Returns:
        The column the client chose
    
    Raises:
        ProtocolViolation: Unless the line is exactly ``MOVE <int>``
    """
    raw = line.rstrip("\r\n")
    tokens = raw.split()
    if len(tokens) != 2 or tokens[0] != MOVE:
        raise ProtocolViolation(raw)
    column = _parse_int(tokens[1])
    if column is None:
        raise ProtocolViolation(raw)
    return column


def parse_column(arguments: str) -> int:
    """Parse the single column argument of a MOVE_MADE message."""
    tokens = arguments.split()
    column = _parse_int(tokens[0]) if len(tokens) == 1 else None
    if column is None:
        raise ProtocolViolation(f"{MOVE_MADE} {arguments}".strip())
    return column


def read_line(reader: TextIO) -> str:
    """
    Read one line of at most MAX_LINE characters.
    
    Returns:
        The line including its newline, or "" at end of stream
    
    Raises:
        ProtocolViolation: If MAX_LINE characters arrive without a newline
    """
    line = reader.readline(MAX_LINE)
    if len(line) >= MAX_LINE and not line.endswith("\n"):
        raise ProtocolViolation(line[:40] + "...", f"Line longer than {MAX_LINE} characters")
    return line
