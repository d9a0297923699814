"""Shared fixtures for the Connect Four test suite."""

import socket

import pytest

from connectfour import protocol
from connectfour.debug import DebugManager, DebugLevel

# 42 moves on a 6x7 board that fill it with no line of four. Columns are
# filled with alternating pieces; each row reads 1 1 2 2 1 1 2 or its
# inverse, so no row or diagonal holds more than two alike in a line.
TIE_MOVES = ([0] * 6 + [1] + [6] * 6 + [1] * 5 + [4] + [2] * 6 + [4] * 5
             + [5] + [3] * 6 + [5] * 5)


class FakeSession:
    """Stand-in for PlayerSession that replays scripted client replies."""
    
    def __init__(self, replies=()):
        self.replies = list(replies)
        self.sent = []
        self.closed = 0
    
    def request_move(self):
        self.sent.append(protocol.MAKE_MOVE)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return protocol.parse_move(reply)
    
    def notify_move_made(self, column):
        self.sent.append(f"{protocol.MOVE_MADE} {column}")
    
    def notify_won(self):
        self.sent.append(protocol.GAME_WON)
    
    def notify_lost(self):
        self.sent.append(protocol.GAME_LOST)
    
    def notify_tied(self):
        self.sent.append(protocol.GAME_TIED)
    
    def notify_error(self, message):
        self.sent.append(f"{protocol.ERROR} {message}")
    
    def close(self):
        self.closed += 1


@pytest.fixture
def quiet():
    """A logging collaborator that drops everything."""
    return DebugManager("connectfour.tests", level=DebugLevel.NONE)


@pytest.fixture
def tie_moves():
    return list(TIE_MOVES)


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def sock_pair():
    """A connected (server_side, client_side) pair with a safety timeout."""
    server_side, client_side = socket.socketpair()
    server_side.settimeout(5)
    client_side.settimeout(5)
    yield server_side, client_side
    for sock in (server_side, client_side):
        sock.close()


def move_replies(moves):
    return [f"MOVE {col}" for col in moves]


@pytest.fixture
def replies_for():
    """Split one move list into the scripted replies of each player."""
    def split(moves):
        return move_replies(moves[0::2]), move_replies(moves[1::2])
    return split
