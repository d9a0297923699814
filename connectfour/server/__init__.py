"""
connectfour.server - Server side of networked Connect Four

Player sessions, the per-game coordinator and the pairing server.
"""

from connectfour.server.coordinator import GameCoordinator
from connectfour.server.server import ConnectFourServer
from connectfour.server.session import PlayerSession, SessionState

__all__ = ['ConnectFourServer', 'GameCoordinator', 'PlayerSession', 'SessionState']
