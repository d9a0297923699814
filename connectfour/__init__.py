"""
connectfour - Networked two-player Connect Four

This package provides a server-authoritative Connect Four game played over
a line-oriented text protocol: the board and win detection, the per-game
coordinator, player sessions, the pairing server, and a text client.
"""

# Version number
__version__ = '0.1.0'
