"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, win and tie detection,
the game engine and the events it publishes.
"""

from connectfour.game.board import Board
from connectfour.game.events import EventChannel, MoveApplied, StatusChanged, TurnGranted
from connectfour.game.rules import GameEngine, MoveOutcome, has_winning_line, is_tied

__all__ = ['Board', 'GameEngine', 'MoveOutcome', 'has_winning_line', 'is_tied',
           'EventChannel', 'MoveApplied', 'StatusChanged', 'TurnGranted']
