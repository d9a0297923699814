"""
coordinator.py - Runs one complete game between two player sessions

The coordinator alternates MAKE_MOVE requests between the sessions, feeds
each answer into the engine, broadcasts the result and stops on the first
win, tie or failure. Both sessions are always closed when it returns.
"""

from connectfour.config import GameConfig
from connectfour.debug import DebugManager, debug as default_debug
from connectfour.exceptions import ConnectFourException
from connectfour.game.rules import GameEngine
from connectfour.utils import GameStatus, Player


class GameCoordinator:
    """
    Drives a single game on the calling thread.
    
    Sessions are anything with the PlayerSession surface: request_move(),
    notify_move_made(), notify_won(), notify_lost(), notify_tied(),
    notify_error() and close().
    """
    
    def __init__(self, player_one, player_two, config: GameConfig = None,
                 debug: DebugManager = None):
        self.debug = debug or default_debug
        self.engine = GameEngine(config, debug=self.debug)
        self.sessions = {Player.ONE: player_one, Player.TWO: player_two}
    
    @property
    def status(self) -> GameStatus:
        return self.engine.status
    
    def run(self) -> GameStatus:
        """
        Play until the game ends.
        
        Returns:
            The terminal status: won, tied or aborted
        """
        self.debug.info("Starting game", "coordinator")
        try:
            while not self.engine.status.is_terminal():
                self._play_turn()
        except ConnectFourException as e:
            self._abort(str(e))
        except Exception as e:
            self._abort(f"Internal server error: {e}")
            raise
        finally:
            self._close_sessions()
        
        self.debug.info(f"Game over after {self.engine.moves_applied} moves: {self.engine.status}",
                        "coordinator")
        return self.engine.status
    
    def _play_turn(self) -> None:
        mover = self.engine.current_player
        current = self.sessions[mover]
        other = self.sessions[mover.other()]
        
        column = current.request_move()
        outcome = self.engine.apply_move(column)
        self.debug.debug(f"{mover.name} played column {column} (row {outcome.row})", "coordinator")
        
        current.notify_move_made(column)
        other.notify_move_made(column)
        
        self.debug.start_timer("win_check")
        won = self.engine.has_winning_line()
        self.debug.end_timer("win_check", "coordinator")
        
        if won:
            current.notify_won()
            other.notify_lost()
            self.engine.finish(GameStatus.won_by(mover))
        elif self.engine.is_tied():
            current.notify_tied()
            other.notify_tied()
            self.engine.finish(GameStatus.tied())
    
    def _abort(self, reason: str) -> None:
        self.debug.warning(f"Aborting game: {reason}", "coordinator")
        for session in self.sessions.values():
            session.notify_error(reason)
        self.engine.finish(GameStatus.aborted(reason))
    
    def _close_sessions(self) -> None:
        for session in self.sessions.values():
            session.close()
