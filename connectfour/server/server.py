"""
server.py - Accepts client connections and pairs them into games

Each accepted connection is greeted with CONNECT straight away. Every two
connections become one game, run by its own GameCoordinator on its own
thread; games share nothing.
"""

import itertools
import socket
import threading
from typing import List, Optional, Tuple

from connectfour.config import LISTEN_BACKLOG, ServerConfig
from connectfour.debug import DebugManager, debug as default_debug
from connectfour.server.coordinator import GameCoordinator
from connectfour.server.session import PlayerSession
from connectfour.utils import GameStatus


class ConnectFourServer:
    """Listens for players and starts a game for every pair."""
    
    def __init__(self, config: ServerConfig, debug: DebugManager = None):
        self.config = config
        self.debug = debug or default_debug
        self.results: List[GameStatus] = []
        self._threads: List[threading.Thread] = []
        self._closed = threading.Event()
        self._results_lock = threading.Lock()
        
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._listener.bind((config.host, config.port))
            self._listener.listen(LISTEN_BACKLOG)
        except OSError:
            self._listener.close()
            raise
        self.debug.info(f"Listening on {self.address[0]}:{self.address[1]}", "server")
    
    @property
    def address(self) -> Tuple[str, int]:
        return self._listener.getsockname()[:2]
    
    def _accept_player(self, name: str) -> Optional[PlayerSession]:
        self.debug.info(f"Waiting for {name}...", "server")
        try:
            conn, addr = self._listener.accept()
        except OSError:
            if self._closed.is_set():
                return None
            raise
        conn.settimeout(self.config.read_timeout)
        session = PlayerSession(conn, name=f"{name} {addr[0]}:{addr[1]}", debug=self.debug)
        session.connect()
        self.debug.info(f"{name.capitalize()} connected from {addr[0]}:{addr[1]}", "server")
        return session
    
    def serve(self) -> List[GameStatus]:
        """
        Accept pairs until max_games is reached or close() is called.
        
        Returns:
            The terminal status of every game that finished
        """
        games = itertools.count(1) if self.config.max_games is None \
            else range(1, self.config.max_games + 1)
        try:
            for game_number in games:
                player_one = self._accept_player("player one")
                if player_one is None:
                    break
                player_two = self._accept_player("player two")
                if player_two is None:
                    player_one.close()
                    break
                self._start_game(game_number, player_one, player_two)
        finally:
            self.close()
        
        for thread in self._threads:
            thread.join()
        return list(self.results)
    
    def _start_game(self, game_number: int, player_one: PlayerSession,
                    player_two: PlayerSession) -> None:
        coordinator = GameCoordinator(player_one, player_two, self.config.game, debug=self.debug)
        
        def play():
            status = coordinator.run()
            with self._results_lock:
                self.results.append(status)
            self.debug.info(f"Game {game_number} finished: {status}", "server")
        
        self.debug.info(f"Starting game {game_number}", "server")
        thread = threading.Thread(target=play, name=f"game-{game_number}", daemon=True)
        self._threads.append(thread)
        thread.start()
    
    def close(self) -> None:
        """Stop accepting connections. Running games finish on their own."""
        if self._closed.is_set():
            return
        self._closed.set()
        try:
            # Wakes a thread blocked in accept() before the socket goes away
            self._listener.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            self.debug.trace(f"Listener shutdown: {e}", "server")
        try:
            self._listener.close()
        except OSError as e:
            self.debug.warning(f"Error closing listener: {e}", "server")
