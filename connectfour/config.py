"""
config.py - Game and server configuration

Defaults match the standard 6x7 board with lines of four. The CLI builds
these objects from its flags; tests build them directly.
"""

from dataclasses import dataclass, field
from typing import Optional

from connectfour.utils import ROWS, COLS, WIN_LEN

DEFAULT_HOST = "0.0.0.0"
DEFAULT_READ_TIMEOUT: Optional[float] = None  # block forever unless configured
LISTEN_BACKLOG = 2


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and the line length needed to win."""
    rows: int = ROWS
    cols: int = COLS
    win_len: int = WIN_LEN
    
    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.rows}x{self.cols}")
        if self.win_len < 1:
            raise ValueError(f"win_len must be positive, got {self.win_len}")
        if self.win_len > max(self.rows, self.cols):
            raise ValueError(
                f"win_len {self.win_len} cannot fit on a {self.rows}x{self.cols} board")


@dataclass(frozen=True)
class ServerConfig:
    """Listening address, per-socket read timeout and game limit."""
    port: int
    host: str = DEFAULT_HOST
    read_timeout: Optional[float] = DEFAULT_READ_TIMEOUT
    max_games: Optional[int] = None  # None serves forever
    game: GameConfig = field(default_factory=GameConfig)
    
    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Port must be in 0..65535, got {self.port}")
        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ValueError(f"read_timeout must be positive, got {self.read_timeout}")
        if self.max_games is not None and self.max_games < 1:
            raise ValueError(f"max_games must be positive, got {self.max_games}")
