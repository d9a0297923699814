"""
debug.py - Leveled logging for the Connect Four server and client

This module provides a DebugManager that wraps a named standard-library
logger with configurable levels, component filtering and optional file
output. Instances are passed into the classes that log; the module-level
``debug`` instance is only the default when none is supplied.
"""

import logging
import sys
import time
from enum import Enum
from typing import List, Optional, Dict, Set

# Define debug levels as an Enum for type checking
class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

# Mapping to standard logging levels
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG - 5  # Python logging doesn't have TRACE
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Manages leveled logging for one logger name."""
    
    def __init__(self, name: str = "connectfour", level: DebugLevel = DebugLevel.INFO,
                 stream=None):
        self.name = name
        self._level = level
        self._enabled = True
        self._log_file = None
        self._enabled_components: Set[str] = set()  # Empty set means all components
        self._logger = self._setup_logger(stream)
        self._timers: Dict[str, float] = {}
    
    def _setup_logger(self, stream) -> logging.Logger:
        """Configure and return the logger for this manager."""
        logger = logging.getLogger(self.name)
        logger.setLevel(LEVEL_MAP[self._level])
        logger.propagate = False
        
        # Only one console handler per logger name
        if not any(getattr(h, '_connectfour_console', False) for h in logger.handlers):
            console_handler = logging.StreamHandler(stream or sys.stdout)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            console_handler._connectfour_console = True
            logger.addHandler(console_handler)
        
        return logger
    
    @property
    def level(self) -> DebugLevel:
        return self._level
    
    @property
    def logger(self) -> logging.Logger:
        return self._logger
    
    def configure(self, level: DebugLevel = None, 
                 enabled: bool = None,
                 log_file: str = None,
                 components: List[str] = None):
        """
        Configure the debug manager settings.
        
        Args:
            level: Debug level to set
            enabled: Whether logging is enabled
            log_file: Path to log file (empty string disables file logging)
            components: List of components to log for (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])
        
        if enabled is not None:
            self._enabled = enabled
        
        if log_file is not None:
            self._log_file = log_file or None
            
            # Remove existing file handlers
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()
            
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)
        
        if components is not None:
            self._enabled_components = set(components)
    
    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        """Determine if a message should be logged based on settings."""
        if not self._enabled or level == DebugLevel.NONE:
            return False
        
        if level.value > self._level.value:
            return False
        
        if component and self._enabled_components and component not in self._enabled_components:
            return False
        
        return True
    
    def log(self, level: DebugLevel, message: str, component: str = None):
        """
        Log a message at the specified level.
        
        Args:
            level: Debug level for the message
            message: The message to log
            component: Optional component name for filtering
        """
        if not self._should_log(level, component):
            return
        
        formatted_message = message
        if component:
            formatted_message = f"[{component}] {message}"
        
        if level == DebugLevel.TRACE:
            self._logger.log(LEVEL_MAP[DebugLevel.TRACE], f"TRACE: {formatted_message}")
        else:
            self._logger.log(LEVEL_MAP[level], formatted_message)
    
    # Convenience methods for each level
    def error(self, message: str, component: str = None):
        """Log an error message."""
        self.log(DebugLevel.ERROR, message, component)
    
    def warning(self, message: str, component: str = None):
        """Log a warning message."""
        self.log(DebugLevel.WARNING, message, component)
    
    def info(self, message: str, component: str = None):
        """Log an info message."""
        self.log(DebugLevel.INFO, message, component)
    
    def debug(self, message: str, component: str = None):
        """Log a debug message."""
        self.log(DebugLevel.DEBUG, message, component)
    
    def trace(self, message: str, component: str = None):
        """Log a trace message."""
        self.log(DebugLevel.TRACE, message, component)
    
    def start_timer(self, marker_name: str):
        """Start a named timer."""
        self._timers[marker_name] = time.perf_counter()
    
    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """
        End a timer and log the elapsed time at TRACE.
        
        Returns:
            Elapsed time in seconds, or None if the marker was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None
        
        elapsed = time.perf_counter() - started
        self.trace(f"Timer [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed
    
    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a command-line string. Returns False if unknown."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False
        
        self.configure(level=level)
        self.debug(f"Debug level set to {level.name}")
        return True


# Default manager used when a class is not handed one explicitly
debug = DebugManager()
