"""
events.py - Game events and the channel that fans them out

The engine publishes a closed set of events; each listener subscribes and
receives its own queue, which it drains on its own schedule.
"""

import queue
import threading
from dataclasses import dataclass
from typing import List, Union

from connectfour.utils import GameStatus, Player


@dataclass(frozen=True)
class MoveApplied:
    column: int
    row: int
    player: Player


@dataclass(frozen=True)
class StatusChanged:
    status: GameStatus


@dataclass(frozen=True)
class TurnGranted:
    player: Player


GameEvent = Union[MoveApplied, StatusChanged, TurnGranted]


class EventChannel:
    """Delivers every published event to every subscriber queue."""
    
    def __init__(self):
        self._subscribers: List[queue.Queue] = []
        self._lock = threading.Lock()
    
    def subscribe(self) -> queue.Queue:
        """Register a new listener and return its queue."""
        subscriber = queue.Queue()
        with self._lock:
            self._subscribers.append(subscriber)
        return subscriber
    
    def unsubscribe(self, subscriber: queue.Queue) -> None:
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)
    
    def publish(self, event: GameEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            subscriber.put(event)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)


def drain(subscriber: queue.Queue) -> List[GameEvent]:
    """Take every event currently waiting on a subscriber queue."""
    events = []
    while True:
        try:
            events.append(subscriber.get_nowait())
        except queue.Empty:
            return events
