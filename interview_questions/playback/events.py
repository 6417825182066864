"""
Event bus for playback state changes and user notices.

Lets the UI layer (or a CLI) follow the player without the player knowing who
is listening.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import structlog

logger = structlog.get_logger()

STATE_CHANGED = "state_changed"
NOTICE = "notice"
ATTEMPT_FAILED = "attempt_failed"


@dataclass
class PlaybackEvent:
    event_type: str
    state: Optional[str] = None
    message: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


class PlaybackEventBus:
    """Async pub-sub for ``PlaybackEvent``s."""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable[[PlaybackEvent], Any]) -> None:
        self._subscribers.setdefault(event_type, []).append(callback)
        logger.debug("Playback subscriber registered",
                     event_type=event_type,
                     total_subscribers=len(self._subscribers[event_type]))

    def unsubscribe(self, event_type: str, callback: Callable) -> bool:
        try:
            self._subscribers.get(event_type, []).remove(callback)
            return True
        except ValueError:
            return False

    async def publish(self, event: PlaybackEvent) -> None:
        """Deliver ``event`` to every subscriber; subscriber failures are logged."""
        subscribers = list(self._subscribers.get(event.event_type, []))
        if not subscribers:
            return

        tasks = []
        for callback in subscribers:
            if asyncio.iscoroutinefunction(callback):
                tasks.append(callback(event))
            else:
                tasks.append(asyncio.to_thread(callback, event))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        for callback, result in zip(subscribers, results):
            if isinstance(result, Exception):
                logger.error("Playback subscriber failed",
                             event_type=event.event_type,
                             callback=getattr(callback, "__name__", repr(callback)),
                             error=str(result))

    def get_subscriber_count(self, event_type: str) -> int:
        return len(self._subscribers.get(event_type, []))
