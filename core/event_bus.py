# core/event_bus.py

import logging
from collections import defaultdict
from typing import Callable

log = logging.getLogger(__name__)


class EventBus:
    """
    Synchronous observer channel. One bus per console; handlers run on the
    caller's thread, and a failing handler never stops the others.
    """

    def __init__(self):
        self._handlers: dict[str, list[Callable]] = defaultdict(list)

    def register(self, event: str, handler: Callable):
        self._handlers[event].append(handler)

    def unregister(self, event: str, handler: Callable):
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def fire(self, event: str, *args, **kwargs):
        for handler in list(self._handlers[event]):
            try:
                handler(*args, **kwargs)
            except Exception as e:
                log.exception(f"Error in '{event}' handler: {e}")
