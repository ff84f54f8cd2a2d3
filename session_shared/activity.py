"""
Activity signal classes and the subscription contract used to observe them.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple


class ActivitySignal(Enum):
    POINTER_PRESS = "pointer_press"
    KEY_PRESS = "key_press"
    SCROLL = "scroll"
    TOUCH_START = "touch_start"
    POINTER_MOVE = "pointer_move"


ALL_SIGNALS: Tuple[ActivitySignal, ...] = (
    ActivitySignal.POINTER_PRESS,
    ActivitySignal.KEY_PRESS,
    ActivitySignal.SCROLL,
    ActivitySignal.TOUCH_START,
    ActivitySignal.POINTER_MOVE,
)

# High-frequency classes whose updates are rate limited by the monitor.
THROTTLED_SIGNALS = frozenset({ActivitySignal.POINTER_MOVE})

ActivityHandler = Callable[[ActivitySignal], None]


class ActivitySource(Protocol):
    """Anything that can deliver activity signals to subscribed handlers."""

    def subscribe(self, signals: Iterable[ActivitySignal], handler: ActivityHandler) -> None:
        ...

    def unsubscribe(self, signals: Iterable[ActivitySignal], handler: ActivityHandler) -> None:
        ...


class ManualActivitySource:
    """
    Activity source driven by explicit `emit` calls.

    Used by tests and by hosts that feed activity from somewhere other than the
    Qt input stream.
    """

    def __init__(self) -> None:
        self._handlers: Dict[ActivitySignal, List[ActivityHandler]] = {signal: [] for signal in ALL_SIGNALS}

    def subscribe(self, signals: Iterable[ActivitySignal], handler: ActivityHandler) -> None:
        for signal in signals:
            handlers = self._handlers[signal]
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(self, signals: Iterable[ActivitySignal], handler: ActivityHandler) -> None:
        for signal in signals:
            handlers = self._handlers[signal]
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, signal: ActivitySignal) -> None:
        # Copy so handlers may unsubscribe while being dispatched.
        for handler in list(self._handlers[signal]):
            handler(signal)

    def subscriber_count(self, signal: Optional[ActivitySignal] = None) -> int:
        if signal is not None:
            return len(self._handlers[signal])
        return sum(len(handlers) for handlers in self._handlers.values())
