"""
Activity source backed by the Qt application's input event stream.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from PySide6.QtCore import QCoreApplication, QEvent, QObject

from session_shared.activity import ALL_SIGNALS, ActivityHandler, ActivitySignal
from session_timeout_app.session_timeout_app import logger as app_logger

_LOGGER = app_logger.get_logger()

EVENT_SIGNALS: Dict[QEvent.Type, ActivitySignal] = {
    QEvent.Type.MouseButtonPress: ActivitySignal.POINTER_PRESS,
    QEvent.Type.KeyPress: ActivitySignal.KEY_PRESS,
    QEvent.Type.Wheel: ActivitySignal.SCROLL,
    QEvent.Type.Scroll: ActivitySignal.SCROLL,
    QEvent.Type.TouchBegin: ActivitySignal.TOUCH_START,
    QEvent.Type.MouseMove: ActivitySignal.POINTER_MOVE,
}


class QtActivitySource(QObject):
    """
    Classifies application-wide input events into activity signals.

    The source installs itself as an event filter on the running
    QCoreApplication only while somebody is subscribed, and never consumes
    the events it observes.
    """

    def __init__(self, app: Optional[QCoreApplication] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._app = app
        self._handlers: Dict[ActivitySignal, List[ActivityHandler]] = {signal: [] for signal in ALL_SIGNALS}
        self._installed = False

    @property
    def is_installed(self) -> bool:
        return self._installed

    def subscribe(self, signals: Iterable[ActivitySignal], handler: ActivityHandler) -> None:
        for signal in signals:
            handlers = self._handlers[signal]
            if handler not in handlers:
                handlers.append(handler)
        self._sync_filter()

    def unsubscribe(self, signals: Iterable[ActivitySignal], handler: ActivityHandler) -> None:
        for signal in signals:
            handlers = self._handlers[signal]
            if handler in handlers:
                handlers.remove(handler)
        self._sync_filter()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt override
        # One gesture can reach this filter several times as it propagates
        # through windows and widgets; handlers only ever advance a timestamp.
        signal = EVENT_SIGNALS.get(event.type())
        if signal is not None:
            for handler in list(self._handlers[signal]):
                handler(signal)
        return False

    def _sync_filter(self) -> None:
        wanted = any(self._handlers.values())
        if wanted == self._installed:
            return

        app = self._app or QCoreApplication.instance()
        if app is None:
            if wanted:
                _LOGGER.warning("No Qt application running; activity events will not be observed.")
            return

        if wanted:
            app.installEventFilter(self)
            _LOGGER.debug("Installed application activity filter.")
        else:
            app.removeEventFilter(self)
            _LOGGER.debug("Removed application activity filter.")
        self._installed = wanted
