# Tradelog_app/dashboard/notifications.py

import logging
from collections import deque
from dataclasses import dataclass

logger = logging.getLogger(__name__)

LEVELS = ('success', 'error', 'warning', 'info')

_LOG_LEVELS = {
    'success': logging.INFO,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class Notifier:
    """Transient user-facing messages, newest last.

    ``sink`` is called with each Notification as it is raised (the CLI
    echoes them); the last ``maxlen`` are kept for inspection.
    """

    def __init__(self, sink=None, maxlen=50):
        self.sink = sink
        self.history = deque(maxlen=maxlen)

    def notify(self, message, level='info'):
        if level not in LEVELS:
            level = 'info'
        notification = Notification(level, message)
        self.history.append(notification)
        logger.log(_LOG_LEVELS[level], message)
        if self.sink is not None:
            self.sink(notification)
        return notification

    def success(self, message):
        return self.notify(message, 'success')

    def error(self, message):
        return self.notify(message, 'error')

    def warning(self, message):
        return self.notify(message, 'warning')

    def info(self, message):
        return self.notify(message, 'info')

    @property
    def last(self):
        return self.history[-1] if self.history else None
