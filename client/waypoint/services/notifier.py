"""Notifier: user-visible acknowledgement and error messages ("toasts")."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    title: str
    description: str = ""
    variant: str = "default"  # "default" | "success" | "destructive"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant,
            "created_at": self.created_at.isoformat(),
        }


class Notifier:
    """Collects notifications for the UI layer and optionally forwards them to a listener."""

    def __init__(self, listener=None):
        self.history: list[Notification] = []
        self._listener = listener

    def info(self, title: str, description: str = "") -> Notification:
        return self._emit(Notification(title=title, description=description))

    def success(self, title: str, description: str = "") -> Notification:
        return self._emit(Notification(title=title, description=description, variant="success"))

    def error(self, title: str, description: str = "") -> Notification:
        return self._emit(Notification(title=title, description=description, variant="destructive"))

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()

    def _emit(self, notification: Notification) -> Notification:
        self.history.append(notification)
        logger.debug(f"Notify [{notification.variant}] {notification.title}: {notification.description}")
        if self._listener is not None:
            self._listener(notification)
        return notification
