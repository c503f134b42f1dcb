"""Delivery notification sinks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DeliveryNotification:
    package_id: int
    phone: str
    sender: str
    body: str


class Notifier(Protocol):
    def send(self, notification: DeliveryNotification) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the log instead of delivering them.

    Keeps the last messages in `sent` so callers can inspect what went out.
    There is no retry and no delivery receipt.
    """

    def __init__(self, history_size: int = 100) -> None:
        self.history_size = history_size
        self.sent: list[DeliveryNotification] = []

    def send(self, notification: DeliveryNotification) -> None:
        logger.info(
            "Notification from %s to %s about package %s: %s",
            notification.sender,
            notification.phone,
            notification.package_id,
            notification.body,
        )
        self.sent.append(notification)
        if len(self.sent) > self.history_size:
            del self.sent[: len(self.sent) - self.history_size]
