import logging
from typing import List, Optional, Protocol

from firebase_admin import messaging

from .payload import NotificationPayload

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Sends one push notification and returns the delivery receipt."""

    def send(self, payload: NotificationPayload) -> str:
        ...


class FcmNotifier:
    """Notifier backed by Firebase Cloud Messaging."""

    def __init__(self, app=None, dry_run: bool = False):
        self.app = app
        self.dry_run = dry_run

    def send(self, payload: NotificationPayload) -> str:
        message = payload.to_message()
        response = messaging.send(message, dry_run=self.dry_run, app=self.app)
        logger.debug(f"FCM accepted {payload.type} notification: {response}")
        return response


class RecordingNotifier:
    """Notifier that keeps every payload instead of delivering it."""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[NotificationPayload] = []
        self.error = error

    def send(self, payload: NotificationPayload) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append(payload)
        return f"projects/local/messages/{len(self.sent)}"
