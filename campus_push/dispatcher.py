import logging
from typing import Any, Dict, List, Optional

from .handlers import MessageNotifier, NotificationHandler, Outcome, RequestNotifier
from .schemas import DocumentEvent

logger = logging.getLogger(__name__)

MESSAGE_PATTERN = "chats/{chatId}/messages/{messageId}"
REQUEST_PATTERN = "requests/{requestId}"

DOCUMENTS_MARKER = "/documents/"


def document_path(resource: str) -> str:
    """Strip ``projects/{p}/databases/{d}/documents/`` from a trigger resource name."""
    if DOCUMENTS_MARKER in resource:
        resource = resource.split(DOCUMENTS_MARKER, 1)[1]
    return resource.strip('/')


class Route:
    def __init__(self, pattern: str, handler: NotificationHandler):
        self.pattern = pattern
        self.segments = pattern.strip('/').split('/')
        self.handler = handler

    def match(self, path: str) -> Optional[Dict[str, str]]:
        parts = path.strip('/').split('/')
        if len(parts) != len(self.segments):
            return None

        params = {}
        for segment, part in zip(self.segments, parts):
            if segment.startswith('{') and segment.endswith('}'):
                if not part:
                    return None
                params[segment[1:-1]] = part
            elif segment != part:
                return None
        return params


class Dispatcher:
    """Routes document-creation events to the handler registered for their path."""

    def __init__(self, routes: Optional[List[Route]] = None):
        self.routes = routes or []

    def register(self, pattern: str, handler: NotificationHandler) -> None:
        self.routes.append(Route(pattern, handler))

    def dispatch(self, path: str, data: Dict[str, Any]) -> Optional[Outcome]:
        path = document_path(path)
        for route in self.routes:
            params = route.match(path)
            if params is None:
                continue
            event = DocumentEvent(path=path, params=params, data=data or {})
            outcome = route.handler.handle(event)
            logger.debug(f"Handled {path} with outcome {outcome.value}")
            return outcome

        logger.warning(f"No handler registered for document {path}")
        return None


def build_dispatcher(directory, notifier) -> Dispatcher:
    dispatcher = Dispatcher()
    dispatcher.register(MESSAGE_PATTERN, MessageNotifier(directory, notifier))
    dispatcher.register(REQUEST_PATTERN, RequestNotifier(directory, notifier))
    return dispatcher
