"""
Cloud Functions entry points.

Deploy each function with a Firestore ``providers/cloud.firestore/eventTypes/document.create``
trigger on its path and ``--max-instances`` set to ``MAX_INSTANCES``:

- ``send_message_notification``: ``chats/{chatId}/messages/{messageId}``
- ``send_request_notification``: ``requests/{requestId}``
"""
import logging
from typing import Any, Dict, Optional

from .config import settings
from .dispatcher import Dispatcher, build_dispatcher
from .firebase_client import FirebaseClient
from .firestore_values import decode_fields
from .handlers import Outcome
from .logging_setup import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

MAX_INSTANCES = settings.max_instances

logger.info(f"Loaded {settings.service_name} in {settings.environment} environment (max instances: {MAX_INSTANCES})")

_dispatcher: Optional[Dispatcher] = None


def get_dispatcher() -> Dispatcher:
    """Build the dispatcher on first use and keep it for the process lifetime."""
    global _dispatcher
    if _dispatcher is None:
        firebase_client = FirebaseClient()
        _dispatcher = build_dispatcher(firebase_client.directory(), firebase_client.notifier())
    return _dispatcher


def set_dispatcher(dispatcher: Optional[Dispatcher]) -> None:
    global _dispatcher
    _dispatcher = dispatcher


def _resource_path(event: Dict[str, Any], context) -> str:
    value = event.get('value') or {}
    if value.get('name'):
        return value['name']
    resource = getattr(context, 'resource', None)
    if isinstance(resource, dict):
        # Some runtimes deliver the resource as {"name": ..., "service": ...}
        resource = resource.get('name')
    return resource or ''


def handle_document_created(event: Dict[str, Any], context) -> Optional[Outcome]:
    try:
        path = _resource_path(event, context)
        data = decode_fields((event.get('value') or {}).get('fields', {}))
    except (ValueError, TypeError, AttributeError) as e:
        logger.error(f"Could not decode Firestore event: {str(e)}")
        return Outcome.INVALID_EVENT

    try:
        return get_dispatcher().dispatch(path, data)
    except Exception as e:
        # The trigger platform must always see a successful invocation
        logger.error(f"Unhandled error dispatching {path}: {str(e)}", exc_info=True)
        return None


def send_message_notification(event, context):
    """Triggered on creation of chats/{chatId}/messages/{messageId}."""
    handle_document_created(event, context)


def send_request_notification(event, context):
    """Triggered on creation of requests/{requestId}."""
    handle_document_created(event, context)
