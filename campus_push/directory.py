import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .config import settings
from .schemas import Chat, UserProfile

logger = logging.getLogger(__name__)


class BaseDirectory(ABC):
    """Read-only lookup of documents by collection and id, with typed reads on top."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        data = self.get(settings.users_collection, user_id)
        if data is None:
            return None
        return UserProfile.model_validate(data)

    def get_chat(self, chat_id: str) -> Optional[Chat]:
        data = self.get(settings.chats_collection, chat_id)
        if data is None:
            return None
        return Chat.model_validate(data)


class FirestoreDirectory(BaseDirectory):
    """Directory backed by a Firestore client."""

    def __init__(self, firestore_db):
        self.firestore_db = firestore_db

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        # Firestore rejects empty document paths
        if not doc_id:
            return None

        snapshot = self.firestore_db.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            logger.debug(f"Document {collection}/{doc_id} does not exist")
            return None
        return snapshot.to_dict() or {}


class InMemoryDirectory(BaseDirectory):
    """Directory over plain dictionaries, keyed by collection then document id."""

    def __init__(self, collections: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self.collections = collections or {}
        self.reads = []

    def put(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        self.collections.setdefault(collection, {})[doc_id] = data

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        self.reads.append((collection, doc_id))
        if not doc_id:
            return None
        data = self.collections.get(collection, {}).get(doc_id)
        return dict(data) if data is not None else None
