from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NotificationType(str, Enum):
    CHAT_MESSAGE = "chat_message"
    FRIEND_REQUEST = "friend_request"


class FirestoreDocument(BaseModel):
    """Base for documents owned by the mobile app; unknown fields are ignored."""
    model_config = ConfigDict(extra="ignore")


class ChatMessage(FirestoreDocument):
    senderId: str
    content: Optional[str] = None
    imageUrl: Optional[str] = None
    audioUrl: Optional[str] = None


class Chat(FirestoreDocument):
    participants: List[str] = []

    @field_validator("participants", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class FriendRequest(FirestoreDocument):
    senderId: str
    receiverId: str


class UserProfile(FirestoreDocument):
    displayName: Optional[str] = None
    profilePhotos: List[str] = []
    fcmToken: Optional[str] = None

    @field_validator("displayName", "fcmToken", mode="before")
    @classmethod
    def _non_string_as_none(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("profilePhotos", mode="before")
    @classmethod
    def _string_urls_only(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return [url for url in value if isinstance(url, str) and url]

    @property
    def profile_photo(self) -> Optional[str]:
        return self.profilePhotos[0] if self.profilePhotos else None


class DocumentEvent(BaseModel):
    """A document-creation trigger: the created document and its path parameters."""
    path: str
    params: Dict[str, str] = Field(default_factory=dict)
    data: Dict[str, Any] = Field(default_factory=dict)
