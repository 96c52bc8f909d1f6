from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the push notification functions"""

    # Application settings
    service_name: str = "campus-push"
    log_level: str = "INFO"
    environment: str = "dev"

    # Firebase settings
    firebase_secret: Optional[str] = None  # service account JSON, ADC when unset
    firebase_project_id: Optional[str] = None

    # Platform concurrency cap, applied at deploy time
    max_instances: int = 10

    # Firestore collections
    users_collection: str = "users"
    chats_collection: str = "chats"
    requests_collection: str = "requests"

    # Notification presentation
    message_preview_length: int = 50
    notification_icon: str = "ic_notification"
    notification_color: str = "#8B5CF6"
    chat_channel_id: str = "chat_messages"
    request_channel_id: str = "friend_requests"
    click_action: str = "FLUTTER_NOTIFICATION_CLICK"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Create settings instance
settings = Settings()
