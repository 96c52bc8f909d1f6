"""
Push notification payloads.

A ``NotificationPayload`` is a fixed structure: optional rich-media fields are
set explicitly by the builders, never merged in. ``as_dict`` renders the exact
wire shape the mobile client expects and ``to_message`` renders the same
content as a Firebase Admin ``messaging.Message``.
"""
from typing import Any, Dict, Optional

from firebase_admin import messaging
from pydantic import BaseModel

from .config import settings
from .schemas import ChatMessage, NotificationType

PHOTO_LABEL = "📷 Photo"
VOICE_MESSAGE_LABEL = "🎤 Voice message"
FALLBACK_MESSAGE_BODY = "New message"
FRIEND_REQUEST_TITLE = "New Request"
ELLIPSIS = "..."


class AndroidHints(BaseModel):
    channel_id: str
    icon: str
    color: str
    image_url: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        notification = {
            'channelId': self.channel_id,
            'priority': 'high',
            'defaultSound': True,
            'defaultVibrateTimings': True,
            'icon': self.icon,
            'color': self.color,
        }
        if self.image_url:
            notification['imageUrl'] = self.image_url
            notification['style'] = 'bigPicture'
        return {'priority': 'high', 'notification': notification}

    def to_config(self) -> messaging.AndroidConfig:
        # The Admin SDK has no "style" field; an image yields the big picture layout.
        return messaging.AndroidConfig(
            priority='high',
            notification=messaging.AndroidNotification(
                channel_id=self.channel_id,
                priority='high',
                default_sound=True,
                default_vibrate_timings=True,
                icon=self.icon,
                color=self.color,
                image=self.image_url or None,
            ),
        )


class ApnsHints(BaseModel):
    title: str
    body: str
    attachment_url: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        aps = {
            'sound': 'default',
            'badge': 1,
            'alert': {'title': self.title, 'body': self.body},
        }
        if self.attachment_url:
            aps['mutable-content'] = 1
            aps['attachment-url'] = self.attachment_url
        return {'payload': {'aps': aps}}

    def to_config(self) -> messaging.APNSConfig:
        aps = messaging.Aps(
            alert=messaging.ApsAlert(title=self.title, body=self.body),
            badge=1,
            sound='default',
            mutable_content=True if self.attachment_url else None,
            custom_data={'attachment-url': self.attachment_url} if self.attachment_url else None,
        )
        return messaging.APNSConfig(payload=messaging.APNSPayload(aps=aps))


class NotificationPayload(BaseModel):
    token: str
    title: str
    body: str
    data: Dict[str, str]
    android: AndroidHints
    apns: ApnsHints

    @property
    def type(self) -> str:
        return self.data.get('type', '')

    def as_dict(self) -> Dict[str, Any]:
        return {
            'token': self.token,
            'notification': {'title': self.title, 'body': self.body},
            'data': dict(self.data),
            'android': self.android.as_dict(),
            'apns': self.apns.as_dict(),
        }

    def to_message(self) -> messaging.Message:
        return messaging.Message(
            token=self.token,
            notification=messaging.Notification(title=self.title, body=self.body),
            data=dict(self.data),
            android=self.android.to_config(),
            apns=self.apns.to_config(),
        )


def derive_message_body(message: ChatMessage, preview_length: Optional[int] = None) -> str:
    """
    Pick the notification body for a chat message.

    Attachments win over text: an image gives the photo label, audio gives the
    voice message label. Text longer than ``preview_length`` is cut and gets an
    ellipsis; empty text falls back to a generic label.
    """
    if preview_length is None:
        preview_length = settings.message_preview_length

    if message.imageUrl:
        return PHOTO_LABEL
    if message.audioUrl:
        return VOICE_MESSAGE_LABEL
    content = message.content or ''
    if len(content) > preview_length:
        return content[:preview_length] + ELLIPSIS
    return content or FALLBACK_MESSAGE_BODY


def _stringify(data: Dict[str, Any]) -> Dict[str, str]:
    # FCM data maps only carry strings
    return {key: '' if value is None else str(value) for key, value in data.items()}


def build_chat_message_payload(token: str,
                               chat_id: str,
                               message_id: str,
                               message: ChatMessage,
                               sender_name: str,
                               sender_photo: Optional[str] = None) -> NotificationPayload:
    body = derive_message_body(message)
    data = _stringify({
        'type': NotificationType.CHAT_MESSAGE.value,
        'chatId': chat_id,
        'senderId': message.senderId,
        'senderName': sender_name,
        'senderProfilePic': sender_photo or '',
        'messageId': message_id,
        'click_action': settings.click_action,
    })
    return NotificationPayload(
        token=token,
        title=sender_name,
        body=body,
        data=data,
        android=AndroidHints(
            channel_id=settings.chat_channel_id,
            icon=settings.notification_icon,
            color=settings.notification_color,
            image_url=sender_photo or None,
        ),
        apns=ApnsHints(title=sender_name, body=body, attachment_url=sender_photo or None),
    )


def build_friend_request_payload(token: str,
                                 request_id: str,
                                 sender_id: str,
                                 sender_name: str) -> NotificationPayload:
    body = f"{sender_name} sent you a friend request"
    data = _stringify({
        'type': NotificationType.FRIEND_REQUEST.value,
        'requestId': request_id,
        'senderId': sender_id,
        'senderName': sender_name,
        'click_action': settings.click_action,
    })
    return NotificationPayload(
        token=token,
        title=FRIEND_REQUEST_TITLE,
        body=body,
        data=data,
        android=AndroidHints(
            channel_id=settings.request_channel_id,
            icon=settings.notification_icon,
            color=settings.notification_color,
        ),
        apns=ApnsHints(title=FRIEND_REQUEST_TITLE, body=body),
    )
