import logging
from abc import ABC, abstractmethod
from enum import Enum

from pydantic import ValidationError

from .directory import BaseDirectory
from .notifier import Notifier
from .payload import build_chat_message_payload, build_friend_request_payload
from .schemas import ChatMessage, DocumentEvent, FriendRequest

logger = logging.getLogger(__name__)

UNKNOWN_SENDER_NAME = "Someone"


class Outcome(str, Enum):
    SENT = "sent"
    CHAT_NOT_FOUND = "chat_not_found"
    NO_RECIPIENT = "no_recipient"
    RECIPIENT_NOT_FOUND = "recipient_not_found"
    NO_TOKEN = "no_token"
    SEND_FAILED = "send_failed"
    INVALID_EVENT = "invalid_event"


class NotificationHandler(ABC):
    """
    Base for document-creation handlers.

    A handler performs its reads and at most one send, in sequence. Nothing is
    raised back to the trigger platform: the returned ``Outcome`` and the log
    lines are the only record of what happened.
    """

    def __init__(self, directory: BaseDirectory, notifier: Notifier):
        self.directory = directory
        self.notifier = notifier

    @abstractmethod
    def handle(self, event: DocumentEvent) -> Outcome:
        ...

    def _sender_name_and_photo(self, sender_id: str):
        try:
            sender = self.directory.get_user(sender_id)
        except ValidationError as e:
            logger.warning(f"Unreadable sender profile, using placeholder name: {str(e)}", extra={'senderId': sender_id})
            return UNKNOWN_SENDER_NAME, None
        if sender is None:
            return UNKNOWN_SENDER_NAME, None
        return sender.displayName or UNKNOWN_SENDER_NAME, sender.profile_photo


class MessageNotifier(NotificationHandler):
    """Notifies the other participant of a chat when a message is created."""

    def handle(self, event: DocumentEvent) -> Outcome:
        chat_id = event.params.get('chatId', '')
        message_id = event.params.get('messageId', '')

        try:
            message = ChatMessage.model_validate(event.data)
        except ValidationError as e:
            logger.error("Invalid message document", extra={'chatId': chat_id, 'messageId': message_id, 'error': str(e)})
            return Outcome.INVALID_EVENT

        logger.info("New message created", extra={'chatId': chat_id, 'messageId': message_id, 'senderId': message.senderId})

        try:
            chat = self.directory.get_chat(chat_id)
            if chat is None:
                logger.error("Chat document not found", extra={'chatId': chat_id})
                return Outcome.CHAT_NOT_FOUND

            recipient_id = None
            # A chat needs two distinct members; malformed chats are reported, not repaired
            if len(set(chat.participants)) >= 2:
                recipient_id = next((p for p in chat.participants if p != message.senderId), None)
            if not recipient_id:
                logger.warning("No recipient found", extra={'participants': chat.participants, 'senderId': message.senderId})
                return Outcome.NO_RECIPIENT

            recipient = self.directory.get_user(recipient_id)
            if recipient is None:
                logger.error("Recipient user not found", extra={'recipientId': recipient_id})
                return Outcome.RECIPIENT_NOT_FOUND

            if not recipient.fcmToken:
                logger.warning("Recipient has no FCM token", extra={'recipientId': recipient_id})
                return Outcome.NO_TOKEN

            sender_name, sender_photo = self._sender_name_and_photo(message.senderId)

            payload = build_chat_message_payload(
                token=recipient.fcmToken,
                chat_id=chat_id,
                message_id=message_id,
                message=message,
                sender_name=sender_name,
                sender_photo=sender_photo,
            )
            response = self.notifier.send(payload)

            logger.info("Push notification sent successfully", extra={'messageId': response, 'recipientId': recipient_id, 'senderName': sender_name})
            # Unread counters are maintained by the client app
            return Outcome.SENT

        except Exception as e:
            logger.error(f"Error sending push notification: {str(e)}", exc_info=True, extra={'chatId': chat_id, 'messageId': message_id})
            return Outcome.SEND_FAILED


class RequestNotifier(NotificationHandler):
    """Notifies the receiver of a friend request when the request is created."""

    def handle(self, event: DocumentEvent) -> Outcome:
        request_id = event.params.get('requestId', '')

        try:
            request = FriendRequest.model_validate(event.data)
        except ValidationError as e:
            logger.error("Invalid request document", extra={'requestId': request_id, 'error': str(e)})
            return Outcome.INVALID_EVENT

        logger.info("New request created", extra={'requestId': request_id, 'senderId': request.senderId, 'receiverId': request.receiverId})

        try:
            receiver = self.directory.get_user(request.receiverId)
            if receiver is None:
                logger.error("Receiver user not found", extra={'receiverId': request.receiverId})
                return Outcome.RECIPIENT_NOT_FOUND

            if not receiver.fcmToken:
                logger.warning("Receiver has no FCM token", extra={'receiverId': request.receiverId})
                return Outcome.NO_TOKEN

            sender_name, _ = self._sender_name_and_photo(request.senderId)

            payload = build_friend_request_payload(
                token=receiver.fcmToken,
                request_id=request_id,
                sender_id=request.senderId,
                sender_name=sender_name,
            )
            response = self.notifier.send(payload)

            logger.info("Friend request notification sent successfully", extra={'messageId': response, 'receiverId': request.receiverId, 'senderName': sender_name})
            return Outcome.SENT

        except Exception as e:
            logger.error(f"Error sending friend request notification: {str(e)}", exc_info=True, extra={'requestId': request_id})
            return Outcome.SEND_FAILED
