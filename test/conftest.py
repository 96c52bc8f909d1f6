import pytest

from campus_push.directory import InMemoryDirectory
from campus_push.notifier import RecordingNotifier
from campus_push.schemas import DocumentEvent


@pytest.fixture
def directory():
    """Alice (A) chats with Bob (B); Bob has a device token."""
    return InMemoryDirectory({
        'users': {
            'A': {'displayName': 'Alice', 'profilePhotos': [], 'fcmToken': 'tokA'},
            'B': {'displayName': 'Bob', 'profilePhotos': ['https://cdn.example/b.jpg'], 'fcmToken': 'tok1'},
        },
        'chats': {
            'chat1': {'participants': ['A', 'B']},
        },
    })


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def message_event():
    def make(data, chat_id='chat1', message_id='m1'):
        return DocumentEvent(
            path=f'chats/{chat_id}/messages/{message_id}',
            params={'chatId': chat_id, 'messageId': message_id},
            data=data,
        )
    return make


@pytest.fixture
def request_event():
    def make(data, request_id='r1'):
        return DocumentEvent(path=f'requests/{request_id}', params={'requestId': request_id}, data=data)
    return make
