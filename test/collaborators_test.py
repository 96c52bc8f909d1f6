import json
from unittest import mock

import pytest

from campus_push.directory import BaseDirectory, FirestoreDirectory, InMemoryDirectory
from campus_push.notifier import FcmNotifier
from campus_push.payload import build_friend_request_payload
from campus_push.schemas import UserProfile


def firestore_returning(exists, data=None):
    snapshot = mock.Mock(exists=exists)
    snapshot.to_dict.return_value = data
    db = mock.MagicMock()
    db.collection.return_value.document.return_value.get.return_value = snapshot
    return db


def test_firestore_directory_reads_document():
    db = firestore_returning(True, {'participants': ['A', 'B']})
    directory = FirestoreDirectory(db)

    chat = directory.get_chat('chat1')

    db.collection.assert_called_with('chats')
    db.collection.return_value.document.assert_called_with('chat1')
    assert chat.participants == ['A', 'B']


def test_firestore_directory_missing_document():
    directory = FirestoreDirectory(firestore_returning(False))

    assert directory.get('users', 'nobody') is None
    assert directory.get_user('nobody') is None


def test_firestore_directory_skips_blank_ids():
    db = firestore_returning(True, {})
    assert FirestoreDirectory(db).get('users', '') is None
    db.collection.assert_not_called()


def test_user_profile_photo():
    directory = InMemoryDirectory({'users': {
        'A': {'displayName': 'Alice', 'profilePhotos': ['p1', 'p2'], 'fcmToken': 't'},
        'B': {'profilePhotos': None},
    }})

    assert directory.get_user('A').profile_photo == 'p1'
    assert directory.get_user('B').profile_photo is None
    assert directory.get_user('B').displayName is None


def test_fcm_notifier_sends_message():
    payload = build_friend_request_payload(token='tok2', request_id='r1', sender_id='A', sender_name='Alice')
    app = mock.Mock()

    with mock.patch('campus_push.notifier.messaging.send', return_value='projects/p/messages/1') as send:
        receipt = FcmNotifier(app=app).send(payload)

    assert receipt == 'projects/p/messages/1'
    message = send.call_args.args[0]
    assert message.token == 'tok2'
    assert send.call_args.kwargs == {'dry_run': False, 'app': app}


def test_fcm_notifier_propagates_errors():
    payload = build_friend_request_payload(token='tok2', request_id='r1', sender_id='A', sender_name='Alice')

    with mock.patch('campus_push.notifier.messaging.send', side_effect=RuntimeError('boom')):
        with pytest.raises(RuntimeError):
            FcmNotifier().send(payload)


class TestFirebaseClient:

    def test_reuses_existing_app(self):
        from campus_push import firebase_client

        app = mock.Mock()
        with mock.patch.object(firebase_client.firebase_admin, 'get_app', return_value=app), \
                mock.patch.object(firebase_client.firestore, 'client', return_value='db') as client:
            fc = firebase_client.FirebaseClient()

        assert fc.app is app
        client.assert_called_once_with(app)
        assert fc.directory().firestore_db == 'db'
        assert fc.notifier().app is app

    def test_initializes_from_double_encoded_secret(self, monkeypatch):
        from campus_push import firebase_client

        secret = {'type': 'service_account', 'project_id': 'p'}
        monkeypatch.setattr(firebase_client.settings, 'firebase_secret', json.dumps(json.dumps(secret)))
        app = mock.Mock()

        with mock.patch.object(firebase_client.firebase_admin, 'get_app', side_effect=ValueError), \
                mock.patch.object(firebase_client.credentials, 'Certificate', return_value='cred') as cert, \
                mock.patch.object(firebase_client.firebase_admin, 'initialize_app', return_value=app) as init, \
                mock.patch.object(firebase_client.firestore, 'client'):
            firebase_client.FirebaseClient()

        cert.assert_called_once_with(secret)
        init.assert_called_once_with(credential='cred', options=None)

    def test_initialization_errors_propagate(self, monkeypatch):
        from campus_push import firebase_client

        monkeypatch.setattr(firebase_client.settings, 'firebase_secret', 'not json')
        with mock.patch.object(firebase_client.firebase_admin, 'get_app', side_effect=ValueError):
            with pytest.raises(ValueError):
                firebase_client.FirebaseClient()


def test_user_profile_tolerates_bad_field_types():
    profile = UserProfile.model_validate({
        'displayName': 7,
        'profilePhotos': [None, {'url': 'x'}, '', 'https://cdn.example/a.jpg'],
        'fcmToken': ['t'],
    })

    assert profile.displayName is None
    assert profile.profilePhotos == ['https://cdn.example/a.jpg']
    assert profile.fcmToken is None
    assert UserProfile.model_validate({'profilePhotos': 'p.jpg'}).profile_photo is None


def test_base_directory_requires_get():
    with pytest.raises(TypeError):
        BaseDirectory()
