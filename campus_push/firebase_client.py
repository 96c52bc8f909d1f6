import json
import logging

import firebase_admin
from firebase_admin import credentials, firestore

from .config import settings
from .directory import FirestoreDirectory
from .notifier import FcmNotifier

logger = logging.getLogger(__name__)


class FirebaseClient:
    """Owns the Firebase Admin app for the lifetime of the process."""

    def __init__(self):
        """Initialize Firebase client with Firestore and FCM capabilities."""
        self.app = None
        self.firestore_db = None
        self.initialized = False
        self.initialize()

    def initialize(self) -> None:
        """Initialize Firebase Admin SDK, reusing the default app if it already exists."""
        if self.initialized:
            return

        try:
            try:
                self.app = firebase_admin.get_app()
                logger.info("Retrieved existing Firebase app")
            except ValueError:
                self.app = firebase_admin.initialize_app(
                    credential=self._credential(),
                    options=self._options()
                )
                logger.info(f"Initialized Firebase app: {self.app.name}")

            self.firestore_db = firestore.client(self.app)
            self.initialized = True

        except Exception as e:
            logger.error(f"Failed to initialize Firebase: {str(e)}")
            raise

    def _credential(self):
        cert_json = settings.firebase_secret
        if not cert_json:
            # Inside Cloud Functions the runtime service account is used
            return None

        cert_dict = json.loads(cert_json)
        if isinstance(cert_dict, str):
            cert_dict = json.loads(cert_dict)
        return credentials.Certificate(cert_dict)

    def _options(self):
        if settings.firebase_project_id:
            return {"projectId": settings.firebase_project_id}
        return None

    def directory(self) -> FirestoreDirectory:
        return FirestoreDirectory(self.firestore_db)

    def notifier(self) -> FcmNotifier:
        return FcmNotifier(app=self.app)
