"""
Firebase initialization.

Builds the collaborator handles the jobs run against. Handles are created
once by the application (see ``main.lifespan``) and passed explicitly into
each job invocation.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore_async, storage

from ..services.clients import (
    CloudStorageBlobStorage,
    FirebaseIdentityService,
    FirestoreDocumentStore,
    JobServices,
)
from ..services.notifications import SmtpNotificationSender

logger = logging.getLogger(__name__)

APP_NAME = "account-jobs"


def _get_or_create_app(settings) -> firebase_admin.App:
    try:
        return firebase_admin.get_app(APP_NAME)
    except ValueError:
        pass
    
    if settings.FIREBASE_CREDENTIALS_PATH:
        cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
    else:
        cred = credentials.ApplicationDefault()
    
    options = {}
    if settings.FIREBASE_PROJECT_ID:
        options["projectId"] = settings.FIREBASE_PROJECT_ID
    if settings.STORAGE_BUCKET:
        options["storageBucket"] = settings.STORAGE_BUCKET
    
    app = firebase_admin.initialize_app(cred, options, name=APP_NAME)
    logger.info(f"Firebase app initialized (project={app.project_id})")
    return app


def initialize_firebase(settings, notifier: Optional[SmtpNotificationSender] = None) -> JobServices:
    """
    Create the document store, identity, storage and email handles.
    
    Args:
        settings: Application settings
        notifier: Optional pre-built email sender
    
    Returns:
        JobServices ready to pass into a job
    """
    app = _get_or_create_app(settings)
    
    # Falls back to the app's default bucket when STORAGE_BUCKET is unset
    bucket = storage.bucket(settings.STORAGE_BUCKET or None, app=app)
    
    return JobServices(
        db=FirestoreDocumentStore(firestore_async.client(app)),
        auth=FirebaseIdentityService(app),
        storage=CloudStorageBlobStorage(bucket, credentials=app.credential.get_credential()),
        notifier=notifier or SmtpNotificationSender.from_settings(settings),
    )
