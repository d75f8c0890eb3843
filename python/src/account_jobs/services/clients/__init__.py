"""
External service clients.

Protocols the jobs depend on, plus the Firebase/Cloud Storage adapters used
in production.
"""

from .base import (
    BlobStorage,
    DocumentStore,
    IdentityService,
    JobServices,
    NotificationSender,
)
from .firestore import FirestoreDocumentStore
from .identity import FirebaseIdentityService
from .storage import CloudStorageBlobStorage

__all__ = [
    "BlobStorage",
    "DocumentStore",
    "IdentityService",
    "JobServices",
    "NotificationSender",
    "FirestoreDocumentStore",
    "FirebaseIdentityService",
    "CloudStorageBlobStorage",
]
