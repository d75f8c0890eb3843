"""
Collaborator interfaces consumed by the account jobs.

The jobs only talk to these protocols. Concrete handles are built by the
caller (see ``core.firebase.initialize_firebase``) and passed in through
``JobServices``; tests pass in-memory fakes.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Protocol, Tuple

from ...models import DocumentSnapshot, EmailNotification


class DocumentStore(Protocol):
    """Hierarchical document database addressed by slash-separated paths."""
    
    async def get_document(self, path: str) -> Tuple[bool, Dict[str, Any]]:
        ...
    
    async def list_children(self, path: str) -> List[DocumentSnapshot]:
        ...
    
    async def delete(self, path: str) -> None:
        ...


class IdentityService(Protocol):
    """Authentication identity provider."""
    
    async def delete_identity(self, user_id: str) -> None:
        ...


class BlobStorage(Protocol):
    """Object storage for user files and export artifacts."""
    
    async def delete_by_prefix(self, prefix: str) -> None:
        ...
    
    async def upload(self, local_path: str, remote_path: str, content_type: str) -> None:
        ...
    
    async def get_signed_read_url(self, remote_path: str, expiry: timedelta) -> str:
        ...


class NotificationSender(Protocol):
    """Delivers email notifications."""
    
    async def send(self, notification: EmailNotification) -> None:
        ...


@dataclass
class JobServices:
    """Handles to every external service a job invocation needs."""
    
    db: DocumentStore
    auth: IdentityService
    storage: BlobStorage
    notifier: NotificationSender
