"""
Pytest configuration and fixtures.

Provides shared fixtures for all tests including:
- In-memory document store
- Recording identity, storage and email fakes
- Workspace seeding helper
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

import pytest

from src.account_jobs.core.config import Settings
from src.account_jobs.models import DocumentSnapshot, EmailNotification
from src.account_jobs.services.clients import JobServices


class InMemoryDocumentStore:
    """Path-addressed document store that records every call."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.fail_on: Dict[Tuple[str, str], Exception] = {}

    def put(self, path: str, data: Optional[Dict[str, Any]] = None):
        self.documents[path] = data or {}

    def _maybe_fail(self, op: str, path: str):
        error = self.fail_on.get((op, path))
        if error:
            raise error

    async def get_document(self, path: str) -> Tuple[bool, Dict[str, Any]]:
        self.calls.append(("get", path))
        self._maybe_fail("get", path)
        if path not in self.documents:
            return False, {}
        return True, dict(self.documents[path])

    async def list_children(self, path: str) -> List[DocumentSnapshot]:
        self.calls.append(("list", path))
        self._maybe_fail("list", path)
        prefix = f"{path}/"
        children = []
        for doc_path, data in self.documents.items():
            if doc_path.startswith(prefix) and "/" not in doc_path[len(prefix):]:
                children.append(
                    DocumentSnapshot(id=doc_path[len(prefix):], path=doc_path, data=dict(data))
                )
        return children

    async def delete(self, path: str) -> None:
        self.calls.append(("delete", path))
        self._maybe_fail("delete", path)
        self.documents.pop(path, None)

    def deleted_paths(self) -> List[str]:
        return [path for op, path in self.calls if op == "delete"]


class RecordingIdentityService:
    def __init__(self):
        self.deleted: List[str] = []
        self.error: Optional[Exception] = None

    async def delete_identity(self, user_id: str) -> None:
        if self.error:
            raise self.error
        self.deleted.append(user_id)


class RecordingBlobStorage:
    """Keeps uploaded file contents, since the local copy is removed afterwards."""

    def __init__(self):
        self.deleted_prefixes: List[str] = []
        self.uploads: List[Dict[str, Any]] = []
        self.signed: List[Tuple[str, timedelta]] = []
        self.delete_error: Optional[Exception] = None
        self.upload_error: Optional[Exception] = None

    async def delete_by_prefix(self, prefix: str) -> None:
        self.deleted_prefixes.append(prefix)
        if self.delete_error:
            raise self.delete_error

    async def upload(self, local_path: str, remote_path: str, content_type: str) -> None:
        if self.upload_error:
            raise self.upload_error
        with open(local_path, encoding="utf-8") as f:
            content = f.read()
        self.uploads.append({
            "local_path": local_path,
            "remote_path": remote_path,
            "content_type": content_type,
            "content": content,
        })

    async def get_signed_read_url(self, remote_path: str, expiry: timedelta) -> str:
        self.signed.append((remote_path, expiry))
        return f"https://storage.example.com/{remote_path}?signature=abc"


class RecordingNotifier:
    def __init__(self):
        self.sent: List[EmailNotification] = []
        self.error: Optional[Exception] = None

    async def send(self, notification: EmailNotification) -> None:
        if self.error:
            raise self.error
        self.sent.append(notification)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        TRAVERSAL_CONCURRENCY=4,
        EXPORT_LINK_EXPIRY_DAYS=7,
        API_SECRET="test-secret",
        SENTRY_DSN="",
    )


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def services(store) -> JobServices:
    return JobServices(
        db=store,
        auth=RecordingIdentityService(),
        storage=RecordingBlobStorage(),
        notifier=RecordingNotifier(),
    )


def seed_workspace(
    store: InMemoryDocumentStore,
    user_id: str,
    events: int = 0,
    expenses: int = 0,
    categories: int = 0
) -> None:
    """Create a workspace with N events, each holding E expenses and C categories."""
    root = f"workspaces/{user_id}"
    store.put(root, {"id": user_id, "name": "My Workspace"})
    for e in range(events):
        event_path = f"{root}/events/event-{e}"
        store.put(event_path, {"name": f"Event {e}"})
        for x in range(expenses):
            store.put(f"{event_path}/expenses/expense-{x}", {"name": f"Expense {x}", "amount": 10})
        for c in range(categories):
            store.put(f"{event_path}/categories/category-{c}", {"name": f"Category {c}"})


@pytest.fixture
def seed(store):
    """Seed the store fixture; see ``seed_workspace``."""
    def _seed(user_id: str, events: int = 0, expenses: int = 0, categories: int = 0):
        seed_workspace(store, user_id, events, expenses, categories)
    return _seed
