"""
Workspace hierarchy traversal.

Walks the fixed three-level shape of an account:

    workspace -> events -> {expenses, categories}

Sibling operations are dispatched concurrently and joined before the parent
is acted upon (fan-out/fan-in). Every store call goes through one semaphore,
so the number of in-flight store operations per walker is capped no matter
how wide the subtree is.

Usage:
    walker = HierarchyWalker(services.db, concurrency=16)
    workspace = await walker.load_workspace(user_id)
    results = await walker.for_each_event(workspace, visit)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, TypeVar

from ...models import DocumentSnapshot
from ..clients import DocumentStore
from .exceptions import WorkspaceNotFoundError
from .paths import (
    COLLECTION_CATEGORIES,
    COLLECTION_EVENTS,
    COLLECTION_EXPENSES,
    child_collection_path,
    workspace_path,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HierarchyWalker:
    """Bounded-concurrency traversal of one account's document subtree."""

    DEFAULT_CONCURRENCY = 16

    def __init__(self, db: DocumentStore, concurrency: int = DEFAULT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.db = db
        self._semaphore = asyncio.Semaphore(concurrency)

    async def _call(self, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
        # Only leaf store calls hold a permit; branch tasks never do
        async with self._semaphore:
            return await fn(*args)

    async def gather_bounded(self, aws: Iterable[Awaitable[T]]) -> List[T]:
        """
        Run sibling operations concurrently and join them.

        All siblings are awaited to completion before the first failure
        (if any) is re-raised, so nothing is left running behind the parent.

        Returns:
            Results in the order the awaitables were given
        """
        results = await asyncio.gather(*aws, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results

    async def load_workspace(self, user_id: str) -> DocumentSnapshot:
        """
        Resolve the workspace root of an account.

        Raises:
            WorkspaceNotFoundError: If the workspace document does not exist
        """
        path = workspace_path(user_id)
        exists, data = await self._call(self.db.get_document, path)
        if not exists:
            raise WorkspaceNotFoundError(user_id)
        return DocumentSnapshot(id=user_id, path=path, data=data)

    async def list_events(self, workspace: DocumentSnapshot) -> List[DocumentSnapshot]:
        return await self._call(
            self.db.list_children,
            child_collection_path(workspace.path, COLLECTION_EVENTS),
        )

    async def list_expenses(self, event: DocumentSnapshot) -> List[DocumentSnapshot]:
        return await self._call(
            self.db.list_children,
            child_collection_path(event.path, COLLECTION_EXPENSES),
        )

    async def list_categories(self, event: DocumentSnapshot) -> List[DocumentSnapshot]:
        return await self._call(
            self.db.list_children,
            child_collection_path(event.path, COLLECTION_CATEGORIES),
        )

    async def delete(self, document: DocumentSnapshot) -> None:
        await self._call(self.db.delete, document.path)

    async def delete_all(self, documents: Iterable[DocumentSnapshot]) -> int:
        """Delete sibling documents concurrently. Returns how many were deleted."""
        documents = list(documents)
        await self.gather_bounded(self.delete(doc) for doc in documents)
        return len(documents)

    async def for_each_event(
        self,
        workspace: DocumentSnapshot,
        visit: Callable[[DocumentSnapshot], Awaitable[T]]
    ) -> List[T]:
        """
        Apply ``visit`` to every event of the workspace concurrently.

        Returns once every visit has finished, with results in the order the
        events were listed.
        """
        events = await self.list_events(workspace)
        logger.debug(f"Workspace {workspace.id}: visiting {len(events)} events")
        return await self.gather_bounded(visit(event) for event in events)
