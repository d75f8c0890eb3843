"""
Firestore-backed document store.

Wraps the async Firestore client from ``firebase-admin``. Paths are plain
slash-separated strings (``workspaces/{id}/events/{id}``) so the jobs never
touch SDK reference objects.
"""

import logging
from typing import Any, Dict, List, Tuple

from ...models import DocumentSnapshot

logger = logging.getLogger(__name__)


class FirestoreDocumentStore:
    """DocumentStore over ``google.cloud.firestore.AsyncClient``."""
    
    def __init__(self, client):
        self.client = client
    
    async def get_document(self, path: str) -> Tuple[bool, Dict[str, Any]]:
        snapshot = await self.client.document(path).get()
        if not snapshot.exists:
            return False, {}
        return True, snapshot.to_dict() or {}
    
    async def list_children(self, path: str) -> List[DocumentSnapshot]:
        """List every document directly inside the collection at ``path``."""
        children = []
        async for snapshot in self.client.collection(path).stream():
            children.append(
                DocumentSnapshot(
                    id=snapshot.id,
                    path=f"{path}/{snapshot.id}",
                    data=snapshot.to_dict() or {},
                )
            )
        logger.debug(f"Listed {len(children)} documents under {path}")
        return children
    
    async def delete(self, path: str) -> None:
        await self.client.document(path).delete()
