"""
Document and storage paths (schema-in-code).

The document store has no DDL; these constants are the single source of
truth for how an account's subtree is laid out:

    workspaces/{userId}
    workspaces/{userId}/events/{eventId}
    workspaces/{userId}/events/{eventId}/expenses/{expenseId}
    workspaces/{userId}/events/{eventId}/categories/{categoryId}

Stored files live under ``users/{userId}/`` in the bucket.
"""

COLLECTION_WORKSPACES = "workspaces"
COLLECTION_EVENTS = "events"
COLLECTION_EXPENSES = "expenses"
COLLECTION_CATEGORIES = "categories"

USER_FILES_ROOT = "users"


def workspace_path(user_id: str) -> str:
    return f"{COLLECTION_WORKSPACES}/{user_id}"


def child_collection_path(document_path: str, collection: str) -> str:
    return f"{document_path}/{collection}"


def user_files_prefix(user_id: str) -> str:
    """Prefix owning every stored file of an account. Trailing slash included."""
    return f"{USER_FILES_ROOT}/{user_id}/"


def export_object_path(user_id: str, timestamp_ms: int) -> str:
    return f"{user_files_prefix(user_id)}exports/event-expenses-{timestamp_ms}.csv"
