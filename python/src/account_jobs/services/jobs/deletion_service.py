"""
Account deletion job.

Irreversibly removes an account:

1. Resolve the workspace (missing workspace -> failed result)
2. Per event, concurrently: delete its expenses and categories, then the event
3. Delete the workspace document
4. Delete the authentication identity
5. Best-effort delete of stored files under ``users/{userId}/``
6. Send the deletion confirmation email

Only step 5 may fail without failing the job. Any other failure stops the
remaining steps and is returned as ``JobResult(success=False)``.
"""

import logging
from typing import Optional, Tuple

from ...core.config import settings as default_settings
from ...models import DocumentSnapshot, JobResult
from ...monitoring import (
    add_breadcrumb,
    capture_exception,
    record_job_outcome,
    set_account_context,
    start_transaction,
    track_job_duration,
)
from ..clients import JobServices
from ..notifications import account_deleted_email
from .exceptions import InvalidJobInputError
from .hierarchy import HierarchyWalker
from .paths import user_files_prefix

logger = logging.getLogger(__name__)

JOB_NAME = "deleteAccount"


class AccountDeletionService:
    """
    Deletes an account's workspace subtree, identity and stored files.

    Collaborator handles are injected per service instance; the caller owns
    their lifecycle.
    """

    def __init__(self, services: JobServices, settings=None):
        self.services = services
        self.settings = settings or default_settings

    async def delete_account(self, user_id: str, user_email: str) -> JobResult:
        """
        Run the deletion job for one account.

        Args:
            user_id: Account (and workspace) identifier
            user_email: Address the confirmation is sent to

        Returns:
            JobResult with ``account_id`` on success

        Raises:
            InvalidJobInputError: If user_id is empty (before any external call)
        """
        if not user_id:
            record_job_outcome(JOB_NAME, "invalid")
            raise InvalidJobInputError()

        with start_transaction(name=JOB_NAME, op=f"function.job.{JOB_NAME}"), \
                track_job_duration(JOB_NAME):
            set_account_context(user_id)
            logger.info(f"Account deletion started: {user_id}")

            try:
                result = await self._run(user_id, user_email)
            except Exception as e:
                capture_exception(e, account_id=user_id, job=JOB_NAME)
                logger.error(f"Error deleting account {user_id}: {e}", exc_info=True)
                record_job_outcome(JOB_NAME, "failure")
                return JobResult.failed(str(e))

            record_job_outcome(JOB_NAME, "success")
            logger.warning(f"Account permanently deleted: {user_id}")
            return result

    async def _run(self, user_id: str, user_email: str) -> JobResult:
        walker = HierarchyWalker(self.services.db, self.settings.TRAVERSAL_CONCURRENCY)

        workspace = await walker.load_workspace(user_id)

        counts = await walker.for_each_event(
            workspace,
            lambda event: self._delete_event(walker, event),
        )
        add_breadcrumb(
            "deletion",
            "Events deleted",
            account_id=user_id,
            events=len(counts),
            expenses=sum(expenses for expenses, _ in counts),
            categories=sum(categories for _, categories in counts),
        )

        await walker.delete(workspace)
        await self.services.auth.delete_identity(user_id)
        cleanup_error = await self._delete_user_files(user_id)
        add_breadcrumb(
            "deletion",
            "Stored files cleanup",
            level="warning" if cleanup_error else "info",
            account_id=user_id,
            succeeded=cleanup_error is None,
        )

        await self.services.notifier.send(
            account_deleted_email(self.settings.EMAIL_FROM, user_email)
        )

        return JobResult.ok(
            message=f"Account for {user_email} deleted successfully.",
            account_id=user_id,
        )

    async def _delete_event(
        self,
        walker: HierarchyWalker,
        event: DocumentSnapshot
    ) -> Tuple[int, int]:
        """Delete an event's children, then the event itself."""
        expenses, categories = await walker.gather_bounded([
            walker.list_expenses(event),
            walker.list_categories(event),
        ])
        deleted_expenses, deleted_categories = await walker.gather_bounded([
            walker.delete_all(expenses),
            walker.delete_all(categories),
        ])
        await walker.delete(event)
        return deleted_expenses, deleted_categories

    async def _delete_user_files(self, user_id: str) -> Optional[Exception]:
        """
        Best-effort removal of the account's stored files.

        Returns:
            The swallowed error, or None when cleanup succeeded
        """
        prefix = user_files_prefix(user_id)
        try:
            await self.services.storage.delete_by_prefix(prefix)
        except Exception as e:
            logger.warning(f"Storage cleanup error for user {user_id}: {e}")
            capture_exception(e, account_id=user_id, prefix=prefix)
            return e
        return None


async def delete_account(
    user_id: str,
    user_email: str,
    services: JobServices,
    settings=None
) -> JobResult:
    """Run the account deletion job with the given collaborator handles."""
    return await AccountDeletionService(services, settings).delete_account(user_id, user_email)
