"""
Account data export job.

Collects every expense of an account, flattens it together with its parent
event into one CSV row, uploads the CSV under ``users/{userId}/exports/``
and emails a signed download link.

The store is only read; any failure is returned as
``JobResult(success=False)``.
"""

import asyncio
import logging
import os
import tempfile
import time
from datetime import timedelta
from typing import Callable, List, Optional

from ...core.config import settings as default_settings
from ...models import DocumentSnapshot, JobResult
from ...monitoring import (
    capture_exception,
    record_job_outcome,
    set_account_context,
    start_transaction,
    track_job_duration,
)
from ..clients import JobServices
from ..notifications import export_ready_email
from .exceptions import InvalidJobInputError, NoExportDataError
from .flattening import ExportRecord, flatten_expense, render_csv
from .hierarchy import HierarchyWalker
from .paths import export_object_path

logger = logging.getLogger(__name__)

JOB_NAME = "exportData"

CSV_CONTENT_TYPE = "text/csv"


def _write_export_file(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


class DataExportService:
    """
    Exports an account's expenses as a CSV download.
    """

    def __init__(
        self,
        services: JobServices,
        settings=None,
        clock: Callable[[], float] = time.time,
        temp_dir: Optional[str] = None
    ):
        self.services = services
        self.settings = settings or default_settings
        self.clock = clock
        self.temp_dir = temp_dir or tempfile.gettempdir()

    async def export_data(self, user_id: str, user_email: str) -> JobResult:
        """
        Run the export job for one account.

        Args:
            user_id: Account (and workspace) identifier
            user_email: Address the download link is sent to

        Returns:
            JobResult with ``download_url`` on success

        Raises:
            InvalidJobInputError: If user_id is empty (before any external call)
        """
        if not user_id:
            record_job_outcome(JOB_NAME, "invalid")
            raise InvalidJobInputError()

        with start_transaction(name=JOB_NAME, op=f"function.job.{JOB_NAME}"), \
                track_job_duration(JOB_NAME):
            set_account_context(user_id)
            logger.info(f"Data export started: {user_id}")

            try:
                result = await self._run(user_id, user_email)
            except Exception as e:
                capture_exception(e, account_id=user_id, job=JOB_NAME)
                logger.error(f"Error exporting data for {user_id}: {e}", exc_info=True)
                record_job_outcome(JOB_NAME, "failure")
                return JobResult.failed(str(e))

            record_job_outcome(JOB_NAME, "success")
            logger.info(f"Data exported: {user_id}")
            return result

    async def collect_records(self, walker: HierarchyWalker, user_id: str) -> List[ExportRecord]:
        """
        Flatten every expense of the account.

        Rows follow event order, then expense order within the event.
        """
        workspace = await walker.load_workspace(user_id)
        per_event = await walker.for_each_event(
            workspace,
            lambda event: self._collect_event(walker, event),
        )
        return [record for records in per_event for record in records]

    async def _collect_event(
        self,
        walker: HierarchyWalker,
        event: DocumentSnapshot
    ) -> List[ExportRecord]:
        expenses = await walker.list_expenses(event)
        return [flatten_expense(event, expense) for expense in expenses]

    async def _run(self, user_id: str, user_email: str) -> JobResult:
        walker = HierarchyWalker(self.services.db, self.settings.TRAVERSAL_CONCURRENCY)

        records = await self.collect_records(walker, user_id)
        if not records:
            raise NoExportDataError(user_email)

        csv_text = render_csv(records)

        timestamp = int(self.clock() * 1000)
        local_path = os.path.join(self.temp_dir, f"expenses-export-{user_id}-{timestamp}.csv")
        remote_path = export_object_path(user_id, timestamp)

        try:
            await asyncio.to_thread(_write_export_file, local_path, csv_text)
            await self.services.storage.upload(local_path, remote_path, CSV_CONTENT_TYPE)
        finally:
            if os.path.exists(local_path):
                os.remove(local_path)

        logger.info(f"Export uploaded: {remote_path} ({len(records)} rows)")

        expiry_days = self.settings.EXPORT_LINK_EXPIRY_DAYS
        url = await self.services.storage.get_signed_read_url(
            remote_path,
            timedelta(days=expiry_days),
        )

        await self.services.notifier.send(
            export_ready_email(self.settings.EMAIL_FROM, user_email, url, expiry_days)
        )

        return JobResult.ok(
            message=f"{user_email} data exported successfully.",
            download_url=url,
        )


async def export_data(
    user_id: str,
    user_email: str,
    services: JobServices,
    settings=None
) -> JobResult:
    """Run the data export job with the given collaborator handles."""
    return await DataExportService(services, settings).export_data(user_id, user_email)
