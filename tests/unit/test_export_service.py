"""
Unit tests for the data export job.

Verifies:
- Input validation and not-found handling
- Empty accounts produce no artifact
- Artifact path, signed URL and notification on success
- Temp file cleanup
"""

import csv
import io
import os
import re
from datetime import timedelta
from unittest.mock import patch

import pytest

from src.account_jobs.services.jobs import (
    DataExportService,
    InvalidJobInputError,
    export_data,
)


USER_ID = "user-123"
USER_EMAIL = "user@example.com"
NOW = 1_700_000_000.123


def _rows(content: str):
    return list(csv.DictReader(io.StringIO(content)))


@pytest.fixture
def export_service(services, settings, tmp_path):
    return DataExportService(services, settings, clock=lambda: NOW, temp_dir=str(tmp_path))


class TestExportValidation:
    """Test preconditions and terminal states."""

    @pytest.mark.asyncio
    async def test_empty_user_id_raises_before_any_call(self, services, store, settings):
        """Test empty user id faults with zero collaborator interaction."""
        with pytest.raises(InvalidJobInputError):
            await export_data("", USER_EMAIL, services, settings)

        assert store.calls == []
        assert services.storage.uploads == []
        assert services.notifier.sent == []

    @pytest.mark.asyncio
    async def test_missing_workspace_returns_not_found(self, services, store, settings):
        """Test missing workspace fails before listing events."""
        result = await export_data(USER_ID, USER_EMAIL, services, settings)

        assert result.success is False
        assert USER_ID in result.message
        assert "not found" in result.message
        assert store.calls == [("get", f"workspaces/{USER_ID}")]

    @pytest.mark.asyncio
    async def test_no_expenses_fails_without_upload(self, export_service, services, seed):
        """Test zero expenses is a failed result with no upload or email."""
        seed(USER_ID, events=2, expenses=0, categories=3)

        result = await export_service.export_data(USER_ID, USER_EMAIL)

        assert result.success is False
        assert "No expense data found" in result.message
        assert services.storage.uploads == []
        assert services.storage.signed == []
        assert services.notifier.sent == []


class TestExportWorkflow:
    """Test artifact production."""

    @pytest.mark.asyncio
    async def test_successful_export(self, export_service, services, seed):
        """Test one upload, one signed URL, one email, and the URL returned."""
        seed(USER_ID, events=2, expenses=3)

        result = await export_service.export_data(USER_ID, USER_EMAIL)

        assert result.success is True
        assert result.message == f"{USER_EMAIL} data exported successfully."

        assert len(services.storage.uploads) == 1
        upload = services.storage.uploads[0]
        assert re.fullmatch(
            rf"users/{USER_ID}/exports/event-expenses-\d+\.csv",
            upload["remote_path"],
        )
        assert str(int(NOW * 1000)) in upload["remote_path"]
        assert upload["content_type"] == "text/csv"

        assert services.storage.signed == [(upload["remote_path"], timedelta(days=7))]
        assert result.download_url == f"https://storage.example.com/{upload['remote_path']}?signature=abc"

        assert len(services.notifier.sent) == 1
        email = services.notifier.sent[0]
        assert email.to == USER_EMAIL
        assert email.subject == "Your data export is ready"
        assert result.download_url in email.html
        assert "7 days" in email.html

    @pytest.mark.asyncio
    async def test_rows_follow_encounter_order(self, export_service, services, seed):
        """Test one row per expense, event order then expense order."""
        seed(USER_ID, events=2, expenses=2)

        await export_service.export_data(USER_ID, USER_EMAIL)

        rows = _rows(services.storage.uploads[0]["content"])
        assert [(r["event_id"], r["expense_id"]) for r in rows] == [
            ("event-0", "expense-0"),
            ("event-0", "expense-1"),
            ("event-1", "expense-0"),
            ("event-1", "expense-1"),
        ]
        assert rows[0]["event_name"] == "Event 0"
        assert rows[0]["expense_amount"] == "10"

    @pytest.mark.asyncio
    async def test_schedule_amount_summed_in_artifact(self, export_service, services, store, seed):
        """Test payment schedule rows carry the summed amount."""
        seed(USER_ID)
        event = f"workspaces/{USER_ID}/events/trip"
        store.put(event, {"name": "Trip"})
        store.put(f"{event}/expenses/hotel", {
            "name": "Hotel",
            "paymentSchedule": [
                {"name": "Deposit", "amount": 40, "method": "card", "isPaid": True},
                {"name": "Balance", "amount": 60, "method": "cash", "isPaid": False},
            ],
        })

        await export_service.export_data(USER_ID, USER_EMAIL)

        rows = _rows(services.storage.uploads[0]["content"])
        assert rows[0]["expense_payment_amount"] == "100"
        assert rows[0]["expense_payment_name"] == "Balance"
        assert rows[0]["expense_payment_method"] == "cash"
        assert rows[0]["expense_payment_isPaid"] == "false"

    @pytest.mark.asyncio
    async def test_export_is_read_only(self, export_service, store, seed):
        """Test the export never deletes documents."""
        seed(USER_ID, events=1, expenses=2, categories=1)
        before = dict(store.documents)

        await export_service.export_data(USER_ID, USER_EMAIL)

        assert store.deleted_paths() == []
        assert store.documents == before

    @pytest.mark.asyncio
    async def test_temp_file_removed(self, export_service, services, seed, tmp_path):
        """Test the local copy is gone after upload."""
        seed(USER_ID, events=1, expenses=1)

        await export_service.export_data(USER_ID, USER_EMAIL)

        local_path = services.storage.uploads[0]["local_path"]
        assert os.path.dirname(local_path) == str(tmp_path)
        assert os.path.basename(local_path) == f"expenses-export-{USER_ID}-{int(NOW * 1000)}.csv"
        assert not os.path.exists(local_path)


class TestExportFailures:
    """Test failure handling."""

    @pytest.mark.asyncio
    async def test_write_failure_cleans_partial_file(self, export_service, services, seed, tmp_path):
        """Test a failed local write leaves no partial file and skips the upload."""
        seed(USER_ID, events=1, expenses=1)

        def write_partial(path, content):
            with open(path, "w", encoding="utf-8") as f:
                f.write(content[:10])
            raise OSError("No space left on device")

        with patch(
            "src.account_jobs.services.jobs.export_service._write_export_file",
            side_effect=write_partial,
        ):
            result = await export_service.export_data(USER_ID, USER_EMAIL)

        assert result.success is False
        assert result.message == "No space left on device"
        assert list(tmp_path.iterdir()) == []
        assert services.storage.uploads == []

    @pytest.mark.asyncio
    async def test_upload_failure_cleans_temp_file(self, export_service, services, seed, tmp_path):
        """Test a failed upload still removes the local copy and fails the job."""
        seed(USER_ID, events=1, expenses=1)
        services.storage.upload_error = RuntimeError("upload refused")

        result = await export_service.export_data(USER_ID, USER_EMAIL)

        assert result.success is False
        assert result.message == "upload refused"
        assert list(tmp_path.iterdir()) == []
        assert services.storage.signed == []
        assert services.notifier.sent == []

    @pytest.mark.asyncio
    async def test_notification_failure_fails_job(self, export_service, services, seed):
        """Test an unsent download link fails the job."""
        seed(USER_ID, events=1, expenses=1)
        services.notifier.error = ConnectionError("SMTP down")

        result = await export_service.export_data(USER_ID, USER_EMAIL)

        assert result.success is False
        assert "SMTP down" in result.message
        assert result.download_url is None

    @pytest.mark.asyncio
    async def test_listing_failure_fails_job(self, export_service, services, store, seed):
        """Test a store read error becomes a failed result."""
        seed(USER_ID, events=1, expenses=1)
        store.fail_on[("list", f"workspaces/{USER_ID}/events")] = RuntimeError("deadline exceeded")

        result = await export_service.export_data(USER_ID, USER_EMAIL)

        assert result.success is False
        assert result.message == "deadline exceeded"
        assert services.storage.uploads == []
