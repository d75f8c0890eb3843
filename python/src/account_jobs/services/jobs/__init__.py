"""
Account lifecycle jobs.

- AccountDeletionService: purge an account's data, identity and files
- DataExportService: export an account's expenses as a CSV download
"""

from .deletion_service import AccountDeletionService, delete_account
from .exceptions import (
    InvalidJobInputError,
    JobError,
    NoExportDataError,
    WorkspaceNotFoundError,
)
from .export_service import DataExportService, export_data
from .hierarchy import HierarchyWalker
from .locks import AccountLockRegistry

__all__ = [
    "AccountDeletionService",
    "DataExportService",
    "delete_account",
    "export_data",
    "HierarchyWalker",
    "AccountLockRegistry",
    "InvalidJobInputError",
    "JobError",
    "NoExportDataError",
    "WorkspaceNotFoundError",
]
