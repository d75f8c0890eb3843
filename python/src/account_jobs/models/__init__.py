"""Data models for account lifecycle jobs."""

from .documents import DocumentSnapshot
from .job import JobRequest, JobResult
from .notification import EmailNotification

__all__ = [
    "DocumentSnapshot",
    "JobRequest",
    "JobResult",
    "EmailNotification",
]
