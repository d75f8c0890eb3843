"""Email notifications for account jobs."""

from .smtp import SmtpNotificationSender
from .templates import account_deleted_email, export_ready_email

__all__ = [
    "SmtpNotificationSender",
    "account_deleted_email",
    "export_ready_email",
]
