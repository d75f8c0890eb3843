"""
SMTP email delivery.

Sends HTML notifications through ``aiosmtplib``. Delivery failures are
raised to the caller; both jobs treat an unsent confirmation as a failed run.
"""

import logging
from email.message import EmailMessage

import aiosmtplib

from ...models import EmailNotification

logger = logging.getLogger(__name__)


class SmtpNotificationSender:
    """NotificationSender over an SMTP relay."""
    
    def __init__(
        self,
        hostname: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        start_tls: bool = True
    ):
        self.hostname = hostname
        self.port = port
        self.username = username or None
        self.password = password or None
        self.start_tls = start_tls
    
    @classmethod
    def from_settings(cls, settings) -> "SmtpNotificationSender":
        return cls(
            hostname=settings.EMAIL_SMTP_HOST,
            port=settings.EMAIL_SMTP_PORT,
            username=settings.EMAIL_SMTP_USER,
            password=settings.EMAIL_SMTP_PASSWORD,
            start_tls=settings.EMAIL_START_TLS,
        )
    
    async def send(self, notification: EmailNotification) -> None:
        msg = EmailMessage()
        msg["Subject"] = notification.subject
        msg["From"] = notification.sender
        msg["To"] = notification.to
        msg.set_content("This message requires an HTML-capable email client.")
        msg.add_alternative(notification.html, subtype="html")
        
        await aiosmtplib.send(
            msg,
            hostname=self.hostname,
            port=self.port,
            username=self.username,
            password=self.password,
            start_tls=self.start_tls,
        )
        
        logger.info(f"Email sent to {notification.to}: {notification.subject}")
