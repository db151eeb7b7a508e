"""
Mail transports.
SMTP delivery for deployments and a logging transport for development.
"""

import logging
import smtplib
import uuid
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import List

from timebill.config import Settings
from timebill.domain.services.email_service import (
    EmailSendResult,
    EmailTemplate,
    MailTransport,
    NotificationRecipient,
)

logger = logging.getLogger(__name__)


class SMTPMailTransport(MailTransport):
    """Sends plain-text mail through an SMTP relay."""

    def __init__(self, settings: Settings, timeout: float = 10.0):
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.use_tls = settings.smtp_use_tls
        self.from_name = settings.email_from_name
        self.from_address = settings.email_from_address
        self.timeout = timeout

    def _build_message(self, recipient: NotificationRecipient, template: EmailTemplate) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.from_name, self.from_address))
        message["To"] = formataddr((recipient.name, recipient.email)) if recipient.name else recipient.email
        message["Subject"] = template.subject
        message["Message-ID"] = make_msgid()
        message.set_content(template.body)
        return message

    def send(self, recipient: NotificationRecipient, template: EmailTemplate) -> EmailSendResult:
        message = self._build_message(recipient, template)
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {recipient.email} failed: {str(e)}")
            return EmailSendResult(success=False, error=str(e))

        return EmailSendResult(success=True, message_id=message["Message-ID"])


class LoggingMailTransport(MailTransport):
    """Logs messages instead of sending them. Keeps a copy for inspection."""

    def __init__(self):
        self.sent: List[tuple] = []

    def send(self, recipient: NotificationRecipient, template: EmailTemplate) -> EmailSendResult:
        logger.info(f"[Email] To: {recipient.email}, Subject: {template.subject}")
        self.sent.append((recipient, template))
        return EmailSendResult(success=True, message_id=f"msg_{uuid.uuid4().hex}")


def create_mail_transport(settings: Settings) -> MailTransport:
    """SMTP when configured, otherwise log messages."""
    if settings.smtp_configured:
        return SMTPMailTransport(settings)
    logger.warning("SMTP not configured, emails will be logged instead")
    return LoggingMailTransport()
