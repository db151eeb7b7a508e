"""
Email infrastructure.
"""

from timebill.infrastructure.email.email_service import (
    LoggingMailTransport,
    SMTPMailTransport,
    create_mail_transport,
)
from timebill.infrastructure.email.template_loader import EmailTemplateLoader

__all__ = [
    "EmailTemplateLoader",
    "LoggingMailTransport",
    "SMTPMailTransport",
    "create_mail_transport",
]
