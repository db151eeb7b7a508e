"""
Outbound email contracts.
Rendering and delivery are provided by infrastructure adapters.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EmailTemplate:
    """Rendered subject and plain-text body."""
    subject: str
    body: str


@dataclass(frozen=True)
class NotificationRecipient:
    email: str
    name: str = ""


@dataclass(frozen=True)
class EmailSendResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class TemplateRenderer(ABC):
    """Turns a named template and a context into an EmailTemplate."""

    @abstractmethod
    def render(self, template_name: str, context: Dict[str, Any]) -> EmailTemplate:
        pass


class MailTransport(ABC):
    """
    Mail delivery interface.
    Implementations attempt delivery once and report the outcome; they do
    not retry.
    """

    @abstractmethod
    def send(self, recipient: NotificationRecipient, template: EmailTemplate) -> EmailSendResult:
        """
        Send one message to one recipient.
        """
        pass
