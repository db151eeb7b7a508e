"""
Tests for email template rendering and mail transports.
"""

import smtplib

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from timebill.config import Settings
from timebill.domain.services.email_service import EmailTemplate, NotificationRecipient
from timebill.infrastructure.email import (
    EmailTemplateLoader,
    LoggingMailTransport,
    SMTPMailTransport,
    create_mail_transport,
)


class TestEmailTemplateLoader:
    def setup_method(self):
        self.loader = EmailTemplateLoader()

    def test_lists_bundled_templates(self):
        assert self.loader.list_templates() == [
            "invoice_generated.txt",
            "time_entry_status.txt",
            "time_entry_submitted.txt",
        ]
        assert self.loader.template_exists("invoice_generated.txt")
        assert not self.loader.template_exists("welcome.txt")

    def test_first_line_is_subject(self):
        template = self.loader.render("invoice_generated.txt", {
            "invoice_number": "INV-2024-000003",
            "client_name": "Acme Corp",
            "total": 1234.5,
        })

        assert template.subject == "Invoice Generated - INV-2024-000003"
        assert "Total: $1,234.50" in template.body
        assert not template.body.startswith("Invoice Generated")

    def test_whole_hours_have_no_decimal(self):
        template = self.loader.render("time_entry_submitted.txt", {
            "employee_name": "Eve",
            "date": "2024-03-18",
            "duration": 2.0,
            "amount": 200,
            "memo": "N/A",
        })
        assert "Duration: 2 hours" in template.body

    def test_missing_variable_raises(self):
        with pytest.raises(UndefinedError):
            self.loader.render("invoice_generated.txt", {"invoice_number": "INV-1"})

    def test_unknown_template(self):
        with pytest.raises(TemplateNotFound):
            self.loader.render("welcome.txt", {})

    def test_custom_directory(self, tmp_path):
        (tmp_path / "ping.txt").write_text("Ping {{ name }}\nHello {{ name }}\n")

        template = EmailTemplateLoader(tmp_path).render("ping.txt", {"name": "Eve"})

        assert template == EmailTemplate(subject="Ping Eve", body="Hello Eve")


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, message):
        self.calls.append(("send", message))


class FailingSMTP(FakeSMTP):
    def send_message(self, message):
        raise smtplib.SMTPRecipientsRefused({"eve@example.com": (550, b"no such user")})


class TestTransports:
    def setup_method(self):
        FakeSMTP.instances = []
        self.settings = Settings(
            _env_file=None,
            smtp_host="mail.example.com",
            smtp_port=2525,
            smtp_user="mailer",
            smtp_password="pw",
            email_from_address="billing@example.com",
        )
        self.recipient = NotificationRecipient("eve@example.com", "Eve")
        self.template = EmailTemplate(subject="Hello", body="Body text")

    def test_factory_picks_transport(self):
        assert isinstance(create_mail_transport(self.settings), SMTPMailTransport)
        assert isinstance(create_mail_transport(Settings(_env_file=None)), LoggingMailTransport)

    def test_logging_transport_keeps_copy(self):
        transport = LoggingMailTransport()

        result = transport.send(self.recipient, self.template)

        assert result.success
        assert result.message_id.startswith("msg_")
        assert transport.sent == [(self.recipient, self.template)]

    def test_smtp_send(self, monkeypatch):
        monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)

        result = SMTPMailTransport(self.settings).send(self.recipient, self.template)

        assert result.success
        server = FakeSMTP.instances[0]
        assert (server.host, server.port) == ("mail.example.com", 2525)
        assert server.calls[0] == "starttls"
        assert server.calls[1] == ("login", "mailer", "pw")
        message = server.calls[2][1]
        assert message["Subject"] == "Hello"
        assert message["To"] == "Eve <eve@example.com>"
        assert message["From"] == "Timebill <billing@example.com>"

    def test_smtp_failure_reported_not_raised(self, monkeypatch):
        monkeypatch.setattr(smtplib, "SMTP", FailingSMTP)

        result = SMTPMailTransport(self.settings).send(self.recipient, self.template)

        assert not result.success
        assert result.error
