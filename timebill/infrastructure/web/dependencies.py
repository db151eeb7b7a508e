"""
FastAPI dependencies wiring request handlers to application-owned collaborators.
Everything here is read from ``app.state``; there are no module-level singletons.
"""

from datetime import timedelta
from typing import Annotated, Iterator

from fastapi import Depends, Request

from timebill.application.use_cases.base_use_case import Clock
from timebill.config import Settings
from timebill.domain.repositories import Repositories
from timebill.domain.services.invoice_service import PartyInfo
from timebill.domain.services.notification_service import NotificationService
from timebill.domain.services.numbering_service import InvoiceNumberSequence
from timebill.infrastructure.auth.jwt_handler import JWTHandler
from timebill.infrastructure.auth.password import BcryptPasswordHasher
from timebill.infrastructure.export.excel_service import ExcelExporter
from timebill.infrastructure.pdf.pdf_service import InvoicePdfRenderer


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repositories(request: Request) -> Iterator[Repositories]:
    """One repositories bundle per request, shared by every dependency of that request."""
    with request.app.state.provider.scope() as repositories:
        yield repositories


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_notifications(request: Request) -> NotificationService:
    return request.app.state.notifications


def get_invoice_sequence(request: Request) -> InvoiceNumberSequence:
    return request.app.state.invoice_sequence


def get_jwt_handler(request: Request) -> JWTHandler:
    return request.app.state.jwt_handler


def get_password_hasher(request: Request) -> BcryptPasswordHasher:
    return request.app.state.password_hasher


def get_pdf_renderer(request: Request) -> InvoicePdfRenderer:
    return request.app.state.pdf_renderer


def get_excel_exporter(request: Request) -> ExcelExporter:
    return request.app.state.excel_exporter


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]
ClockDep = Annotated[Clock, Depends(get_clock)]
NotificationsDep = Annotated[NotificationService, Depends(get_notifications)]
InvoiceSequenceDep = Annotated[InvoiceNumberSequence, Depends(get_invoice_sequence)]
JWTHandlerDep = Annotated[JWTHandler, Depends(get_jwt_handler)]
PasswordHasherDep = Annotated[BcryptPasswordHasher, Depends(get_password_hasher)]
PdfRendererDep = Annotated[InvoicePdfRenderer, Depends(get_pdf_renderer)]
ExcelExporterDep = Annotated[ExcelExporter, Depends(get_excel_exporter)]


def modification_window(settings: Settings) -> timedelta:
    return timedelta(hours=settings.modification_window_hours)


def company_info(settings: Settings) -> PartyInfo:
    return PartyInfo(name=settings.company_name, address=settings.company_address)
