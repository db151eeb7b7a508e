"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timebill.application.dto.base_dto import ErrorResponseDTO, HealthCheckResponseDTO
from timebill.application.use_cases.base_use_case import Clock
from timebill.config import Settings, get_settings
from timebill.domain.models.base import utcnow
from timebill.domain.services.email_service import MailTransport, NotificationRecipient
from timebill.domain.services.notification_service import NotificationService
from timebill.domain.services.numbering_service import InvoiceNumberSequence
from timebill.infrastructure.auth.jwt_handler import JWTHandler
from timebill.infrastructure.auth.password import BcryptPasswordHasher
from timebill.infrastructure.container import RepositoryProvider, create_repository_provider
from timebill.infrastructure.email import EmailTemplateLoader, create_mail_transport
from timebill.infrastructure.export import ExcelExporter
from timebill.infrastructure.pdf import InvoicePdfRenderer
from timebill.infrastructure.web.middleware.error_handler import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from timebill.infrastructure.web.routers import (
    audit_logs,
    auth,
    billing_rules,
    clients,
    invoices,
    payroll,
    rates,
    reports,
    services,
    time_entries,
    users,
)

logger = logging.getLogger(__name__)

ROUTERS = (
    (auth, "auth", "Authentication"),
    (users, "users", "Users"),
    (time_entries, "time-entries", "Time Tracking"),
    (clients, "clients", "Clients"),
    (services, "services", "Services"),
    (rates, "rates", "Rates"),
    (billing_rules, "billing-rules", "Billing Rules"),
    (invoices, "invoices", "Invoices"),
    (payroll, "payroll", "Payroll"),
    (reports, "reports", "Reports"),
    (audit_logs, "audit-logs", "Audit Logs"),
)

ERROR_RESPONSES = {
    code: {"model": ErrorResponseDTO} for code in (400, 401, 403, 404, 409)
}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Setup and teardown operations.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")
    app.state.provider.startup()

    yield

    logger.info("Shutting down application")
    app.state.provider.shutdown()


def build_notifications(settings: Settings, transport: Optional[MailTransport] = None) -> NotificationService:
    fallback = None
    if settings.admin_email:
        fallback = NotificationRecipient(email=settings.admin_email, name="Administrator")
    return NotificationService(
        EmailTemplateLoader(),
        transport or create_mail_transport(settings),
        admin_fallback=fallback,
    )


def create_application(
    settings: Optional[Settings] = None,
    provider: Optional[RepositoryProvider] = None,
    clock: Optional[Clock] = None,
    transport: Optional[MailTransport] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every collaborator is created here and kept on ``app.state``; tests pass
    their own provider, clock or mail transport.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    clock = clock or utcnow

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.provider = provider or create_repository_provider(settings)
    app.state.clock = clock
    app.state.notifications = build_notifications(settings, transport)
    app.state.invoice_sequence = InvoiceNumberSequence(
        prefix=settings.invoice_number_prefix,
        clock=clock,
        max_attempts=settings.invoice_number_max_attempts,
    )
    app.state.jwt_handler = JWTHandler(settings)
    app.state.password_hasher = BcryptPasswordHasher()
    app.state.pdf_renderer = InvoicePdfRenderer()
    app.state.excel_exporter = ExcelExporter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware, debug=settings.debug)
    register_exception_handlers(app)

    for module, path, tag in ROUTERS:
        app.include_router(
            module.router,
            prefix=f"{settings.api_prefix}/{path}",
            tags=[tag],
            responses=ERROR_RESPONSES,
        )

    @app.get("/")
    def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs" if settings.debug else None,
            "health": f"{settings.api_prefix}/health"
        }

    @app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponseDTO)
    def health_check() -> HealthCheckResponseDTO:
        """Health check endpoint for monitoring."""
        return HealthCheckResponseDTO(
            status="healthy",
            version=settings.api_version,
            environment=settings.environment,
            storage=settings.storage_backend,
        )

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "timebill.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
