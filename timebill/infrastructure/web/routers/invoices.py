"""
Invoice router.
Handles invoice generation, status updates and PDF download.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from timebill.application.dto.invoice_dto import (
    GenerateInvoiceRequestDTO,
    InvoiceResponseDTO,
    InvoiceSummaryResponseDTO,
    UpdateInvoiceRequestDTO,
)
from timebill.application.use_cases.invoice_use_cases import (
    GenerateInvoiceUseCase,
    GetInvoiceUseCase,
    ListInvoicesUseCase,
    RenderInvoicePdfUseCase,
    UpdateInvoiceUseCase,
)
from timebill.domain.models.invoice import InvoiceStatus
from timebill.infrastructure.auth.dependencies import AdminUser
from timebill.infrastructure.web.dependencies import (
    ClockDep,
    InvoiceSequenceDep,
    NotificationsDep,
    PdfRendererDep,
    RepositoriesDep,
    SettingsDep,
    company_info,
)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InvoiceResponseDTO)
def generate_invoice(
    request: GenerateInvoiceRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    sequence: InvoiceSequenceDep,
    clock: ClockDep,
    notifications: NotificationsDep
):
    """
    Generate a draft invoice from billable time.

    - **client_id**: Client to bill
    - **start_date** / **end_date**: Inclusive period
    - **additional_charges**: Extra lines with a description and positive amount
    - **billing_rule_ids**: Billing rules added at their default amount
    """
    use_case = GenerateInvoiceUseCase(repositories, sequence, clock, notifications)
    return InvoiceResponseDTO.from_domain(use_case.execute(admin.id, request))


@router.get("", response_model=List[InvoiceSummaryResponseDTO])
def list_invoices(
    admin: AdminUser,
    repositories: RepositoriesDep,
    client_id: Optional[str] = Query(None, description="Filter by client"),
    invoice_status: Optional[InvoiceStatus] = Query(None, alias="status", description="Filter by status"),
    start_date: Optional[date] = Query(None, description="Period overlaps from this date"),
    end_date: Optional[date] = Query(None, description="Period overlaps up to this date")
):
    invoices = ListInvoicesUseCase(repositories).execute(client_id, invoice_status, start_date, end_date)
    return [InvoiceSummaryResponseDTO.from_domain(invoice) for invoice in invoices]


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
def get_invoice(invoice_id: str, admin: AdminUser, repositories: RepositoriesDep):
    return InvoiceResponseDTO.from_domain(GetInvoiceUseCase(repositories).execute(invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceResponseDTO)
def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    """
    Move an invoice forward (draft, sent, paid) or replace the charges of a draft.
    """
    invoice = UpdateInvoiceUseCase(repositories, clock).execute(admin.id, invoice_id, request)
    return InvoiceResponseDTO.from_domain(invoice)


@router.get("/{invoice_id}/pdf")
def download_invoice_pdf(
    invoice_id: str,
    admin: AdminUser,
    repositories: RepositoriesDep,
    renderer: PdfRendererDep,
    settings: SettingsDep
):
    use_case = RenderInvoicePdfUseCase(repositories, renderer, company_info(settings))
    invoice = GetInvoiceUseCase(repositories).execute(invoice_id)
    content = use_case.execute(invoice_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{invoice.invoice_number}.pdf"'},
    )
