"""
Invoice management router.
Handles invoice creation, status changes, payment proofs, email delivery
and dashboard statistics.
"""

from typing import Annotated, List, Optional
from datetime import date
from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from app.config import get_settings
from app.infrastructure.auth import get_current_user_id
from app.infrastructure.web.dependencies import (
    get_unit_of_work, get_storage, get_email_service, get_clock, read_upload
)
from app.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    InvoiceResponseDTO,
    PaymentProofResponseDTO,
    SendInvoiceResponseDTO,
    DashboardResponseDTO,
    DailyRevenueDTO,
)
from app.application.use_cases.base_use_case import Clock
from app.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    UpdateInvoiceUseCase,
    GetInvoiceUseCase,
    ListInvoicesUseCase,
    DeleteInvoiceUseCase,
    UploadPaymentProofUseCase,
    SendInvoiceUseCase,
    GetDashboardStatisticsUseCase,
    GetRevenueByRangeUseCase,
)
from app.domain.models.invoice import InvoiceStatus
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.email_service import EmailService
from app.domain.services.numbering_service import NumberingService
from app.domain.services.storage_service import FileStorage


router = APIRouter()


# Statistics routes are declared before /{invoice_id} so they are not shadowed.
@router.get("/stats/overview", response_model=DashboardResponseDTO)
async def dashboard_statistics(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    clock: Annotated[Clock, Depends(get_clock)]
):
    """
    Dashboard figures: totals per status, daily revenue for the last 30 days,
    this month against last month and the status distribution.
    """
    stats = await GetDashboardStatisticsUseCase(uow, clock=clock).execute(user_id)
    return DashboardResponseDTO.from_domain(stats)


@router.get("/stats/revenue", response_model=List[DailyRevenueDTO])
async def revenue_by_range(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    start_date: Optional[date] = Query(None, description="First day, inclusive"),
    end_date: Optional[date] = Query(None, description="Last day, inclusive")
):
    """PAID revenue per issue date between two dates."""
    revenue = await GetRevenueByRangeUseCase(uow).execute(user_id, start_date, end_date)
    return [DailyRevenueDTO(date_=day.date, total=day.total) for day in revenue]


@router.get("", response_model=List[InvoiceResponseDTO])
async def list_invoices(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    status_filter: Optional[InvoiceStatus] = Query(None, alias="status", description="Filter by status")
):
    """List invoices, newest first."""
    invoices = await ListInvoicesUseCase(uow).execute(user_id, status_filter)
    return [InvoiceResponseDTO.from_domain(invoice) for invoice in invoices]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InvoiceResponseDTO)
async def create_invoice(
    request: CreateInvoiceRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    clock: Annotated[Clock, Depends(get_clock)]
):
    """
    Create a new invoice numbered from the user's sequence.

    - **customer_id**: Customer to invoice (required)
    - **date** / **due_date**: due date may not precede the invoice date
    - **items**: at least one line with a whole positive quantity
    - **tax_rate**: percentage, defaults to the user's setting
    - **notes**: Additional notes
    """
    use_case = CreateInvoiceUseCase(
        uow,
        numbering_service=NumberingService(width=get_settings().invoice_number_width),
        clock=clock
    )
    invoice = await use_case.execute(user_id, request)
    return InvoiceResponseDTO.from_domain(invoice)


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
async def get_invoice(
    invoice_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """Get an invoice with its items, customer and issuer profile."""
    invoice, issuer = await GetInvoiceUseCase(uow).execute(user_id, invoice_id)
    return InvoiceResponseDTO.from_domain(invoice, issuer)


@router.patch("/{invoice_id}", response_model=InvoiceResponseDTO)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    clock: Annotated[Clock, Depends(get_clock)]
):
    """
    Change status, notes, payment proof or due date.

    Paid invoices only accept cancellation; cancelled invoices accept nothing.
    """
    invoice = await UpdateInvoiceUseCase(uow, clock=clock).execute(user_id, invoice_id, request)
    return InvoiceResponseDTO.from_domain(invoice)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    await DeleteInvoiceUseCase(uow).execute(user_id, invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{invoice_id}/payment-proof", response_model=PaymentProofResponseDTO)
async def upload_payment_proof(
    invoice_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    storage: Annotated[FileStorage, Depends(get_storage)],
    clock: Annotated[Clock, Depends(get_clock)],
    file: UploadFile = File(...)
):
    """Upload a JPG or PNG payment proof (max 5MB) and return its URL."""
    upload = await read_upload(file)
    use_case = UploadPaymentProofUseCase(
        uow, storage, clock=clock, max_size=get_settings().max_upload_size_bytes
    )
    url = await use_case.execute(user_id, invoice_id, upload)
    return PaymentProofResponseDTO(url=url)


@router.post("/{invoice_id}/send", response_model=SendInvoiceResponseDTO)
async def send_invoice(
    invoice_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    email_service: Annotated[EmailService, Depends(get_email_service)]
):
    """Email the invoice to its customer."""
    return await SendInvoiceUseCase(uow, email_service).execute(user_id, invoice_id)
