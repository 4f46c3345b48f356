"""Invoice API Routes

FastAPI routes for invoices, payments against an invoice and invoice PDFs.
"""

import base64
from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.pdf_service import PdfService
from src.app.use_cases.billing import (
    CreateInvoice,
    CreateInvoiceCommandDTO,
    DeleteInvoice,
    DeleteInvoiceResponseDTO,
    GenerateInvoicePdf,
    GetBillingSummary,
    GetInvoice,
    InvoicePdfResponseDTO,
    InvoiceResponseDTO,
    ListInvoices,
    ListInvoicesResponseDTO,
    RecordPayment,
    RecordPaymentCommandDTO,
    RecordPaymentResponseDTO,
    UpdateInvoice,
    UpdateInvoiceCommandDTO,
)
from src.app.views import BillingSummary, InvoiceFilters
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_config, get_current_actor, get_pdf_service, get_session, require_roles
from src.domain.roles import Actor, UserRole
from src.api.error import raise_for_error

router = APIRouter(prefix="/billing/invoices", tags=["Invoices"])

BILLING_ROLES = (UserRole.ADMIN, UserRole.RECEPTIONIST, UserRole.DOCTOR)


async def _render_pdf(invoice_id, session, pdf_service, config, actor):
    use_case = GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        pdf_service,
        hospital_name=config.HOSPITAL_NAME,
        hospital_address=config.HOSPITAL_ADDRESS,
    )
    result = await use_case.execute(invoice_id, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Invalid request parameters",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "body.items: List should have at least 1 item after validation"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: CreateInvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*BILLING_ROLES)),
):
    """
    Raise an invoice for a patient.

    Subtotal, discount, tax, total and balance are computed server side from
    the line items. Amounts the caller sends for them are ignored.

    **Example request:**
    ```json
    {
      "patient_id": "PAT20240001",
      "patient_name": "Jane Doe",
      "items": [
        {"description": "Consultation", "category": "consultation", "quantity": 1, "unit_price": "1000"},
        {"description": "X-Ray", "category": "test", "quantity": 2, "unit_price": "750"}
      ],
      "discount_percentage": "10",
      "tax_percentage": "5"
    }
    ```

    **Returns:**
    - 201: Invoice created (total 2362.50 for the example above)
    - 400: Invalid request parameters
    """
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        currency=config.CURRENCY,
        due_days=config.INVOICE_DUE_DAYS,
    )
    result = await use_case.execute(request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    filters: Annotated[InvoiceFilters, Query()],
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """
    List invoices, newest first.

    Patients only see their own invoices. `status=overdue` matches invoices
    whose due date has passed with a balance outstanding, whatever their
    stored status.
    """
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(filters, actor, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=BillingSummary)
async def get_billing_summary(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*BILLING_ROLES)),
):
    result = await GetBillingSummary(SqlAlchemyInvoiceRepository(session)).execute()
    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_FOUND",
                            "message": "Invoice with ID 123 not found"
                        }
                    }
                }
            }
        }
    }
)
async def get_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    use_case = GetInvoice(SqlAlchemyInvoiceRepository(session), SqlAlchemyInvoiceLineRepository(session))
    result = await use_case.execute(invoice_id, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{invoice_id}", response_model=InvoiceResponseDTO)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*BILLING_ROLES)),
):
    """
    Edit a draft or pending invoice. Replacing the items recomputes all totals.

    **Returns:**
    - 200: Invoice updated
    - 400: Invoice is paid or cancelled (INVOICE_FINALIZED)
    - 404: Invoice not found
    """
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(invoice_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{invoice_id}", response_model=DeleteInvoiceResponseDTO)
async def delete_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """
    Delete an invoice. Administrators only; invoices with payments cannot be deleted.
    """
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(invoice_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/pay",
    response_model=RecordPaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Payment rejected",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PAYMENT_EXCEEDS_BALANCE",
                            "message": "Payment amount 2500.00 exceeds outstanding balance 2362.50",
                            "reason": "Overpayment is not allowed"
                        }
                    }
                }
            }
        }
    }
)
async def record_payment(
    invoice_id: str,
    request: RecordPaymentCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(UserRole.ADMIN, UserRole.RECEPTIONIST)),
):
    """
    Record a payment against an invoice.

    The payment record and the invoice balance update are committed together.
    Status moves to `partially_paid` or `paid` depending on what is left.

    **Returns:**
    - 201: Payment recorded, updated invoice included
    - 400: Invoice already paid or cancelled, or amount exceeds balance
    - 404: Invoice not found
    """
    use_case = RecordPayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyNotificationRepository(session),
    )
    result = await use_case.execute(invoice_id, request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{invoice_id}/pdf", response_model=InvoicePdfResponseDTO)
async def get_invoice_pdf(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    config=Depends(get_config),
    actor: Actor = Depends(get_current_actor),
):
    """
    Render the invoice as a PDF, returned base64-encoded.

    **Returns:**
    - 200: PDF generated
    - 404: Invoice not found
    """
    return await _render_pdf(invoice_id, session, pdf_service, config, actor)


@router.get(
    "/{invoice_id}/pdf/download",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        }
    }
)
async def download_invoice_pdf(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    config=Depends(get_config),
    actor: Actor = Depends(get_current_actor),
):
    """
    Download the invoice PDF as a file.

    **Returns:**
    - 200: PDF file (application/pdf)
    - 404: Invoice not found
    """
    document = await _render_pdf(invoice_id, session, pdf_service, config, actor)

    return Response(
        content=base64.b64decode(document.pdf_base64),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{document.file_name}"'},
    )
