"""
Invoice and payment routes.
"""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autoflow.database import get_db
from autoflow.models.customer import Customer
from autoflow.models.invoice import Invoice, InvoiceStatus
from autoflow.models.repair_order import RepairOrder
from autoflow.models.user import User
from autoflow.schemas.invoice import Invoice as InvoiceSchema, InvoiceCreate, InvoiceUpdate
from autoflow.auth import require_access

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])

invoices_access = require_access("/invoices")


async def _get_invoice_or_404(db: AsyncSession, invoice_id: int) -> Invoice:
    invoice = await db.get(Invoice, invoice_id)
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invoice not found"
        )
    return invoice


async def _check_billing_target(db: AsyncSession, customer_id: int, repair_order_id: Optional[int]):
    if await db.get(Customer, customer_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Customer does not exist"
        )
    if repair_order_id is None:
        return
    repair_order = await db.get(RepairOrder, repair_order_id)
    if repair_order is None or repair_order.customer_id != customer_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Repair order does not belong to customer"
        )


@router.get("/", response_model=List[InvoiceSchema])
async def get_invoices(
    status_filter: Optional[InvoiceStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(invoices_access)
):
    """
    Get all invoices, newest first, optionally filtered by status.
    """
    query = select(Invoice).order_by(Invoice.id.desc())
    if status_filter is not None:
        query = query.where(Invoice.status == status_filter)
    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{invoice_id}", response_model=InvoiceSchema)
async def get_invoice(
    invoice_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(invoices_access)
):
    """
    Get a specific invoice by ID.
    """
    return await _get_invoice_or_404(db, invoice_id)


@router.post("/", response_model=InvoiceSchema, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice: InvoiceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(invoices_access)
):
    """
    Bill a customer, optionally against one of their repair orders.
    """
    result = await db.execute(select(Invoice).where(Invoice.invoice_number == invoice.invoice_number))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invoice number already exists"
        )
    await _check_billing_target(db, invoice.customer_id, invoice.repair_order_id)

    db_invoice = Invoice(**invoice.model_dump())
    db.add(db_invoice)
    await db.commit()
    await db.refresh(db_invoice)

    logger.info("%s issued invoice %s", current_user.username, db_invoice.invoice_number)
    return db_invoice


@router.put("/{invoice_id}", response_model=InvoiceSchema)
async def update_invoice(
    invoice_id: int,
    invoice_update: InvoiceUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(invoices_access)
):
    """
    Update an invoice. Marking it paid stamps ``paid_at`` when the caller
    does not supply one.
    """
    db_invoice = await _get_invoice_or_404(db, invoice_id)

    update_data = invoice_update.model_dump(exclude_unset=True)
    if update_data.get("status") == InvoiceStatus.PAID and db_invoice.paid_at is None:
        update_data.setdefault("paid_at", datetime.now(timezone.utc))

    for field, value in update_data.items():
        setattr(db_invoice, field, value)

    await db.commit()
    await db.refresh(db_invoice)

    return db_invoice


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(invoices_access)
):
    """
    Delete an invoice.
    """
    db_invoice = await _get_invoice_or_404(db, invoice_id)

    await db.delete(db_invoice)
    await db.commit()

    return None
