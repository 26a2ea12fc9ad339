"""
Pydantic schemas for Invoice.
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from typing import Optional
from autoflow.models.invoice import InvoiceStatus


class InvoiceBase(BaseModel):
    """Base invoice schema with common fields."""
    invoice_number: str
    customer_id: int
    repair_order_id: Optional[int] = None
    subtotal: float = Field(ge=0)
    tax: float = Field(default=0.0, ge=0)
    total: Optional[float] = None
    status: InvoiceStatus = InvoiceStatus.PENDING
    due_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class InvoiceCreate(InvoiceBase):
    """Schema for creating an invoice. ``total`` defaults to subtotal plus tax."""

    @model_validator(mode="after")
    def fill_total(self):
        if self.total is None:
            self.total = round(self.subtotal + self.tax, 2)
        return self


class InvoiceUpdate(BaseModel):
    """Schema for updating an invoice."""
    subtotal: Optional[float] = Field(default=None, ge=0)
    tax: Optional[float] = Field(default=None, ge=0)
    total: Optional[float] = None
    status: Optional[InvoiceStatus] = None
    due_date: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class Invoice(InvoiceBase):
    """Schema for invoice responses."""
    id: int
    total: float
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
