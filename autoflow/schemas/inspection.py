"""
Pydantic schemas for Inspection.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from autoflow.models.inspection import InspectionStatus


class InspectionBase(BaseModel):
    customer_id: int
    vehicle_id: int
    repair_order_id: Optional[int] = None
    technician_id: Optional[int] = None
    service_type: str
    status: InspectionStatus = InspectionStatus.PENDING
    checklist_items: int = Field(default=12, ge=1)
    completed_items: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class InspectionCreate(InspectionBase):
    pass


class InspectionUpdate(BaseModel):
    technician_id: Optional[int] = None
    service_type: Optional[str] = None
    status: Optional[InspectionStatus] = None
    checklist_items: Optional[int] = Field(default=None, ge=1)
    completed_items: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class Inspection(InspectionBase):
    """Schema for inspection responses."""
    id: int
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
