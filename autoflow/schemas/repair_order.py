"""
Pydantic schemas for RepairOrder.
"""
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional
from autoflow.models.repair_order import RepairOrderStatus, RepairOrderPriority


class RepairOrderBase(BaseModel):
    """Base repair order schema with common fields."""
    order_number: str
    customer_id: int
    vehicle_id: int
    appointment_id: Optional[int] = None
    technician_id: Optional[int] = None
    status: RepairOrderStatus = RepairOrderStatus.CREATED
    priority: RepairOrderPriority = RepairOrderPriority.NORMAL
    description: str
    diagnosis: Optional[str] = None
    estimated_cost: Optional[float] = None


class RepairOrderCreate(RepairOrderBase):
    """Schema for creating a repair order."""
    pass


class RepairOrderUpdate(BaseModel):
    """Schema for updating a repair order."""
    technician_id: Optional[int] = None
    status: Optional[RepairOrderStatus] = None
    priority: Optional[RepairOrderPriority] = None
    description: Optional[str] = None
    diagnosis: Optional[str] = None
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class RepairOrder(RepairOrderBase):
    """Schema for repair order responses."""
    id: int
    actual_cost: Optional[float] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
