"""
Pydantic schemas for Appointment.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from autoflow.models.appointment import AppointmentStatus


class AppointmentBase(BaseModel):
    """Base appointment schema with common fields."""
    customer_id: int
    vehicle_id: int
    scheduled_date: datetime
    duration: int = Field(default=60, gt=0)
    service_type: str
    description: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None


class AppointmentCreate(AppointmentBase):
    """Schema for creating an appointment."""
    pass


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment."""
    scheduled_date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    service_type: Optional[str] = None
    description: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None


class Appointment(AppointmentBase):
    """Schema for appointment responses."""
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
