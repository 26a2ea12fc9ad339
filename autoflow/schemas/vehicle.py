"""
Pydantic schemas for Vehicle.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class VehicleBase(BaseModel):
    """Base vehicle schema with common fields."""
    customer_id: int
    year: int = Field(ge=1900, le=2100)
    make: str
    model: str
    vin: Optional[str] = Field(default=None, max_length=17)
    license_plate: Optional[str] = None
    color: Optional[str] = None
    mileage: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle."""
    pass


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle."""
    customer_id: Optional[int] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    make: Optional[str] = None
    model: Optional[str] = None
    vin: Optional[str] = Field(default=None, max_length=17)
    license_plate: Optional[str] = None
    color: Optional[str] = None
    mileage: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class Vehicle(VehicleBase):
    """Schema for vehicle responses."""
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
