"""
Appointment routes.
"""
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autoflow.database import get_db
from autoflow.models.appointment import Appointment
from autoflow.models.vehicle import Vehicle
from autoflow.models.user import User
from autoflow.schemas.appointment import Appointment as AppointmentSchema, AppointmentCreate, AppointmentUpdate
from autoflow.auth import require_access

router = APIRouter(prefix="/appointments", tags=["appointments"])

appointments_access = require_access("/appointments")


async def _get_appointment_or_404(db: AsyncSession, appointment_id: int) -> Appointment:
    result = await db.execute(select(Appointment).where(Appointment.id == appointment_id))
    appointment = result.scalar_one_or_none()
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )
    return appointment


@router.get("/", response_model=List[AppointmentSchema])
async def get_appointments(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(appointments_access)
):
    """
    Get appointments ordered by date, optionally within a date range.
    """
    query = select(Appointment).order_by(Appointment.scheduled_date)
    if start_date is not None:
        query = query.where(Appointment.scheduled_date >= start_date)
    if end_date is not None:
        query = query.where(Appointment.scheduled_date <= end_date)
    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{appointment_id}", response_model=AppointmentSchema)
async def get_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(appointments_access)
):
    """
    Get a specific appointment by ID.
    """
    return await _get_appointment_or_404(db, appointment_id)


@router.post("/", response_model=AppointmentSchema, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(appointments_access)
):
    """
    Book an appointment for a customer's vehicle.
    """
    vehicle = await db.get(Vehicle, appointment.vehicle_id)
    if vehicle is None or vehicle.customer_id != appointment.customer_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vehicle does not belong to customer"
        )

    db_appointment = Appointment(**appointment.model_dump())
    db.add(db_appointment)
    await db.commit()
    await db.refresh(db_appointment)

    return db_appointment


@router.patch("/{appointment_id}", response_model=AppointmentSchema)
async def update_appointment(
    appointment_id: int,
    appointment_update: AppointmentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(appointments_access)
):
    """
    Update an appointment.
    """
    db_appointment = await _get_appointment_or_404(db, appointment_id)

    # Update only provided fields
    update_data = appointment_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_appointment, field, value)

    await db.commit()
    await db.refresh(db_appointment)

    return db_appointment


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(appointments_access)
):
    """
    Cancel and remove an appointment.
    """
    db_appointment = await _get_appointment_or_404(db, appointment_id)

    await db.delete(db_appointment)
    await db.commit()

    return None
