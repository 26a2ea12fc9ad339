"""
Vehicle routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autoflow.database import get_db
from autoflow.models.customer import Customer
from autoflow.models.vehicle import Vehicle
from autoflow.models.user import User
from autoflow.schemas.vehicle import Vehicle as VehicleSchema, VehicleCreate, VehicleUpdate
from autoflow.auth import require_access

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

vehicles_access = require_access("/vehicles")


async def _get_vehicle_or_404(db: AsyncSession, vehicle_id: int) -> Vehicle:
    result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
    vehicle = result.scalar_one_or_none()
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found"
        )
    return vehicle


async def _check_customer_exists(db: AsyncSession, customer_id: int):
    if await db.get(Customer, customer_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Customer does not exist"
        )


async def _check_vin_free(db: AsyncSession, vin: Optional[str], vehicle_id: int = None):
    if not vin:
        return
    query = select(Vehicle).where(Vehicle.vin == vin)
    if vehicle_id is not None:
        query = query.where(Vehicle.id != vehicle_id)
    result = await db.execute(query)
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="VIN already registered"
        )


@router.get("/", response_model=List[VehicleSchema])
async def get_vehicles(
    customer_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(vehicles_access)
):
    """
    Get vehicles with pagination, optionally for a single customer.
    """
    query = select(Vehicle)
    if customer_id is not None:
        query = query.where(Vehicle.customer_id == customer_id)
    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{vehicle_id}", response_model=VehicleSchema)
async def get_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(vehicles_access)
):
    """
    Get a specific vehicle by ID.
    """
    return await _get_vehicle_or_404(db, vehicle_id)


@router.post("/", response_model=VehicleSchema, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(vehicles_access)
):
    """
    Create a new vehicle.
    """
    await _check_customer_exists(db, vehicle.customer_id)
    await _check_vin_free(db, vehicle.vin)

    db_vehicle = Vehicle(**vehicle.model_dump())
    db.add(db_vehicle)
    await db.commit()
    await db.refresh(db_vehicle)

    return db_vehicle


@router.put("/{vehicle_id}", response_model=VehicleSchema)
async def update_vehicle(
    vehicle_id: int,
    vehicle_update: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(vehicles_access)
):
    """
    Update a vehicle.
    """
    db_vehicle = await _get_vehicle_or_404(db, vehicle_id)

    # Update only provided fields
    update_data = vehicle_update.model_dump(exclude_unset=True)
    if "customer_id" in update_data:
        await _check_customer_exists(db, update_data["customer_id"])
    await _check_vin_free(db, update_data.get("vin"), vehicle_id)
    for field, value in update_data.items():
        setattr(db_vehicle, field, value)

    await db.commit()
    await db.refresh(db_vehicle)

    return db_vehicle


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(vehicles_access)
):
    """
    Delete a vehicle.
    """
    db_vehicle = await _get_vehicle_or_404(db, vehicle_id)

    await db.delete(db_vehicle)
    await db.commit()

    return None
