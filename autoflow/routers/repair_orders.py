"""
Repair order routes.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autoflow.database import get_db
from autoflow.models.repair_order import RepairOrder, RepairOrderStatus
from autoflow.models.vehicle import Vehicle
from autoflow.models.user import User, UserRole
from autoflow.schemas.repair_order import RepairOrder as RepairOrderSchema, RepairOrderCreate, RepairOrderUpdate
from autoflow.auth import require_access

router = APIRouter(prefix="/repair-orders", tags=["repair-orders"])

repair_orders_access = require_access("/repair-orders")


async def _get_repair_order_or_404(db: AsyncSession, repair_order_id: int) -> RepairOrder:
    result = await db.execute(select(RepairOrder).where(RepairOrder.id == repair_order_id))
    repair_order = result.scalar_one_or_none()
    if not repair_order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Repair order not found"
        )
    return repair_order


async def _check_technician(db: AsyncSession, technician_id: Optional[int]):
    if technician_id is None:
        return
    technician = await db.get(User, technician_id)
    if technician is None or technician.role not in (UserRole.USER, UserRole.ADMIN):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Technician not found"
        )


@router.get("/", response_model=List[RepairOrderSchema])
async def get_repair_orders(
    status_filter: Optional[RepairOrderStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(repair_orders_access)
):
    """
    Get all repair orders with pagination, optionally filtered by status.
    """
    query = select(RepairOrder).order_by(RepairOrder.id.desc())
    if status_filter is not None:
        query = query.where(RepairOrder.status == status_filter)
    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{repair_order_id}", response_model=RepairOrderSchema)
async def get_repair_order(
    repair_order_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(repair_orders_access)
):
    """
    Get a specific repair order by ID.
    """
    return await _get_repair_order_or_404(db, repair_order_id)


@router.post("/", response_model=RepairOrderSchema, status_code=status.HTTP_201_CREATED)
async def create_repair_order(
    repair_order: RepairOrderCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(repair_orders_access)
):
    """
    Open a repair order on a customer's vehicle.
    """
    result = await db.execute(
        select(RepairOrder).where(RepairOrder.order_number == repair_order.order_number)
    )
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order number already exists"
        )

    vehicle = await db.get(Vehicle, repair_order.vehicle_id)
    if vehicle is None or vehicle.customer_id != repair_order.customer_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vehicle does not belong to customer"
        )
    await _check_technician(db, repair_order.technician_id)

    db_repair_order = RepairOrder(**repair_order.model_dump())
    db.add(db_repair_order)
    await db.commit()
    await db.refresh(db_repair_order)

    return db_repair_order


@router.put("/{repair_order_id}", response_model=RepairOrderSchema)
async def update_repair_order(
    repair_order_id: int,
    repair_order_update: RepairOrderUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(repair_orders_access)
):
    """
    Update a repair order. Moving to in-progress or completed stamps the
    matching timestamp when the caller does not supply one.
    """
    db_repair_order = await _get_repair_order_or_404(db, repair_order_id)

    update_data = repair_order_update.model_dump(exclude_unset=True)
    if "technician_id" in update_data:
        await _check_technician(db, update_data["technician_id"])

    now = datetime.now(timezone.utc)
    new_status = update_data.get("status")
    if new_status == RepairOrderStatus.IN_PROGRESS and db_repair_order.started_at is None:
        update_data.setdefault("started_at", now)
    if new_status == RepairOrderStatus.COMPLETED and db_repair_order.completed_at is None:
        update_data.setdefault("completed_at", now)

    for field, value in update_data.items():
        setattr(db_repair_order, field, value)

    await db.commit()
    await db.refresh(db_repair_order)

    return db_repair_order


@router.delete("/{repair_order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_repair_order(
    repair_order_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(repair_orders_access)
):
    """
    Delete a repair order.
    """
    db_repair_order = await _get_repair_order_or_404(db, repair_order_id)

    await db.delete(db_repair_order)
    await db.commit()

    return None
