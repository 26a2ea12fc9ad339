"""
Digital inspection routes.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autoflow.database import get_db
from autoflow.models.inspection import Inspection, InspectionStatus
from autoflow.models.vehicle import Vehicle
from autoflow.models.user import User
from autoflow.schemas.inspection import Inspection as InspectionSchema, InspectionCreate, InspectionUpdate
from autoflow.auth import require_access

router = APIRouter(prefix="/inspections", tags=["inspections"])

inspections_access = require_access("/inspections")


async def _get_inspection_or_404(db: AsyncSession, inspection_id: int) -> Inspection:
    inspection = await db.get(Inspection, inspection_id)
    if not inspection:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inspection not found"
        )
    return inspection


def _check_progress(checklist_items: int, completed_items: int):
    if completed_items > checklist_items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Completed items exceed checklist items"
        )


@router.get("/", response_model=List[InspectionSchema])
async def get_inspections(
    status_filter: Optional[InspectionStatus] = None,
    vehicle_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(inspections_access)
):
    """
    Get inspections, newest first, optionally filtered by status or vehicle.
    """
    query = select(Inspection).order_by(Inspection.id.desc())
    if status_filter is not None:
        query = query.where(Inspection.status == status_filter)
    if vehicle_id is not None:
        query = query.where(Inspection.vehicle_id == vehicle_id)
    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{inspection_id}", response_model=InspectionSchema)
async def get_inspection(
    inspection_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(inspections_access)
):
    """
    Get a specific inspection by ID.
    """
    return await _get_inspection_or_404(db, inspection_id)


@router.post("/", response_model=InspectionSchema, status_code=status.HTTP_201_CREATED)
async def create_inspection(
    inspection: InspectionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(inspections_access)
):
    """
    Start an inspection on a customer's vehicle. The technician defaults to
    the caller.
    """
    vehicle = await db.get(Vehicle, inspection.vehicle_id)
    if vehicle is None or vehicle.customer_id != inspection.customer_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vehicle does not belong to customer"
        )
    _check_progress(inspection.checklist_items, inspection.completed_items)

    data = inspection.model_dump()
    if data["technician_id"] is None:
        data["technician_id"] = current_user.id
    db_inspection = Inspection(**data)
    db.add(db_inspection)
    await db.commit()
    await db.refresh(db_inspection)

    return db_inspection


@router.put("/{inspection_id}", response_model=InspectionSchema)
async def update_inspection(
    inspection_id: int,
    inspection_update: InspectionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(inspections_access)
):
    """
    Update an inspection's progress or notes.
    """
    db_inspection = await _get_inspection_or_404(db, inspection_id)

    update_data = inspection_update.model_dump(exclude_unset=True)
    _check_progress(
        update_data.get("checklist_items", db_inspection.checklist_items),
        update_data.get("completed_items", db_inspection.completed_items),
    )
    if update_data.get("status") == InspectionStatus.COMPLETED and db_inspection.completed_at is None:
        update_data["completed_at"] = datetime.now(timezone.utc)

    for field, value in update_data.items():
        setattr(db_inspection, field, value)

    await db.commit()
    await db.refresh(db_inspection)

    return db_inspection


@router.delete("/{inspection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inspection(
    inspection_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(inspections_access)
):
    """
    Delete an inspection.
    """
    db_inspection = await _get_inspection_or_404(db, inspection_id)

    await db.delete(db_inspection)
    await db.commit()

    return None
