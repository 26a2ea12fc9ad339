"""
Customer routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from autoflow.database import get_db
from autoflow.models.customer import Customer
from autoflow.models.user import User
from autoflow.schemas.customer import Customer as CustomerSchema, CustomerCreate, CustomerUpdate
from autoflow.auth import require_access

router = APIRouter(prefix="/customers", tags=["customers"])

customers_access = require_access("/customers")


async def _get_customer_or_404(db: AsyncSession, customer_id: int) -> Customer:
    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = result.scalar_one_or_none()
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )
    return customer


async def _check_email_free(db: AsyncSession, email, customer_id: int = None):
    if email is None:
        return
    query = select(Customer).where(Customer.email == email)
    if customer_id is not None:
        query = query.where(Customer.id != customer_id)
    result = await db.execute(query)
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )


@router.get("/", response_model=List[CustomerSchema])
async def get_customers(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(customers_access)
):
    """
    Get all customers with pagination.
    """
    result = await db.execute(
        select(Customer).order_by(Customer.last_name, Customer.first_name).offset(skip).limit(limit)
    )
    return result.scalars().all()


@router.get("/{customer_id}", response_model=CustomerSchema)
async def get_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(customers_access)
):
    """
    Get a specific customer by ID.
    """
    return await _get_customer_or_404(db, customer_id)


@router.post("/", response_model=CustomerSchema, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(customers_access)
):
    """
    Create a new customer.
    """
    await _check_email_free(db, customer.email)

    db_customer = Customer(**customer.model_dump())
    db.add(db_customer)
    await db.commit()
    await db.refresh(db_customer)

    return db_customer


@router.put("/{customer_id}", response_model=CustomerSchema)
async def update_customer(
    customer_id: int,
    customer_update: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(customers_access)
):
    """
    Update a customer.
    """
    db_customer = await _get_customer_or_404(db, customer_id)

    # Update only provided fields
    update_data = customer_update.model_dump(exclude_unset=True)
    await _check_email_free(db, update_data.get("email"), customer_id)
    for field, value in update_data.items():
        setattr(db_customer, field, value)

    await db.commit()
    await db.refresh(db_customer)

    return db_customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(customers_access)
):
    """
    Delete a customer and their vehicles and appointments.
    """
    db_customer = await _get_customer_or_404(db, customer_id)

    await db.delete(db_customer)
    await db.commit()

    return None
