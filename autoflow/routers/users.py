"""
User management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import List

from autoflow.database import get_db
from autoflow.models.user import User
from autoflow.schemas.user import User as UserSchema, UserCreate, UserUpdate, RoleUpdate
from autoflow.auth import hash_password, require_access

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

users_access = require_access("/users")


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.get("/", response_model=List[UserSchema])
async def get_users(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(users_access)
):
    """
    Get all user accounts with pagination.
    """
    result = await db.execute(select(User).order_by(User.id).offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserSchema)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(users_access)
):
    """
    Get a specific user by ID.
    """
    return await _get_user_or_404(db, user_id)


@router.post("/", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(users_access)
):
    """
    Create a user account.
    """
    result = await db.execute(
        select(User).where(or_(User.username == user.username, User.email == user.email))
    )
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already registered"
        )

    data = user.model_dump(exclude={"password"})
    db_user = User(**data, hashed_password=hash_password(user.password))
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)

    logger.info("%s created user '%s' with role %s", current_user.username, db_user.username, db_user.role.value)
    return db_user


@router.put("/{user_id}", response_model=UserSchema)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(users_access)
):
    """
    Update a user's profile, password or active flag. Shop managers cannot
    disable their own account.
    """
    db_user = await _get_user_or_404(db, user_id)

    update_data = user_update.model_dump(exclude_unset=True)
    if update_data.get("is_active") is False and db_user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot disable your own account"
        )
    if update_data.get("email") is not None:
        result = await db.execute(
            select(User).where(User.email == update_data["email"], User.id != user_id)
        )
        if result.scalar_one_or_none():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username or email already registered"
            )

    password = update_data.pop("password", None)
    if password:
        db_user.hashed_password = hash_password(password)
    for field, value in update_data.items():
        setattr(db_user, field, value)

    await db.commit()
    await db.refresh(db_user)

    return db_user


@router.patch("/{user_id}/role", response_model=UserSchema)
async def update_user_role(
    user_id: int,
    role_update: RoleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(users_access)
):
    """
    Change a user's role. Shop managers cannot change their own role.
    """
    db_user = await _get_user_or_404(db, user_id)
    if db_user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot change your own role"
        )

    old_role = db_user.role
    db_user.role = role_update.role
    await db.commit()
    await db.refresh(db_user)

    logger.info("%s changed role of '%s' from %s to %s",
                current_user.username, db_user.username, old_role.value, db_user.role.value)
    return db_user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(users_access)
):
    """
    Delete a user account.
    """
    db_user = await _get_user_or_404(db, user_id)
    if db_user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account"
        )

    await db.delete(db_user)
    await db.commit()

    return None
