"""
Authentication routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from autoflow.config import Settings, get_settings
from autoflow.database import get_db
from autoflow.models.user import User
from autoflow.schemas.user import User as UserSchema, Token, LoginRequest
from autoflow.auth import authenticate_user, create_access_token, get_current_active_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Exchange username and password for a bearer token.
    """
    user = await authenticate_user(db, credentials.username, credentials.password)
    if not user:
        logger.info("Failed login for '%s'", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account disabled"
        )

    return {
        "access_token": create_access_token(user, settings),
        "token_type": "bearer",
        "user": UserSchema.model_validate(user),
    }


@router.get("/user", response_model=UserSchema)
async def read_current_user(current_user: User = Depends(get_current_active_user)):
    """
    Get the signed-in user.
    """
    return current_user


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_active_user)):
    """
    Log out. Tokens are stateless, so the client discards its token.
    """
    logger.info("User '%s' logged out", current_user.username)
    return {"message": "Logged out successfully"}
