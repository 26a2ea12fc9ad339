"""
Authentication: password hashing, JWT access tokens and the request-level
auth session that feeds the access-control layer.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoflow.config import Settings, get_settings
from autoflow.database import get_db
from autoflow.models.user import User, UserRole
from autoflow.rbac import AccessEvaluator, AuthSession, get_access_evaluator

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: User, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token whose subject is the username."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": user.username, "role": user.role.value, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[dict]:
    """Return the token payload, or None if it is invalid or expired."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError as e:
        logger.debug("Rejected access token: %s", e)
        return None


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def authenticate_user(db: AsyncSession, username: str, password: str) -> Optional[User]:
    user = await get_user_by_username(db, username)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


async def get_auth_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthSession:
    """
    Resolve the caller's auth session from the bearer token.

    A missing or invalid token, an unknown user, or a disabled account all
    resolve to an anonymous session rather than an error.
    """
    if credentials is None:
        return AuthSession.anonymous()

    payload = decode_access_token(credentials.credentials, settings)
    username = payload.get("sub") if payload else None
    if not username:
        return AuthSession.anonymous()

    user = await get_user_by_username(db, username)
    if user is None or not user.is_active:
        return AuthSession.anonymous()

    return AuthSession.for_user(user)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_active_user(session: AuthSession = Depends(get_auth_session)) -> User:
    """Require an authenticated, active user."""
    if not session.is_authenticated:
        raise _unauthorized()
    return session.user


def require_access(page_path: str):
    """
    Dependency factory gating an endpoint on the page it backs.

    The decision goes through ``AccessEvaluator.has_access`` so API and
    front-end gating share one registry.
    """

    async def dependency(
        session: AuthSession = Depends(get_auth_session),
        evaluator: AccessEvaluator = Depends(get_access_evaluator),
    ) -> User:
        if not session.is_authenticated:
            raise _unauthorized()

        role = session.role
        if not evaluator.has_access(role, page_path):
            entry = evaluator.find_entry(page_path)
            required_roles = sorted(r.value for r in entry.roles) if entry else []
            logger.info("Denied %s access to %s (role=%s)", session.user.username, page_path, role.value)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "message": "Access denied",
                    "required_roles": required_roles,
                    "user_role": role.value,
                },
            )
        return session.user

    return dependency


async def ensure_first_admin(db: AsyncSession, settings: Settings) -> Optional[User]:
    """Create the bootstrap shop manager if no account with that username exists."""
    if await get_user_by_username(db, settings.first_admin_username):
        return None

    admin = User(
        username=settings.first_admin_username,
        email=settings.first_admin_email,
        hashed_password=hash_password(settings.first_admin_password),
        first_name="Shop",
        last_name="Manager",
        role=UserRole.ADMIN,
    )
    db.add(admin)
    await db.commit()
    logger.info("Created first shop manager account '%s'", admin.username)
    return admin
