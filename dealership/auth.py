"""
Authentication dependencies.

The session token is read from the HTTP-only cookie first and from an
``Authorization: Bearer`` header second. An invalid or expired token is
treated the same as no token at all.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.config import Settings
from dealership.database import get_db
from dealership.exceptions import AuthenticationError, PermissionDenied
from dealership.models.user import User
from dealership.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def extract_token(
    request: Request,
    settings: Settings,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    token = request.cookies.get(settings.cookie_name)
    if token:
        return token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


async def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Optional[User]:
    """Resolve the caller to a user, or None when unauthenticated."""
    token = extract_token(request, settings, credentials)
    if not token:
        return None

    user_id = decode_access_token(token, settings)
    if user_id is None:
        return None

    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """Require an authenticated user."""
    if user is None:
        raise AuthenticationError("Authentication required. Please log in.")
    return user


async def get_current_admin(
    user: User = Depends(get_current_user),
) -> User:
    """Require an authenticated admin."""
    if not user.is_admin:
        raise PermissionDenied("Admin access required.")
    return user
