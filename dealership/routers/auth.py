"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.auth import get_app_settings, get_current_user
from dealership.config import Settings
from dealership.database import get_db
from dealership.models.user import User
from dealership.schemas.user import (
    AuthResponse,
    EmailChange,
    EmailChangeResponse,
    LoginRequest,
    Message,
    PasswordChange,
    ProfileResponse,
    ProfileUpdate,
    UserCreate,
    UserResponse,
)
from dealership.security import create_access_token
from dealership.services import accounts

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Create a customer account and start a session.
    """
    user = await accounts.register(db, data, settings)
    token = create_access_token(user.id, settings)
    set_session_cookie(response, token, settings)

    return {
        "message": "Account created successfully. Welcome!",
        "user": user,
        "token": token,
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Verify credentials and start a session.
    """
    user = await accounts.authenticate(db, credentials.email, credentials.password)
    token = create_access_token(user.id, settings)
    set_session_cookie(response, token, settings)

    return {"message": "Login successful.", "user": user, "token": token}


@router.post("/logout", response_model=Message)
async def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    """
    Clear the session cookie. Bearer tokens simply expire.
    """
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return {"message": "Logged out successfully."}


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Current user."""
    return {"user": current_user}


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = await accounts.update_profile(db, current_user, data)
    return {"message": "Profile updated successfully.", "user": user}


@router.put("/change-password", response_model=Message)
async def change_password(
    data: PasswordChange,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
):
    await accounts.change_password(db, current_user, data, settings)
    return {"message": "Password updated successfully."}


@router.put("/change-email", response_model=EmailChangeResponse)
async def change_email(
    data: EmailChange,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    email = await accounts.change_email(db, current_user, data)
    return {"message": "Email updated successfully.", "email": email}
