"""
Account registration, login and profile maintenance.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.config import Settings
from dealership.exceptions import AuthenticationError, ConflictError, ValidationError
from dealership.models.user import User, UserRole
from dealership.schemas.user import EmailChange, PasswordChange, ProfileUpdate, UserCreate
from dealership.security import hash_password, verify_password

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "first_name", "last_name", "phone", "address", "city", "state", "zip", "drivers_license",
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_password(password: str, settings: Settings, label: str = "Password") -> None:
    if len(password) < settings.password_min_length:
        raise ValidationError(
            f"{label} must be at least {settings.password_min_length} characters long."
        )


async def get_user_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def register(db: AsyncSession, data: UserCreate, settings: Settings) -> User:
    """Create a customer account."""
    first_name = data.first_name.strip()
    last_name = data.last_name.strip()
    if not first_name or not last_name:
        raise ValidationError("Email, password, first name, and last name are required.")
    validate_password(data.password, settings)

    email = normalize_email(data.email)
    if await get_user_by_email(db, email):
        raise ConflictError("An account with this email already exists.")

    user = User(
        email=email,
        hashed_password=hash_password(data.password, settings.bcrypt_rounds),
        first_name=first_name,
        last_name=last_name,
        phone=data.phone or None,
        role=UserRole.CUSTOMER,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("An account with this email already exists.")
    await db.refresh(user)

    logger.info("Registered customer account %s", user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """Return the user for a valid email/password pair."""
    if not email or not password:
        raise ValidationError("Email and password are required.")

    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Failed login for %s", normalize_email(email))
        raise AuthenticationError("Invalid email or password.")
    return user


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> User:
    # Empty strings leave the stored value untouched.
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in PROFILE_FIELDS and value:
            setattr(user, field, value.strip())

    await db.commit()
    await db.refresh(user)
    return user


async def change_password(db: AsyncSession, user: User, data: PasswordChange, settings: Settings) -> None:
    if not data.current_password or not data.new_password:
        raise ValidationError("Current password and new password are required.")
    validate_password(data.new_password, settings, label="New password")
    if data.current_password == data.new_password:
        raise ValidationError("New password must be different from current password.")
    if not verify_password(data.current_password, user.hashed_password):
        raise AuthenticationError("Current password is incorrect.")

    user.hashed_password = hash_password(data.new_password, settings.bcrypt_rounds)
    await db.commit()
    logger.info("Password changed for user %s", user.id)


async def change_email(db: AsyncSession, user: User, data: EmailChange) -> str:
    if not verify_password(data.current_password, user.hashed_password):
        raise AuthenticationError("Current password is incorrect.")

    email = normalize_email(data.new_email)
    result = await db.execute(select(User.id).where(User.email == email, User.id != user.id))
    if result.first() is not None:
        raise ConflictError("An account with this email already exists.")

    user.email = email
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("An account with this email already exists.")
    return email
