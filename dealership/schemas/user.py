"""
Pydantic schemas for User and Authentication.
"""
from pydantic import BaseModel, EmailStr, ConfigDict, Field
from datetime import datetime
from typing import Optional
from dealership.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = None


class UserCreate(UserBase):
    """Schema for registering a customer account."""
    password: str


class ProfileUpdate(BaseModel):
    """Schema for updating profile fields. Omitted or empty fields are left as they are."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    drivers_license: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


class EmailChange(BaseModel):
    current_password: str
    new_email: EmailStr


class User(BaseModel):
    """Schema for user responses. Never carries the password hash."""
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    drivers_license: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Customer(User):
    """Customer row in the admin back-office."""
    booking_count: int = 0


class UserSummary(BaseModel):
    """Who made a booking, as shown to admins."""
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Schema for login request."""
    email: str
    password: str


class AuthResponse(BaseModel):
    """Returned by register and login."""
    message: str
    user: User
    token: str


class UserResponse(BaseModel):
    user: User


class ProfileResponse(BaseModel):
    message: str
    user: User


class EmailChangeResponse(BaseModel):
    message: str
    email: str


class CustomerList(BaseModel):
    customers: list[Customer]


class Message(BaseModel):
    message: str
