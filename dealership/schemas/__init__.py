"""
Pydantic schemas for request/response validation.
"""
from dealership.schemas.user import (
    UserCreate, User, Customer, LoginRequest, ProfileUpdate, PasswordChange, EmailChange,
)
from dealership.schemas.vehicle import VehicleCreate, VehicleUpdate, Vehicle, VehicleSummary
from dealership.schemas.booking import BookingCreate, BookingStatusUpdate, Booking, AdminBooking
from dealership.schemas.inquiry import InquiryCreate, InquiryStatusUpdate, Inquiry
from dealership.schemas.stats import Dashboard, DashboardStats

__all__ = [
    "UserCreate", "User", "Customer", "LoginRequest", "ProfileUpdate", "PasswordChange", "EmailChange",
    "VehicleCreate", "VehicleUpdate", "Vehicle", "VehicleSummary",
    "BookingCreate", "BookingStatusUpdate", "Booking", "AdminBooking",
    "InquiryCreate", "InquiryStatusUpdate", "Inquiry",
    "Dashboard", "DashboardStats",
]
