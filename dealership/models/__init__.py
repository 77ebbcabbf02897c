"""
SQLAlchemy database models.
"""
from dealership.models.user import User, UserRole
from dealership.models.vehicle import Vehicle, VehicleStatus
from dealership.models.booking import Booking, BookingStatus, BookingType
from dealership.models.inquiry import Inquiry, InquiryStatus, InquiryType

__all__ = [
    "User", "UserRole",
    "Vehicle", "VehicleStatus",
    "Booking", "BookingStatus", "BookingType",
    "Inquiry", "InquiryStatus", "InquiryType",
]
