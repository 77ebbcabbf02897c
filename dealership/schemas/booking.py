"""
Pydantic schemas for Booking.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from dealership.models.booking import BookingStatus, BookingType
from dealership.schemas.user import UserSummary
from dealership.schemas.vehicle import VehicleSummary


class BookingCreate(BaseModel):
    """Schema for creating a booking."""
    vehicle_id: int = Field(..., gt=0)
    booking_type: BookingType
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    duration: Optional[str] = None
    notes: Optional[str] = None
    financing_type: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    """Schema for the admin status transition."""
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None


class Booking(BaseModel):
    """Schema for booking responses."""
    id: int
    booking_ref: str
    user_id: int
    vehicle_id: Optional[int] = None
    booking_type: BookingType
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    duration: Optional[str] = None
    status: BookingStatus
    total_price: Optional[float] = None
    notes: Optional[str] = None
    financing_type: Optional[str] = None
    created_at: Optional[datetime] = None
    vehicle: Optional[VehicleSummary] = None

    model_config = ConfigDict(from_attributes=True)


class AdminBooking(Booking):
    """Booking as listed in the back-office, with the customer attached."""
    user: Optional[UserSummary] = None


class BookingResponse(BaseModel):
    booking: Booking


class BookingMessage(BaseModel):
    message: str
    booking: Booking


class BookingList(BaseModel):
    bookings: list[Booking]


class AdminBookingList(BaseModel):
    bookings: list[AdminBooking]


class AdminBookingMessage(BaseModel):
    message: str
    booking: AdminBooking
