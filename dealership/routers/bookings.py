"""
Customer booking routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.auth import get_current_user
from dealership.database import get_db
from dealership.models.user import User
from dealership.schemas.booking import BookingCreate, BookingList, BookingMessage, BookingResponse
from dealership.services import bookings

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingMessage, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Request to purchase, lease or rent an available vehicle. The vehicle is
    reserved until the dealership confirms or the booking is cancelled.
    """
    booking = await bookings.create_booking(db, current_user, data)
    return {
        "message": f"Booking created successfully! Your reference number is {booking.booking_ref}.",
        "booking": booking,
    }


@router.get("/my", response_model=BookingList)
async def my_bookings(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"bookings": await bookings.list_user_bookings(db, current_user)}


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"booking": await bookings.get_user_booking(db, current_user, booking_id)}


@router.put("/{booking_id}/cancel", response_model=BookingMessage)
async def cancel_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Cancel one of your own bookings while it is still pending.
    """
    booking = await bookings.cancel_booking(db, current_user, booking_id)
    return {"message": "Booking cancelled successfully.", "booking": booking}
