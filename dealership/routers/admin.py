"""
Admin back-office routes.

Everything here requires an admin, except submitting an inquiry, which is
the public contact form.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from dealership.auth import get_current_admin, get_current_user_optional
from dealership.database import get_db
from dealership.models.user import User
from dealership.schemas.booking import AdminBookingList, AdminBookingMessage, BookingStatusUpdate
from dealership.schemas.inquiry import (
    InquiryCreate,
    InquiryCreated,
    InquiryList,
    InquiryMessage,
    InquiryStatusUpdate,
)
from dealership.schemas.stats import Dashboard
from dealership.schemas.user import CustomerList, Message
from dealership.schemas.vehicle import VehicleCollection, VehicleCreate, VehicleMessage, VehicleUpdate
from dealership.services import admin, bookings, inquiries

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=Dashboard)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """
    Dashboard counts, revenue figures and the latest activity.
    """
    return await admin.dashboard_stats(db)


# Vehicles

@router.get("/vehicles", response_model=VehicleCollection)
async def list_vehicles(
    status: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    return {"vehicles": await admin.list_all_vehicles(db, status, sort, order)}


@router.post("/vehicles", response_model=VehicleMessage, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    data: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    vehicle = await admin.create_vehicle(db, data)
    return {"message": "Vehicle added successfully.", "vehicle": vehicle}


@router.put("/vehicles/{vehicle_id}", response_model=VehicleMessage)
async def update_vehicle(
    vehicle_id: int,
    data: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    vehicle = await admin.update_vehicle(db, vehicle_id, data)
    return {"message": "Vehicle updated successfully.", "vehicle": vehicle}


@router.delete("/vehicles/{vehicle_id}", response_model=Message)
async def delete_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """
    Delete a vehicle. Refused while a pending, confirmed or active booking
    references it.
    """
    await admin.delete_vehicle(db, vehicle_id)
    return {"message": "Vehicle deleted successfully."}


# Bookings

@router.get("/bookings", response_model=AdminBookingList)
async def list_bookings(
    status: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    return {"bookings": await admin.list_all_bookings(db, status)}


@router.put("/bookings/{booking_id}", response_model=AdminBookingMessage)
async def update_booking(
    booking_id: int,
    data: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """
    Move a booking through its lifecycle; the vehicle's status follows.
    """
    booking = await bookings.update_booking_status(db, booking_id, data.status, data.notes)
    return {"message": "Booking updated successfully.", "booking": booking}


# Customers

@router.get("/customers", response_model=CustomerList)
async def list_customers(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    return {"customers": await admin.list_customers(db)}


# Inquiries

@router.get("/inquiries", response_model=InquiryList)
async def list_inquiries(
    status: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    return {"inquiries": await inquiries.list_inquiries(db, status)}


@router.post("/inquiries", response_model=InquiryCreated, status_code=status.HTTP_201_CREATED)
async def create_inquiry(
    data: InquiryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """
    Contact form submission. No login required.
    """
    inquiry = await inquiries.create_inquiry(db, data, current_user)
    return {
        "message": "Thank you for your inquiry! Our team will be in touch shortly.",
        "inquiry_id": inquiry.id,
    }


@router.put("/inquiries/{inquiry_id}", response_model=InquiryMessage)
async def update_inquiry(
    inquiry_id: int,
    data: InquiryStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    inquiry = await inquiries.update_inquiry_status(db, inquiry_id, data.status)
    return {"message": "Inquiry status updated.", "inquiry": inquiry}
