"""
Booking creation and status transitions.

Every write to a booking's status goes through ``apply_status`` so the
vehicle's status is always recomputed from the lifecycle table, in the same
transaction as the booking change.
"""
import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dealership.exceptions import ConflictError, NotFoundError, ValidationError
from dealership.lifecycle import (
    booking_total,
    can_book,
    can_customer_cancel,
    generate_booking_ref,
    vehicle_status_for,
)
from dealership.models.booking import Booking, BookingStatus, BookingType
from dealership.models.user import User
from dealership.models.vehicle import Vehicle, VehicleStatus
from dealership.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


async def unique_booking_ref(db: AsyncSession) -> str:
    """Draw references until one is not already taken."""
    while True:
        ref = generate_booking_ref()
        taken = await db.scalar(select(Booking.id).where(Booking.booking_ref == ref))
        if taken is None:
            return ref
        logger.debug("Booking reference %s already taken, drawing again", ref)


async def load_booking(db: AsyncSession, booking_id: int, with_user: bool = False) -> Optional[Booking]:
    options = [selectinload(Booking.vehicle)]
    if with_user:
        options.append(selectinload(Booking.user))
    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking_id)
        .options(*options)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def apply_status(db: AsyncSession, booking: Booking, new_status: BookingStatus) -> VehicleStatus:
    """Move a booking to ``new_status`` and bring its vehicle along. Does not commit."""
    vehicle_status = vehicle_status_for(booking.booking_type, new_status)
    booking.status = new_status
    if booking.vehicle_id is not None:
        await db.execute(
            update(Vehicle)
            .where(Vehicle.id == booking.vehicle_id)
            .values(status=vehicle_status)
        )
    return vehicle_status


async def create_booking(db: AsyncSession, user: User, data: BookingCreate) -> Booking:
    """
    Reserve a vehicle for a customer.

    The availability check, the vehicle status change and the booking insert
    happen in one transaction. The vehicle row is locked where the backend
    supports it, and the status change itself only applies while the vehicle
    is still available, so two concurrent requests cannot both succeed.
    """
    booking_type = BookingType(data.booking_type)
    if booking_type == BookingType.RENTAL and not data.duration:
        raise ValidationError("Duration is required for rental bookings.")

    try:
        result = await db.execute(
            select(Vehicle).where(Vehicle.id == data.vehicle_id).with_for_update()
        )
        vehicle = result.scalar_one_or_none()
        if vehicle is None:
            raise NotFoundError("Vehicle not found.")

        unavailable = ConflictError(
            f"This vehicle is not currently available for {booking_type.value}."
        )
        if not can_book(vehicle.status):
            raise unavailable

        reserved = await db.execute(
            update(Vehicle)
            .where(Vehicle.id == vehicle.id, Vehicle.status == VehicleStatus.AVAILABLE)
            .values(status=vehicle_status_for(booking_type, BookingStatus.PENDING))
        )
        if reserved.rowcount != 1:
            raise unavailable

        booking = Booking(
            booking_ref=await unique_booking_ref(db),
            user_id=user.id,
            vehicle_id=vehicle.id,
            booking_type=booking_type,
            start_date=data.start_date or None,
            end_date=data.end_date or None,
            duration=data.duration or None,
            status=BookingStatus.PENDING,
            total_price=booking_total(vehicle, booking_type, data.duration),
            notes=data.notes or None,
            financing_type=data.financing_type or None,
        )
        db.add(booking)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Booking %s created: %s of vehicle %s by user %s",
        booking.booking_ref, booking_type.value, vehicle.id, user.id,
    )
    return await load_booking(db, booking.id)


async def list_user_bookings(db: AsyncSession, user: User) -> list[Booking]:
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == user.id)
        .options(selectinload(Booking.vehicle))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    return result.scalars().all()


async def get_user_booking(db: AsyncSession, user: User, booking_id: int) -> Booking:
    """A booking owned by ``user``; anything else is reported as not found."""
    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking_id, Booking.user_id == user.id)
        .options(selectinload(Booking.vehicle))
    )
    booking = result.scalar_one_or_none()
    if booking is None:
        raise NotFoundError("Booking not found.")
    return booking


async def cancel_booking(db: AsyncSession, user: User, booking_id: int) -> Booking:
    """Customer-initiated cancellation of a pending booking."""
    try:
        result = await db.execute(
            select(Booking)
            .where(Booking.id == booking_id, Booking.user_id == user.id)
            .with_for_update()
        )
        booking = result.scalar_one_or_none()
        if booking is None:
            raise NotFoundError("Booking not found.")

        if booking.status == BookingStatus.CANCELLED:
            raise ConflictError("This booking is already cancelled.")
        if booking.status == BookingStatus.COMPLETED:
            raise ConflictError("Cannot cancel a completed booking.")
        if not can_customer_cancel(booking.status):
            raise ConflictError(
                "This booking has already been confirmed. Please contact the dealership to cancel it."
            )

        await apply_status(db, booking, BookingStatus.CANCELLED)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Booking %s cancelled by its owner", booking.booking_ref)
    return await load_booking(db, booking_id)


async def update_booking_status(
    db: AsyncSession,
    booking_id: int,
    new_status: Optional[BookingStatus] = None,
    notes: Optional[str] = None,
) -> Booking:
    """
    Admin transition. Last write wins; there is no version check.

    A booking that has reached a terminal status cannot be moved again, since
    its vehicle may already be committed to another booking.
    """
    try:
        result = await db.execute(
            select(Booking).where(Booking.id == booking_id).with_for_update()
        )
        booking = result.scalar_one_or_none()
        if booking is None:
            raise NotFoundError("Booking not found.")

        previous = BookingStatus(booking.status)
        if new_status is not None and new_status != previous:
            if previous.is_terminal:
                raise ConflictError(f"This booking is already {previous.value} and cannot be changed.")
            vehicle_status = await apply_status(db, booking, new_status)
            logger.info(
                "Booking %s moved from %s to %s; vehicle %s is now %s",
                booking.booking_ref, previous.value, new_status.value,
                booking.vehicle_id, vehicle_status.value,
            )
        if notes:
            booking.notes = notes
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return await load_booking(db, booking_id, with_user=True)
