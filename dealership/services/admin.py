"""
Back-office queries and inventory maintenance.
"""
import logging
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dealership.exceptions import ConflictError, NotFoundError
from dealership.models.booking import (
    Booking,
    BookingStatus,
    OPEN_BOOKING_STATUSES,
    REVENUE_BOOKING_STATUSES,
)
from dealership.models.inquiry import Inquiry, InquiryStatus
from dealership.models.user import User, UserRole
from dealership.models.vehicle import Vehicle, VehicleStatus
from dealership.schemas.vehicle import VehicleCreate, VehicleUpdate
from dealership.services.catalog import SORT_FIELDS, get_vehicle, order_by, parse_status

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5

ADMIN_SORT_FIELDS = dict(SORT_FIELDS, status=Vehicle.status)

DUPLICATE_VIN = "A vehicle with this VIN already exists."


async def dashboard_stats(db: AsyncSession) -> dict:
    """Counts and sums for the admin dashboard."""
    result = await db.execute(
        select(Vehicle.status, func.count(Vehicle.id)).group_by(Vehicle.status)
    )
    by_status = {VehicleStatus(status): count for status, count in result.all()}

    active_bookings = await db.scalar(
        select(func.count(Booking.id)).where(Booking.status.in_(OPEN_BOOKING_STATUSES))
    )
    total_bookings = await db.scalar(select(func.count(Booking.id)))
    registered_customers = await db.scalar(
        select(func.count(User.id)).where(User.role == UserRole.CUSTOMER)
    )
    revenue_potential = await db.scalar(
        select(func.coalesce(func.sum(Vehicle.price), 0.0))
        .where(Vehicle.status == VehicleStatus.AVAILABLE)
    )
    total_revenue = await db.scalar(
        select(func.coalesce(func.sum(Booking.total_price), 0.0))
        .where(Booking.status.in_(REVENUE_BOOKING_STATUSES))
    )
    new_inquiries = await db.scalar(
        select(func.count(Inquiry.id)).where(Inquiry.status == InquiryStatus.NEW)
    )

    recent_bookings = await db.execute(
        select(Booking)
        .options(selectinload(Booking.user), selectinload(Booking.vehicle))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .limit(RECENT_LIMIT)
    )
    recent_inquiries = await db.execute(
        select(Inquiry)
        .options(selectinload(Inquiry.vehicle))
        .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        .limit(RECENT_LIMIT)
    )

    return {
        "stats": {
            "total_vehicles": sum(by_status.values()),
            "available_vehicles": by_status.get(VehicleStatus.AVAILABLE, 0),
            "reserved_vehicles": by_status.get(VehicleStatus.RESERVED, 0),
            "sold_vehicles": by_status.get(VehicleStatus.SOLD, 0),
            "leased_vehicles": by_status.get(VehicleStatus.LEASED, 0),
            "rented_vehicles": by_status.get(VehicleStatus.RENTED, 0),
            "active_bookings": active_bookings or 0,
            "total_bookings": total_bookings or 0,
            "registered_customers": registered_customers or 0,
            "revenue_potential": float(revenue_potential or 0),
            "total_revenue": float(total_revenue or 0),
            "new_inquiries": new_inquiries or 0,
        },
        "recent_bookings": recent_bookings.scalars().all(),
        "recent_inquiries": recent_inquiries.scalars().all(),
    }


async def list_all_vehicles(
    db: AsyncSession,
    status: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> list[Vehicle]:
    """Every vehicle regardless of status, optionally filtered by one."""
    query = select(Vehicle)
    wanted = parse_status(status)
    if wanted is False:
        return []
    if wanted is not None:
        query = query.where(Vehicle.status == wanted)

    result = await db.execute(query.order_by(*order_by(sort, order, ADMIN_SORT_FIELDS)))
    return result.scalars().all()


async def ensure_vin_free(db: AsyncSession, vin: Optional[str], vehicle_id: Optional[int] = None) -> None:
    if not vin:
        return
    query = select(Vehicle.id).where(Vehicle.vin == vin)
    if vehicle_id is not None:
        query = query.where(Vehicle.id != vehicle_id)
    if await db.scalar(query) is not None:
        raise ConflictError(DUPLICATE_VIN)


async def create_vehicle(db: AsyncSession, data: VehicleCreate) -> Vehicle:
    values = data.model_dump()
    values["vin"] = (values.get("vin") or "").strip() or None
    await ensure_vin_free(db, values["vin"])

    vehicle = Vehicle(**values, status=VehicleStatus.AVAILABLE)
    db.add(vehicle)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_VIN)
    await db.refresh(vehicle)

    logger.info("Vehicle %s added: %s", vehicle.id, vehicle.title)
    return vehicle


async def update_vehicle(db: AsyncSession, vehicle_id: int, data: VehicleUpdate) -> Vehicle:
    """Apply the fields that were sent. Status is owned by the booking lifecycle."""
    vehicle = await get_vehicle(db, vehicle_id)

    changes = data.model_dump(exclude_unset=True)
    if "vin" in changes:
        changes["vin"] = (changes["vin"] or "").strip() or None
        await ensure_vin_free(db, changes["vin"], vehicle_id)

    for field, value in changes.items():
        if value is None and field in ("year", "make", "model", "features", "images", "featured"):
            continue
        setattr(vehicle, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_VIN)
    await db.refresh(vehicle)

    logger.info("Vehicle %s updated", vehicle.id)
    return vehicle


async def delete_vehicle(db: AsyncSession, vehicle_id: int) -> None:
    """Remove a vehicle that no open booking depends on."""
    try:
        vehicle = await get_vehicle(db, vehicle_id)

        open_booking = await db.scalar(
            select(Booking.id).where(
                Booking.vehicle_id == vehicle_id,
                Booking.status.in_(OPEN_BOOKING_STATUSES),
            )
        )
        if open_booking is not None:
            raise ConflictError(
                "Cannot delete a vehicle with active bookings. Cancel or complete the bookings first."
            )

        # Finished bookings and inquiries outlive the vehicle.
        await db.execute(
            update(Booking).where(Booking.vehicle_id == vehicle_id).values(vehicle_id=None)
        )
        await db.execute(
            update(Inquiry).where(Inquiry.vehicle_id == vehicle_id).values(vehicle_id=None)
        )
        await db.execute(delete(Vehicle).where(Vehicle.id == vehicle_id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Vehicle %s deleted", vehicle.id)


async def list_all_bookings(db: AsyncSession, status: Optional[str] = None) -> list[Booking]:
    query = select(Booking).options(selectinload(Booking.user), selectinload(Booking.vehicle))
    if status:
        try:
            query = query.where(Booking.status == BookingStatus(status))
        except ValueError:
            return []
    result = await db.execute(query.order_by(Booking.created_at.desc(), Booking.id.desc()))
    return result.scalars().all()


async def list_customers(db: AsyncSession) -> list[dict]:
    """Registered customers with how many bookings each has made."""
    booking_count = func.count(Booking.id).label("booking_count")
    result = await db.execute(
        select(User, booking_count)
        .outerjoin(Booking, Booking.user_id == User.id)
        .where(User.role == UserRole.CUSTOMER)
        .group_by(User.id)
        .order_by(User.created_at.desc(), User.id.desc())
    )
    customers = []
    for user, count in result.all():
        customers.append({
            "id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone": user.phone,
            "address": user.address,
            "city": user.city,
            "state": user.state,
            "zip": user.zip,
            "drivers_license": user.drivers_license,
            "role": user.role,
            "created_at": user.created_at,
            "booking_count": count,
        })
    return customers
