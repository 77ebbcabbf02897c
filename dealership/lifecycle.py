"""
Booking lifecycle rules.

A vehicle's status is never edited on its own when bookings change: it is
recomputed from the booking that moved, using ``vehicle_status_for``. Keep
every booking mutation path going through this module.
"""
import secrets
import string
from typing import Optional

from dealership.models.booking import BookingStatus, BookingType
from dealership.models.vehicle import VehicleStatus

BOOKING_REF_PREFIX = "PRN-"
BOOKING_REF_LENGTH = 6
BOOKING_REF_ALPHABET = string.ascii_uppercase + string.digits

_HELD_STATUS = {
    BookingType.PURCHASE: VehicleStatus.SOLD,
    BookingType.LEASE: VehicleStatus.LEASED,
    BookingType.RENTAL: VehicleStatus.RENTED,
}

# duration label -> (rate attribute on Vehicle, multiplier)
RENTAL_DURATIONS = {
    "1-day": ("rental_daily", 1),
    "3-days": ("rental_daily", 3),
    "1-week": ("rental_weekly", 1),
    "2-weeks": ("rental_weekly", 2),
    "1-month": ("rental_monthly", 1),
    "3-months": ("rental_monthly", 3),
    "6-months": ("rental_monthly", 6),
}
DEFAULT_RENTAL_DURATION = ("rental_daily", 1)


def vehicle_status_for(booking_type: BookingType, booking_status: BookingStatus) -> VehicleStatus:
    """Return the vehicle status implied by a booking of this type entering this status."""
    booking_type = BookingType(booking_type)
    booking_status = BookingStatus(booking_status)

    if booking_status == BookingStatus.PENDING:
        return VehicleStatus.RESERVED
    if booking_status in (BookingStatus.CONFIRMED, BookingStatus.ACTIVE):
        return _HELD_STATUS[booking_type]
    return VehicleStatus.AVAILABLE


def can_book(vehicle_status: VehicleStatus) -> bool:
    return VehicleStatus(vehicle_status) == VehicleStatus.AVAILABLE


def can_customer_cancel(booking_status: BookingStatus) -> bool:
    """Customers may only withdraw a booking the dealership has not acted on yet."""
    return BookingStatus(booking_status) == BookingStatus.PENDING


def generate_booking_ref() -> str:
    """Return a candidate reference such as ``PRN-A3F8K2``; uniqueness is the caller's job."""
    suffix = "".join(secrets.choice(BOOKING_REF_ALPHABET) for _ in range(BOOKING_REF_LENGTH))
    return BOOKING_REF_PREFIX + suffix


def rental_price(vehicle, duration: Optional[str]) -> Optional[float]:
    """
    Total for a rental of the given duration label.

    Unrecognised labels are charged as a single day.
    """
    attribute, multiplier = RENTAL_DURATIONS.get(duration or "", DEFAULT_RENTAL_DURATION)
    rate = getattr(vehicle, attribute)
    if rate is None:
        return None
    return rate * multiplier


def booking_total(vehicle, booking_type: BookingType, duration: Optional[str] = None) -> Optional[float]:
    """
    Price captured on a booking at creation time.

    Leases record the first monthly payment only, not the contract value.
    """
    booking_type = BookingType(booking_type)
    if booking_type == BookingType.PURCHASE:
        return vehicle.price
    if booking_type == BookingType.LEASE:
        return vehicle.lease_monthly
    return rental_price(vehicle, duration)
