"""
Booking model for database.
"""
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from dealership.database import Base, enum_values
import enum


class BookingType(str, enum.Enum):
    """What the customer wants to do with the vehicle."""
    PURCHASE = "purchase"
    LEASE = "lease"
    RENTAL = "rental"


class BookingStatus(str, enum.Enum):
    """Booking status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.COMPLETED, BookingStatus.CANCELLED)


OPEN_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.ACTIVE)
REVENUE_BOOKING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.ACTIVE, BookingStatus.COMPLETED)


class Booking(Base):
    """Booking database model."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_ref = Column(String, unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Nullable only so finished bookings survive the vehicle being deleted;
    # delete_vehicle refuses while any open booking still points here.
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True, index=True)
    booking_type = Column(
        SQLEnum(BookingType, name="booking_type", values_callable=enum_values),
        nullable=False,
    )
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)
    duration = Column(String, nullable=True)
    status = Column(
        SQLEnum(BookingStatus, name="booking_status", values_callable=enum_values),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )
    total_price = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    financing_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="bookings")
    vehicle = relationship("Vehicle", back_populates="bookings")
