"""
Vehicle model for database.
"""
from sqlalchemy import Boolean, Column, Integer, String, Float, Text, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from dealership.database import Base, JSONList, enum_values
import enum


class VehicleStatus(str, enum.Enum):
    """Commercial availability of a vehicle, derived from its bookings."""
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"
    LEASED = "leased"
    RENTED = "rented"


class Vehicle(Base):
    """Vehicle database model."""

    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    year = Column(Integer, nullable=False)
    make = Column(String, nullable=False, index=True)
    model = Column(String, nullable=False)
    trim = Column(String, nullable=True)
    vin = Column(String, unique=True, nullable=True)
    exterior_color = Column(String, nullable=True)
    interior_color = Column(String, nullable=True)
    mileage = Column(Integer, nullable=True)

    # Pricing
    price = Column(Float, nullable=True)
    lease_monthly = Column(Float, nullable=True)
    rental_daily = Column(Float, nullable=True)
    rental_weekly = Column(Float, nullable=True)
    rental_monthly = Column(Float, nullable=True)

    body_type = Column(String, nullable=True)
    fuel_type = Column(String, nullable=True)
    transmission = Column(String, nullable=True)
    engine = Column(String, nullable=True)
    drivetrain = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    features = Column(JSONList, nullable=False, default=list)
    images = Column(JSONList, nullable=False, default=list)
    status = Column(
        SQLEnum(VehicleStatus, name="vehicle_status", values_callable=enum_values),
        default=VehicleStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    featured = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="vehicle")

    @property
    def title(self) -> str:
        parts = [str(self.year), self.make, self.model, self.trim or ""]
        return " ".join(part for part in parts if part)
