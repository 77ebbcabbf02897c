"""
Pydantic schemas for Vehicle.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional
from dealership.models.vehicle import VehicleStatus


def _split_features(value):
    """Accept a list, or a comma-separated string as the admin form sends it."""
    if value is None or isinstance(value, list):
        return value
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class VehicleBase(BaseModel):
    """Base vehicle schema with common fields."""
    year: int = Field(..., ge=1886, le=2100)
    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    trim: Optional[str] = None
    vin: Optional[str] = None
    exterior_color: Optional[str] = None
    interior_color: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    lease_monthly: Optional[float] = Field(None, ge=0)
    rental_daily: Optional[float] = Field(None, ge=0)
    rental_weekly: Optional[float] = Field(None, ge=0)
    rental_monthly: Optional[float] = Field(None, ge=0)
    body_type: Optional[str] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    engine: Optional[str] = None
    drivetrain: Optional[str] = None
    description: Optional[str] = None
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    featured: bool = False


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle. New vehicles always start out available."""

    @field_validator("features", mode="before")
    @classmethod
    def split_features(cls, value):
        return _split_features(value)


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle."""
    year: Optional[int] = Field(None, ge=1886, le=2100)
    make: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    trim: Optional[str] = None
    vin: Optional[str] = None
    exterior_color: Optional[str] = None
    interior_color: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    lease_monthly: Optional[float] = Field(None, ge=0)
    rental_daily: Optional[float] = Field(None, ge=0)
    rental_weekly: Optional[float] = Field(None, ge=0)
    rental_monthly: Optional[float] = Field(None, ge=0)
    body_type: Optional[str] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    engine: Optional[str] = None
    drivetrain: Optional[str] = None
    description: Optional[str] = None
    features: Optional[list[str]] = None
    images: Optional[list[str]] = None
    featured: Optional[bool] = None

    @field_validator("features", mode="before")
    @classmethod
    def split_features(cls, value):
        return _split_features(value)


class Vehicle(VehicleBase):
    """Schema for vehicle responses."""
    id: int
    status: VehicleStatus
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class VehicleSummary(BaseModel):
    """The slice of a vehicle shown alongside bookings and inquiries."""
    id: int
    year: int
    make: str
    model: str
    trim: Optional[str] = None
    exterior_color: Optional[str] = None
    interior_color: Optional[str] = None
    price: Optional[float] = None
    status: VehicleStatus
    images: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class VehicleList(BaseModel):
    vehicles: list[Vehicle]
    total: int
    limit: int
    offset: int


class VehicleSearchResult(BaseModel):
    vehicles: list[Vehicle]
    count: int


class VehicleCollection(BaseModel):
    vehicles: list[Vehicle]


class MakeList(BaseModel):
    makes: list[str]


class VehicleResponse(BaseModel):
    vehicle: Vehicle


class VehicleMessage(BaseModel):
    message: str
    vehicle: Vehicle
