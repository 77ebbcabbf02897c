"""
Pydantic schemas for Inquiry.
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional
from dealership.models.inquiry import InquiryStatus, InquiryType
from dealership.schemas.vehicle import VehicleSummary


class InquiryCreate(BaseModel):
    """Contact form submission. Unknown inquiry types are filed as general."""
    vehicle_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    inquiry_type: Optional[str] = None
    message: str = Field(..., min_length=1)


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus


class Inquiry(BaseModel):
    """Schema for inquiry responses."""
    id: int
    user_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    inquiry_type: InquiryType
    message: str
    status: InquiryStatus
    created_at: Optional[datetime] = None
    vehicle: Optional[VehicleSummary] = None

    model_config = ConfigDict(from_attributes=True)


class InquiryCreated(BaseModel):
    message: str
    inquiry_id: int


class InquiryList(BaseModel):
    inquiries: list[Inquiry]


class InquiryMessage(BaseModel):
    message: str
    inquiry: Inquiry
