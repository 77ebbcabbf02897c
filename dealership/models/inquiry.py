"""
Inquiry model for database.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from dealership.database import Base, enum_values
import enum


class InquiryType(str, enum.Enum):
    """Contact form topics."""
    GENERAL = "general"
    TEST_DRIVE = "test-drive"
    FINANCING = "financing"
    TRADE_IN = "trade-in"


class InquiryStatus(str, enum.Enum):
    """Inquiry triage status."""
    NEW = "new"
    IN_PROGRESS = "in-progress"
    READ = "read"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Inquiry(Base):
    """Inquiry database model."""

    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    inquiry_type = Column(
        SQLEnum(InquiryType, name="inquiry_type", values_callable=enum_values),
        default=InquiryType.GENERAL,
        nullable=False,
    )
    message = Column(Text, nullable=False)
    status = Column(
        SQLEnum(InquiryStatus, name="inquiry_status", values_callable=enum_values),
        default=InquiryStatus.NEW,
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    vehicle = relationship("Vehicle")
