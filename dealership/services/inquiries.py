"""
Contact form intake and triage.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dealership.exceptions import NotFoundError, ValidationError
from dealership.models.inquiry import Inquiry, InquiryStatus, InquiryType
from dealership.models.user import User
from dealership.models.vehicle import Vehicle
from dealership.schemas.inquiry import InquiryCreate

logger = logging.getLogger(__name__)


def coerce_inquiry_type(value: Optional[str]) -> InquiryType:
    try:
        return InquiryType(value)
    except ValueError:
        return InquiryType.GENERAL


async def create_inquiry(db: AsyncSession, data: InquiryCreate, user: Optional[User] = None) -> Inquiry:
    if data.vehicle_id is not None:
        exists = await db.scalar(select(Vehicle.id).where(Vehicle.id == data.vehicle_id))
        if exists is None:
            raise ValidationError("Unknown vehicle for this inquiry.")

    inquiry = Inquiry(
        user_id=user.id if user is not None else None,
        vehicle_id=data.vehicle_id,
        name=data.name.strip(),
        email=data.email.strip().lower(),
        phone=data.phone or None,
        inquiry_type=coerce_inquiry_type(data.inquiry_type),
        message=data.message.strip(),
        status=InquiryStatus.NEW,
    )
    db.add(inquiry)
    await db.commit()
    await db.refresh(inquiry)

    logger.info("Inquiry %s received (%s)", inquiry.id, inquiry.inquiry_type.value)
    return inquiry


async def list_inquiries(db: AsyncSession, status: Optional[str] = None) -> list[Inquiry]:
    query = select(Inquiry).options(selectinload(Inquiry.vehicle))
    if status:
        try:
            query = query.where(Inquiry.status == InquiryStatus(status))
        except ValueError:
            return []
    result = await db.execute(query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()))
    return result.scalars().all()


async def update_inquiry_status(db: AsyncSession, inquiry_id: int, status: InquiryStatus) -> Inquiry:
    result = await db.execute(
        select(Inquiry).where(Inquiry.id == inquiry_id).options(selectinload(Inquiry.vehicle))
    )
    inquiry = result.scalar_one_or_none()
    if inquiry is None:
        raise NotFoundError("Inquiry not found.")

    inquiry.status = status
    await db.commit()
    return inquiry
