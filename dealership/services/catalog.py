"""
Public vehicle catalog queries.

Query-string filters arrive as raw strings and are parsed leniently: a value
that does not parse is dropped rather than rejected.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.exceptions import NotFoundError, ValidationError
from dealership.models.vehicle import Vehicle, VehicleStatus

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

SORT_FIELDS = {
    "price": Vehicle.price,
    "year": Vehicle.year,
    "mileage": Vehicle.mileage,
    "make": Vehicle.make,
    "created_at": Vehicle.created_at,
}

SEARCH_COLUMNS = (
    Vehicle.make,
    Vehicle.model,
    Vehicle.trim,
    Vehicle.body_type,
    Vehicle.exterior_color,
    Vehicle.interior_color,
    Vehicle.description,
    Vehicle.engine,
    Vehicle.fuel_type,
)


def parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_status(value: Optional[str]):
    """Map a status string to the enum. Returns False for an unknown value."""
    if not value:
        return None
    try:
        return VehicleStatus(value)
    except ValueError:
        return False


def page_size(limit: Optional[str]) -> int:
    size = parse_int(limit)
    if not size or size < 1:
        return DEFAULT_PAGE_SIZE
    return min(size, MAX_PAGE_SIZE)


def page_offset(offset: Optional[str]) -> int:
    start = parse_int(offset)
    if start is None or start < 0:
        return 0
    return start


def order_by(sort: Optional[str], order: Optional[str], fields=SORT_FIELDS):
    column = fields.get(sort or "", Vehicle.created_at)
    if order == "asc":
        return column.asc(), Vehicle.id.asc()
    return column.desc(), Vehicle.id.desc()


@dataclass
class VehicleFilters:
    """Raw query-string filters for the public listing."""
    make: Optional[str] = None
    body_type: Optional[str] = None
    fuel_type: Optional[str] = None
    min_price: Optional[str] = None
    max_price: Optional[str] = None
    min_year: Optional[str] = None
    max_year: Optional[str] = None
    status: Optional[str] = None
    sort: Optional[str] = None
    order: Optional[str] = None
    limit: Optional[str] = None
    offset: Optional[str] = None

    def conditions(self) -> list:
        conditions = []

        status = parse_status(self.status)
        if status is None:
            conditions.append(Vehicle.status == VehicleStatus.AVAILABLE)
        elif status is False:
            # Unknown status: nothing can match it.
            conditions.append(Vehicle.id.is_(None))
        else:
            conditions.append(Vehicle.status == status)

        if self.make:
            conditions.append(Vehicle.make == self.make)
        if self.body_type:
            conditions.append(Vehicle.body_type == self.body_type)
        if self.fuel_type:
            conditions.append(Vehicle.fuel_type == self.fuel_type)

        min_price = parse_float(self.min_price)
        if min_price is not None:
            conditions.append(Vehicle.price >= min_price)
        max_price = parse_float(self.max_price)
        if max_price is not None:
            conditions.append(Vehicle.price <= max_price)
        min_year = parse_int(self.min_year)
        if min_year is not None:
            conditions.append(Vehicle.year >= min_year)
        max_year = parse_int(self.max_year)
        if max_year is not None:
            conditions.append(Vehicle.year <= max_year)

        return conditions


async def list_vehicles(db: AsyncSession, filters: VehicleFilters) -> dict:
    """Filtered, sorted and paginated listing."""
    conditions = filters.conditions()
    limit = page_size(filters.limit)
    offset = page_offset(filters.offset)

    query = (
        select(Vehicle)
        .where(*conditions)
        .order_by(*order_by(filters.sort, filters.order))
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    vehicles = result.scalars().all()

    total = await db.scalar(select(func.count(Vehicle.id)).where(*conditions))

    return {"vehicles": vehicles, "total": total or 0, "limit": limit, "offset": offset}


async def search_vehicles(db: AsyncSession, q: Optional[str]) -> dict:
    """Case-insensitive substring search over available vehicles."""
    if not q or not q.strip():
        raise ValidationError("Search query is required.")

    pattern = f"%{q.strip().lower()}%"
    matches = [func.lower(column).like(pattern) for column in SEARCH_COLUMNS]
    matches.append(cast(Vehicle.year, String).like(pattern))

    query = (
        select(Vehicle)
        .where(Vehicle.status == VehicleStatus.AVAILABLE, or_(*matches))
        .order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
    )
    result = await db.execute(query)
    vehicles = result.scalars().all()
    return {"vehicles": vehicles, "count": len(vehicles)}


async def get_vehicle(db: AsyncSession, vehicle_id: int) -> Vehicle:
    result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
    vehicle = result.scalar_one_or_none()
    if vehicle is None:
        raise NotFoundError("Vehicle not found.")
    return vehicle


async def featured_vehicles(db: AsyncSession) -> list[Vehicle]:
    query = (
        select(Vehicle)
        .where(Vehicle.featured.is_(True), Vehicle.status == VehicleStatus.AVAILABLE)
        .order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
    )
    result = await db.execute(query)
    return result.scalars().all()


async def list_makes(db: AsyncSession) -> list[str]:
    query = (
        select(Vehicle.make)
        .where(Vehicle.status == VehicleStatus.AVAILABLE)
        .distinct()
        .order_by(Vehicle.make.asc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())
