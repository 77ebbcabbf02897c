"""
Public vehicle catalog routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from dealership.database import get_db
from dealership.schemas.vehicle import (
    MakeList,
    VehicleCollection,
    VehicleList,
    VehicleResponse,
    VehicleSearchResult,
)
from dealership.services import catalog

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=VehicleList)
async def list_vehicles(
    make: Optional[str] = None,
    body_type: Optional[str] = None,
    fuel_type: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    min_year: Optional[str] = None,
    max_year: Optional[str] = None,
    status: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Filtered, sorted and paginated listing. Only available vehicles unless a
    status is asked for.
    """
    filters = catalog.VehicleFilters(
        make=make,
        body_type=body_type,
        fuel_type=fuel_type,
        min_price=min_price,
        max_price=max_price,
        min_year=min_year,
        max_year=max_year,
        status=status,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )
    return await catalog.list_vehicles(db, filters)


@router.get("/featured", response_model=VehicleCollection)
async def featured_vehicles(db: AsyncSession = Depends(get_db)):
    return {"vehicles": await catalog.featured_vehicles(db)}


@router.get("/makes", response_model=MakeList)
async def list_makes(db: AsyncSession = Depends(get_db)):
    return {"makes": await catalog.list_makes(db)}


@router.get("/search", response_model=VehicleSearchResult)
async def search_vehicles(q: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    """
    Substring search across make, model, trim, colours, description, engine,
    fuel type and year.
    """
    return await catalog.search_vehicles(db, q)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get a specific vehicle by ID.
    """
    return {"vehicle": await catalog.get_vehicle(db, vehicle_id)}
