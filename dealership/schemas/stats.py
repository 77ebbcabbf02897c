"""
Pydantic schemas for the admin dashboard.
"""
from pydantic import BaseModel
from dealership.schemas.booking import AdminBooking
from dealership.schemas.inquiry import Inquiry


class DashboardStats(BaseModel):
    total_vehicles: int
    available_vehicles: int
    reserved_vehicles: int
    sold_vehicles: int
    leased_vehicles: int
    rented_vehicles: int
    active_bookings: int
    total_bookings: int
    registered_customers: int
    revenue_potential: float
    total_revenue: float
    new_inquiries: int


class Dashboard(BaseModel):
    stats: DashboardStats
    recent_bookings: list[AdminBooking]
    recent_inquiries: list[Inquiry]
