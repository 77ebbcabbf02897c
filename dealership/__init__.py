"""
Dealership API: vehicle catalog, customer accounts, bookings and back-office.
"""
__version__ = "1.0.0"
