"""
Initial data: the default admin account and a demo inventory.
"""
import logging
import secrets
import string

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.config import Settings
from dealership.database import Database
from dealership.models.user import User, UserRole
from dealership.models.vehicle import Vehicle, VehicleStatus
from dealership.security import hash_password

logger = logging.getLogger(__name__)


def _unsplash(photo_id: str) -> str:
    return f"https://images.unsplash.com/photo-{photo_id}?auto=format&fit=crop&w=1200&q=80"


def _vin(prefix: str) -> str:
    return prefix + "".join(secrets.choice(string.ascii_uppercase + string.digits) for _ in range(6))


DEMO_VEHICLES = [
    {
        "year": 2024, "make": "Mercedes-Benz", "model": "S-Class", "trim": "S580 4MATIC",
        "vin_prefix": "WDD2173441A",
        "exterior_color": "Black", "interior_color": "Black Leather", "mileage": 8200,
        "price": 94900, "lease_monthly": 1389,
        "rental_daily": 299, "rental_weekly": 1799, "rental_monthly": 5999,
        "body_type": "sedan", "fuel_type": "Gasoline", "transmission": "Automatic",
        "engine": "4.0L V8 Biturbo", "drivetrain": "AWD",
        "description": (
            "Flagship luxury sedan with the Executive Rear Seat Package, Burmester 4D "
            "surround sound and massaging seats front and rear."
        ),
        "features": [
            "Burmester 4D Sound System", "Head-Up Display", "Executive Rear Seat Package",
            "Night Vision Assist", "MBUX Augmented Reality Navigation",
        ],
        "images": [_unsplash("1764089859662-7b4773dff85b"), _unsplash("1660108384081-62099678489e")],
        "featured": True,
    },
    {
        "year": 2024, "make": "BMW", "model": "760i", "trim": "xDrive",
        "vin_prefix": "WBA73AG07R",
        "exterior_color": "Alpine White", "interior_color": "Cognac Nappa Leather", "mileage": 5100,
        "price": 112500, "lease_monthly": 1649,
        "rental_daily": 349, "rental_weekly": 2099, "rental_monthly": 6999,
        "body_type": "sedan", "fuel_type": "Gasoline", "transmission": "Automatic",
        "engine": "4.4L V8 TwinPower Turbo", "drivetrain": "AWD",
        "description": (
            "Ultimate luxury sedan with the Sky Lounge Panoramic Roof, BMW Theater Screen "
            "and Crystal Headlights."
        ),
        "features": [
            "Bowers & Wilkins Diamond Surround Sound", "Sky Lounge Panoramic Roof",
            "BMW Theater Screen", "Automatic Doors", "Crystal Headlights",
        ],
        "images": [_unsplash("1627936354732-ffbe552799d8"), _unsplash("1759002369921-ba54006bff01")],
        "featured": True,
    },
    {
        "year": 2023, "make": "Porsche", "model": "Cayenne", "trim": "Turbo GT",
        "vin_prefix": "WP1BG2AY1P",
        "exterior_color": "GT Silver Metallic", "interior_color": "Black/Alcantara", "mileage": 12400,
        "price": 149900, "lease_monthly": 2199,
        "rental_daily": 449, "rental_weekly": 2699, "rental_monthly": 8999,
        "body_type": "suv", "fuel_type": "Gasoline", "transmission": "Automatic",
        "engine": "4.0L Twin-Turbo V8", "drivetrain": "AWD",
        "description": (
            "The most powerful Cayenne built, with the Lightweight Sport Package, carbon "
            "ceramic brakes and Sport Chrono."
        ),
        "features": [
            "Sport Chrono Package", "Carbon Ceramic Brakes (PCCB)", "Lightweight Sport Package",
            "Porsche Dynamic Chassis Control", "Sport Exhaust System",
        ],
        "images": [_unsplash("1654159866298-e3c8ee93e43b"), _unsplash("1699325974549-fd06639650aa")],
        "featured": True,
    },
    {
        "year": 2023, "make": "Audi", "model": "RS e-tron GT", "trim": None,
        "vin_prefix": "WUAESFF1XP",
        "exterior_color": "Daytona Gray", "interior_color": "Express Red", "mileage": 9700,
        "price": 119900, "lease_monthly": 1749,
        "rental_daily": 379, "rental_weekly": 2299, "rental_monthly": 7499,
        "body_type": "sedan", "fuel_type": "Electric", "transmission": "Automatic",
        "engine": "Dual Electric Motors (637 HP)", "drivetrain": "AWD",
        "description": (
            "All-electric grand tourer with a carbon roof and RS Sport Suspension Plus; "
            "0-60 in 3.1 seconds."
        ),
        "features": [
            "Carbon Roof", "Bang & Olufsen Premium Sound System", "Matrix LED Headlights",
            "RS Sport Suspension Plus", "Head-Up Display",
        ],
        "images": [_unsplash("1655126276417-a2427cc1ba20"), _unsplash("1655126275489-2c41cb7f2b74")],
        "featured": True,
    },
    {
        "year": 2024, "make": "Lexus", "model": "LC 500", "trim": "Convertible",
        "vin_prefix": "JTHHP5BC5R",
        "exterior_color": "Infrared", "interior_color": "White Semi-Aniline Leather", "mileage": 4200,
        "price": 104900, "lease_monthly": 1529,
        "rental_daily": 329, "rental_weekly": 1999, "rental_monthly": 6499,
        "body_type": "convertible", "fuel_type": "Gasoline", "transmission": "Automatic",
        "engine": "5.0L Naturally Aspirated V8", "drivetrain": "RWD",
        "description": (
            "Open-air grand tourer with a naturally aspirated V8 and the Mark Levinson "
            "Reference sound system."
        ),
        "features": [
            "Mark Levinson Reference 21-Speaker Sound", "Torsen Limited-Slip Differential",
            "Variable Gear Ratio Steering", "Sport Package",
        ],
        "images": [_unsplash("1771556907904-073e16b61983"), _unsplash("1771556907938-af4f87462310")],
        "featured": False,
    },
    {
        "year": 2023, "make": "Tesla", "model": "Model X", "trim": "Plaid",
        "vin_prefix": "5YJXCBE20P",
        "exterior_color": "Ultra White", "interior_color": "Cream Interior", "mileage": 11500,
        "price": 84900, "lease_monthly": 1249,
        "rental_daily": 269, "rental_weekly": 1599, "rental_monthly": 5499,
        "body_type": "suv", "fuel_type": "Electric", "transmission": "Automatic",
        "engine": "Tri-Motor Electric (1,020 HP)", "drivetrain": "AWD",
        "description": (
            "Tri-motor electric SUV with Falcon Wing Doors, HEPA filtration and a 17\" "
            "cinematic display."
        ),
        "features": [
            "Full Self-Driving Capability", "Falcon Wing Doors", "22\" Turbine Wheels",
            "HEPA Air Filtration System", "Yoke Steering Wheel",
        ],
        "images": [_unsplash("1707002752329-5a4a889f7de9"), _unsplash("1652509197980-9f3d9ac7916e")],
        "featured": False,
    },
]


async def seed_admin(db: AsyncSession, settings: Settings) -> bool:
    """Create the default admin account if there is no admin yet."""
    admins = await db.scalar(select(func.count(User.id)).where(User.role == UserRole.ADMIN))
    if admins:
        return False

    db.add(User(
        email=settings.admin_email.strip().lower(),
        hashed_password=hash_password(settings.admin_password, settings.bcrypt_rounds),
        first_name="Dealership",
        last_name="Admin",
        role=UserRole.ADMIN,
    ))
    await db.commit()
    logger.info("Default admin user seeded: %s", settings.admin_email)
    return True


async def seed_vehicles(db: AsyncSession) -> int:
    """Load the demo inventory into an empty vehicles table."""
    existing = await db.scalar(select(func.count(Vehicle.id)))
    if existing:
        return 0

    for entry in DEMO_VEHICLES:
        values = dict(entry)
        vin_prefix = values.pop("vin_prefix")
        db.add(Vehicle(**values, vin=_vin(vin_prefix), status=VehicleStatus.AVAILABLE))
    await db.commit()

    logger.info("Seeded %d demo vehicles", len(DEMO_VEHICLES))
    return len(DEMO_VEHICLES)


async def init_db(database: Database, settings: Settings) -> None:
    """Create tables, the default admin and, if enabled, the demo inventory."""
    await database.create_all()
    async with database.session() as db:
        await seed_admin(db, settings)
        if settings.seed_demo_data:
            await seed_vehicles(db)
