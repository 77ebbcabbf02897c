"""
Shared fixtures for the API tests.

Each test case gets its own SQLite database file and a fresh application
built with ``create_app``; the lifespan seeds the admin account and the demo
inventory just like a real startup.
"""
import itertools
import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from dealership.config import Settings
from dealership.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass123!"
DEFAULT_PASSWORD = "Password123"

_emails = itertools.count(1)


def make_settings(db_path: str, **overrides) -> Settings:
    values = dict(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        secret_key="test-secret-key-for-the-dealership-suite",
        bcrypt_rounds=4,
        seed_demo_data=True,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class APITestCase(unittest.TestCase):
    """Runs the app in-process against a throwaway database."""

    settings_overrides = {}

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.settings = make_settings(
            os.path.join(self._tmpdir.name, "dealership.db"), **self.settings_overrides
        )
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.admin_token = self.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    def tearDown(self):
        self.client.__exit__(None, None, None)
        self._tmpdir.cleanup()

    # Requests are authenticated with explicit bearer headers. The cookie jar
    # is cleared after every login so one user's cookie never leaks into
    # another user's request.

    def api(self, path: str) -> str:
        return f"{self.settings.api_prefix}{path}"

    @staticmethod
    def auth(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    @property
    def admin(self) -> dict:
        return self.auth(self.admin_token)

    def login(self, email: str, password: str) -> str:
        response = self.client.post(self.api("/auth/login"), json={"email": email, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        self.client.cookies.clear()
        return response.json()["token"]

    def register(self, email: str = None, password: str = DEFAULT_PASSWORD, **fields):
        email = email or f"customer{next(_emails)}@example.com"
        payload = {
            "email": email,
            "password": password,
            "first_name": fields.pop("first_name", "Test"),
            "last_name": fields.pop("last_name", "Customer"),
        }
        payload.update(fields)
        response = self.client.post(self.api("/auth/register"), json=payload)
        self.client.cookies.clear()
        return response

    def customer_token(self, **fields) -> str:
        response = self.register(**fields)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["token"]

    def create_vehicle(self, **overrides) -> dict:
        payload = {
            "year": 2022,
            "make": "Testmake",
            "model": "Roadster",
            "trim": "Base",
            "price": 50000,
            "lease_monthly": 700,
            "rental_daily": 100,
            "rental_weekly": 600,
            "rental_monthly": 2000,
            "body_type": "coupe",
            "fuel_type": "Gasoline",
            "features": ["Heated Seats", "Sunroof"],
            "images": ["https://example.com/roadster.jpg"],
        }
        payload.update(overrides)
        response = self.client.post(self.api("/admin/vehicles"), json=payload, headers=self.admin)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["vehicle"]

    def get_vehicle(self, vehicle_id: int) -> dict:
        response = self.client.get(self.api(f"/vehicles/{vehicle_id}"))
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["vehicle"]

    def book(self, token: str, vehicle_id: int, booking_type: str = "purchase", **fields):
        payload = {"vehicle_id": vehicle_id, "booking_type": booking_type}
        payload.update(fields)
        return self.client.post(self.api("/bookings"), json=payload, headers=self.auth(token))

    def set_booking_status(self, booking_id: int, status: str, **fields):
        payload = {"status": status}
        payload.update(fields)
        return self.client.put(self.api(f"/admin/bookings/{booking_id}"), json=payload, headers=self.admin)

    def assertError(self, response, status_code: int, error_type: str):
        self.assertEqual(response.status_code, status_code, response.text)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error_type"], error_type)
        self.assertTrue(body["message"])
