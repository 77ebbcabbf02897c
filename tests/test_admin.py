import unittest

from helpers import APITestCase


class TestDashboard(APITestCase):

    def stats(self):
        response = self.client.get(self.api("/admin/stats"), headers=self.admin)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def test_seeded_dashboard(self):
        stats = self.stats()["stats"]
        self.assertEqual(stats["total_vehicles"], 6)
        self.assertEqual(stats["available_vehicles"], 6)
        self.assertEqual(stats["active_bookings"], 0)
        self.assertEqual(stats["registered_customers"], 0)
        self.assertEqual(stats["total_revenue"], 0)
        self.assertGreater(stats["revenue_potential"], 0)

    def test_counts_follow_activity(self):
        before = self.stats()["stats"]

        token = self.customer_token()
        sold = self.create_vehicle(model="Sold", price=40000)
        held = self.create_vehicle(model="Held", price=25000)
        spare = self.create_vehicle(model="Spare", price=10000)

        sale = self.book(token, sold["id"]).json()["booking"]
        self.set_booking_status(sale["id"], "confirmed")
        self.book(token, held["id"], "lease")
        self.client.post(
            self.api("/admin/inquiries"),
            json={"name": "Pat", "email": "pat@example.com", "message": "Is it still here?"},
        )

        body = self.stats()
        stats = body["stats"]
        self.assertEqual(stats["total_vehicles"], before["total_vehicles"] + 3)
        self.assertEqual(stats["available_vehicles"], before["available_vehicles"] + 1)
        self.assertEqual(stats["sold_vehicles"], 1)
        self.assertEqual(stats["reserved_vehicles"], 1)
        self.assertEqual(stats["active_bookings"], 2)
        self.assertEqual(stats["total_bookings"], 2)
        self.assertEqual(stats["registered_customers"], 1)
        self.assertEqual(stats["revenue_potential"], before["revenue_potential"] + spare["price"])
        self.assertEqual(stats["total_revenue"], 40000)
        self.assertEqual(stats["new_inquiries"], before["new_inquiries"] + 1)

        self.assertEqual(len(body["recent_bookings"]), 2)
        self.assertEqual(body["recent_bookings"][0]["user"]["id"], sale["user_id"])
        self.assertEqual(body["recent_inquiries"][0]["name"], "Pat")

    def test_cancelled_bookings_are_not_revenue(self):
        token = self.customer_token()
        vehicle = self.create_vehicle(price=12345)
        booking = self.book(token, vehicle["id"]).json()["booking"]
        self.set_booking_status(booking["id"], "cancelled")
        stats = self.stats()["stats"]
        self.assertEqual(stats["total_revenue"], 0)
        self.assertEqual(stats["active_bookings"], 0)


class TestInventory(APITestCase):

    def test_create_vehicle_starts_available(self):
        vehicle = self.create_vehicle(vin=" VIN0001 ", features="Heated Seats, Sunroof , ,Carplay")
        self.assertEqual(vehicle["status"], "available")
        self.assertEqual(vehicle["vin"], "VIN0001")
        self.assertEqual(vehicle["features"], ["Heated Seats", "Sunroof", "Carplay"])

    def test_status_cannot_be_set_directly(self):
        vehicle = self.create_vehicle(status="sold")
        self.assertEqual(vehicle["status"], "available")

        response = self.client.put(
            self.api(f"/admin/vehicles/{vehicle['id']}"), json={"status": "sold"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["vehicle"]["status"], "available")

    def test_create_requires_make_model_year(self):
        response = self.client.post(
            self.api("/admin/vehicles"), json={"make": "Nomodel", "year": 2020}, headers=self.admin
        )
        self.assertError(response, 400, "validation_error")

    def test_duplicate_vin(self):
        first = self.create_vehicle(vin="DUPVIN1")
        response = self.client.post(
            self.api("/admin/vehicles"),
            json={"year": 2021, "make": "Copy", "model": "Cat", "vin": "DUPVIN1"},
            headers=self.admin,
        )
        self.assertError(response, 409, "conflict")

        other = self.create_vehicle(vin="OTHERVIN")
        response = self.client.put(
            self.api(f"/admin/vehicles/{other['id']}"), json={"vin": "DUPVIN1"}, headers=self.admin
        )
        self.assertError(response, 409, "conflict")

        same = self.client.put(
            self.api(f"/admin/vehicles/{first['id']}"), json={"vin": "DUPVIN1"}, headers=self.admin
        )
        self.assertEqual(same.status_code, 200, same.text)

    def test_partial_update(self):
        vehicle = self.create_vehicle(mileage=1000)
        response = self.client.put(
            self.api(f"/admin/vehicles/{vehicle['id']}"),
            json={"price": 47500, "mileage": 1200, "featured": True, "make": None},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200, response.text)
        updated = response.json()["vehicle"]
        self.assertEqual(updated["price"], 47500)
        self.assertEqual(updated["mileage"], 1200)
        self.assertTrue(updated["featured"])
        self.assertEqual(updated["make"], vehicle["make"])
        self.assertEqual(updated["model"], vehicle["model"])

    def test_update_unknown_vehicle(self):
        response = self.client.put(self.api("/admin/vehicles/999999"), json={"price": 1}, headers=self.admin)
        self.assertError(response, 404, "not_found")

    def test_admin_listing_includes_every_status(self):
        vehicle = self.create_vehicle(make="Allstatus")
        self.book(self.customer_token(), vehicle["id"])

        everything = self.client.get(self.api("/admin/vehicles"), headers=self.admin).json()["vehicles"]
        self.assertIn(vehicle["id"], [v["id"] for v in everything])
        self.assertEqual(len(everything), 7)

        reserved = self.client.get(
            self.api("/admin/vehicles"), params={"status": "reserved"}, headers=self.admin
        ).json()["vehicles"]
        self.assertEqual([v["id"] for v in reserved], [vehicle["id"]])

    def test_delete_is_refused_while_a_booking_is_open(self):
        vehicle = self.create_vehicle()
        booking = self.book(self.customer_token(), vehicle["id"], "lease").json()["booking"]
        self.set_booking_status(booking["id"], "confirmed")

        response = self.client.delete(self.api(f"/admin/vehicles/{vehicle['id']}"), headers=self.admin)
        self.assertError(response, 409, "conflict")
        self.assertEqual(self.get_vehicle(vehicle["id"])["status"], "leased")

        self.set_booking_status(booking["id"], "completed")
        response = self.client.delete(self.api(f"/admin/vehicles/{vehicle['id']}"), headers=self.admin)
        self.assertEqual(response.status_code, 200, response.text)
        self.assertError(self.client.get(self.api(f"/vehicles/{vehicle['id']}")), 404, "not_found")

        history = self.client.get(self.api("/admin/bookings"), headers=self.admin).json()["bookings"]
        kept = [b for b in history if b["id"] == booking["id"]]
        self.assertEqual(len(kept), 1)
        self.assertIsNone(kept[0]["vehicle_id"])
        self.assertEqual(kept[0]["status"], "completed")

    def test_delete_unknown_vehicle(self):
        response = self.client.delete(self.api("/admin/vehicles/999999"), headers=self.admin)
        self.assertError(response, 404, "not_found")


class TestCustomers(APITestCase):

    def test_customers_with_booking_counts(self):
        busy = self.customer_token(email="busy@example.com")
        self.customer_token(email="idle@example.com")
        for index in range(2):
            vehicle = self.create_vehicle(model=f"Count {index}")
            self.book(busy, vehicle["id"])

        response = self.client.get(self.api("/admin/customers"), headers=self.admin)
        self.assertEqual(response.status_code, 200, response.text)
        customers = {c["email"]: c for c in response.json()["customers"]}
        self.assertEqual(set(customers), {"busy@example.com", "idle@example.com"})
        self.assertEqual(customers["busy@example.com"]["booking_count"], 2)
        self.assertEqual(customers["idle@example.com"]["booking_count"], 0)
        self.assertNotIn("hashed_password", customers["busy@example.com"])


class TestInquiries(APITestCase):

    def submit(self, headers=None, **fields):
        payload = {"name": "Sam Buyer", "email": "Sam@Example.com", "message": "Can I test drive it?"}
        payload.update(fields)
        return self.client.post(self.api("/admin/inquiries"), json=payload, headers=headers or {})

    def inquiries(self, **params):
        response = self.client.get(self.api("/admin/inquiries"), params=params, headers=self.admin)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["inquiries"]

    def test_anonymous_submission(self):
        vehicle = self.create_vehicle()
        response = self.submit(vehicle_id=vehicle["id"], inquiry_type="test-drive", phone="555-0199")
        self.assertEqual(response.status_code, 201, response.text)
        inquiry_id = response.json()["inquiry_id"]

        stored = [i for i in self.inquiries() if i["id"] == inquiry_id][0]
        self.assertEqual(stored["status"], "new")
        self.assertEqual(stored["inquiry_type"], "test-drive")
        self.assertEqual(stored["email"], "sam@example.com")
        self.assertIsNone(stored["user_id"])
        self.assertEqual(stored["vehicle"]["id"], vehicle["id"])

    def test_logged_in_submission_is_linked_to_the_user(self):
        token = self.customer_token()
        me = self.client.get(self.api("/auth/me"), headers=self.auth(token)).json()["user"]
        inquiry_id = self.submit(headers=self.auth(token)).json()["inquiry_id"]
        stored = [i for i in self.inquiries() if i["id"] == inquiry_id][0]
        self.assertEqual(stored["user_id"], me["id"])

    def test_unknown_type_is_filed_as_general(self):
        inquiry_id = self.submit(inquiry_type="complaint").json()["inquiry_id"]
        stored = [i for i in self.inquiries() if i["id"] == inquiry_id][0]
        self.assertEqual(stored["inquiry_type"], "general")

    def test_required_fields(self):
        self.assertError(self.submit(message=""), 400, "validation_error")
        self.assertError(self.submit(email="nobody"), 400, "validation_error")
        self.assertError(self.submit(name=""), 400, "validation_error")

    def test_unknown_vehicle_is_rejected(self):
        self.assertError(self.submit(vehicle_id=999999), 400, "validation_error")

    def test_triage(self):
        inquiry_id = self.submit().json()["inquiry_id"]
        response = self.client.put(
            self.api(f"/admin/inquiries/{inquiry_id}"), json={"status": "resolved"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["inquiry"]["status"], "resolved")

        self.assertEqual([i["id"] for i in self.inquiries(status="resolved")], [inquiry_id])
        self.assertEqual(self.inquiries(status="new"), [])

    def test_invalid_status(self):
        inquiry_id = self.submit().json()["inquiry_id"]
        response = self.client.put(
            self.api(f"/admin/inquiries/{inquiry_id}"), json={"status": "escalated"}, headers=self.admin
        )
        self.assertError(response, 400, "validation_error")

    def test_unknown_inquiry(self):
        response = self.client.put(
            self.api("/admin/inquiries/999999"), json={"status": "closed"}, headers=self.admin
        )
        self.assertError(response, 404, "not_found")

    def test_listing_requires_admin(self):
        token = self.customer_token()
        self.assertError(self.client.get(self.api("/admin/inquiries"), headers=self.auth(token)), 403, "forbidden")


class TestServiceEndpoints(APITestCase):

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_unknown_route_uses_error_shape(self):
        self.assertError(self.client.get(self.api("/nowhere")), 404, "not_found")


if __name__ == "__main__":
    unittest.main()
