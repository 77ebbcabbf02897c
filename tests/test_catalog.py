import unittest

from helpers import APITestCase


class TestCatalog(APITestCase):

    def setUp(self):
        super().setUp()
        self.cheap = self.create_vehicle(make="Budgetco", model="Hatch", year=2018, price=15000, body_type="hatchback")
        self.mid = self.create_vehicle(make="Budgetco", model="Wagon", year=2020, price=30000, body_type="wagon")
        self.pricey = self.create_vehicle(
            make="Budgetco", model="Coupe", year=2024, price=90000, fuel_type="Electric",
            exterior_color="Midnight Teal",
        )

    def listing(self, **params):
        response = self.client.get(self.api("/vehicles"), params=params)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def ids(self, body):
        return [vehicle["id"] for vehicle in body["vehicles"]]

    def test_default_listing_shows_only_available(self):
        token = self.customer_token()
        self.assertEqual(self.book(token, self.mid["id"]).status_code, 201)

        body = self.listing(make="Budgetco")
        self.assertNotIn(self.mid["id"], self.ids(body))
        self.assertEqual(body["total"], 2)
        for vehicle in body["vehicles"]:
            self.assertEqual(vehicle["status"], "available")

        reserved = self.listing(make="Budgetco", status="reserved")
        self.assertEqual(self.ids(reserved), [self.mid["id"]])

    def test_unknown_status_matches_nothing(self):
        body = self.listing(status="scrapped")
        self.assertEqual(body["vehicles"], [])
        self.assertEqual(body["total"], 0)

    def test_filters_combine(self):
        body = self.listing(make="Budgetco", min_price="20000", max_price="95000", min_year="2019")
        self.assertEqual(set(self.ids(body)), {self.mid["id"], self.pricey["id"]})

        body = self.listing(make="Budgetco", fuel_type="Electric")
        self.assertEqual(self.ids(body), [self.pricey["id"]])

        body = self.listing(body_type="hatchback")
        self.assertEqual(self.ids(body), [self.cheap["id"]])

    def test_malformed_numbers_are_ignored(self):
        body = self.listing(make="Budgetco", min_price="cheap", max_year="soon")
        self.assertEqual(body["total"], 3)

    def test_sorting(self):
        body = self.listing(make="Budgetco", sort="price", order="asc")
        self.assertEqual(self.ids(body), [self.cheap["id"], self.mid["id"], self.pricey["id"]])

        body = self.listing(make="Budgetco", sort="year", order="desc")
        self.assertEqual(self.ids(body), [self.pricey["id"], self.mid["id"], self.cheap["id"]])

    def test_pagination(self):
        first = self.listing(make="Budgetco", sort="price", order="asc", limit="2")
        second = self.listing(make="Budgetco", sort="price", order="asc", limit="2", offset="2")
        self.assertEqual(first["total"], 3)
        self.assertEqual(first["limit"], 2)
        self.assertEqual(self.ids(first), [self.cheap["id"], self.mid["id"]])
        self.assertEqual(self.ids(second), [self.pricey["id"]])
        self.assertEqual(second["offset"], 2)

    def test_page_size_is_clamped(self):
        self.assertEqual(self.listing(limit="1000")["limit"], 100)
        self.assertEqual(self.listing(limit="many")["limit"], 50)
        self.assertEqual(self.listing()["limit"], 50)

    def test_get_vehicle(self):
        vehicle = self.get_vehicle(self.pricey["id"])
        self.assertEqual(vehicle["model"], "Coupe")
        self.assertEqual(vehicle["features"], ["Heated Seats", "Sunroof"])
        self.assertEqual(vehicle["images"], ["https://example.com/roadster.jpg"])
        self.assertEqual(vehicle["status"], "available")

    def test_get_vehicle_not_found(self):
        self.assertError(self.client.get(self.api("/vehicles/999999")), 404, "not_found")

    def test_seeded_inventory_is_listed(self):
        body = self.listing(make="Porsche")
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["vehicles"][0]["model"], "Cayenne")


class TestSearch(APITestCase):

    def setUp(self):
        super().setUp()
        self.vehicle = self.create_vehicle(
            make="Searchmotors", model="Nimbus", year=2019, exterior_color="Sunset Orange"
        )

    def search(self, q):
        return self.client.get(self.api("/vehicles/search"), params={"q": q})

    def test_case_insensitive_substring(self):
        for q in ("nimbus", "NIMB", "searchmot", "sunset orange"):
            response = self.search(q)
            self.assertEqual(response.status_code, 200, response.text)
            self.assertIn(self.vehicle["id"], [v["id"] for v in response.json()["vehicles"]], q)

    def test_year_matches(self):
        body = self.search("2019").json()
        self.assertIn(self.vehicle["id"], [v["id"] for v in body["vehicles"]])
        self.assertEqual(body["count"], len(body["vehicles"]))

    def test_search_skips_unavailable_vehicles(self):
        self.book(self.customer_token(), self.vehicle["id"], "lease")
        body = self.search("nimbus").json()
        self.assertEqual(body["vehicles"], [])
        self.assertEqual(body["count"], 0)

    def test_blank_query_is_rejected(self):
        self.assertError(self.search("   "), 400, "validation_error")
        self.assertError(self.client.get(self.api("/vehicles/search")), 400, "validation_error")


class TestShowroom(APITestCase):

    def test_featured_vehicles(self):
        response = self.client.get(self.api("/vehicles/featured"))
        self.assertEqual(response.status_code, 200)
        vehicles = response.json()["vehicles"]
        self.assertTrue(vehicles)
        for vehicle in vehicles:
            self.assertTrue(vehicle["featured"])
            self.assertEqual(vehicle["status"], "available")

    def test_makes_are_distinct_and_sorted(self):
        self.create_vehicle(make="Aardvark")
        self.create_vehicle(make="Aardvark", model="Second")
        makes = self.client.get(self.api("/vehicles/makes")).json()["makes"]
        self.assertEqual(makes, sorted(makes))
        self.assertEqual(makes.count("Aardvark"), 1)
        self.assertIn("Tesla", makes)


if __name__ == "__main__":
    unittest.main()
