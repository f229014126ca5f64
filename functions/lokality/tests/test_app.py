import json
import os
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from flows.property_description import PropertyDescriptionOutput
from lokality.app import create_app
from lokality.config import get_settings
from lokality.dependencies import get_db_client, get_storage_client, reset_clients
from lokality.exceptions import LokalityError
from shared.types import PropertyStatus

from testing_utils import make_admin, make_property, make_provider

SEEKER = {"X-User-Id": "seeker", "X-User-Email": "asha@example.com"}
LISTER = {"X-User-Id": "lister", "X-User-Email": "priya@example.com"}
ADMIN = {"X-User-Id": "admin", "X-User-Email": "admin@example.com"}
PROVIDER = {"X-User-Id": "provider", "X-User-Email": "provider@example.com"}

PROPERTY_FORM = {
    "priceType": "rent",
    "priceAmount": 45000,
    "location": "Koramangala, Bengaluru",
    "societyName": "Raheja Residency",
    "configuration": "2bhk",
    "propertyType": "apartment",
    "superBuiltUpArea": 1200,
    "carpetArea": 950,
}


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        patcher = patch.dict(os.environ, {"LOKALITY_USE_IN_MEMORY_BACKENDS": "1"})
        patcher.start()
        self.addCleanup(patcher.stop)
        get_settings.cache_clear()
        reset_clients()
        self.addCleanup(get_settings.cache_clear)
        self.addCleanup(reset_clients)
        self.client = TestClient(create_app())
        self.db = get_db_client()

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_me_creates_seeker_profile(self):
        response = self.client.get("/api/me", headers=SEEKER)
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["id"], "seeker")
        self.assertEqual(payload["name"], "asha")
        self.assertEqual(payload["type"], "seeker")

        response = self.client.patch(
            "/api/me", headers=SEEKER, json={"bio": "Moving in March."}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["bio"], "Moving in March.")

    def test_errors_use_title_and_detail(self):
        response = self.client.get("/api/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"title": "Not Logged In", "detail": "You need to be logged in."},
        )
        response = self.client.get("/api/properties/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["title"], "Not Found")

    def test_error_classes_in_use(self):
        self.assertEqual(
            {cls.__name__: cls.status_code for cls in LokalityError.__subclasses__()},
            {
                "ValidationError": 400,
                "AuthenticationError": 401,
                "PermissionDeniedError": 403,
                "NotFoundError": 404,
            },
        )

    def test_public_profile_hides_search_data(self):
        self.client.get("/api/me", headers=SEEKER)
        response = self.client.get("/api/users/seeker")
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("searchHistory", response.json())
        self.assertNotIn("searchCriteria", response.json())

    def test_create_review_and_feed(self):
        self.db.save_user(make_admin())
        response = self.client.post(
            "/api/properties",
            headers=LISTER,
            data={"payload": json.dumps(PROPERTY_FORM)},
            files={"video": ("tour.mp4", b"video-bytes", "video/mp4")},
        )
        self.assertEqual(response.status_code, 201)
        created = response.json()
        self.assertEqual(created["status"], "pending-review")
        self.assertEqual(created["title"], "2BHK in Raheja Residency")
        self.assertIn("videos/lister/", created["video"])

        self.assertEqual(self.client.get("/api/reels").json()["properties"], [])
        pending = self.client.get("/api/admin/pending", headers=ADMIN).json()
        self.assertEqual([p["id"] for p in pending["properties"]], [created["id"]])

        response = self.client.post(
            f"/api/admin/properties/{created['id']}/approve", headers=ADMIN
        )
        self.assertEqual(response.status_code, 200)
        feed = self.client.get("/api/reels").json()["properties"]
        self.assertEqual([p["id"] for p in feed], [created["id"]])

        mine = self.client.get("/api/users/lister/properties").json()["properties"]
        self.assertEqual(len(mine), 1)

    def test_admin_routes_require_admin(self):
        response = self.client.get("/api/admin/pending", headers=SEEKER)
        self.assertEqual(response.status_code, 403)

    def test_invalid_property_form(self):
        form = dict(PROPERTY_FORM, priceAmount=0)
        response = self.client.post(
            "/api/properties", headers=LISTER, data={"payload": json.dumps(form)}
        )
        self.assertEqual(response.status_code, 422)

    def test_delete_property(self):
        self.db.save_property(make_property("p1", lister_id="lister"))
        response = self.client.delete("/api/properties/p1", headers=SEEKER)
        self.assertEqual(response.status_code, 403)
        response = self.client.delete("/api/properties/p1", headers=LISTER)
        self.assertEqual(response.status_code, 204)
        self.assertIsNone(self.db.get_property("p1"))

    def test_hidden_listing_only_visible_to_lister_and_admin(self):
        self.db.save_user(make_admin())
        self.db.save_property(
            make_property(
                "p1", lister_id="lister", status=PropertyStatus.PENDING_REVIEW
            )
        )
        self.assertEqual(self.client.get("/api/properties/p1").status_code, 404)
        response = self.client.get("/api/properties/p1", headers=SEEKER)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            self.client.get("/api/ai/match-score/p1", headers=SEEKER).status_code, 404
        )
        for headers in (LISTER, ADMIN):
            response = self.client.get("/api/properties/p1", headers=headers)
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json()["status"], "pending-review")

    def test_shortlisted(self):
        self.db.save_property(make_property("a"))
        self.db.save_property(make_property("b"))
        response = self.client.post(
            "/api/properties/shortlisted", json={"propertyIds": ["b", "x", "a"]}
        )
        self.assertEqual(
            [p["id"] for p in response.json()["properties"]], ["b", "a"]
        )

    def test_search_records_history(self):
        self.db.save_property(make_property("hsr", amount=30000))
        self.db.save_property(
            make_property("far", amount=30000, location="Whitefield, Bengaluru")
        )
        self.db.save_property(
            make_property("hsr-pending", status=PropertyStatus.PENDING_REVIEW)
        )
        self.client.get("/api/me", headers=SEEKER)

        filters = {"lookingTo": "rent", "priceRange": [0, 300000], "location": "hsr"}
        response = self.client.post(
            "/api/search", headers=SEEKER, json={"filters": filters}
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual([p["id"] for p in payload["properties"]], ["hsr"])
        self.assertEqual(payload["maxPrice"], 300000)
        self.assertEqual(len(payload["searchHistory"]), 1)

        history = self.client.get("/api/search/history", headers=SEEKER).json()
        self.assertEqual(
            history["searchHistory"][0]["display"], payload["description"]
        )

        replay = self.client.post("/api/search/history/0/replay", headers=SEEKER)
        self.assertEqual([p["id"] for p in replay.json()["properties"]], ["hsr"])
        self.assertEqual(len(replay.json()["searchHistory"]), 2)
        self.assertEqual(
            self.client.post("/api/search/history/5/replay", headers=SEEKER).status_code,
            400,
        )

        response = self.client.delete("/api/search/history", headers=SEEKER)
        self.assertEqual(response.status_code, 204)
        history = self.client.get("/api/search/history", headers=SEEKER).json()
        self.assertEqual(history["searchHistory"], [])

    def test_anonymous_search(self):
        self.db.save_property(make_property("p1"))
        response = self.client.post("/api/search", json={"filters": {}})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["searchHistory"])

    def test_chat_flow(self):
        self.client.get("/api/me", headers=SEEKER)
        response = self.client.post(
            "/api/chats",
            headers=SEEKER,
            json={"targetId": "lister", "targetName": "Priya"},
        )
        self.assertEqual(response.status_code, 200)
        chat_id = response.json()["id"]

        response = self.client.post(
            f"/api/chats/{chat_id}/messages", headers=LISTER, json={"text": "Hello"}
        )
        self.assertEqual(response.status_code, 201)

        listed = self.client.get("/api/chats", headers=SEEKER).json()["chats"]
        self.assertEqual(listed[0]["lastMessage"]["text"], "Hello")
        chat = self.client.get(f"/api/chats/{chat_id}", headers=SEEKER).json()
        self.assertEqual([m["text"] for m in chat["messages"]], ["Hello"])

        response = self.client.get(f"/api/chats/{chat_id}", headers=PROVIDER)
        self.assertEqual(response.status_code, 403)

    def test_presence(self):
        self.assertEqual(
            self.client.get("/api/presence/seeker").json()["status"], "offline"
        )
        response = self.client.put(
            "/api/presence", headers=SEEKER, json={"status": "online"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.client.get("/api/presence/seeker").json()["status"], "online"
        )

    def test_ironing_flow(self):
        self.db.save_user(make_provider())
        prices = self.client.get("/api/ironing/prices").json()["items"]
        self.assertEqual(len(prices), 16)

        response = self.client.post(
            "/api/ironing/orders",
            headers=SEEKER,
            json={
                "items": [{"name": "Shirt", "price": 15, "quantity": 3}],
                "address": {
                    "apartmentName": "Green Acres",
                    "block": "B",
                    "floorNo": "3",
                    "flatNo": "304",
                },
            },
        )
        self.assertEqual(response.status_code, 201)
        order = response.json()
        self.assertEqual(order["orderId"], 1)
        self.assertEqual(order["totalCost"], 45)

        mine = self.client.get("/api/ironing/my-orders", headers=SEEKER).json()
        self.assertEqual([o["id"] for o in mine["orders"]], [order["id"]])
        profile = self.client.get("/api/ironing/profile", headers=SEEKER).json()
        self.assertEqual(profile["address"]["flatNo"], "304")

        response = self.client.get("/api/ironing/orders", headers=SEEKER)
        self.assertEqual(response.status_code, 403)
        response = self.client.post(
            f"/api/ironing/orders/{order['id']}/advance",
            headers=PROVIDER,
            json={"status": "picked-up"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "picked-up")
        response = self.client.post(
            f"/api/ironing/orders/{order['id']}/advance",
            headers=PROVIDER,
            json={"status": "placed"},
        )
        self.assertEqual(response.status_code, 400)

    def test_sign_url_limited_to_own_folder(self):
        response = self.client.get(
            "/api/sign-url", params={"path": "videos/seeker/tour.mp4"}, headers=SEEKER
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("videos/seeker/tour.mp4", response.json()["url"])

        response = self.client.get(
            "/api/sign-url", params={"path": "videos/lister/tour.mp4"}, headers=SEEKER
        )
        self.assertEqual(response.status_code, 403)

    def test_avatar_upload(self):
        response = self.client.post(
            "/api/me/avatar",
            headers=SEEKER,
            files={"file": ("me.png", b"png-bytes", "image/png")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("avatars/seeker/me.png", response.json()["avatar"])
        self.assertIn("avatars/seeker/me.png", get_storage_client().stored_objects)

    def test_description_falls_back_without_model(self):
        with patch(
            "lokality.routes.ai.generate_property_description_action",
            return_value=None,
        ):
            response = self.client.post(
                "/api/ai/description",
                json={
                    "propertyType": "apartment",
                    "configuration": "2bhk",
                    "location": "HSR Layout",
                    "societyName": "Green Acres",
                    "priceType": "rent",
                },
            )
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["generated"])
        self.assertTrue(response.json()["description"])

    def test_description_reports_template_when_model_fails(self):
        with patch(
            "lokality.routes.ai.generate_property_description_action",
            return_value=PropertyDescriptionOutput(
                description="Template text.", generated=False
            ),
        ):
            response = self.client.post(
                "/api/ai/description", json={"location": "HSR Layout"}
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"description": "Template text.", "generated": False}
        )


if __name__ == "__main__":
    unittest.main()
