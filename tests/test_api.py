import unittest

from fastapi.testclient import TestClient

from app.database.session import get_db
from app.integrations.http_client import ChannelRequestError
from app.main import create_app
from tests.support import FakeAdapter, FakeRegistry, StoreHarness


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.responses = {}
        self.registry = FakeRegistry(lambda: FakeAdapter(self.responses))
        self.harness = StoreHarness(adapters=self.registry)
        app = create_app(self.harness.settings, context=self.harness.context)

        def override_get_db():
            session = self.harness.session_factory()
            try:
                yield session
            finally:
                session.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        self.harness.close()

    def create_channel(self, name="Warehouse", **fields):
        response = self.client.post("/channels", json=dict({"name": name, "type": "manual"}, **fields))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["channel"]

    def create_product(self, sku="X1", **fields):
        body = {"sku": sku, "name": "Widget", "category": "Tools", "reorderPoint": 10, "reorderQuantity": 20}
        body.update(fields)
        response = self.client.post("/products", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["product"]


class HealthApiTest(ApiTestCase):
    def test_health(self):
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["app"], self.harness.settings.APP_NAME)


class ProductApiTest(ApiTestCase):
    def test_crud_round(self):
        product = self.create_product()
        self.assertEqual(product["reorderPoint"], 10)
        self.assertTrue(product["createdAt"].endswith(("Z", "+00:00")))

        response = self.client.post("/products", json={"sku": "x1", "name": "Dup", "category": "Tools"})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "DUPLICATE_KEY")
        self.assertFalse(response.json()["success"])

        response = self.client.put("/products/{}".format(product["id"]), json={"price": 9.5})
        self.assertEqual(response.json()["product"]["price"], 9.5)

        listing = self.client.get("/products", params={"search": "widg"}).json()
        self.assertEqual(listing["total"], 1)

        response = self.client.delete("/products/{}".format(product["id"]))
        self.assertEqual(response.json(), {"success": True, "id": product["id"]})
        self.assertEqual(self.client.get("/products/{}".format(product["id"])).status_code, 404)

    def test_schema_validation_uses_error_envelope(self):
        response = self.client.post("/products", json={"sku": "N", "name": "n", "category": "c", "price": -2})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "VALIDATION_FAILED")

    def test_initial_stock(self):
        channel = self.create_channel()
        product = self.create_product(initialStock=[{"channelId": channel["id"], "quantity": 6}])
        items = self.client.get("/inventory", params={"product_id": product["id"]}).json()["items"]
        self.assertEqual([(i["channelId"], i["quantity"], i["available"]) for i in items], [(channel["id"], 6, 6)])


class ChannelApiTest(ApiTestCase):
    def test_secret_is_never_echoed(self):
        channel = self.create_channel(name="Shop", apiKey="k", apiSecret="s", storeUrl="https://shop.example.com")
        self.assertNotIn("apiSecret", channel)
        self.assertNotIn("apiKey", channel)
        self.assertEqual(channel["syncStatus"], "idle")

    def test_patch_and_filters(self):
        channel = self.create_channel()
        response = self.client.patch("/channels/{}".format(channel["id"]), json={"isActive": False})
        self.assertFalse(response.json()["channel"]["isActive"])
        listing = self.client.get("/channels", params={"is_active": "true"}).json()
        self.assertEqual(listing["total"], 0)

    def test_push_stock(self):
        channel = self.create_channel()
        product = self.create_product()
        response = self.client.post(
            "/channels/{}/push-stock".format(channel["id"]), json={"productId": product["id"]}
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["quantity"], 0)
        self.assertTrue(response.json()["success"])


class MovementApiTest(ApiTestCase):
    def test_record_and_list(self):
        channel = self.create_channel()
        product = self.create_product()
        body = {"productId": product["id"], "channelId": channel["id"], "type": "replenishment", "quantity": 15}
        response = self.client.post("/movements", json=body)
        self.assertEqual(response.status_code, 201, response.text)

        body.update(type="sale", quantity=8)
        payload = self.client.post("/movements", json=body).json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["movement"]["previousQuantity"], 15)
        self.assertEqual(payload["movement"]["newQuantity"], 7)
        self.assertEqual(payload["inventoryItem"]["available"], 7)

        listing = self.client.get("/movements", params={"product_id": product["id"], "limit": 1}).json()
        self.assertEqual(listing["total"], 1)
        self.assertEqual(listing["movements"][0]["type"], "sale")

    def test_rejections(self):
        channel = self.create_channel()
        response = self.client.post("/movements", json={"channelId": channel["id"], "type": "sale", "quantity": 1})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"], {"missing": ["productId"]})

        response = self.client.post(
            "/movements",
            json={"productId": "prod_missing", "channelId": channel["id"], "type": "sale", "quantity": 1},
        )
        self.assertEqual(response.status_code, 404)

        response = self.client.get("/movements", params={"start_date": "not-a-date"})
        self.assertEqual(response.status_code, 400)


class SyncApiTest(ApiTestCase):
    def test_partial_sync(self):
        channel = self.create_channel()
        a = self.create_product(sku="A")
        b = self.create_product(sku="B")
        self.responses.update({a["id"]: 40, b["id"]: ChannelRequestError("timeout")})

        response = self.client.post(
            "/inventory/sync", json={"channelId": channel["id"], "productIds": [a["id"], b["id"]]}
        )
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertTrue(body["success"])
        self.assertEqual(body["syncedCount"], 1)
        self.assertEqual(body["errors"], [{"productId": b["id"], "error": "timeout"}])
        self.assertEqual(body["channel"]["syncError"], "Partial sync: 1 errors")
        self.assertIsNotNone(body["lastSyncedAt"])

    def test_inactive_channel_returns_failure_shape(self):
        channel = self.create_channel()
        self.client.patch("/channels/{}".format(channel["id"]), json={"isActive": False})
        response = self.client.post("/inventory/sync", json={"channelId": channel["id"]})
        body = response.json()
        self.assertEqual(response.status_code, 400)
        self.assertFalse(body["success"])
        self.assertEqual(body["syncedCount"], 0)
        self.assertEqual(body["errors"], [{"productId": "", "error": "Channel is not active"}])
        self.assertIsNotNone(body["lastSyncedAt"])
        status = self.client.get("/channels/{}".format(channel["id"])).json()["channel"]["syncStatus"]
        self.assertEqual(status, "idle")

    def test_missing_channel_id(self):
        response = self.client.post("/inventory/sync", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["error"], "Channel ID is required")


class DashboardApiTest(ApiTestCase):
    def test_stats_and_low_stock(self):
        channel = self.create_channel()
        product = self.create_product(price=2.0)
        self.client.post(
            "/movements",
            json={"productId": product["id"], "channelId": channel["id"], "type": "purchase", "quantity": 5},
        )
        stats = self.client.get("/dashboard/stats").json()
        self.assertEqual(stats["totalProducts"], 1)
        self.assertEqual(stats["totalValue"], 10.0)
        self.assertEqual(stats["lowStockCount"], 1)
        self.assertEqual(stats["channelStats"][0]["productCount"], 1)
        self.assertEqual(len(stats["recentMovements"]), 1)

        low = self.client.get("/dashboard/low-stock").json()
        self.assertEqual(low["total"], 1)
        self.assertEqual(low["items"][0]["suggestedReorder"], 20)


if __name__ == "__main__":
    unittest.main()
