import unittest

from app.core.dates import utc_now
from app.models.product import Product
from tests.support import StoreHarness, add_channel, add_product


class CollectionStoreTest(unittest.TestCase):
    def setUp(self):
        self.harness = StoreHarness()
        self.store = self.harness.store()
        self.context = self.harness.context

    def tearDown(self):
        self.harness.close()

    def test_save_replaces_the_whole_collection(self):
        keep = add_product(self.store, self.context, sku="K1")
        add_product(self.store, self.context, sku="D1")
        now = utc_now()
        added = Product(
            id="prod_manual",
            sku="M1",
            sku_key="m1",
            name="Manual",
            description="",
            category="Tools",
            price=1.0,
            cost=0.5,
            reorder_point=1,
            reorder_quantity=2,
            created_at=now,
            updated_at=now,
        )
        keep.name = "Kept"

        self.store.save_products([keep, added])

        products = {p.id: p for p in self.store.get_products()}
        self.assertEqual(set(products), {keep.id, "prod_manual"})
        self.assertEqual(products[keep.id].name, "Kept")

    def test_save_channels_and_lookups(self):
        channel = add_channel(self.store, self.context, name="Main Hall")
        self.assertIs(self.store.find_channel_by_name("  main hall "), channel)
        self.store.save_channels([])
        self.assertEqual(self.store.get_channels(), [])
        self.assertIsNone(self.store.get_channel(channel.id))

    def test_product_id_helpers(self):
        a = add_product(self.store, self.context, sku="A")
        b = add_product(self.store, self.context, sku="B")
        self.assertEqual(self.store.all_product_ids(), [a.id, b.id])
        self.assertEqual(self.store.existing_product_ids([a.id, "prod_x"]), {a.id})
        self.assertEqual(self.store.existing_product_ids([]), set())
        self.assertIs(self.store.find_product_by_sku("a"), a)


if __name__ == "__main__":
    unittest.main()
