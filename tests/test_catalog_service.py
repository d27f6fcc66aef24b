import unittest

from app.core.exceptions import DuplicateKeyError, NotFoundError, ValidationFailedError
from app.services import catalog_service
from app.services.catalog_service import InitialStock, ProductDraft
from app.services.ledger_service import record_movement
from tests.support import StoreHarness, add_channel, add_product


class CatalogServiceTest(unittest.TestCase):
    def setUp(self):
        self.harness = StoreHarness()
        self.store = self.harness.store()
        self.context = self.harness.context

    def tearDown(self):
        self.harness.close()

    def test_create_applies_defaults(self):
        product = catalog_service.create_product(
            self.store, self.context, ProductDraft(sku=" ab-1 ", name="Bolt", category="Hardware")
        )
        self.assertTrue(product.id.startswith("prod_"))
        self.assertEqual(product.sku, "ab-1")
        self.assertEqual(product.description, "")
        self.assertEqual(product.price, 0.0)
        self.assertEqual(product.reorder_point, 10)
        self.assertEqual(product.reorder_quantity, 50)

    def test_duplicate_sku_is_rejected_case_insensitively(self):
        add_product(self.store, self.context, sku="X1")
        with self.assertRaises(DuplicateKeyError):
            add_product(self.store, self.context, sku="x1", name="Other")
        products = self.store.get_products()
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0].name, "Widget")

    def test_required_fields_and_ranges(self):
        with self.assertRaises(ValidationFailedError) as ctx:
            catalog_service.create_product(
                self.store, self.context, ProductDraft(sku="", name="n", category="")
            )
        self.assertEqual(ctx.exception.details, {"missing": ["sku", "category"]})
        with self.assertRaises(ValidationFailedError):
            add_product(self.store, self.context, sku="N1", price=-1)
        with self.assertRaises(ValidationFailedError):
            add_product(self.store, self.context, sku="N2", reorder_quantity=0)
        self.assertEqual(self.store.get_products(), [])

    def test_initial_stock_goes_through_the_ledger(self):
        channel = add_channel(self.store, self.context)
        product = catalog_service.create_product(
            self.store,
            self.context,
            ProductDraft(
                sku="S1",
                name="Seeded",
                category="Tools",
                initial_stock=[
                    InitialStock(channel_id=channel.id, quantity=12),
                    InitialStock(channel_id="chan_ghost", quantity=3),
                    InitialStock(channel_id=channel.id, quantity=0),
                ],
            ),
        )
        inventory = self.store.list_inventory(product_id=product.id)
        self.assertEqual([(i.channel_id, i.quantity) for i in inventory], [(channel.id, 12)])
        movements = self.store.get_movements()
        self.assertEqual(len(movements), 1)
        self.assertEqual(movements[0].type, "replenishment")
        self.assertEqual(movements[0].reason, "Initial stock")

    def test_update_rechecks_sku_only_when_changed(self):
        first = add_product(self.store, self.context, sku="A1")
        add_product(self.store, self.context, sku="B1")

        updated = catalog_service.update_product(self.store, first.id, {"sku": "a1", "price": 3.5})
        self.assertEqual(updated.sku, "a1")
        self.assertEqual(updated.price, 3.5)
        with self.assertRaises(DuplicateKeyError):
            catalog_service.update_product(self.store, first.id, {"sku": "b1"})
        with self.assertRaises(ValidationFailedError):
            catalog_service.update_product(self.store, first.id, {"name": " "})
        with self.assertRaises(ValidationFailedError):
            catalog_service.update_product(self.store, first.id, {"color": "red"})
        with self.assertRaises(NotFoundError):
            catalog_service.update_product(self.store, "prod_missing", {"name": "x"})

    def test_delete_cascades(self):
        channel = add_channel(self.store, self.context)
        keep = add_product(self.store, self.context, sku="K1")
        drop = add_product(self.store, self.context, sku="D1")
        for product in (keep, drop):
            record_movement(
                self.store,
                self.context,
                product_id=product.id,
                channel_id=channel.id,
                movement_type="replenishment",
                quantity=4,
            )

        catalog_service.delete_product(self.store, drop.id)

        self.assertEqual([p.id for p in self.store.get_products()], [keep.id])
        self.assertEqual({i.product_id for i in self.store.get_inventory()}, {keep.id})
        self.assertEqual({m.product_id for m in self.store.get_movements()}, {keep.id})
        with self.assertRaises(NotFoundError):
            catalog_service.get_product(self.store, drop.id)

    def test_list_filters(self):
        add_product(self.store, self.context, sku="T1", name="Hammer", category="Tools")
        add_product(self.store, self.context, sku="G1", name="Hose", category="Garden", description="Green hose")
        self.assertEqual(len(catalog_service.list_products(self.store, category="Tools")), 1)
        self.assertEqual(
            [p.sku for p in catalog_service.list_products(self.store, search="GREEN")], ["G1"]
        )
        self.assertEqual(
            [p.sku for p in catalog_service.list_products(self.store, search="t1")], ["T1"]
        )


if __name__ == "__main__":
    unittest.main()
