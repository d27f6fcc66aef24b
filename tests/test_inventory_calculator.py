import math
import unittest
from types import SimpleNamespace

from app.core import inventory_calculator as calc


def product(pid="p1", reorder_point=10, reorder_quantity=20, price=5.0, cost=2.0):
    return SimpleNamespace(
        id=pid,
        reorder_point=reorder_point,
        reorder_quantity=reorder_quantity,
        price=price,
        cost=cost,
    )


def item(product_id, channel_id, quantity, reserved=0):
    return SimpleNamespace(
        product_id=product_id,
        channel_id=channel_id,
        quantity=quantity,
        reserved=reserved,
        available=calc.calculate_available(quantity, reserved),
    )


class AvailabilityTest(unittest.TestCase):
    def test_available_is_floored_at_zero(self):
        self.assertEqual(calc.calculate_available(10, 3), 7)
        self.assertEqual(calc.calculate_available(3, 10), 0)
        self.assertEqual(calc.calculate_available(None, None), 0)


class StockStatusTest(unittest.TestCase):
    def test_thresholds(self):
        widget = product(reorder_point=10, reorder_quantity=20)
        self.assertEqual(calc.stock_status(widget, 0), "out_of_stock")
        self.assertEqual(calc.stock_status(widget, 7), "low_stock")
        self.assertEqual(calc.stock_status(widget, 10), "low_stock")
        self.assertEqual(calc.stock_status(widget, 11), "in_stock")
        self.assertEqual(calc.stock_status(widget, 60), "in_stock")
        self.assertEqual(calc.stock_status(widget, 61), "overstocked")

    def test_zero_stock_is_not_low(self):
        widget = product()
        self.assertFalse(calc.is_low_stock(widget, 0))
        self.assertTrue(calc.is_out_of_stock(0))

    def test_reorder_suggestion(self):
        widget = product(reorder_point=10, reorder_quantity=20)
        self.assertEqual(calc.reorder_suggestion(widget, 12), 0)
        self.assertEqual(calc.reorder_suggestion(widget, 10), 0)
        self.assertEqual(calc.reorder_suggestion(widget, 4), 20)
        big_gap = product(reorder_point=100, reorder_quantity=20)
        self.assertEqual(calc.reorder_suggestion(big_gap, 30), 70)


class AggregationTest(unittest.TestCase):
    def setUp(self):
        self.inventory = [
            item("p1", "c1", 10, reserved=2),
            item("p1", "c2", 5),
            item("p2", "c1", 3),
        ]

    def test_sums_by_product_and_channel(self):
        self.assertEqual(calc.quantity_by_product(self.inventory), {"p1": 15, "p2": 3})
        self.assertEqual(calc.available_by_product(self.inventory), {"p1": 13, "p2": 3})
        self.assertEqual(calc.reserved_by_product(self.inventory), {"p1": 2, "p2": 0})
        self.assertEqual(calc.quantity_by_channel(self.inventory), {"c1": 13, "c2": 5})

    def test_channel_distribution(self):
        distribution = calc.channel_distribution(self.inventory)
        self.assertEqual(distribution["c1"], {"quantity": 13, "available": 11, "reserved": 2})
        self.assertEqual(distribution["c2"], {"quantity": 5, "available": 5, "reserved": 0})

    def test_filters(self):
        self.assertEqual(len(calc.inventory_for_product(self.inventory, "p1")), 2)
        self.assertEqual(len(calc.inventory_for_channel(self.inventory, "c2")), 1)

    def test_values(self):
        products = [product("p1", price=5.0, cost=2.0), product("p2", price=4.0, cost=0.0)]
        self.assertAlmostEqual(calc.inventory_value(products, self.inventory), 30.0)
        self.assertAlmostEqual(
            calc.inventory_value(products, self.inventory, use_retail_price=True), 87.0
        )
        # p2 has no cost, so its price stands in
        self.assertAlmostEqual(calc.total_value(products, self.inventory), 42.0)
        self.assertAlmostEqual(calc.potential_profit(products, self.inventory), 57.0)


class RateTest(unittest.TestCase):
    def test_stock_days(self):
        self.assertEqual(calc.stock_days(30, 3), 10)
        self.assertTrue(math.isinf(calc.stock_days(30, 0)))

    def test_turnover_rate(self):
        self.assertEqual(calc.turnover_rate(40, 20), 2)
        self.assertEqual(calc.turnover_rate(40, 0), 0.0)


if __name__ == "__main__":
    unittest.main()
