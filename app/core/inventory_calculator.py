import math

from app.core.constants import STOCK_IN_STOCK, STOCK_LOW, STOCK_OUT_OF_STOCK, STOCK_OVERSTOCKED


def calculate_available(quantity, reserved):
    return max(0, (quantity or 0) - (reserved or 0))


def is_low_stock(product, current_stock):
    return current_stock > 0 and current_stock <= product.reorder_point


def is_out_of_stock(current_stock):
    return current_stock <= 0


def reorder_suggestion(product, current_stock):
    if current_stock >= product.reorder_point:
        return 0
    deficit = product.reorder_point - current_stock
    return max(product.reorder_quantity, deficit)


def stock_status(product, current_stock):
    if is_out_of_stock(current_stock):
        return STOCK_OUT_OF_STOCK
    if is_low_stock(product, current_stock):
        return STOCK_LOW
    optimal_stock = product.reorder_point + product.reorder_quantity
    if current_stock > optimal_stock * 2:
        return STOCK_OVERSTOCKED
    return STOCK_IN_STOCK


def _sum_by(items, key_attr, value_attr):
    totals = {}
    for item in items:
        key = getattr(item, key_attr)
        totals[key] = totals.get(key, 0) + (getattr(item, value_attr) or 0)
    return totals


def quantity_by_product(inventory):
    return _sum_by(inventory, "product_id", "quantity")


def available_by_product(inventory):
    return _sum_by(inventory, "product_id", "available")


def reserved_by_product(inventory):
    return _sum_by(inventory, "product_id", "reserved")


def quantity_by_channel(inventory):
    return _sum_by(inventory, "channel_id", "quantity")


def channel_distribution(inventory):
    distribution = {}
    for item in inventory:
        entry = distribution.setdefault(
            item.channel_id, {"quantity": 0, "available": 0, "reserved": 0}
        )
        entry["quantity"] += item.quantity or 0
        entry["available"] += item.available or 0
        entry["reserved"] += item.reserved or 0
    return distribution


def inventory_for_product(inventory, product_id):
    return [item for item in inventory if item.product_id == product_id]


def inventory_for_channel(inventory, channel_id):
    return [item for item in inventory if item.channel_id == channel_id]


def inventory_value(products, inventory, *, use_retail_price=False):
    totals = quantity_by_product(inventory)
    total_value = 0.0
    for product in products:
        unit_price = product.price if use_retail_price else product.cost
        total_value += (unit_price or 0.0) * totals.get(product.id, 0)
    return total_value


def total_value(products, inventory):
    totals = quantity_by_product(inventory)
    value = 0.0
    for product in products:
        unit_price = product.cost
        if unit_price is None or unit_price <= 0:
            unit_price = product.price or 0.0
        value += unit_price * totals.get(product.id, 0)
    return value


def potential_profit(products, inventory):
    totals = quantity_by_product(inventory)
    profit = 0.0
    for product in products:
        per_unit = (product.price or 0.0) - (product.cost or 0.0)
        profit += per_unit * totals.get(product.id, 0)
    return profit


def stock_days(current_stock, average_daily_sales):
    if average_daily_sales <= 0:
        return math.inf
    return current_stock / average_daily_sales


def turnover_rate(sold_quantity, average_inventory):
    if average_inventory <= 0:
        return 0.0
    return sold_quantity / average_inventory


__all__ = [
    "available_by_product",
    "calculate_available",
    "channel_distribution",
    "inventory_for_channel",
    "inventory_for_product",
    "inventory_value",
    "is_low_stock",
    "is_out_of_stock",
    "potential_profit",
    "quantity_by_channel",
    "quantity_by_product",
    "reorder_suggestion",
    "reserved_by_product",
    "stock_days",
    "stock_status",
    "total_value",
    "turnover_rate",
]
