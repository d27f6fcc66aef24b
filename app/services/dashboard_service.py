from app.core.inventory_calculator import (
    channel_distribution,
    inventory_for_product,
    inventory_value,
    is_low_stock,
    is_out_of_stock,
    quantity_by_product,
    reorder_suggestion,
    stock_status,
)
from app.database.store import CollectionStore


def _product_value(product, quantity):
    return (product.price or 0.0) * quantity


def compute_dashboard_stats(products, inventory, movements, channels, *, top_n=5, recent_n=10):
    """Summary figures for the dashboard.

    Values use the sale price. Products with no inventory count as out of
    stock. ``movements`` is expected newest first.
    """
    totals = quantity_by_product(inventory)

    low_stock_count = 0
    out_of_stock_count = 0
    ranked = []
    for product in products:
        quantity = totals.get(product.id, 0)
        if is_out_of_stock(quantity):
            out_of_stock_count += 1
        elif is_low_stock(product, quantity):
            low_stock_count += 1
        ranked.append(
            {
                "product_id": product.id,
                "sku": product.sku,
                "name": product.name,
                "quantity": quantity,
                "value": _product_value(product, quantity),
                "stock_status": stock_status(product, quantity),
            }
        )
    ranked.sort(key=lambda row: (-row["value"], row["sku"]))

    distribution = channel_distribution(inventory)
    channel_products = {}
    for item in inventory:
        channel_products.setdefault(item.channel_id, set()).add(item.product_id)

    channel_stats = []
    for channel in channels:
        sums = distribution.get(channel.id, {"quantity": 0, "available": 0, "reserved": 0})
        channel_stats.append(
            {
                "channel_id": channel.id,
                "name": channel.name,
                "type": channel.type,
                "is_active": channel.is_active,
                "sync_status": channel.sync_status,
                "last_synced_at": channel.last_synced_at,
                "product_count": len(channel_products.get(channel.id, ())),
                "total_quantity": sums["quantity"],
                "total_available": sums["available"],
            }
        )

    return {
        "total_products": len(products),
        "total_value": inventory_value(products, inventory, use_retail_price=True),
        "low_stock_count": low_stock_count,
        "out_of_stock_count": out_of_stock_count,
        "top_products": ranked[: max(0, top_n)],
        "channel_stats": channel_stats,
        "recent_movements": list(movements)[: max(0, recent_n)],
    }


def low_stock_report(products, inventory):
    report = []
    for product in products:
        items = inventory_for_product(inventory, product.id)
        quantity = sum(item.quantity or 0 for item in items)
        if not (is_out_of_stock(quantity) or is_low_stock(product, quantity)):
            continue
        report.append(
            {
                "product_id": product.id,
                "sku": product.sku,
                "name": product.name,
                "category": product.category,
                "total_quantity": quantity,
                "reorder_point": product.reorder_point,
                "stock_status": stock_status(product, quantity),
                "suggested_reorder": reorder_suggestion(product, quantity),
                "channels": [
                    {"channel_id": item.channel_id, "quantity": item.quantity or 0}
                    for item in items
                ],
            }
        )
    report.sort(key=lambda row: (row["total_quantity"], row["sku"]))
    return report


def dashboard_stats(store: CollectionStore, settings):
    return compute_dashboard_stats(
        store.get_products(),
        store.get_inventory(),
        store.list_movements(),
        store.list_channels(),
        top_n=settings.DASHBOARD_TOP_PRODUCTS,
        recent_n=settings.DASHBOARD_RECENT_MOVEMENTS,
    )


def dashboard_low_stock(store: CollectionStore):
    return low_stock_report(store.get_products(), store.get_inventory())


__all__ = [
    "compute_dashboard_stats",
    "dashboard_low_stock",
    "dashboard_stats",
    "low_stock_report",
]
