import importlib

from app.models.channel import SalesChannel
from app.models.inventory import InventoryItem
from app.models.movement import StockMovement
from app.models.product import Product


def import_all_models() -> None:
    for module_name in (
        "app.models.channel",
        "app.models.inventory",
        "app.models.movement",
        "app.models.product",
    ):
        importlib.import_module(module_name)


__all__ = [
    "InventoryItem",
    "Product",
    "SalesChannel",
    "StockMovement",
    "import_all_models",
]
