import argparse

from sqlalchemy import delete

from app.core.logging import setup_logging
from app.database import SessionLocal, create_schema
from app.database.store import CollectionStore
from app.models import InventoryItem, Product, SalesChannel, StockMovement
from app.services.catalog_service import InitialStock, ProductDraft, create_product
from app.services.channel_service import create_channel
from app.services.context import build_context

DEMO_CHANNELS = (
    ("Main Warehouse", "manual"),
    ("Retail Store", "manual"),
)

DEMO_PRODUCTS = (
    ("TOOL-001", "Cordless Drill", "Tools", 89.99, 52.0, 10, 20, (40, 12)),
    ("TOOL-002", "Hammer", "Tools", 19.5, 8.25, 15, 30, (8, 0)),
    ("GARD-001", "Garden Hose 25m", "Garden", 34.0, 17.5, 5, 10, (0, 3)),
    ("ELEC-001", "LED Bulb 4-pack", "Electrical", 12.99, 4.1, 25, 100, (150, 60)),
)


def parse_args():
    parser = argparse.ArgumentParser(description="Seed demo channels and products.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    create_schema()
    context = build_context()

    db = SessionLocal()
    store = CollectionStore(db)
    try:
        if args.reset:
            db.execute(delete(StockMovement))
            db.execute(delete(InventoryItem))
            db.execute(delete(Product))
            db.execute(delete(SalesChannel))
            db.commit()

        if store.get_products() or store.get_channels():
            print("Seed skipped: catalog already has data.")
            return

        channels = [
            create_channel(store, context, name=name, channel_type=channel_type)
            for name, channel_type in DEMO_CHANNELS
        ]
        for sku, name, category, price, cost, reorder_point, reorder_quantity, stock in DEMO_PRODUCTS:
            create_product(
                store,
                context,
                ProductDraft(
                    sku=sku,
                    name=name,
                    category=category,
                    price=price,
                    cost=cost,
                    reorder_point=reorder_point,
                    reorder_quantity=reorder_quantity,
                    initial_stock=[
                        InitialStock(channel_id=channel.id, quantity=quantity)
                        for channel, quantity in zip(channels, stock)
                    ],
                ),
            )
        print("Seeded {} channels and {} products.".format(len(channels), len(DEMO_PRODUCTS)))
    finally:
        db.close()
        context.close()


if __name__ == "__main__":
    main()
