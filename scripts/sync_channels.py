import argparse
import logging
import sys

from app.core.exceptions import InventoryError
from app.core.logging import setup_logging
from app.database import SessionLocal, create_schema
from app.database.store import CollectionStore
from app.services.context import build_context
from app.services.reconciler_service import sync_active_channels, sync_channel

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Pull channel quantities into local inventory.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--channel", help="Sync a single channel by id.")
    target.add_argument(
        "--all",
        action="store_true",
        help="Sync every active channel once.",
    )
    parser.add_argument(
        "--product",
        action="append",
        dest="products",
        help="Limit the sync to these product ids (repeatable).",
    )
    return parser.parse_args()


def _report(channel_id, outcome):
    print(
        "{}: synced={} errors={}".format(channel_id, outcome.synced_count, len(outcome.errors))
    )
    for error in outcome.errors:
        print("  {}: {}".format(error.product_id, error.error))


def main():
    setup_logging()
    args = parse_args()
    create_schema()
    context = build_context()

    db = SessionLocal()
    store = CollectionStore(db)
    exit_code = 0
    try:
        if args.channel:
            try:
                outcome = sync_channel(store, context, args.channel, args.products)
            except InventoryError as exc:
                logger.error("Sync of %s rejected: %s", args.channel, exc.message)
                return 1
            _report(args.channel, outcome)
            exit_code = 0 if outcome.success else 2
        else:
            outcomes = sync_active_channels(store, context)
            for channel_id, outcome in outcomes.items():
                _report(channel_id, outcome)
                if not outcome.success:
                    exit_code = 2
    finally:
        db.close()
        context.close()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
