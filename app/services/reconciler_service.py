"""Channel sync cycles.

A cycle pulls authoritative quantities from the channel's adapter and
overwrites the local inventory records with them. Overwrites bypass the
ledger and leave no movement behind, so replaying a cycle is idempotent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.constants import SYNC_STATUS_ERROR, SYNC_STATUS_SUCCESS, SYNC_STATUS_SYNCING
from app.core.dates import ensure_utc, utc_now
from app.core.exceptions import (
    InactiveChannelError,
    InventoryError,
    NotFoundError,
    SyncInProgressError,
    ValidationFailedError,
)
from app.database.store import CollectionStore
from app.integrations.base import ChannelCredentials, SyncResult, unique_ids
from app.integrations.registry import missing_integration_results
from app.models.channel import SalesChannel
from app.services.context import InventoryContext
from app.services.inventory_service import apply_quantity, find_or_create_item

logger = logging.getLogger(__name__)

MISSING_RESULT_ERROR = "No result returned by channel"
STORE_FAILURE_ERROR = "Failed to store synced quantity"


@dataclass
class SyncItemError:
    product_id: str
    error: str


@dataclass
class SyncOutcome:
    success: bool
    synced_count: int
    errors: list[SyncItemError] = field(default_factory=list)
    last_synced_at: Optional[datetime] = None
    attempted: int = 0
    channel: Optional[SalesChannel] = None


@dataclass
class PushOutcome:
    success: bool
    product_id: str
    channel_id: str
    quantity: int


def _is_stale(started_at: Optional[datetime], now: datetime, stale_seconds: int) -> bool:
    if started_at is None:
        return True
    return now - ensure_utc(started_at) > timedelta(seconds=stale_seconds)


def summarize_errors(synced_count: int, error_count: int) -> tuple[str, Optional[str]]:
    if error_count == 0:
        return SYNC_STATUS_SUCCESS, None
    if synced_count > 0:
        return SYNC_STATUS_SUCCESS, "Partial sync: {} errors".format(error_count)
    return SYNC_STATUS_ERROR, "Sync failed: {} errors".format(error_count)


def _begin_sync(store: CollectionStore, context: InventoryContext, channel_id: str) -> SalesChannel:
    with context.channel_locks.hold(channel_id):
        store.commit()
        channel = store.refresh_channel(channel_id)
        if channel is None:
            raise NotFoundError("Channel not found")
        if not channel.is_active:
            raise InactiveChannelError("Channel is not active")

        now = utc_now()
        if channel.sync_status == SYNC_STATUS_SYNCING and not _is_stale(
            channel.sync_started_at, now, context.settings.SYNC_STALE_SECONDS
        ):
            raise SyncInProgressError("Channel sync already in progress")
        if channel.sync_status == SYNC_STATUS_SYNCING:
            logger.warning(
                "Taking over stale sync for channel %s", channel_id, extra={"channel_id": channel_id}
            )

        channel.sync_status = SYNC_STATUS_SYNCING
        channel.sync_error = None
        channel.sync_started_at = now
        try:
            store.commit()
        except SQLAlchemyError:
            store.rollback()
            raise
        return channel


def _resolve_targets(store: CollectionStore, channel_id: str, product_ids: Optional[Iterable[str]]) -> list[str]:
    if product_ids is None:
        return store.all_product_ids()

    requested = unique_ids(pid for pid in product_ids if pid)
    known = store.existing_product_ids(requested)
    unknown = [pid for pid in requested if pid not in known]
    if unknown:
        logger.warning(
            "Skipping %s unknown product ids for channel %s: %s",
            len(unknown),
            channel_id,
            ", ".join(unknown[:10]),
            extra={"channel_id": channel_id},
        )
    return [pid for pid in requested if pid in known]


def _fetch_results(context: InventoryContext, channel: SalesChannel, product_ids: list[str]) -> list[SyncResult]:
    adapter = context.adapters.create(channel.type)
    if adapter is None:
        logger.warning(
            "No integration registered for channel type %s", channel.type, extra={"channel_id": channel.id}
        )
        return missing_integration_results(product_ids)
    try:
        adapter.connect(ChannelCredentials.from_channel(channel))
        return adapter.sync_inventory(product_ids)
    finally:
        adapter.disconnect()


def _one_result_per_id(product_ids: list[str], results: Iterable[SyncResult]) -> list[SyncResult]:
    by_id = {}
    for result in results:
        if result.product_id in by_id:
            continue
        by_id[result.product_id] = result
    return [
        by_id.get(pid) or SyncResult(product_id=pid, success=False, error=MISSING_RESULT_ERROR)
        for pid in product_ids
    ]


def _apply_result(
    store: CollectionStore,
    context: InventoryContext,
    channel_id: str,
    result: SyncResult,
    *,
    now: datetime,
) -> Optional[str]:
    with context.inventory_locks.hold((result.product_id, channel_id)):
        try:
            store.commit()
            item, _created = find_or_create_item(store, result.product_id, channel_id, now=now)
            apply_quantity(item, result.quantity, now=now, synced=True)
            store.commit()
        except SQLAlchemyError:
            store.rollback()
            logger.exception(
                "Failed to store synced quantity for %s/%s",
                result.product_id,
                channel_id,
                extra={"product_id": result.product_id, "channel_id": channel_id},
            )
            return STORE_FAILURE_ERROR
    return None


def _finish_sync(
    store: CollectionStore,
    context: InventoryContext,
    channel_id: str,
    *,
    cycle_at: datetime,
    synced_count: int,
    error_count: int,
) -> Optional[SalesChannel]:
    status, message = summarize_errors(synced_count, error_count)
    with context.channel_locks.hold(channel_id):
        store.commit()
        channel = store.refresh_channel(channel_id)
        if channel is None:
            logger.warning("Channel %s was deleted during sync", channel_id, extra={"channel_id": channel_id})
            return None
        channel.last_synced_at = cycle_at
        channel.sync_status = status
        channel.sync_error = message
        channel.sync_started_at = None
        try:
            store.commit()
        except SQLAlchemyError:
            store.rollback()
            raise
        return channel


def _mark_sync_failed(store: CollectionStore, context: InventoryContext, channel_id: str, exc: Exception) -> None:
    try:
        store.rollback()
        with context.channel_locks.hold(channel_id):
            channel = store.refresh_channel(channel_id)
            if channel is None:
                return
            channel.sync_status = SYNC_STATUS_ERROR
            channel.sync_error = str(exc) or "Sync failed"
            channel.sync_started_at = None
            store.commit()
    except Exception:
        logger.exception(
            "Unable to record sync failure for channel %s", channel_id, extra={"channel_id": channel_id}
        )


def _run_cycle(
    store: CollectionStore,
    context: InventoryContext,
    channel: SalesChannel,
    product_ids: Optional[Iterable[str]],
) -> SyncOutcome:
    channel_id = channel.id
    target_ids = _resolve_targets(store, channel_id, product_ids)
    if not target_ids:
        cycle_at = utc_now()
        final_channel = _finish_sync(
            store, context, channel_id, cycle_at=cycle_at, synced_count=0, error_count=0
        )
        logger.info("Channel %s sync: nothing to sync", channel_id, extra={"channel_id": channel_id})
        return SyncOutcome(success=True, synced_count=0, last_synced_at=cycle_at, channel=final_channel)

    results = _one_result_per_id(target_ids, _fetch_results(context, channel, target_ids))
    cycle_at = utc_now()

    errors = []
    synced_count = 0
    for result in results:
        if result.success and result.quantity is not None:
            store_error = _apply_result(store, context, channel_id, result, now=cycle_at)
            if store_error is None:
                synced_count += 1
                continue
            errors.append(SyncItemError(product_id=result.product_id, error=store_error))
            continue
        message = result.error or "Unknown sync error"
        logger.warning(
            "Channel %s failed to sync %s: %s",
            channel_id,
            result.product_id,
            message,
            extra={"channel_id": channel_id, "product_id": result.product_id},
        )
        errors.append(SyncItemError(product_id=result.product_id, error=message))

    final_channel = _finish_sync(
        store,
        context,
        channel_id,
        cycle_at=cycle_at,
        synced_count=synced_count,
        error_count=len(errors),
    )
    logger.info(
        "Channel %s sync finished: attempted=%s synced=%s errors=%s",
        channel_id,
        len(results),
        synced_count,
        len(errors),
        extra={"channel_id": channel_id},
    )
    return SyncOutcome(
        success=len(errors) < len(results),
        synced_count=synced_count,
        errors=errors,
        last_synced_at=cycle_at,
        attempted=len(results),
        channel=final_channel,
    )


def sync_channel(
    store: CollectionStore,
    context: InventoryContext,
    channel_id: str,
    product_ids: Optional[Iterable[str]] = None,
) -> SyncOutcome:
    if not (channel_id or "").strip():
        raise ValidationFailedError("Channel ID is required")

    channel = _begin_sync(store, context, channel_id)
    logger.info("Channel %s sync started", channel_id, extra={"channel_id": channel_id})
    try:
        return _run_cycle(store, context, channel, product_ids)
    except Exception as exc:
        logger.exception("Channel %s sync failed", channel_id, extra={"channel_id": channel_id})
        _mark_sync_failed(store, context, channel_id, exc)
        raise


def sync_active_channels(store: CollectionStore, context: InventoryContext) -> dict[str, SyncOutcome]:
    outcomes = {}
    for channel in store.list_channels(is_active=True):
        try:
            outcomes[channel.id] = sync_channel(store, context, channel.id)
        except InventoryError as exc:
            logger.warning(
                "Channel %s skipped: %s", channel.id, exc.message, extra={"channel_id": channel.id}
            )
    return outcomes


def push_stock(store: CollectionStore, context: InventoryContext, channel_id: str, product_id: str) -> PushOutcome:
    channel = store.get_channel(channel_id)
    if channel is None:
        raise NotFoundError("Channel not found")
    if not channel.is_active:
        raise InactiveChannelError("Channel is not active")
    if store.get_product(product_id) is None:
        raise NotFoundError("Product not found: {}".format(product_id))

    item = store.find_inventory_item(product_id, channel_id)
    quantity = item.quantity if item is not None else 0

    adapter = context.adapters.create(channel.type)
    if adapter is None:
        return PushOutcome(success=False, product_id=product_id, channel_id=channel_id, quantity=quantity)
    try:
        adapter.connect(ChannelCredentials.from_channel(channel))
        pushed = adapter.update_stock(product_id, quantity)
    finally:
        adapter.disconnect()
    logger.info(
        "Pushed quantity %s for %s to channel %s: %s",
        quantity,
        product_id,
        channel_id,
        "ok" if pushed else "failed",
        extra={"channel_id": channel_id, "product_id": product_id},
    )
    return PushOutcome(success=pushed, product_id=product_id, channel_id=channel_id, quantity=quantity)


__all__ = [
    "PushOutcome",
    "SyncItemError",
    "SyncOutcome",
    "push_stock",
    "summarize_errors",
    "sync_active_channels",
    "sync_channel",
]
