import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.constants import CHANNEL_TYPES, ID_PREFIX_CHANNEL, SYNC_STATUS_IDLE
from app.core.dates import utc_now
from app.core.exceptions import DuplicateKeyError, NotFoundError, ValidationFailedError
from app.core.identifiers import new_id
from app.database.store import CollectionStore, normalize_key
from app.models.channel import SalesChannel
from app.services.context import InventoryContext

logger = logging.getLogger(__name__)

_CREDENTIAL_FIELDS = ("api_key", "api_secret", "store_url")
_UPDATABLE_FIELDS = ("name", "is_active") + _CREDENTIAL_FIELDS


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _missing_credentials(context: InventoryContext, channel_type: str, values: dict) -> list[str]:
    required = context.adapters.required_credentials(channel_type)
    return [name for name in required if not _clean(values.get(name))]


def list_channels(store: CollectionStore, *, is_active=None, channel_type=None) -> list[SalesChannel]:
    return store.list_channels(is_active=is_active, channel_type=channel_type)


def get_channel(store: CollectionStore, channel_id: str) -> SalesChannel:
    channel = store.get_channel(channel_id)
    if channel is None:
        raise NotFoundError("Channel not found")
    return channel


def create_channel(
    store: CollectionStore,
    context: InventoryContext,
    *,
    name: str,
    channel_type: str,
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    store_url: Optional[str] = None,
) -> SalesChannel:
    name = (name or "").strip()
    channel_type = (channel_type or "").strip().lower()
    if not name or not channel_type:
        raise ValidationFailedError("Name and type are required")
    if channel_type not in CHANNEL_TYPES:
        raise ValidationFailedError(
            "Invalid channel type: {}".format(channel_type),
            details={"allowed": list(CHANNEL_TYPES)},
        )

    credentials = {"api_key": api_key, "api_secret": api_secret, "store_url": store_url}
    missing = _missing_credentials(context, channel_type, credentials)
    if missing:
        raise ValidationFailedError(
            "Missing credentials for {}: {}".format(channel_type, ", ".join(missing)),
            details={"missing": missing},
        )
    if store.find_channel_by_name(name) is not None:
        raise DuplicateKeyError("Channel name already exists", details={"name": name})

    channel = SalesChannel(
        id=new_id(ID_PREFIX_CHANNEL),
        name=name,
        name_key=normalize_key(name),
        type=channel_type,
        api_key=_clean(api_key),
        api_secret=_clean(api_secret),
        store_url=_clean(store_url),
        is_active=True,
        sync_status=SYNC_STATUS_IDLE,
        created_at=utc_now(),
    )
    store.add(channel)
    try:
        store.commit()
    except IntegrityError:
        store.rollback()
        raise DuplicateKeyError("Channel name already exists", details={"name": name}) from None
    logger.info("Created %s channel %s", channel_type, channel.id, extra={"channel_id": channel.id})
    return channel


def update_channel(store: CollectionStore, context: InventoryContext, channel_id: str, changes: dict) -> SalesChannel:
    channel = get_channel(store, channel_id)
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationFailedError("Unknown fields: {}".format(", ".join(unknown)))

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise ValidationFailedError("name cannot be empty")
        if normalize_key(name) != channel.name_key:
            existing = store.find_channel_by_name(name)
            if existing is not None and existing.id != channel.id:
                raise DuplicateKeyError("Channel name already exists", details={"name": name})
        channel.name = name
        channel.name_key = normalize_key(name)

    merged = {field: getattr(channel, field) for field in _CREDENTIAL_FIELDS}
    merged.update({field: changes[field] for field in _CREDENTIAL_FIELDS if field in changes})
    missing = _missing_credentials(context, channel.type, merged)
    if missing:
        raise ValidationFailedError(
            "Missing credentials for {}: {}".format(channel.type, ", ".join(missing)),
            details={"missing": missing},
        )
    for field in _CREDENTIAL_FIELDS:
        if field in changes:
            setattr(channel, field, _clean(changes[field]))

    if "is_active" in changes:
        if not isinstance(changes["is_active"], bool):
            raise ValidationFailedError("isActive must be a boolean")
        channel.is_active = changes["is_active"]

    try:
        store.commit()
    except IntegrityError:
        store.rollback()
        raise DuplicateKeyError("Channel name already exists") from None
    return channel


def delete_channel(store: CollectionStore, channel_id: str) -> None:
    channel = get_channel(store, channel_id)
    try:
        removed = store.delete_inventory_for_channel(channel_id)
        store.delete(channel)
        store.commit()
    except SQLAlchemyError:
        store.rollback()
        raise
    logger.info(
        "Deleted channel %s with %s inventory records", channel_id, removed, extra={"channel_id": channel_id}
    )


__all__ = [
    "create_channel",
    "delete_channel",
    "get_channel",
    "list_channels",
    "update_channel",
]
