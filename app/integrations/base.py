from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from app.config import Settings
from app.integrations.http_client import ChannelRequestError, request_json

logger = logging.getLogger(__name__)

_FETCH_EXCEPTIONS = (ChannelRequestError, ValueError, KeyError, IndexError, TypeError, AttributeError)


@dataclass
class ChannelCredentials:
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    store_url: Optional[str] = None

    @classmethod
    def from_channel(cls, channel) -> "ChannelCredentials":
        return cls(
            api_key=channel.api_key,
            api_secret=channel.api_secret,
            store_url=channel.store_url,
        )


@dataclass
class SyncResult:
    product_id: str
    success: bool
    quantity: Optional[int] = None
    error: Optional[str] = None


@dataclass
class AdapterOptions:
    timeout_seconds: float = 15.0
    max_retries: int = 2
    backoff_seconds: float = 0.5
    shopify_api_version: str = "2024-01"
    amazon_api_url: str = "https://sellingpartnerapi-na.amazon.com"
    amazon_marketplace_id: Optional[str] = None
    ebay_api_url: str = "https://api.ebay.com"

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdapterOptions":
        return cls(
            timeout_seconds=settings.CHANNEL_REQUEST_TIMEOUT_SECONDS,
            max_retries=max(0, settings.CHANNEL_MAX_RETRIES),
            backoff_seconds=max(0.0, settings.CHANNEL_RETRY_BACKOFF_SECONDS),
            shopify_api_version=settings.SHOPIFY_API_VERSION,
            amazon_api_url=settings.AMAZON_API_URL,
            amazon_marketplace_id=settings.AMAZON_MARKETPLACE_ID,
            ebay_api_url=settings.EBAY_API_URL,
        )


def coerce_quantity(value: Any) -> int:
    """Channel payloads omit the field for untracked items; that reads as zero."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError("Invalid quantity: {!r}".format(value))
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("Invalid quantity: {!r}".format(value))
        value = int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            raise ValueError("Invalid quantity: {!r}".format(value)) from None
    elif not isinstance(value, int):
        raise ValueError("Invalid quantity: {!r}".format(value))
    return max(0, value)


def unique_ids(product_ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(product_ids))


class ChannelAdapter(ABC):
    channel_type: str = ""
    display_name: str = ""
    required_credentials: tuple[str, ...] = ("api_key",)

    def __init__(self, options: Optional[AdapterOptions] = None) -> None:
        self.options = options or AdapterOptions()
        self._credentials: Optional[ChannelCredentials] = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected and self._credentials is not None

    def missing_credentials(self, credentials: ChannelCredentials) -> list[str]:
        return [
            field
            for field in self.required_credentials
            if not (getattr(credentials, field, None) or "").strip()
        ]

    def connect(self, credentials: ChannelCredentials) -> bool:
        missing = self.missing_credentials(credentials)
        if missing:
            logger.warning(
                "%s connect rejected: missing %s", self.display_name, ", ".join(missing)
            )
            self.disconnect()
            return False
        try:
            self._probe(credentials)
        except (ChannelRequestError, ValueError) as exc:
            logger.warning("%s connect failed: %s", self.display_name, exc)
            self.disconnect()
            return False
        self._credentials = credentials
        self._connected = True
        return True

    def sync_inventory(self, product_ids: Iterable[str]) -> list[SyncResult]:
        ids = unique_ids(product_ids)
        if not self.connected:
            message = "Not connected to {}".format(self.display_name)
            return [SyncResult(product_id=pid, success=False, error=message) for pid in ids]

        results = []
        for product_id in ids:
            try:
                quantity = coerce_quantity(self._fetch_quantity(product_id))
            except _FETCH_EXCEPTIONS as exc:
                results.append(
                    SyncResult(product_id=product_id, success=False, error=str(exc) or "Unknown error")
                )
                continue
            results.append(SyncResult(product_id=product_id, success=True, quantity=quantity))
        return results

    def update_stock(self, product_id: str, quantity: int) -> bool:
        if not self.connected:
            return False
        try:
            self._push_quantity(product_id, max(0, int(quantity)))
        except (ChannelRequestError, ValueError) as exc:
            logger.warning(
                "%s stock update failed: %s", self.display_name, exc, extra={"product_id": product_id}
            )
            return False
        return True

    def disconnect(self) -> None:
        self._credentials = None
        self._connected = False

    def _request(self, method: str, url: str, *, headers=None, payload=None):
        return request_json(
            method,
            url,
            headers=headers,
            payload=payload,
            timeout=self.options.timeout_seconds,
            max_retries=self.options.max_retries,
            backoff_seconds=self.options.backoff_seconds,
        )

    @abstractmethod
    def _probe(self, credentials: ChannelCredentials) -> None:
        """One lightweight authenticated call; raises on failure."""

    @abstractmethod
    def _fetch_quantity(self, product_id: str) -> Any:
        ...

    @abstractmethod
    def _push_quantity(self, product_id: str, quantity: int) -> None:
        ...


__all__ = [
    "AdapterOptions",
    "ChannelAdapter",
    "ChannelCredentials",
    "SyncResult",
    "coerce_quantity",
    "unique_ids",
]
