from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from app.config import Settings
from app.integrations.amazon import AmazonAdapter
from app.integrations.base import AdapterOptions, ChannelAdapter, SyncResult, unique_ids
from app.integrations.ebay import EbayAdapter
from app.integrations.manual import ManualAdapter
from app.integrations.shopify import ShopifyAdapter
from app.integrations.woocommerce import WooCommerceAdapter

INTEGRATION_NOT_FOUND = "Integration not found"

DEFAULT_ADAPTERS: Mapping[str, type[ChannelAdapter]] = MappingProxyType(
    {
        adapter.channel_type: adapter
        for adapter in (ShopifyAdapter, WooCommerceAdapter, AmazonAdapter, EbayAdapter, ManualAdapter)
    }
)


class AdapterRegistry:
    """Channel type -> adapter class, fixed at construction.

    Every call to :meth:`create` hands out a fresh adapter so two channels of
    the same type never share connection state.
    """

    def __init__(self, adapters: Mapping[str, object], *, options: Optional[AdapterOptions] = None) -> None:
        self._adapters = MappingProxyType(dict(adapters))
        self._options = options or AdapterOptions()

    @property
    def channel_types(self) -> tuple[str, ...]:
        return tuple(self._adapters)

    def supports(self, channel_type: str) -> bool:
        return channel_type in self._adapters

    def required_credentials(self, channel_type: str) -> tuple[str, ...]:
        factory = self._adapters.get(channel_type)
        return tuple(getattr(factory, "required_credentials", ()))

    def create(self, channel_type: str) -> Optional[ChannelAdapter]:
        factory = self._adapters.get(channel_type)
        if factory is None:
            return None
        return factory(self._options)


def missing_integration_results(product_ids) -> list[SyncResult]:
    return [
        SyncResult(product_id=product_id, success=False, error=INTEGRATION_NOT_FOUND)
        for product_id in unique_ids(product_ids)
    ]


def build_default_registry(settings: Settings) -> AdapterRegistry:
    return AdapterRegistry(DEFAULT_ADAPTERS, options=AdapterOptions.from_settings(settings))


__all__ = [
    "AdapterRegistry",
    "DEFAULT_ADAPTERS",
    "INTEGRATION_NOT_FOUND",
    "build_default_registry",
    "missing_integration_results",
]
