from __future__ import annotations

from dataclasses import dataclass, field

from app.config import Settings, get_settings
from app.core.locks import KeyedLocks
from app.integrations.registry import AdapterRegistry, build_default_registry


@dataclass
class InventoryContext:
    settings: Settings
    adapters: AdapterRegistry
    inventory_locks: KeyedLocks = field(default_factory=lambda: KeyedLocks("inventory"))
    channel_locks: KeyedLocks = field(default_factory=lambda: KeyedLocks("channel"))

    def close(self) -> None:
        self.inventory_locks.clear()
        self.channel_locks.clear()


def build_context(settings: Settings | None = None, *, adapters: AdapterRegistry | None = None) -> InventoryContext:
    settings = settings or get_settings()
    return InventoryContext(
        settings=settings,
        adapters=adapters or build_default_registry(settings),
    )


__all__ = ["InventoryContext", "build_context"]
