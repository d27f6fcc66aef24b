from app.integrations.base import AdapterOptions, ChannelAdapter, ChannelCredentials, SyncResult
from app.integrations.http_client import ChannelRequestError
from app.integrations.registry import AdapterRegistry, build_default_registry

__all__ = [
    "AdapterOptions",
    "AdapterRegistry",
    "ChannelAdapter",
    "ChannelCredentials",
    "ChannelRequestError",
    "SyncResult",
    "build_default_registry",
]
