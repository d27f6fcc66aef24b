import json
import os
import tempfile

from app.config import Settings
from app.database import create_schema, make_engine, make_session_factory
from app.database.store import CollectionStore
from app.integrations.base import ChannelAdapter
from app.integrations.registry import AdapterRegistry
from app.services.catalog_service import ProductDraft, create_product
from app.services.channel_service import create_channel
from app.services.context import InventoryContext


def make_settings(**overrides):
    values = {"DATABASE_URL": "sqlite://", "CHANNEL_RETRY_BACKOFF_SECONDS": 0.0}
    values.update(overrides)
    return Settings(**values)


class FakeAdapter(ChannelAdapter):
    """Answers from a dict: an int is a quantity, an exception is raised per item."""

    channel_type = "manual"
    display_name = "Fake"
    required_credentials = ()

    def __init__(self, responses=None, *, probe_error=None, calls=None):
        super().__init__()
        self.responses = responses if responses is not None else {}
        self.probe_error = probe_error
        self.calls = calls if calls is not None else []
        self.pushed = {}

    def _probe(self, credentials):
        self.calls.append("connect")
        if self.probe_error is not None:
            raise self.probe_error

    def _fetch_quantity(self, product_id):
        self.calls.append(product_id)
        value = self.responses[product_id]
        if isinstance(value, Exception):
            raise value
        return value

    def _push_quantity(self, product_id, quantity):
        self.pushed[product_id] = quantity


class FakeRegistry(AdapterRegistry):
    """Routes every channel type to the same scripted adapter factory."""

    def __init__(self, factory, *, missing_types=()):
        super().__init__({})
        self.factory = factory
        self.missing_types = set(missing_types)
        self.created = []

    def required_credentials(self, channel_type):
        return ()

    def supports(self, channel_type):
        return channel_type not in self.missing_types

    def create(self, channel_type):
        if channel_type in self.missing_types:
            return None
        adapter = self.factory()
        self.created.append(adapter)
        return adapter


class StoreHarness:
    """One SQLite database plus a session factory and a context over it."""

    def __init__(self, *, adapters=None, file_backed=False, **settings_overrides):
        self._tmpdir = None
        url = "sqlite://"
        if file_backed:
            self._tmpdir = tempfile.TemporaryDirectory()
            url = "sqlite:///{}".format(os.path.join(self._tmpdir.name, "inventory.db"))
        self.settings = make_settings(DATABASE_URL=url, **settings_overrides)
        self.engine = make_engine(url)
        create_schema(self.engine)
        self.session_factory = make_session_factory(self.engine)
        self.context = InventoryContext(
            settings=self.settings,
            adapters=adapters or FakeRegistry(FakeAdapter),
        )
        self.sessions = []

    def store(self):
        session = self.session_factory()
        self.sessions.append(session)
        return CollectionStore(session)

    def close(self):
        for session in self.sessions:
            session.close()
        self.context.close()
        self.engine.dispose()
        if self._tmpdir is not None:
            self._tmpdir.cleanup()


def add_product(store, context, sku="X1", **fields):
    values = {"name": "Widget", "category": "Tools", "reorder_point": 10, "reorder_quantity": 20}
    values.update(fields)
    return create_product(store, context, ProductDraft(sku=sku, **values))


def add_channel(store, context, name="Warehouse", channel_type="manual", **fields):
    return create_channel(store, context, name=name, channel_type=channel_type, **fields)


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self.status = status
        self._body = b"" if payload is None else json.dumps(payload).encode("utf-8")

    def getcode(self):
        return self.status

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        return False
