from app.integrations.base import ChannelAdapter, ChannelCredentials, SyncResult, unique_ids


class ManualAdapter(ChannelAdapter):
    """Internal stock location with no remote system behind it."""

    channel_type = "manual"
    display_name = "Manual"
    required_credentials = ()

    def __init__(self, options=None):
        super().__init__(options)
        self._credentials = ChannelCredentials()
        self._connected = True

    def connect(self, credentials):
        self._credentials = credentials or ChannelCredentials()
        self._connected = True
        return True

    def sync_inventory(self, product_ids):
        return [
            SyncResult(product_id=product_id, success=True, quantity=0)
            for product_id in unique_ids(product_ids)
        ]

    def update_stock(self, product_id, quantity):
        return True

    def _probe(self, credentials):
        return None

    def _fetch_quantity(self, product_id):
        return 0

    def _push_quantity(self, product_id, quantity):
        return None
