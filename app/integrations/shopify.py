from urllib.parse import quote

from app.integrations.base import ChannelAdapter, ChannelCredentials
from app.integrations.http_client import validate_base_url


class ShopifyAdapter(ChannelAdapter):
    channel_type = "shopify"
    display_name = "Shopify"
    required_credentials = ("api_key", "api_secret", "store_url")

    def _admin_url(self, store_url, path):
        base = validate_base_url(store_url)
        return "{}/admin/api/{}/{}".format(base, self.options.shopify_api_version, path)

    def _headers(self, credentials: ChannelCredentials):
        return {"X-Shopify-Access-Token": credentials.api_key}

    def _probe(self, credentials):
        self._request("GET", self._admin_url(credentials.store_url, "shop.json"), headers=self._headers(credentials))

    def _fetch_quantity(self, product_id):
        credentials = self._credentials
        url = self._admin_url(
            credentials.store_url,
            "inventory_levels.json?inventory_item_ids={}".format(quote(product_id, safe="")),
        )
        data = self._request("GET", url, headers=self._headers(credentials))
        levels = data.get("inventory_levels") or []
        if not levels:
            return 0
        return levels[0].get("available")

    def _push_quantity(self, product_id, quantity):
        credentials = self._credentials
        self._request(
            "POST",
            self._admin_url(credentials.store_url, "inventory_levels/set.json"),
            headers=self._headers(credentials),
            payload={"inventory_item_id": product_id, "available": quantity},
        )
