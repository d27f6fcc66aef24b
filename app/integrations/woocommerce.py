import base64
from urllib.parse import quote

from app.integrations.base import ChannelAdapter, ChannelCredentials
from app.integrations.http_client import validate_base_url


def _basic_auth(credentials: ChannelCredentials) -> str:
    token = "{}:{}".format(credentials.api_key, credentials.api_secret).encode("utf-8")
    return "Basic {}".format(base64.b64encode(token).decode("ascii"))


class WooCommerceAdapter(ChannelAdapter):
    channel_type = "woocommerce"
    display_name = "WooCommerce"
    required_credentials = ("api_key", "api_secret", "store_url")

    def _api_url(self, store_url, path):
        return "{}/wp-json/wc/v3/{}".format(validate_base_url(store_url), path)

    def _headers(self, credentials):
        return {"Authorization": _basic_auth(credentials)}

    def _probe(self, credentials):
        self._request("GET", self._api_url(credentials.store_url, "system_status"), headers=self._headers(credentials))

    def _fetch_quantity(self, product_id):
        credentials = self._credentials
        url = self._api_url(credentials.store_url, "products/{}".format(quote(product_id, safe="")))
        data = self._request("GET", url, headers=self._headers(credentials))
        return data.get("stock_quantity")

    def _push_quantity(self, product_id, quantity):
        credentials = self._credentials
        url = self._api_url(credentials.store_url, "products/{}".format(quote(product_id, safe="")))
        self._request(
            "PUT",
            url,
            headers=self._headers(credentials),
            payload={"stock_quantity": quantity, "manage_stock": True},
        )
