from urllib.parse import quote

from app.integrations.base import ChannelAdapter
from app.integrations.http_client import validate_base_url


class EbayAdapter(ChannelAdapter):
    channel_type = "ebay"
    display_name = "eBay"
    required_credentials = ("api_key",)

    def _api_url(self, path):
        return "{}/sell/inventory/v1/{}".format(validate_base_url(self.options.ebay_api_url), path)

    def _headers(self, credentials):
        token = credentials.api_key
        if not token.lower().startswith("bearer "):
            token = "Bearer {}".format(token)
        return {"Authorization": token}

    def _probe(self, credentials):
        self._request("GET", self._api_url("inventory_item?limit=1"), headers=self._headers(credentials))

    def _fetch_quantity(self, product_id):
        url = self._api_url("inventory_item/{}".format(quote(product_id, safe="")))
        data = self._request("GET", url, headers=self._headers(self._credentials))
        availability = (data.get("availability") or {}).get("shipToLocationAvailability") or {}
        return availability.get("quantity")

    def _push_quantity(self, product_id, quantity):
        payload = {
            "requests": [
                {"sku": product_id, "shipToLocationAvailability": {"quantity": quantity}}
            ]
        }
        self._request(
            "POST",
            self._api_url("bulk_update_price_quantity"),
            headers=self._headers(self._credentials),
            payload=payload,
        )
