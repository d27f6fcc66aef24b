from urllib.parse import quote, urlencode

from app.integrations.base import ChannelAdapter
from app.integrations.http_client import validate_base_url


class AmazonAdapter(ChannelAdapter):
    """Selling-partner inventory summaries.

    ``api_key`` carries the access token, ``api_secret`` the seller id used
    for listing updates. ``store_url`` optionally overrides the regional
    endpoint.
    """

    channel_type = "amazon"
    display_name = "Amazon"
    required_credentials = ("api_key", "api_secret")

    def _base_url(self, credentials):
        return validate_base_url(credentials.store_url or self.options.amazon_api_url)

    def _headers(self, credentials):
        return {"x-amz-access-token": credentials.api_key}

    def _marketplace_params(self):
        marketplace_id = self.options.amazon_marketplace_id
        if not marketplace_id:
            return {}
        return {
            "granularityType": "Marketplace",
            "granularityId": marketplace_id,
            "marketplaceIds": marketplace_id,
        }

    def _probe(self, credentials):
        url = "{}/sellers/v1/marketplaceParticipations".format(self._base_url(credentials))
        self._request("GET", url, headers=self._headers(credentials))

    def _fetch_quantity(self, product_id):
        credentials = self._credentials
        params = dict(self._marketplace_params(), details="true", sellerSkus=product_id)
        url = "{}/fba/inventory/v1/summaries?{}".format(self._base_url(credentials), urlencode(params))
        data = self._request("GET", url, headers=self._headers(credentials))
        summaries = (data.get("payload") or {}).get("inventorySummaries") or []
        if not summaries:
            return 0
        details = summaries[0].get("inventoryDetails") or {}
        if "fulfillableQuantity" in details:
            return details.get("fulfillableQuantity")
        return summaries[0].get("totalQuantity")

    def _push_quantity(self, product_id, quantity):
        credentials = self._credentials
        path = "/listings/2021-08-01/items/{}/{}".format(
            quote(credentials.api_secret, safe=""), quote(product_id, safe="")
        )
        query = ""
        if self.options.amazon_marketplace_id:
            query = "?" + urlencode({"marketplaceIds": self.options.amazon_marketplace_id})
        payload = {
            "productType": "PRODUCT",
            "patches": [
                {
                    "op": "replace",
                    "path": "/attributes/fulfillment_availability",
                    "value": [{"fulfillment_channel_code": "DEFAULT", "quantity": quantity}],
                }
            ],
        }
        self._request(
            "PATCH",
            "{}{}{}".format(self._base_url(credentials), path, query),
            headers=self._headers(credentials),
            payload=payload,
        )
