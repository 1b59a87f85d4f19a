import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class StorefrontClient:
    """Async client for the catalog API, used by storefront tooling and scripts.

    Read helpers never raise on network or HTTP errors: they log and return
    an empty result, so a storefront can keep rendering while the API is down.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001/api",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.is_server_connected = False

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            resp = await client.request(method, endpoint, **kwargs)
            resp.raise_for_status()
            return resp.json()

    async def check_health(self) -> bool:
        try:
            await self._request("GET", "/health")
        except httpx.HTTPError as e:
            logger.error("Catalog API not available: %s", e)
            self.is_server_connected = False
            return False
        self.is_server_connected = True
        return True

    async def get_products(self, **filters: Any) -> list[dict]:
        params = {}
        for key, value in filters.items():
            if value is None or value == "":
                continue
            params[key] = str(value).lower() if isinstance(value, bool) else value
        try:
            return await self._request("GET", "/products", params=params)
        except httpx.HTTPError as e:
            logger.error("Error getting products: %s", e)
            return []

    async def get_sections(self, active: bool | None = True) -> list[dict]:
        params = {} if active is None else {"active": str(active).lower()}
        try:
            return await self._request("GET", "/sections", params=params)
        except httpx.HTTPError as e:
            logger.error("Error getting sections: %s", e)
            return []

    async def get_product_by_id(self, product_id: int) -> dict | None:
        try:
            return await self._request("GET", f"/products/{product_id}")
        except httpx.HTTPError as e:
            logger.error("Error getting product %s: %s", product_id, e)
            return None

    async def get_product_by_sku(self, sku: str) -> dict | None:
        try:
            return await self._request("GET", f"/products/sku/{sku}")
        except httpx.HTTPError as e:
            logger.error("Error getting product by SKU %s: %s", sku, e)
            return None

    async def get_featured_products(self, limit: int = 8) -> list[dict]:
        return await self.get_products(featured=True, active=True, limit=limit)

    async def get_products_by_category(self, category: str, limit: int | None = None) -> list[dict]:
        return await self.get_products(category=category, active=True, limit=limit)

    async def get_products_by_section(self, section: str, limit: int | None = None) -> list[dict]:
        return await self.get_products(section=section, active=True, limit=limit)

    async def search_products(self, query: str) -> list[dict]:
        return await self.get_products(search=query, active=True)
