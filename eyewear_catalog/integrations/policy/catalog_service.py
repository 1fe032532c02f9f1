"""
Catalog Service

Read/write access to the eyewear catalog for UI callers. Reads degrade to
the local backup whenever the products API cannot answer; writes never do,
since a write that only lands locally would be invisible to every other
client. After each successful write the full remote list is re-fetched to
refresh the backup (one extra list request per write).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from eyewear_catalog.database.backup_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    LocalBackupStore,
)
from eyewear_catalog.error_handler import CatalogApiError, NotFound, ProductOperationError
from eyewear_catalog.integrations.clients.real_http.products_api import Expect, ProductsApiClient
from eyewear_catalog.integrations.contracts.products import matches_text, product_id_matches
from eyewear_catalog.integrations.policy.endpoint_resolver import Endpoint, resolve_endpoint
from eyewear_catalog.utils.config_loader import CatalogConfig

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/products"
SEARCH_FIELDS = ("name", "category", "brand")

SOURCE_API = "api"
SOURCE_BACKUP = "backup"


def build_key_value_store(config: CatalogConfig) -> KeyValueStore:
    if config.backup.redis_url:
        from eyewear_catalog.database.redis_real import RedisKeyValueStore

        return RedisKeyValueStore(url=config.backup.redis_url)
    if config.backup.path:
        return JsonFileKeyValueStore(config.backup.path)
    return InMemoryKeyValueStore()


class CatalogService:
    def __init__(
        self,
        endpoint: Endpoint,
        backup: LocalBackupStore,
        api_client: Optional[ProductsApiClient] = None,
    ) -> None:
        self.endpoint = endpoint
        self.backup = backup
        self.api = api_client or ProductsApiClient(endpoint)

    @classmethod
    def from_config(
        cls,
        config: CatalogConfig,
        hostname: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "CatalogService":
        endpoint = resolve_endpoint(
            hostname,
            config.client.products_api_url,
            default_port=config.client.default_port,
            api_path=config.client.api_path,
        )
        logger.info("Catalog endpoint for host %r: %s %s", hostname, endpoint.mode.value, endpoint.base_url or "")
        backup = LocalBackupStore(build_key_value_store(config), key=config.backup.key)
        return cls(endpoint, backup, ProductsApiClient(endpoint, transport=transport))

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    async def test_connection(self) -> bool:
        return await self.api.check_health()

    async def get_all_products(self) -> List[Dict[str, Any]]:
        products, _ = await self.load_products()
        return products

    async def load_products(self) -> Tuple[List[Dict[str, Any]], str]:
        """Full catalog plus where it came from: SOURCE_API or SOURCE_BACKUP."""
        if not self.endpoint.is_remote:
            products = self.backup.load()
            logger.info("Local-only mode: loaded %d products from backup", len(products))
            return products, SOURCE_BACKUP

        try:
            products = await self.api.execute(PRODUCTS_PATH, expect=Expect.COLLECTION)
        except CatalogApiError as exc:
            logger.warning("Products API failed, using local backup: %s", exc)
            return self.backup.load(), SOURCE_BACKUP

        self.backup.save(products)
        return products, SOURCE_API

    async def get_product_by_id(self, product_id: Any) -> Dict[str, Any]:
        try:
            return await self.api.execute(PRODUCTS_PATH, params={"id": product_id}, expect=Expect.ITEM)
        except CatalogApiError as exc:
            logger.warning("Products API failed for product %s, using local backup: %s", product_id, exc)

        for product in self.backup.load():
            if product_id_matches(product, product_id):
                return product
        raise NotFound(product_id)

    async def search_products(self, query: str) -> List[Dict[str, Any]]:
        try:
            return await self.api.execute(PRODUCTS_PATH, params={"search": query}, expect=Expect.COLLECTION)
        except CatalogApiError as exc:
            logger.warning("Products API search failed, filtering local backup: %s", exc)
        return [p for p in self.backup.load() if matches_text(p, query, SEARCH_FIELDS)]

    async def get_products_by_category(self, category: str) -> List[Dict[str, Any]]:
        try:
            return await self.api.execute(PRODUCTS_PATH, params={"category": category}, expect=Expect.COLLECTION)
        except CatalogApiError as exc:
            logger.warning("Products API category lookup failed, filtering local backup: %s", exc)
        return [p for p in self.backup.load() if matches_text(p, category, ("category",))]

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    async def create_product(self, product_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            created = await self.api.execute(PRODUCTS_PATH, "POST", product_data)
        except Exception as exc:
            logger.error("Error creating product: %s", exc)
            raise ProductOperationError("create", exc) from exc
        await self._refresh_backup("creating")
        return created

    async def update_product(self, product_id: Any, product_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            updated = await self.api.execute(PRODUCTS_PATH, "PUT", product_data, params={"id": product_id})
        except Exception as exc:
            logger.error("Error updating product %s: %s", product_id, exc)
            raise ProductOperationError("update", exc) from exc
        await self._refresh_backup("updating")
        return updated

    async def delete_product(self, product_id: Any) -> Dict[str, Any]:
        try:
            deleted = await self.api.execute(PRODUCTS_PATH, "DELETE", params={"id": product_id})
        except Exception as exc:
            logger.error("Error deleting product %s: %s", product_id, exc)
            raise ProductOperationError("delete", exc) from exc
        await self._refresh_backup("deleting")
        return deleted

    async def _refresh_backup(self, action: str) -> None:
        # TODO: merge the single changed record into the backup instead of re-fetching the whole list
        try:
            products = await self.api.execute(PRODUCTS_PATH, expect=Expect.COLLECTION)
        except CatalogApiError as exc:
            logger.warning("Failed to update backup after %s product: %s", action, exc)
            return
        self.backup.save(products)
