"""
Verb-dispatched CRUD over the products table.

Kept independent of FastAPI so it can be driven directly in tests; the
route in eyewear_catalog.api.main only translates requests and responses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from eyewear_catalog.database.postgres_real import ProductStore
from eyewear_catalog.error_handler import ErrorHandler, MethodNotAllowed

logger = logging.getLogger(__name__)


@dataclass
class HandlerResponse:
    status_code: int
    body: Dict[str, Any]


def _parse_id(raw: Any) -> Optional[int]:
    """Integer id, or None when the value cannot name any row."""
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


class ProductsHandler:
    def __init__(self, store: ProductStore, error_handler: Optional[ErrorHandler] = None) -> None:
        self.store = store
        self.errors = error_handler or ErrorHandler()

    def handle(self, method: str, query: Mapping[str, Any], body: Any = None) -> HandlerResponse:
        method = (method or "").upper()
        if method == "OPTIONS":
            return HandlerResponse(200, {})

        try:
            if method == "GET":
                return self._get(query)
            if method == "POST":
                return self._post(body)
            if method == "PUT":
                return self._put(query, body)
            if method == "DELETE":
                return self._delete(query)
            raise MethodNotAllowed(method)
        except MethodNotAllowed as exc:
            return HandlerResponse(405, self.errors.method_not_allowed(exc))
        except Exception as exc:
            return HandlerResponse(500, self.errors.internal_error(exc, {"method": method, "query": dict(query)}))

    # ------------------------------------------------------------------ #
    # Verbs
    # ------------------------------------------------------------------ #
    def _get(self, query: Mapping[str, Any]) -> HandlerResponse:
        self.store.ensure_schema()

        if query.get("id"):
            product_id = _parse_id(query["id"])
            product = self.store.get_product(product_id) if product_id is not None else None
            if product is None:
                return HandlerResponse(404, self.errors.not_found())
            return HandlerResponse(200, {"success": True, "data": product})

        search = query.get("search")
        if search:
            products = self.store.search_products(search)
            return HandlerResponse(200, {"success": True, "data": products, "count": len(products), "query": search})

        category = query.get("category")
        if category:
            products = self.store.products_by_category(category)
            return HandlerResponse(
                200, {"success": True, "data": products, "count": len(products), "category": category}
            )

        products = self.store.list_products()
        return HandlerResponse(
            200, {"success": True, "data": products, "count": len(products), "source": self.store.dialect_name}
        )

    def _post(self, body: Any) -> HandlerResponse:
        fields = _body_fields(body)
        self.store.ensure_schema()
        logger.info("Creating product: %s", fields.get("name"))
        product = self.store.create_product(fields)
        logger.info("Product created: id=%s", product["id"])
        return HandlerResponse(201, {"success": True, "data": product, "message": "Product created successfully"})

    def _put(self, query: Mapping[str, Any], body: Any) -> HandlerResponse:
        fields = _body_fields(body)
        product_id = _parse_id(query.get("id"))
        if product_id is None:
            return HandlerResponse(404, self.errors.not_found())

        self.store.ensure_schema()
        product = self.store.update_product(product_id, fields)
        if product is None:
            return HandlerResponse(404, self.errors.not_found())
        return HandlerResponse(200, {"success": True, "data": product, "message": "Product updated successfully"})

    def _delete(self, query: Mapping[str, Any]) -> HandlerResponse:
        raw_id = query.get("id")
        if not raw_id:
            logger.info("DELETE request without product ID")
            return HandlerResponse(400, self.errors.bad_request("Product ID is required"))

        product_id = _parse_id(raw_id)
        if product_id is None:
            return HandlerResponse(404, self.errors.not_found("Product not found"))

        self.store.ensure_schema()
        if self.store.get_product(product_id) is None:
            logger.info("Product not found for deletion: %s", product_id)
            return HandlerResponse(404, self.errors.not_found("Product not found"))

        deleted = self.store.delete_product(product_id)
        if deleted is None:
            # removed by a concurrent request between the check and the delete
            return HandlerResponse(404, self.errors.not_found("Product not found"))
        logger.info("Product deleted: id=%s", product_id)
        return HandlerResponse(200, {"success": True, "message": "Product deleted successfully", "data": deleted})


def _body_fields(body: Any) -> Dict[str, Any]:
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body
