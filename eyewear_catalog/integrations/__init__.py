"""
Integrations layer.
This package contains all code used by catalog callers to reach the products backend:
- Endpoint resolution (which backend, if any, a host talks to)
- The products API HTTP client
- The catalog service that falls back to the local backup

Key rule:
- Callers MUST NOT call the products API directly.
- They go through CatalogService (integrations/policy/catalog_service.py), which owns
  the fallback and backup-refresh rules.

Only leaf modules are re-exported here; the database layer imports the
contracts, so CatalogService is imported from its own module.
"""

from .contracts.products import (
    PRODUCT_FIELDS,
    ProductRecord,
    ProductStatus,
    complete_product,
)
from .policy.endpoint_resolver import Endpoint, EndpointMode, resolve_endpoint

__all__ = [
    # contracts
    "PRODUCT_FIELDS", "ProductRecord", "ProductStatus", "complete_product",
    # policy
    "Endpoint", "EndpointMode", "resolve_endpoint",
]
