#!/usr/bin/env python3
"""
Check which products backend a host resolves to and whether it answers.

Prints the resolved mode/base URL, the health check result and the number
of products the catalog returns (from the API, or from the local backup when
the API is unavailable).

Usage:
  python scripts/check_backend.py --host localhost
  python scripts/check_backend.py --host shop.example.com
  PRODUCTS_API_URL=https://shop.example.com/api python scripts/check_backend.py
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from eyewear_catalog.database.redis_real import RedisKeyValueStore
from eyewear_catalog.integrations.policy.catalog_service import SOURCE_API, CatalogService
from eyewear_catalog.utils.config_loader import load_catalog_config


async def run(host: str) -> int:
    config = load_catalog_config()
    service = CatalogService.from_config(config, hostname=host)

    print(f"Host: {host}")
    print(f"Mode: {service.endpoint.mode.value}")
    if service.endpoint.base_url:
        print(f"API base URL: {service.endpoint.base_url}")
    if isinstance(service.backup.store, RedisKeyValueStore):
        print(f"Backup store (Redis) reachable: {'yes' if service.backup.store.ping() else 'no'}")

    connected = await service.test_connection()
    print(f"API reachable: {'yes' if connected else 'no'}")

    products, source = await service.load_products()
    label = "API" if source == SOURCE_API else "local backup"
    print(f"Products: {len(products)} (from {label})")
    return 0 if source == SOURCE_API or not service.endpoint.is_remote else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Check the products backend for a host")
    parser.add_argument("--host", default="localhost", help="Host name the catalog is served on")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(run(args.host))


if __name__ == "__main__":
    sys.exit(main())
