"""
Local backup of the product catalog.

The backup is a single named slot in a key-value store holding the full
product list as JSON text. Two stores live here: an in-memory one for
development and tests, and a JSON-file one for a durable local copy. The
Redis-backed store is in `eyewear_catalog.database.redis_real`.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from eyewear_catalog.data.sample_products import SAMPLE_PRODUCTS
from eyewear_catalog.error_handler import PersistenceFailure
from eyewear_catalog.integrations.contracts.products import complete_product, complete_products

logger = logging.getLogger(__name__)

BACKUP_KEY = "eyewear_products_backup"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """All slots in one JSON object on disk; writes go through a temp file and a rename."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"Cannot read backup file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceFailure(f"Backup file {self.path} does not hold an object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except PersistenceFailure:
            logger.warning("Backup file %s unreadable; rewriting it", self.path)
            data = {}
        data[key] = value
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceFailure(f"Cannot write backup file {self.path}: {exc}") from exc


class LocalBackupStore:
    def __init__(
        self,
        store: KeyValueStore,
        key: str = BACKUP_KEY,
        samples: Sequence[Dict[str, Any]] = SAMPLE_PRODUCTS,
    ) -> None:
        self.store = store
        self.key = key
        self.samples = samples

    def seed(self) -> List[Dict[str, Any]]:
        return [complete_product({**product, "id": index + 1}) for index, product in enumerate(self.samples)]

    def load(self) -> List[Dict[str, Any]]:
        """Last persisted backup, or the numbered sample set when there is none (not persisted)."""
        try:
            raw = self.store.get(self.key)
        except PersistenceFailure as exc:
            logger.error("Error reading products backup: %s", exc)
            return self.seed()

        if not raw:
            return self.seed()

        try:
            products = json.loads(raw)
        except ValueError as exc:
            logger.error("Products backup is not valid JSON, using samples: %s", exc)
            return self.seed()
        if not isinstance(products, list):
            logger.error("Products backup is not a list, using samples")
            return self.seed()
        return products

    def save(self, products: Sequence[Dict[str, Any]]) -> bool:
        """Replace the backup. Failures are logged and reported as False, never raised."""
        try:
            payload = json.dumps(complete_products(products), default=str)
            self.store.set(self.key, payload)
        except (PersistenceFailure, TypeError, ValueError) as exc:
            logger.error("Error saving products backup: %s", exc)
            return False
        logger.debug("Saved %d products to backup slot %s", len(products), self.key)
        return True
