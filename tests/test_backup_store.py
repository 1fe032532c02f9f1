import json

import pytest
import redis

from eyewear_catalog.data.sample_products import SAMPLE_PRODUCTS
from eyewear_catalog.database.backup_store import BACKUP_KEY, JsonFileKeyValueStore, LocalBackupStore
from eyewear_catalog.database.redis_real import RedisKeyValueStore
from eyewear_catalog.error_handler import PersistenceFailure
from eyewear_catalog.integrations.contracts.products import PRODUCT_FIELDS, complete_products


class BrokenStore:
    def get(self, key):
        raise PersistenceFailure("disk on fire")

    def set(self, key, value):
        raise PersistenceFailure("quota exceeded")


def test_empty_backup_seeds_numbered_samples_without_persisting(backup, kv):
    products = backup.load()

    assert [p["id"] for p in products] == list(range(1, len(SAMPLE_PRODUCTS) + 1))
    assert products[0]["name"] == SAMPLE_PRODUCTS[0]["name"]
    assert all(set(PRODUCT_FIELDS) <= set(p) for p in products)
    assert kv.get(BACKUP_KEY) is None


def test_save_then_load_round_trips_in_order(backup):
    products = complete_products([
        {"id": 9, "name": "Wayfarer", "price": 99.0},
        {"id": 2, "name": "Aviator", "price": 129.99},
        {"id": 5, "name": "Round", "price": 59.5},
    ])

    assert backup.save(products) is True
    assert backup.load() == products


def test_save_completes_partial_records(backup, kv):
    backup.save([{"id": 1, "name": "Partial"}])

    stored = json.loads(kv.get(BACKUP_KEY))
    assert set(stored[0]) == set(PRODUCT_FIELDS)
    assert stored[0]["brand"] is None
    assert stored[0]["name"] == "Partial"


def test_save_failure_is_swallowed():
    backup = LocalBackupStore(BrokenStore())
    assert backup.save([{"id": 1, "name": "X"}]) is False


def test_read_failure_falls_back_to_samples():
    products = LocalBackupStore(BrokenStore()).load()
    assert len(products) == len(SAMPLE_PRODUCTS)


def test_corrupt_backup_falls_back_to_samples(kv):
    kv.set(BACKUP_KEY, "{not json")
    assert len(LocalBackupStore(kv).load()) == len(SAMPLE_PRODUCTS)


def test_file_store_survives_new_instances(tmp_path):
    path = tmp_path / "backup" / "products.json"
    LocalBackupStore(JsonFileKeyValueStore(path)).save([{"id": 1, "name": "Kept"}])

    reloaded = LocalBackupStore(JsonFileKeyValueStore(path)).load()
    assert [p["name"] for p in reloaded] == ["Kept"]


def test_file_store_keeps_other_slots(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "kv.json")
    store.set("a", "1")
    store.set("b", "2")
    assert store.get("a") == "1"
    assert store.get("b") == "2"


def test_unreadable_file_raises_persistence_failure(tmp_path):
    path = tmp_path / "kv.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(PersistenceFailure):
        JsonFileKeyValueStore(path).get(BACKUP_KEY)


class FailingRedis:
    def get(self, key):
        raise redis.ConnectionError("down")

    def set(self, key, value):
        raise redis.ConnectionError("down")


def test_redis_errors_become_persistence_failures():
    store = RedisKeyValueStore("redis://localhost:6379/0")
    store._client = FailingRedis()

    with pytest.raises(PersistenceFailure):
        store.get(BACKUP_KEY)
    assert LocalBackupStore(store).save([{"id": 1}]) is False


class PingableRedis:
    def __init__(self, healthy):
        self.healthy = healthy

    def ping(self):
        if not self.healthy:
            raise redis.ConnectionError("down")
        return True


def test_redis_ping_reports_reachability():
    store = RedisKeyValueStore("redis://localhost:6379/0")

    store._client = PingableRedis(healthy=True)
    assert store.ping() is True

    store._client = PingableRedis(healthy=False)
    assert store.ping() is False


def test_save_validates_records_and_keeps_extra_keys(backup, kv):
    assert backup.save([{"id": "4", "name": "Sport Wrap", "status": "draft", "badge": "new"}]) is True

    stored = json.loads(kv.get(BACKUP_KEY))[0]
    assert stored["id"] == 4
    assert stored["status"] == "draft"
    assert stored["badge"] == "new"


def test_save_rejects_record_with_unknown_status(backup, kv):
    backup.save([{"id": 1, "name": "Kept"}])

    assert backup.save([{"id": 2, "name": "Odd", "status": "discontinued"}]) is False
    assert [p["name"] for p in backup.load()] == ["Kept"]


def test_saved_empty_catalog_loads_as_empty(backup):
    assert backup.save([]) is True
    assert backup.load() == []
