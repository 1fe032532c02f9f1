from sqlalchemy import create_engine, inspect, text

from eyewear_catalog.database.schema import ADDED_PRODUCT_COLUMNS, SchemaMigrator
from eyewear_catalog.database.postgres_real import ProductStore, create_store_engine

LEGACY_PRODUCTS_DDL = """
CREATE TABLE products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name VARCHAR(255) NOT NULL,
    price DECIMAL(10,2) NOT NULL,
    original_price DECIMAL(10,2),
    category VARCHAR(100),
    brand VARCHAR(100),
    material VARCHAR(100),
    shape VARCHAR(100),
    color VARCHAR(100),
    size VARCHAR(50),
    image TEXT,
    gallery TEXT,
    description TEXT,
    features TEXT,
    specifications TEXT,
    status VARCHAR(50) DEFAULT 'active',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


def test_creates_both_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'fresh.db'}")

    assert SchemaMigrator(engine).ensure_schema() == []

    inspector = inspect(engine)
    assert {"products", "comments"} <= set(inspector.get_table_names())
    columns = {c["name"] for c in inspector.get_columns("products")}
    assert {name for name, _ in ADDED_PRODUCT_COLUMNS} <= columns


def test_running_twice_keeps_data(store):
    created = store.create_product({"name": "Aviator Classic", "price": 129.99})

    assert store.ensure_schema() == []
    assert store.ensure_schema() == []

    assert [p["id"] for p in store.list_products()] == [created["id"]]


def test_upgrades_legacy_table_without_losing_rows(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with engine.begin() as conn:
        conn.execute(text(LEGACY_PRODUCTS_DDL))
        conn.execute(text("INSERT INTO products (name, price) VALUES (:name, :price)"), {"name": "Old Frame", "price": 20})

    assert SchemaMigrator(engine).ensure_schema() == []

    store = ProductStore(engine=engine)
    [old] = store.list_products()
    assert old["name"] == "Old Frame"
    assert old["featured"] is False
    assert old["framecolor"] is None


def test_failed_column_additions_are_isolated(tmp_path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'isolated.db'}")
    migrator = SchemaMigrator(engine)
    migrator.ensure_schema()

    # SQLite rejects ADD COLUMN IF NOT EXISTS, so every addition fails on its own.
    monkeypatch.setattr(SchemaMigrator, "supports_add_column_if_not_exists", property(lambda self: True))
    failed = migrator.ensure_schema()

    assert failed == [name for name, _ in ADDED_PRODUCT_COLUMNS]
    assert "comments" in inspect(engine).get_table_names()


def test_postgres_urls_use_psycopg_driver():
    engine = create_store_engine("'postgres://user:pw@db.example.com/catalog'")
    assert engine.dialect.name == "postgresql"
    assert engine.dialect.driver == "psycopg"
