"""
Relational product store for the products API.
Postgres in production (DATABASE_URL); any SQLAlchemy URL works, tests use SQLite.
Every statement goes through SQLAlchemy with bound parameters.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import create_engine, func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from eyewear_catalog.database.models import JSON_TEXT_COLUMNS, Product
from eyewear_catalog.database.schema import SchemaMigrator
from eyewear_catalog.integrations.contracts.products import WRITABLE_FIELDS, ProductStatus
from eyewear_catalog.utils.config_loader import normalize_connection_string

NUMERIC_COLUMNS = ("price", "original_price", "discount")
BOOLEAN_COLUMNS = ("featured", "bestseller")


def _with_psycopg_driver(connection_string: str) -> str:
    for prefix in ("postgres://", "postgresql://"):
        if connection_string.startswith(prefix):
            return "postgresql+psycopg://" + connection_string[len(prefix):]
    return connection_string


def create_store_engine(connection_string: str) -> Engine:
    connection_string = _with_psycopg_driver(normalize_connection_string(connection_string))
    if connection_string.startswith("sqlite"):
        return create_engine(connection_string, connect_args={"check_same_thread": False})
    return create_engine(connection_string, pool_pre_ping=True, pool_size=5, max_overflow=10)


class ProductStore:
    def __init__(self, connection_string: Optional[str] = None, engine: Optional[Engine] = None) -> None:
        if engine is None:
            if not connection_string:
                raise ValueError("DATABASE_URL is not configured.")
            engine = create_store_engine(connection_string)
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)
        self.migrator = SchemaMigrator(self.engine)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def ensure_schema(self) -> List[str]:
        return self.migrator.ensure_schema()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        s = self.SessionLocal()
        try:
            yield s
            s.commit()
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def get_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        with self._session() as s:
            p = s.get(Product, product_id)
            return p.to_dict() if p else None

    def list_products(self) -> List[Dict[str, Any]]:
        return self._newest_first(select(Product))

    def search_products(self, query: str) -> List[Dict[str, Any]]:
        stmt = select(Product).where(
            or_(
                Product.name.icontains(query, autoescape=True),
                Product.category.icontains(query, autoescape=True),
                Product.brand.icontains(query, autoescape=True),
            )
        )
        return self._newest_first(stmt)

    def products_by_category(self, category: str) -> List[Dict[str, Any]]:
        return self._newest_first(select(Product).where(Product.category.icontains(category, autoescape=True)))

    def _newest_first(self, stmt) -> List[Dict[str, Any]]:
        with self._session() as s:
            rows = s.execute(stmt.order_by(Product.created_at.desc(), Product.id.desc())).scalars().all()
            return [p.to_dict() for p in rows]

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def create_product(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        values = {name: _encode_value(name, fields[name]) for name in WRITABLE_FIELDS if name in fields}
        values.setdefault("status", ProductStatus.ACTIVE.value)
        values.setdefault("featured", False)
        values.setdefault("bestseller", False)
        with self._session() as s:
            p = Product(**values)
            s.add(p)
            s.flush()
            s.refresh(p)
            return p.to_dict()

    def update_product(self, product_id: int, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Full replace: every writable column not in `fields` is set to NULL."""
        with self._session() as s:
            p = s.get(Product, product_id)
            if p is None:
                return None
            for name in WRITABLE_FIELDS:
                setattr(p, name, _encode_value(name, fields.get(name)))
            p.updated_at = func.now()
            s.flush()
            s.refresh(p)
            return p.to_dict()

    def delete_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        with self._session() as s:
            p = s.get(Product, product_id)
            if p is None:
                return None
            snapshot = p.to_dict()
            s.delete(p)
            return snapshot


def _encode_value(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in JSON_TEXT_COLUMNS and isinstance(value, (list, dict)):
        return json.dumps(value)
    if name in NUMERIC_COLUMNS and isinstance(value, str):
        return float(value) if value.strip() else None
    if name in BOOLEAN_COLUMNS and isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    if name == "status":
        # raises ValueError for a status outside ProductStatus
        return ProductStatus(value).value
    return value
