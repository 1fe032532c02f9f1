"""
Idempotent schema provisioning for the products API.

Runs before every request: CREATE TABLE IF NOT EXISTS for products and
comments, then one add-column statement per column introduced after the
first products table shape. Every statement is safe to repeat and safe to
run from concurrent cold starts.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateTable

from eyewear_catalog.database.models import Comment, Product

logger = logging.getLogger(__name__)

# (column, DDL type clause); order does not matter.
ADDED_PRODUCT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("framecolor", "VARCHAR(100)"),
    ("style", "VARCHAR(100)"),
    ("rim", "VARCHAR(100)"),
    ("gender", "VARCHAR(50)"),
    ("type", "VARCHAR(100)"),
    ("featured", "BOOLEAN DEFAULT false"),
    ("bestseller", "BOOLEAN DEFAULT false"),
    ("sizes", "TEXT"),
    ("lenstypes", "TEXT"),
    ("discount", "DECIMAL(5,2)"),
    ("colorimages", "TEXT"),
)


class SchemaMigrator:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @property
    def supports_add_column_if_not_exists(self) -> bool:
        return self.engine.dialect.name == "postgresql"

    def ensure_schema(self) -> List[str]:
        """Create missing tables and columns. Returns the columns whose addition failed."""
        with self.engine.begin() as conn:
            conn.execute(CreateTable(Product.__table__, if_not_exists=True))
            conn.execute(CreateTable(Comment.__table__, if_not_exists=True))

        if self.supports_add_column_if_not_exists:
            pending = list(ADDED_PRODUCT_COLUMNS)
        else:
            existing = {c["name"] for c in inspect(self.engine).get_columns(Product.__tablename__)}
            pending = [(name, ddl) for name, ddl in ADDED_PRODUCT_COLUMNS if name not in existing]

        failed: List[str] = []
        for name, ddl in pending:
            if not self._add_column(name, ddl):
                failed.append(name)
        return failed

    def _add_column(self, name: str, ddl: str) -> bool:
        if_not_exists = "IF NOT EXISTS " if self.supports_add_column_if_not_exists else ""
        statement = text(f"ALTER TABLE {Product.__tablename__} ADD COLUMN {if_not_exists}{name} {ddl}")
        try:
            with self.engine.begin() as conn:
                conn.execute(statement)
        except SQLAlchemyError as exc:
            logger.warning("Note: column %s may already exist: %s", name, exc)
            return False
        logger.debug("Ensured column products.%s", name)
        return True
