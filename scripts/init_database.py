#!/usr/bin/env python3
"""
Provision the products API schema (products + comments tables and every
added products column) in the database named by DATABASE_URL.

Safe to run repeatedly: nothing is dropped, existing tables and columns are
left untouched.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

# Make sure the package is importable when run from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from eyewear_catalog.database.postgres_real import create_store_engine
from eyewear_catalog.database.schema import SchemaMigrator
from eyewear_catalog.utils.config_loader import load_catalog_config


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    url = load_catalog_config().server.database_url
    if not url:
        print("DATABASE_URL is not set (env or config/catalog_config.yml)", file=sys.stderr)
        return 1

    try:
        engine = create_store_engine(url)

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")

        failed = SchemaMigrator(engine).ensure_schema()
        if failed:
            print(f"⚠️ Could not add columns: {', '.join(failed)}")

        inspector = inspect(engine)
        tables = inspector.get_table_names()
        columns = [c["name"] for c in inspector.get_columns("products")]
        print("✅ Tables:", sorted(tables))
        print("✅ products columns:", columns)
        return 0

    except OperationalError as exc:
        print(f"❌ Cannot reach the products database: {exc}", file=sys.stderr)
        return 2
    except SQLAlchemyError as exc:
        print(f"❌ Schema provisioning failed: {exc}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(main())
