#!/usr/bin/env python3
"""
Create the products table in the configured database.

Uses DATABASE_URL (or database.url in config/catalog_config.yml, ENC(...)
values decrypted with CATALOG_SECRET_PASSPHRASE). Does NOT drop existing tables.
"""

from __future__ import annotations
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

# Make sure the repo root is on sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError

from catalog.database.models import Base
from catalog.database.store_real import build_engine
from catalog.utils.config_loader import load_catalog_config


def main() -> int:
    cfg = load_catalog_config()
    url = cfg.database.connection_url()
    if not url:
        print("DATABASE_URL is not set", file=sys.stderr)
        return 1

    try:
        engine = build_engine(url, pool_size=cfg.database.pool_size, max_overflow=cfg.database.max_overflow)

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")

        # Create all tables (only missing ones will be added)
        Base.metadata.create_all(bind=engine)
        tables = inspect(engine).get_table_names()
        print("App tables now exist:", sorted(tables))
        return 0

    except OperationalError as e:
        print(f"Failed to connect to database: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
