#!/usr/bin/env python3
"""
Fill a Venture Connect SQLite database with sample data.

Creates the database (and applies migrations) if needed, then inserts
six sample users, two collaboration requests and a short conversation.
Nothing is inserted if the database already contains users.

Usage:
    python seed_db.py --db ./venture_connect.db
    python seed_db.py --db ./venture_connect.db --password "demo-pass"

All sample users share the same password (``password123`` unless
``--password`` is given).
"""

import argparse
import sys

from venture_connect_api.app.core.db import get_database_path
from venture_connect_api.app.core.logging_config import setup_logging
from venture_connect_api.app.core.seed import SAMPLE_PASSWORD, seed_store
from venture_connect_api.app.storage import SQLiteStore


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Seed the Venture Connect database with sample data.")
    ap.add_argument("--db", default=None, help="Path to SQLite DB file (defaults to DATABASE_URL)")
    ap.add_argument("--password", default=SAMPLE_PASSWORD, help="Password given to every sample user")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    if len(args.password) < 6:
        print("[!] Password must be at least 6 characters.", file=sys.stderr)
        return 1

    setup_logging(args.log_level)
    db_path = get_database_path(args.db)
    store = SQLiteStore(db_path)
    try:
        seeded = seed_store(store, password=args.password)
    finally:
        store.close()

    if seeded:
        print(f"[+] Sample data inserted into {db_path}")
    else:
        print(f"[=] {db_path} already has users; nothing inserted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
