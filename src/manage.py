"""Storefront database management CLI.

Creates or drops the relational schema for the configured providers using the
setup_db/drop_db helpers. Memory providers are left alone.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from storefront.domain import storefront
from storefront.utils.db import drop_db, setup_db


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    storefront.init()
    if args.command == "setup-db":
        print("Creating storefront database schema...")
        setup_db(storefront)
        print("  schema ready.")
    elif args.command == "drop-db":
        print("Dropping storefront database schema...")
        drop_db(storefront)
        print("  schema dropped.")
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
