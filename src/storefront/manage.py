"""Storefront database management CLI.

Usage:
    storefront-manage setup-db   # Create all tables
    storefront-manage drop-db    # Drop all tables
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_databases():
    """Create the database schema for the storefront domain."""
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_databases():
    """Drop the database schema for the storefront domain."""
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
