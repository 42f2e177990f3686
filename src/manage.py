"""Talex storefront management CLI.

Creates and drops the database schemas of both bounded contexts and loads
the demo catalogue.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load demo data into an empty catalogue
"""

import argparse
import sys

DOMAIN_NAMES = ["catalogue", "ordering"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    all_domains = {"catalogue": catalogue, "ordering": ordering}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(names=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(names).items():
        print(f"Initializing {name} domain...")
        domain.init()
        providers = setup_db(domain)
        if providers:
            print(f"  {name} schema ready on {', '.join(providers)}.")
        else:
            print(f"  {name} uses in-memory storage, nothing to create.")

    print("Done.")


def drop_databases(names=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(names).items():
        print(f"Initializing {name} domain...")
        domain.init()
        providers = drop_db(domain)
        print(f"  {name} schema dropped ({', '.join(providers) or 'no SQL providers'}).")

    print("Done.")


def seed():
    from seed import seed_if_empty

    for domain in _domains().values():
        domain.init()

    if seed_if_empty():
        print("Demo data loaded.")
    else:
        print("Catalogue is not empty, nothing seeded.")


def main():
    parser = argparse.ArgumentParser(description="Talex storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to target (default: all)",
        )

    subparsers.add_parser("seed", help="Load demo products and a demo order")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
