#!/usr/bin/env python3
"""
Access code management from the command line

Lets operators inspect and manage access codes without the dashboard, e.g.
to hand out the first registration code on a fresh deployment.

Usage:
    python scripts/manage_access_codes.py list
    python scripts/manage_access_codes.py create WELCOME1 --max-uses 2 --description "Spring hires"
    python scripts/manage_access_codes.py deactivate WELCOME1
    python scripts/manage_access_codes.py delete WELCOME1
"""

import sys
import argparse
from pathlib import Path

# Add the project root to the Python path
sys.path.append(str(Path(__file__).parent.parent))

from gallery_api import create_app
from gallery_api.services.access_code_store import AccessCodeStore, AccessCodeError
from config import Config


# ANSI color codes for console output
class Colors:
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'


def print_code(access_code):
    if access_code.can_be_used():
        status = f"{Colors.GREEN}usable{Colors.END}"
    else:
        status = f"{Colors.YELLOW}unusable{Colors.END}"
    print(
        f"{Colors.BOLD}{access_code.code:<20}{Colors.END} "
        f"{access_code.current_uses}/{access_code.max_uses} uses  {status}  {access_code.description}"
    )


def find_or_exit(store, code):
    lookup = store.lookup(code)
    if lookup.record is None:
        print(f"{Colors.RED}[ERROR]{Colors.END} Access code {code} not found")
        sys.exit(1)
    return lookup.record


def run(args, store):
    if args.command == 'list':
        access_codes = store.list_codes()
        if not access_codes:
            print("No access codes")
        for access_code in access_codes:
            print_code(access_code)

    elif args.command == 'create':
        access_code = store.create_code(
            args.code,
            description=args.description,
            max_uses=args.max_uses,
            is_active=not args.inactive
        )
        print(f"{Colors.GREEN}[SUCCESS]{Colors.END} Created access code")
        print_code(access_code)

    elif args.command == 'deactivate':
        access_code = find_or_exit(store, args.code)
        access_code = store.update_code(access_code.id, {'is_active': False})
        print(f"{Colors.GREEN}[SUCCESS]{Colors.END} Deactivated access code")
        print_code(access_code)

    elif args.command == 'delete':
        access_code = find_or_exit(store, args.code)
        snapshot = store.delete_code(access_code.id)
        print(f"{Colors.GREEN}[SUCCESS]{Colors.END} Deleted access code {snapshot['code']}")


def main():
    """Main function with command line argument parsing"""
    parser = argparse.ArgumentParser(description="Manage admin registration access codes")
    parser.add_argument(
        "--database-url",
        default=Config.SQLALCHEMY_DATABASE_URI,
        help="Database URL (default: from config)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List access codes, newest first")

    create_parser = subparsers.add_parser("create", help="Create an access code")
    create_parser.add_argument("code")
    create_parser.add_argument("--description", default="")
    create_parser.add_argument("--max-uses", type=int, default=1)
    create_parser.add_argument("--inactive", action="store_true", help="Create the code disabled")

    deactivate_parser = subparsers.add_parser("deactivate", help="Disable an access code")
    deactivate_parser.add_argument("code")

    delete_parser = subparsers.add_parser("delete", help="Delete an access code")
    delete_parser.add_argument("code")

    args = parser.parse_args()

    app = create_app(config_overrides={'SQLALCHEMY_DATABASE_URI': args.database_url})
    with app.app_context():
        try:
            run(args, AccessCodeStore())
        except AccessCodeError as e:
            print(f"{Colors.RED}[ERROR]{Colors.END} {e.message}")
            sys.exit(1)


if __name__ == "__main__":
    main()
