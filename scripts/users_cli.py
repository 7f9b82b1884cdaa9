#!/usr/bin/env python
"""CLI for the Users API.

Usage:
    python scripts/users_cli.py list
    python scripts/users_cli.py get 7
    python scripts/users_cli.py create --name Ada --age 36 --salary 5000 --mobile-number 5550100
    python scripts/users_cli.py update 7 --name Ada --age 37 --salary 5200 --mobile-number 5550100
    python scripts/users_cli.py patch 7 --salary 6000
    python scripts/users_cli.py delete 7 --yes

Exit status is 0 on success, 1 on validation errors and 2 on transport errors.
"""
import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path so 'usermgmt' imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from usermgmt.api_client import UserApiClient
from usermgmt.config import get_settings
from usermgmt.models.draft import UserDraft
from usermgmt.results import Success, ValidationFailure
from usermgmt.utils.logger import setup_logging

# CLI option dest -> wire field
FIELD_OPTIONS = {
    "name": "name",
    "age": "age",
    "salary": "salary",
    "mobile_number": "mobileNumber",
}


def _add_field_options(parser, required):
    parser.add_argument("--name", required=required, help="User name")
    parser.add_argument("--age", type=int, required=required, help="Age in years")
    parser.add_argument("--salary", type=float, required=required, help="Salary")
    parser.add_argument("--mobile-number", required=required, help="Mobile number")


def build_parser():
    parser = argparse.ArgumentParser(description="Manage users through the Users API")
    parser.add_argument("--base-url", default=None, help="API root (default: USERMGMT_API_BASE)")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP traffic")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all users")

    get = sub.add_parser("get", help="Show one user")
    get.add_argument("id", type=int)

    create = sub.add_parser("create", help="Create a user")
    _add_field_options(create, required=True)

    update = sub.add_parser("update", help="Replace a user")
    update.add_argument("id", type=int)
    _add_field_options(update, required=True)

    patch = sub.add_parser("patch", help="Update some fields of a user")
    patch.add_argument("id", type=int)
    _add_field_options(patch, required=False)

    delete = sub.add_parser("delete", help="Delete a user")
    delete.add_argument("id", type=int)
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    return parser


def _draft_from_args(args):
    draft = UserDraft()
    for dest, field in FIELD_OPTIONS.items():
        draft = draft.with_field(field, getattr(args, dest))
    return draft


def _print_value(value):
    if value is None:
        print("OK")
    elif isinstance(value, list):
        print(json.dumps([user.to_payload() for user in value], indent=2))
    else:
        print(json.dumps(value.to_payload(), indent=2))


def run(args, client):
    if args.command == "list":
        result = client.list_all()
    elif args.command == "get":
        result = client.get(args.id)
    elif args.command == "create":
        result = client.create(_draft_from_args(args))
    elif args.command == "update":
        result = client.replace(args.id, _draft_from_args(args))
    elif args.command == "patch":
        partial = {
            field: getattr(args, dest)
            for dest, field in FIELD_OPTIONS.items()
            if getattr(args, dest) is not None
        }
        if not partial:
            print("Nothing to update", file=sys.stderr)
            return 1
        result = client.patch(args.id, partial)
    elif args.command == "delete":
        if not args.yes:
            answer = input(f"Delete user {args.id}? [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                print("Cancelled")
                return 0
        result = client.remove(args.id)
    else:
        raise ValueError(f"Unknown command: {args.command}")

    if isinstance(result, Success):
        _print_value(result.value)
        return 0
    if isinstance(result, ValidationFailure):
        for field, message in result.errors.items():
            print(f"{field}: {message}", file=sys.stderr)
        return 1
    print(f"Error: {result.detail}", file=sys.stderr)
    return 2


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)
    client = UserApiClient(base_url=args.base_url)
    return run(args, client)


if __name__ == "__main__":
    sys.exit(main())
