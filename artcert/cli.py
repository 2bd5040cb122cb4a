#!/usr/bin/env python3
"""
artcert CLI

Command-line access to a certificate registry kept in a world state file:
  artcert init      - Seed the example certificates
  artcert create    - Issue a certificate
  artcert read      - Show a certificate
  artcert update    - Replace a certificate's fields
  artcert delete    - Remove a certificate
  artcert transfer  - Change a certificate's owner
  artcert exists    - Check whether a certificate exists
  artcert list      - Show every certificate
  artcert invoke    - Run a raw ledger invocation

Usage:
  artcert [--state-file <path>] init [--seeds <yaml>]
  artcert create <id> --photo <uri> --title <title> --owner <owner> --year <year>
                 --artist-id <id> --artist-name <name> --artist-dob <DD.MM.YYYY>
  artcert transfer <id> <new-owner>
  artcert invoke '{"function": "ReadAsset", "Args": ["<id>"]}'
"""

import argparse
import json
import logging
import sys
from typing import Any

from .certificate import Artist
from .dispatcher import Dispatcher
from .errors import RegistryError, WorldStateError
from .registry import AssetRegistry, load_seeds
from .worldstate import FileWorldState

DEFAULT_STATE_FILE = "./worldstate.json"


def _print_json(data: Any):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _artist_from_args(args) -> Artist:
    return Artist(
        id=args.artist_id,
        name=args.artist_name,
        date_of_birth=args.artist_dob,
    )


def cmd_init(args, registry: AssetRegistry, state: FileWorldState):
    """Seed the example certificates."""
    if args.seeds:
        registry = AssetRegistry(seeds=load_seeds(args.seeds))
    seeded = registry.initialize(state)
    print(f"Seeded {len(seeded)} certificates into {state.path}")


def cmd_create(args, registry: AssetRegistry, state: FileWorldState):
    cert = registry.create(
        state, args.id, args.photo, args.title,
        _artist_from_args(args), args.owner, args.year,
    )
    _print_json(cert.to_dict())


def cmd_read(args, registry: AssetRegistry, state: FileWorldState):
    _print_json(registry.read(state, args.id).to_dict())


def cmd_update(args, registry: AssetRegistry, state: FileWorldState):
    cert = registry.update(
        state, args.id, args.photo, args.title,
        _artist_from_args(args), args.owner, args.year,
    )
    _print_json(cert.to_dict())


def cmd_delete(args, registry: AssetRegistry, state: FileWorldState):
    registry.delete(state, args.id)
    print(f"Deleted {args.id}")


def cmd_transfer(args, registry: AssetRegistry, state: FileWorldState):
    cert = registry.transfer(state, args.id, args.new_owner)
    _print_json(cert.to_dict())


def cmd_exists(args, registry: AssetRegistry, state: FileWorldState):
    _print_json(registry.exists(state, args.id))


def cmd_list(args, registry: AssetRegistry, state: FileWorldState):
    _print_json([cert.to_dict() for cert in registry.list_all(state)])


def cmd_invoke(args, registry: AssetRegistry, state: FileWorldState):
    """Run a ledger function given as {"function": ..., "Args": [...]}."""
    try:
        ctor = json.loads(args.ctor)
        function = ctor["function"]
        call_args = [a if isinstance(a, str) else json.dumps(a) for a in ctor.get("Args", [])]
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ValueError(f"Invalid invocation {args.ctor!r}: {e}") from e

    response = Dispatcher(registry).invoke(state, function, call_args)
    _print_json(response.to_dict())
    if not response.ok:
        sys.exit(1)


COMMANDS = {
    "init": cmd_init,
    "create": cmd_create,
    "read": cmd_read,
    "update": cmd_update,
    "delete": cmd_delete,
    "transfer": cmd_transfer,
    "exists": cmd_exists,
    "list": cmd_list,
    "invoke": cmd_invoke,
}


def _add_certificate_fields(parser: argparse.ArgumentParser):
    parser.add_argument("id", help="Certificate id")
    parser.add_argument("--photo", required=True, help="Photo URI")
    parser.add_argument("--title", required=True, help="Title of the work")
    parser.add_argument("--owner", required=True, help="Owner")
    parser.add_argument("--year", type=int, required=True, help="Year of production")
    parser.add_argument("--artist-id", required=True, help="Artist id")
    parser.add_argument("--artist-name", required=True, help="Artist name")
    parser.add_argument("--artist-dob", required=True, help="Artist date of birth (DD.MM.YYYY)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artcert",
        description="artcert - Art certificate registry",
    )
    parser.add_argument("--state-file", default=DEFAULT_STATE_FILE,
                        help=f"World state file (default: {DEFAULT_STATE_FILE})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    init_parser = subparsers.add_parser("init", help="Seed the example certificates")
    init_parser.add_argument("--seeds", help="Seed YAML file (default: bundled seeds)")

    create_parser = subparsers.add_parser("create", help="Issue a certificate")
    _add_certificate_fields(create_parser)

    read_parser = subparsers.add_parser("read", help="Show a certificate")
    read_parser.add_argument("id", help="Certificate id")

    update_parser = subparsers.add_parser("update", help="Replace a certificate's fields")
    _add_certificate_fields(update_parser)

    delete_parser = subparsers.add_parser("delete", help="Remove a certificate")
    delete_parser.add_argument("id", help="Certificate id")

    transfer_parser = subparsers.add_parser("transfer", help="Change a certificate's owner")
    transfer_parser.add_argument("id", help="Certificate id")
    transfer_parser.add_argument("new_owner", help="New owner")

    exists_parser = subparsers.add_parser("exists", help="Check whether a certificate exists")
    exists_parser.add_argument("id", help="Certificate id")

    subparsers.add_parser("list", help="Show every certificate")

    invoke_parser = subparsers.add_parser("invoke", help="Run a raw ledger invocation")
    invoke_parser.add_argument("ctor", help='Invocation JSON: {"function": ..., "Args": [...]}')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        state = FileWorldState(args.state_file)
        command(args, AssetRegistry(), state)
    except (RegistryError, WorldStateError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
