"""
Schema Bridge Inspector CLI
===========================

Diagnostics for persisted blobs and qualified type names.

COMMANDS:
- envelope: Show the version header and decoded payload of a blob
- typename: Show the parsed tree of a qualified type name
- bind:     Rebind a type name against a set of loaded module identifiers
- wrap:     Add a version header to a legacy (headerless) blob

USAGE:
    python -m schemabridge.inspector [COMMAND] [ARGS]
"""
import argparse
import sys
from dataclasses import asdict
from typing import List, Optional

from .codec.envelope import decode_envelope, encode_envelope
from .codec.json_codec import to_json
from .codec.payload import DEFAULT_CODEC
from .config import Settings, get_settings
from .contracts.errors import ErrorCode, MalformedPayloadError
from .observability import configure_logging
from .registry import InMemoryModuleRegistry
from .typenames.binder import VersionTolerantBinder
from .typenames.parser import parse_type_name, serialize_type_name


def cmd_envelope(args, settings: Settings) -> int:
    with open(args.file, "rb") as f:
        data = f.read()

    version, offset = decode_envelope(data)
    print(f"[*] File:           {args.file}")
    print(f"[*] Version:        {version}{' (legacy, no header)' if offset == 0 else ''}")
    print(f"[*] Payload offset: {offset}")
    print(f"[*] Payload length: {len(data) - offset}")

    try:
        document = DEFAULT_CODEC.decode(data[offset:])
    except MalformedPayloadError as e:
        print(f"[FAIL] Payload does not decode: {e}")
        return 1

    print(to_json(document, indent=settings.cli_indent))
    return 0


def cmd_typename(args, settings: Settings) -> int:
    signature = parse_type_name(args.name)
    print(to_json(asdict(signature), indent=settings.cli_indent))
    print(serialize_type_name(signature))
    return 0


def cmd_bind(args, settings: Settings) -> int:
    registry = InMemoryModuleRegistry(modules=args.module or [])
    binder = VersionTolerantBinder(registry)
    result = binder.bind_signature(parse_type_name(args.name))

    print(result.qualified_name)
    for error in result.errors:
        # Only modules are known here; there is no type table to look in.
        if error.code is ErrorCode.TYPE_NOT_FOUND:
            continue
        print(f"[WARN] {error.code.name}: {error.message}")
    return 0


def cmd_wrap(args, settings: Settings) -> int:
    with open(args.file, "rb") as f:
        data = f.read()

    _, offset = decode_envelope(data)
    if offset != 0:
        print(f"[FAIL] {args.file} already carries a version header")
        return 1

    try:
        wrapped = encode_envelope(data, args.version)
    except ValueError as e:
        print(f"[FAIL] {e}")
        return 1

    with open(args.out, "wb") as f:
        f.write(wrapped)
    print(f"[PASS] Wrote {args.out} at version {args.version}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Schema Bridge Inspector")

    subparsers = parser.add_subparsers(dest="command")

    envelope_parser = subparsers.add_parser("envelope", help="Show header and payload of a blob")
    envelope_parser.add_argument("file", help="Path to the blob")

    typename_parser = subparsers.add_parser("typename", help="Parse a qualified type name")
    typename_parser.add_argument("name", help="Qualified type name")

    bind_parser = subparsers.add_parser("bind", help="Rebind module references in a type name")
    bind_parser.add_argument("name", help="Qualified type name including its module reference")
    bind_parser.add_argument(
        "--module", action="append",
        help="Full identifier of a loaded module (repeatable)"
    )

    wrap_parser = subparsers.add_parser("wrap", help="Add a version header to a legacy blob")
    wrap_parser.add_argument("file", help="Path to the legacy blob")
    wrap_parser.add_argument("--version", type=int, required=True, help="Version to record")
    wrap_parser.add_argument("--out", required=True, help="Output path")

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)

    if args.command == "envelope":
        return cmd_envelope(args, settings)
    elif args.command == "typename":
        return cmd_typename(args, settings)
    elif args.command == "bind":
        return cmd_bind(args, settings)
    elif args.command == "wrap":
        return cmd_wrap(args, settings)
    else:
        parser.print_help()
        return 2


if __name__ == "__main__":
    sys.exit(main())
