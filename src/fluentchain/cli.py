"""fluentchain CLI entry point.

Usage: uv run fluentchain [command]
"""
import argparse
import importlib
import logging
import sys


def _add_members_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "members",
        help="List the members wrap() would intercept on an object or class.",
    )
    p.add_argument(
        "target",
        help="Object to inspect, as MODULE:ATTR (ATTR may be dotted)",
    )
    p.add_argument(
        "--exclude-private", action="store_true",
        help="Leave out _single_underscore members.",
    )


def _resolve(spec: str):
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected MODULE:ATTR, got {spec!r}")
    obj = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def _run_members(args: argparse.Namespace) -> int:
    from fluentchain.composable.discovery import chainable_members

    try:
        target = _resolve(args.target)
    except (ImportError, AttributeError, ValueError) as exc:
        print(f"fluentchain: cannot resolve {args.target}: {exc}", file=sys.stderr)
        return 1

    for name in chainable_members(target, exclude_private=args.exclude_private):
        print(name)
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="fluentchain",
        description="Deferred, chainable calls over sync and async methods.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log discovery details to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_members_parser(subparsers)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "members":
        sys.exit(_run_members(args))
