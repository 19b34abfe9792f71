# SPDX-License-Identifier: Apache-2.0
"""CLI for ulimitflags: parse and convert ulimit specifications."""

import argparse
import json
import logging
import sys


def _print_result(ulimits, args: argparse.Namespace) -> None:
    """Print ulimits as runtime descriptors, canonical JSON, or flag text."""
    if getattr(args, "runtime", False):
        from ulimitflags.runtime import to_runtime_ulimits
        print(json.dumps(to_runtime_ulimits(ulimits)))
    elif getattr(args, "json", False):
        from ulimitflags.structured import encode_ulimits
        print(json.dumps(encode_ulimits(ulimits), sort_keys=True))
    else:
        from ulimitflags.text import render_ulimits
        print(render_ulimits(ulimits))


def _print_error(message: str, args: argparse.Namespace) -> None:
    """Print error as JSON (if --json) or plain text to stderr."""
    if getattr(args, "json", False):
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    """Add output format flags to a subparser."""
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument(
        "--runtime",
        action="store_true",
        help="Print container runtime ulimit descriptors (JSON).",
    )


def _add_ulimit_args(parser: argparse.ArgumentParser) -> None:
    """Add the repeatable --ulimit flag to a subparser."""
    parser.add_argument(
        "-u", "--ulimit",
        action="append",
        default=[],
        dest="ulimits",
        metavar="NAME=SOFT[:HARD]",
        help="Ulimit override (repeatable, last one wins), e.g. nofile=1024:2048.",
    )


def _parse_ulimit_args(args: argparse.Namespace):
    """Parse --ulimit flags into a Ulimits collection."""
    from ulimitflags.text import parse_ulimits
    return parse_ulimits(getattr(args, "ulimits", None) or [])


def _setup_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ulimitflags",
        description="Parse, decode and render container ulimit specifications.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # --- parse ---
    p_parse = sub.add_parser(
        "parse",
        help="Parse NAME=SOFT[:HARD] tokens.",
        description="Parse ulimit tokens; a later token for the same name wins.",
    )
    _add_output_args(p_parse)
    p_parse.add_argument("tokens", nargs="+", metavar="TOKEN",
                         help="Ulimit token, e.g. nofile=1024:2048")

    # --- decode ---
    p_decode = sub.add_parser(
        "decode",
        help="Decode ulimits from a JSON or YAML config file.",
        description=(
            "Decode the ulimits stored under KEY in FILE and merge --ulimit "
            "overrides on top."
        ),
    )
    p_decode.add_argument("file", metavar="FILE", help="JSON or YAML document")
    p_decode.add_argument(
        "-k", "--key",
        default="ulimits",
        help="Dotted key path of the ulimits value (default: ulimits)",
    )
    _add_ulimit_args(p_decode)
    _add_output_args(p_decode)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _setup_logging(args)

    try:
        if args.command == "parse":
            from .parse import cmd_parse
            sys.exit(cmd_parse(args))
        elif args.command == "decode":
            from .decode import cmd_decode
            sys.exit(cmd_decode(args))
        else:
            parser.print_help()
            sys.exit(1)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        _print_error(str(e), args)
        sys.exit(1)
