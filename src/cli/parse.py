# SPDX-License-Identifier: Apache-2.0
"""Implementation of 'ulimitflags parse' command."""

from ulimitflags.text import parse_ulimits

from . import _print_result


def cmd_parse(args) -> int:
    ulimits = parse_ulimits(args.tokens)
    _print_result(ulimits, args)
    return 0
