# SPDX-License-Identifier: Apache-2.0
"""Text codec for the ``name=soft[:hard]`` flag grammar."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from .exceptions import ParseError
from .limits import INT64_MAX, INT64_MIN, ULIMIT_NAMES, Ulimit, Ulimits

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int64(s: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Raises:
        ParseError: If ``s`` is not an integer or is out of range.
    """
    if _INT_RE.fullmatch(s) is None:
        raise ParseError(f"invalid limit value: {s!r}")
    value = int(s)
    if value < INT64_MIN or value > INT64_MAX:
        raise ParseError(f"limit value out of range: {s!r}")
    return value


def parse_ulimit(token: str) -> tuple[str, Ulimit]:
    """Parse a single ``name=soft[:hard]`` token.

    Returns:
        ``(name, Ulimit)``; ``hard`` equals ``soft`` when omitted.

    Raises:
        ParseError: If the token is malformed, names an unknown
            resource, or carries a non-integer value.
    """
    name, sep, value = token.partition("=")
    if not sep:
        raise ParseError(f"invalid ulimit argument: {token}")
    if name not in ULIMIT_NAMES:
        raise ParseError(f"invalid ulimit type: {name}")

    parts = value.split(":")
    if len(parts) > 2:
        raise ParseError(
            f"too many limit value arguments - {value}, "
            "can only have up to two, `soft[:hard]`"
        )
    soft = parse_int64(parts[0])
    hard = parse_int64(parts[1]) if len(parts) == 2 else soft
    return name, Ulimit(soft, hard)


def parse_ulimits(tokens: Iterable[str]) -> Ulimits:
    """Parse repeated ulimit flags into a collection.

    A later token for the same name replaces an earlier one.  The first
    invalid token aborts the whole parse.
    """
    ulimits = Ulimits()
    for token in tokens:
        name, ulimit = parse_ulimit(token)
        if name in ulimits:
            logger.debug("ulimit %s overridden by %r", name, token)
        ulimits[name] = ulimit
    return ulimits


def format_ulimit(name: str, ulimit: Ulimit) -> str:
    """Format one entry as ``name=soft:hard``."""
    return f"{name}={ulimit.soft}:{ulimit.hard}"


def render_ulimits(ulimits: Mapping[str, Ulimit]) -> str:
    """Render a collection the way the Docker CLI shows its ulimit option.

    Example: ``[nofile=1024:2048 nproc=100:100]``.
    """
    from .runtime import format_runtime_ulimit, to_runtime_ulimits

    entries = [format_runtime_ulimit(d) for d in to_runtime_ulimits(ulimits)]
    return "[" + " ".join(entries) + "]"
