# SPDX-License-Identifier: Apache-2.0
"""Ulimit model: soft/hard pairs keyed by resource name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

ULIMIT_NAMES = frozenset({
    "core",
    "cpu",
    "data",
    "fsize",
    "locks",
    "memlock",
    "msgqueue",
    "nice",
    "nofile",
    "nproc",
    "rss",
    "rtprio",
    "rttime",
    "sigpending",
    "stack",
})
"""Resource names accepted by the ``name=soft[:hard]`` flag grammar."""


@dataclass(frozen=True)
class Ulimit:
    """Soft and hard limit for a single resource.

    ``Ulimit(1024)`` sets both limits to 1024.  No ordering between
    ``soft`` and ``hard`` is checked; the runtime rejects bad pairs.
    """

    soft: int
    hard: Optional[int] = None

    def __post_init__(self) -> None:
        if self.hard is None:
            object.__setattr__(self, "hard", self.soft)


class Ulimits(Dict[str, Ulimit]):
    """Resource name -> :class:`Ulimit`.

    Iteration order is not meaningful; renderers sort by name.
    """

    def merge(self, other: Optional[Mapping[str, Ulimit]]) -> Ulimits:
        """Return a new collection with ``other`` overriding this one."""
        return merge_ulimits(self, other)

    def __repr__(self) -> str:
        return f"Ulimits({dict.__repr__(self)})"

    def __str__(self) -> str:
        from .text import render_ulimits
        return render_ulimits(self)


def merge_ulimits(
    base: Optional[Mapping[str, Ulimit]],
    overlay: Optional[Mapping[str, Ulimit]],
) -> Ulimits:
    """Merge two collections, entries of ``overlay`` winning.

    ``None`` is treated as empty.  Neither argument is modified; the
    result is always a fresh :class:`Ulimits`.
    """
    merged = Ulimits(base or {})
    merged.update(overlay or {})
    return merged
