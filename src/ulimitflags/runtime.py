# SPDX-License-Identifier: Apache-2.0
"""Hand-off to the container runtime's ulimit descriptor.

The Docker SDK represents a ulimit as :class:`docker.types.Ulimit`, a
dict with ``Name``/``Soft``/``Hard`` keys.  A list of them is what
``client.containers.run(..., ulimits=...)`` expects.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from docker.types import Ulimit as RuntimeUlimit

from .exceptions import ConversionError
from .limits import Ulimit, Ulimits


def to_runtime_ulimits(ulimits: Mapping[str, Ulimit]) -> list[RuntimeUlimit]:
    """Convert a collection to runtime descriptors, sorted by name."""
    return [
        RuntimeUlimit(name=name, soft=u.soft, hard=u.hard)
        for name, u in sorted(ulimits.items())
    ]


def from_runtime_ulimits(descriptors: Iterable[Mapping[str, Any]]) -> Ulimits:
    """Build a collection from runtime descriptors.

    Accepts :class:`docker.types.Ulimit` objects or plain HostConfig
    dicts.  A descriptor without ``Hard`` gets ``hard = soft``.
    """
    ulimits = Ulimits()
    for i, d in enumerate(descriptors):
        name = d.get("Name")
        soft = d.get("Soft")
        hard = d.get("Hard")
        if not isinstance(name, str) or not _is_limit(soft):
            raise ConversionError(
                f"runtime ulimit needs Name and Soft, got {dict(d)!r}", (i,)
            )
        if hard is not None and not _is_limit(hard):
            raise ConversionError(f"runtime ulimit Hard must be an integer, got {hard!r}", (i,))
        ulimits[name] = Ulimit(soft, hard)
    return ulimits


def _is_limit(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def format_runtime_ulimit(descriptor: RuntimeUlimit) -> str:
    """String form of one descriptor: ``name=soft:hard``."""
    return f"{descriptor.name}={descriptor.soft}:{descriptor.hard}"
