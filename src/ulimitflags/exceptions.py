# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for ulimit parsing and conversion."""

from typing import Hashable, Optional, Tuple


class UlimitError(Exception):
    """Base exception for all ulimit errors.

    ``path`` locates the failing element inside a structured value, e.g.
    ``("ulimits", 0)``.  It is empty for errors raised on bare values.
    """

    def __init__(self, message: str, path: Optional[Tuple[Hashable, ...]] = None):
        super().__init__(message)
        self.message = message
        self.path = tuple(path or ())

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{format_path(self.path)}: {self.message}"


class ParseError(UlimitError, ValueError):
    """Text token does not match ``name=soft[:hard]``."""

    pass


class UlimitTypeError(UlimitError, TypeError):
    """Structured value has a shape no decoder accepts."""

    pass


class ValidationError(UlimitError, ValueError):
    """Shape matched but the number of limit values is wrong."""

    pass


class ConversionError(UlimitError, ValueError):
    """Value could not be converted to the canonical ulimit object."""

    pass


class ConfigError(UlimitError):
    """Config document could not be read or navigated."""

    pass


def format_path(path: Tuple[Hashable, ...]) -> str:
    """Render a value path as ``root.key[0]``."""
    out = ""
    for step in path:
        if isinstance(step, int):
            out += f"[{step}]"
        elif out:
            out += f".{step}"
        else:
            out = str(step)
    return out
