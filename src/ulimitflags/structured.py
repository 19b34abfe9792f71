# SPDX-License-Identifier: Apache-2.0
"""Structured-value codec for ulimits.

Decodes the plain values a JSON/YAML/HCL loader hands over into
:class:`~ulimitflags.limits.Ulimits`, and encodes them back.  A single
resource may be written as any of::

    nofile: 1024                      # number, hard = soft
    nofile: "1024:2048"               # soft[:hard] string
    nofile: [1024, 2048]              # one or two numbers
    nofile: {soft: 1024, hard: 2048}  # canonical object, hard optional

and a whole collection either as a mapping of such values or as a list
of ``name=soft[:hard]`` strings.  Encoding always emits the canonical
object form.
"""

from __future__ import annotations

import enum
import logging
import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Hashable, Optional, Tuple

from .exceptions import ConversionError, ParseError, UlimitTypeError, ValidationError
from .limits import INT64_MAX, INT64_MIN, Ulimit, Ulimits
from .text import parse_int64, parse_ulimit

logger = logging.getLogger(__name__)

Path = Tuple[Hashable, ...]

_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class Shape(enum.Enum):
    """Runtime shape of a structured value, in decode precedence order."""

    NUMBER = "number"
    TEXT = "string"
    SHORT_LIST = "list"
    MAPPING = "mapping"
    OBJECT = "object"


@dataclass(frozen=True)
class ObjectSchema:
    """Attributes of the canonical ulimit object."""

    attributes: Tuple[str, ...]
    optional: frozenset

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(a for a in self.attributes if a not in self.optional)

    def describe(self) -> str:
        fields = ", ".join(
            f"{a}?: number" if a in self.optional else f"{a}: number"
            for a in self.attributes
        )
        return "{" + fields + "}"


_ULIMIT_SCHEMA = ObjectSchema(attributes=("soft", "hard"), optional=frozenset({"hard"}))


def ulimit_schema() -> ObjectSchema:
    """Schema of ``{soft: number, hard?: number}``, built at import."""
    return _ULIMIT_SCHEMA


def classify(value: Any) -> Shape:
    """Return the shape ``value`` is decoded as.

    ``bool`` is not a number.  Anything unrecognised is ``OBJECT``, the
    fallback shape whose conversion reports the mismatch.
    """
    if isinstance(value, bool):
        return Shape.OBJECT
    if isinstance(value, (numbers.Real, Decimal)):
        return Shape.NUMBER
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, (list, tuple)):
        return Shape.SHORT_LIST
    if isinstance(value, Mapping):
        return Shape.MAPPING
    return Shape.OBJECT


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    return classify(value).value


# ---------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------

def to_int64(value: Any, path: Path = ()) -> int:
    """Truncate a number toward zero, saturating at the int64 bounds.

    Raises:
        ConversionError: For NaN.
    """
    if isinstance(value, int):
        n = value
    else:
        if isinstance(value, Decimal):
            nan, inf = value.is_nan(), value.is_infinite()
        else:
            nan, inf = math.isnan(value), math.isinf(value)
        if nan:
            raise ConversionError("NaN is not a valid limit value", path)
        if inf or value > INT64_MAX or value < INT64_MIN:
            return INT64_MAX if value > 0 else INT64_MIN
        n = math.trunc(value)
    return max(INT64_MIN, min(INT64_MAX, n))


def _as_number(value: Any, path: Path) -> int:
    """Convert a number or numeric string, as a list or object element."""
    shape = classify(value)
    if shape is Shape.NUMBER:
        return to_int64(value, path)
    if shape is Shape.TEXT and _NUMBER_RE.fullmatch(value):
        return to_int64(Decimal(value), path)
    raise ConversionError(f"a number is required, got {_type_name(value)}", path)


# ---------------------------------------------------------------
# Single ulimit
# ---------------------------------------------------------------

def decode_ulimit(value: Any, path: Path = ()) -> Ulimit:
    """Decode one resource's limits from any accepted shape.

    Raises:
        ParseError: A ``soft[:hard]`` string has a non-integer part.
        ValidationError: Zero or more than two limit values.
        ConversionError: The value does not fit the object form.
    """
    shape = classify(value)
    logger.debug("decoding ulimit %r as %s", value, shape.name)
    if shape is Shape.NUMBER:
        return _from_number(value, path)
    if shape is Shape.TEXT:
        return _from_text(value, path)
    if shape is Shape.SHORT_LIST:
        return _from_list(value, path)
    # Canonical form.
    return _from_object(value, path)


def _from_number(value: Any, path: Path) -> Ulimit:
    return Ulimit(to_int64(value, path))


def _from_text(value: str, path: Path) -> Ulimit:
    parts = []
    for part in value.split(":"):
        try:
            parts.append(parse_int64(part))
        except ParseError as e:
            raise ParseError(e.message, path) from e
    return _from_number_list(parts, path)


def _from_list(value: Any, path: Path) -> Ulimit:
    parts = [_as_number(elem, path + (i,)) for i, elem in enumerate(value)]
    return _from_number_list(parts, path)


def _from_number_list(parts: list, path: Path) -> Ulimit:
    if len(parts) < 1:
        raise ValidationError(
            f"too few limit value arguments - {_format_parts(parts)}, "
            "must have at least one, `soft[:hard]`",
            path,
        )
    if len(parts) > 2:
        raise ValidationError(
            f"too many limit value arguments - {_format_parts(parts)}, "
            "can only have up to two, `soft[:hard]`",
            path,
        )
    return Ulimit(*parts)


def _format_parts(parts: list) -> str:
    return "[" + " ".join(str(p) for p in parts) + "]"


def _from_object(value: Any, path: Path) -> Ulimit:
    schema = ulimit_schema()
    if not isinstance(value, Mapping):
        raise ConversionError(
            f"{schema.describe()} required, got {_type_name(value)}", path
        )

    for key in value:
        if key not in schema.attributes:
            raise ConversionError(f"unsupported attribute {key!r}", path)
    for key in schema.required:
        if key not in value or value[key] is None:
            raise ConversionError(f"attribute {key!r} is required", path)

    soft = _as_number(value["soft"], path + ("soft",))
    hard = value.get("hard")
    if hard is not None:
        hard = _as_number(hard, path + ("hard",))
    return Ulimit(soft, hard)


def encode_ulimit(ulimit: Optional[Ulimit]) -> Optional[Dict[str, int]]:
    """Encode to the canonical object; ``None`` stays ``None``."""
    if ulimit is None:
        return None
    return {"soft": ulimit.soft, "hard": ulimit.hard}


# ---------------------------------------------------------------
# Collections
# ---------------------------------------------------------------

def decode_ulimits(value: Any, path: Path = ()) -> Ulimits:
    """Decode a whole collection.

    Accepts a list of ``name=soft[:hard]`` strings or a mapping of
    resource name to any single-ulimit shape.

    Raises:
        UlimitTypeError: ``value`` is neither, or a list element is not
            a string, or a mapping key is not a string.
        ParseError, ValidationError, ConversionError: From the entries.
    """
    shape = classify(value)
    if shape is Shape.SHORT_LIST:
        return _ulimits_from_list(value, path)
    if shape is Shape.MAPPING:
        return _ulimits_from_mapping(value, path)
    raise UlimitTypeError(
        "list of strings or mapping of ulimits required, "
        f"got {_type_name(value)}",
        path,
    )


def _ulimits_from_list(value: Any, path: Path) -> Ulimits:
    ulimits = Ulimits()
    for i, elem in enumerate(value):
        if not isinstance(elem, str):
            raise UlimitTypeError(
                f"string required, got {_type_name(elem)}", path + (i,)
            )
        try:
            name, ulimit = parse_ulimit(elem)
        except ParseError as e:
            raise ParseError(e.message, path + (i,)) from e
        ulimits[name] = ulimit
    logger.debug("decoded %d ulimit(s) from list", len(ulimits))
    return ulimits


def _ulimits_from_mapping(value: Mapping, path: Path) -> Ulimits:
    ulimits = Ulimits()
    for name, elem in value.items():
        if not isinstance(name, str):
            raise UlimitTypeError(
                f"ulimit name must be a string, got {name!r}", path
            )
        ulimits[name] = decode_ulimit(elem, path + (name,))
    logger.debug("decoded %d ulimit(s) from mapping", len(ulimits))
    return ulimits


def encode_ulimits(ulimits: Optional[Mapping[str, Ulimit]]) -> Dict[str, Any]:
    """Encode a collection as ``{name: {"soft": n, "hard": n}}``.

    Always returns a dict, ``{}`` for an empty or missing collection, so
    "no limits" stays distinguishable from an absent value.
    """
    if not ulimits:
        return {}
    return {name: encode_ulimit(u) for name, u in ulimits.items()}
