# SPDX-License-Identifier: Apache-2.0
"""Load ulimits from JSON or YAML config documents."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

import yaml

from .exceptions import ConfigError
from .limits import Ulimits
from .structured import decode_ulimits

logger = logging.getLogger(__name__)

DEFAULT_KEY = "ulimits"


def load_document(path: Union[str, Path]) -> Any:
    """Read a config document.

    ``.json`` files are parsed as JSON, everything else as YAML.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"cannot read {path}: not valid UTF-8 ({e.reason})") from e

    try:
        if path.suffix.lower() == ".json":
            doc = json.loads(text)
        else:
            doc = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot parse {path}: {e}") from e

    logger.debug("loaded config document %s", path)
    return doc


def lookup(doc: Any, key: str) -> Any:
    """Follow a dotted key path, e.g. ``services.web.ulimits``.

    Returns ``None`` when any key along the path is missing.

    Raises:
        ConfigError: If an intermediate node is not a mapping.
    """
    node = doc
    walked: list[str] = []
    for part in key.split("."):
        if node is None:
            return None
        if not isinstance(node, Mapping):
            where = ".".join(walked) or "document root"
            raise ConfigError(f"{where} is not a mapping")
        node = node.get(part)
        walked.append(part)
    return node


def load_ulimits(path: Union[str, Path], key: str = DEFAULT_KEY) -> Ulimits:
    """Load and decode the ulimits stored under ``key`` in a document.

    A missing key yields an empty collection.  Decode errors carry the
    key path, e.g. ``ulimits.nofile: ...``.
    """
    value = lookup(load_document(path), key)
    if value is None:
        logger.debug("no %r in %s", key, path)
        return Ulimits()
    return decode_ulimits(value, tuple(key.split(".")))
