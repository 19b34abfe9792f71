# SPDX-License-Identifier: Apache-2.0
"""Implementation of 'ulimitflags decode' command."""

import logging

from ulimitflags.config import load_ulimits

from . import _parse_ulimit_args, _print_result

logger = logging.getLogger(__name__)


def cmd_decode(args) -> int:
    # Parse flags first so a bad token fails before the file is read.
    overrides = _parse_ulimit_args(args)
    ulimits = load_ulimits(args.file, key=args.key)
    if overrides:
        logger.debug("applying %d ulimit override(s)", len(overrides))
    _print_result(ulimits.merge(overrides), args)
    return 0
