# SPDX-License-Identifier: Apache-2.0
"""
ulimitflags - parse, decode and render container ulimit specifications.

The same limits can be written as flags, as config values of several
shapes, or handed to the container runtime:

    from ulimitflags import parse_ulimits, decode_ulimits

    flags = parse_ulimits(["nofile=1024:2048", "nproc=100"])
    config = decode_ulimits({"nofile": {"soft": 4096}, "core": "0"})

    merged = config.merge(flags)        # flags win
    print(merged)                       # [core=0:0 nofile=1024:2048 nproc=100:100]

The runtime and config layers are loaded lazily.  Parsing, decoding and
encoding never import the Docker SDK or PyYAML; rendering does, since
the text form is built from the runtime descriptors:

    from ulimitflags import to_runtime_ulimits   # loads docker
    from ulimitflags import load_ulimits         # loads yaml
    str(merged), render_ulimits(merged)          # load docker on first call
"""

# Exceptions and the core codec are lightweight and always available.
from .exceptions import (
    UlimitError,
    ParseError,
    UlimitTypeError,
    ValidationError,
    ConversionError,
    ConfigError,
)
from .limits import Ulimit, Ulimits, merge_ulimits, ULIMIT_NAMES
from .text import parse_ulimit, parse_ulimits, format_ulimit, render_ulimits
from .structured import decode_ulimit, decode_ulimits, encode_ulimit, encode_ulimits

__all__ = [
    # Model
    "Ulimit",
    "Ulimits",
    "merge_ulimits",
    "ULIMIT_NAMES",
    # Text
    "parse_ulimit",
    "parse_ulimits",
    "format_ulimit",
    "render_ulimits",
    # Structured values
    "decode_ulimit",
    "decode_ulimits",
    "encode_ulimit",
    "encode_ulimits",
    # Runtime
    "to_runtime_ulimits",
    "from_runtime_ulimits",
    # Config
    "load_ulimits",
    # Exceptions
    "UlimitError",
    "ParseError",
    "UlimitTypeError",
    "ValidationError",
    "ConversionError",
    "ConfigError",
]

__version__ = "0.1.0"

# Lazy imports - each layer loads only when first accessed.
_LAZY_IMPORTS = {
    "to_runtime_ulimits": ".runtime",
    "from_runtime_ulimits": ".runtime",
    "load_ulimits": ".config",
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        import importlib
        module = importlib.import_module(_LAZY_IMPORTS[name], __name__)
        value = getattr(module, name)
        # Cache on the module so __getattr__ isn't called again.
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
