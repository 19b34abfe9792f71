#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Run a container with ulimits taken from a config file plus flags.

Requires a reachable Docker daemon.

Usage:
    python run_with_ulimits.py build.yaml alpine nofile=4096 -- ulimit -n
"""

import sys

import docker

from ulimitflags import load_ulimits, parse_ulimits, to_runtime_ulimits


def main():
    argv = sys.argv[1:]
    if "--" in argv:
        split = argv.index("--")
        argv, command = argv[:split], argv[split + 1:]
    else:
        command = None
    if len(argv) < 2:
        print(f"Usage: {sys.argv[0]} <config> <image> [NAME=SOFT[:HARD]...] [-- CMD...]")
        sys.exit(1)

    config_path, image, *flags = argv

    # Flags override whatever the config file says.
    ulimits = load_ulimits(config_path).merge(parse_ulimits(flags))
    print(f"ulimits: {ulimits}")

    client = docker.from_env()
    output = client.containers.run(
        image,
        command=command,
        ulimits=to_runtime_ulimits(ulimits),
        remove=True,
    )
    print(output.decode(), end="")


if __name__ == "__main__":
    main()
