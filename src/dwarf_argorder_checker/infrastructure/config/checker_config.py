#!/usr/bin/env python3

"""Tunables for debug-info evaluation and source filtering."""

import os

DEFAULT_CONFIG = {
    # Synthetic CFA and frame base; only relative order of addresses matters
    "SYNTHETIC_CFA": 0x1000,

    # File name the Go toolchain gives compiler-generated wrappers
    "AUTOGENERATED_FILE": "<autogenerated>",

    # Substring a declaration line must contain to be checked
    "FUNC_MARKER": "func ",

    # Write a DEBUG log file next to the console output
    "LOG_TO_FILE": True,
}


def get_config() -> dict:
    """Get configuration with environment variable overrides.

    Every key can be overridden with ``ARGORDER_<KEY>``; integers accept
    any base Python understands (``0x1000``).

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key in config:
        env_value = os.getenv(f"ARGORDER_{key}")
        if env_value is None:
            continue

        if isinstance(config[key], bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        elif isinstance(config[key], int):
            try:
                config[key] = int(env_value, 0)
            except ValueError:
                pass
        else:
            config[key] = env_value

    return config
