from __future__ import annotations

import logging
import os

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def log_level() -> int:
    name = os.getenv("LEASE_QUOTES_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)

    if not isinstance(level, int):
        raise RuntimeError(f"LEASE_QUOTES_LOG_LEVEL has an unknown level: {name!r}")

    return level


def log_json() -> bool:
    value = os.getenv("LEASE_QUOTES_LOG_JSON", "true").strip().lower()

    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False

    raise RuntimeError(f"LEASE_QUOTES_LOG_JSON must be a boolean, got {value!r}")
