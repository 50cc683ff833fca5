"""
Centralized configuration for the balanced team generator.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int | None) -> int | None:
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


# Solo, Duo, Trio, Squad
SUPPORTED_TEAM_SIZES: tuple[int, ...] = (1, 2, 3, 4)

DEFAULT_TEAM_SIZE = _parse_int("DEFAULT_TEAM_SIZE", 2)
if DEFAULT_TEAM_SIZE not in SUPPORTED_TEAM_SIZES:
    DEFAULT_TEAM_SIZE = 2

# Joins member names into the derived team name
TEAM_NAME_SEPARATOR = os.getenv("TEAM_NAME_SEPARATOR", "_") or "_"

# Unset means every generation run draws fresh randomness
TEAMGEN_SEED = _parse_int("TEAMGEN_SEED", None)

# Raise instead of logging when a rebalancing pass fails to converge
REBALANCE_STRICT = _parse_bool("REBALANCE_STRICT", False)

# JSONL swap trace, disabled when unset
TEAMGEN_DEBUG_LOG_PATH = os.getenv("TEAMGEN_DEBUG_LOG_PATH")
