"""
Structured trace of rebalancing swaps.

Enabled when TEAMGEN_DEBUG_LOG_PATH is set. Each swap is appended as one
JSON line so a surprising draw can be replayed step by step.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any

DEBUG_LOG_ENV_VAR = "TEAMGEN_DEBUG_LOG_PATH"


def debug_log(
    location: str,
    message: str,
    data: dict[str, Any] | None = None,
    *,
    run_id: str | None = None,
    path: str | None = None,
) -> bool:
    """
    Append a JSONL entry to the trace file if one is configured.

    Returns True when an entry was written.
    """
    path = path or os.getenv(DEBUG_LOG_ENV_VAR)
    if not path:
        return False

    payload = {
        "timestamp": int(time.time() * 1000),
        "runId": run_id,
        "location": location,
        "message": message,
        "data": data or {},
    }

    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload, default=str) + "\n")
    except OSError:
        # Tracing must never break team generation
        return False
    return True
