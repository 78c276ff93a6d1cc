"""Per-tool sliding-window rate limiting for the MCP tool surface."""

import time
from collections import deque
from typing import Deque, Dict

RATE_LIMIT_WINDOW = 60  # seconds
RATE_LIMIT_MAX_CALLS = 30

# tool name -> monotonic timestamps of accepted calls, oldest first
_calls: Dict[str, Deque[float]] = {}


def check_rate_limit(
    tool_name: str,
    window: float = RATE_LIMIT_WINDOW,
    max_calls: int = RATE_LIMIT_MAX_CALLS,
) -> bool:
    """Record a call to ``tool_name``. False if it exceeds the window budget."""
    now = time.monotonic()
    calls = _calls.setdefault(tool_name, deque())

    while calls and now - calls[0] >= window:
        calls.popleft()

    if len(calls) >= max_calls:
        return False

    calls.append(now)
    return True


def reset_rate_limits() -> None:
    _calls.clear()
