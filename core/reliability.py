"""
Reliability utilities: per-source circuit breakers and transient retries.

Each knowledge source gets one ``CircuitBreaker``. Adapters run their
network call through ``retry_transient`` inside ``breaker.guard``, so a
connection blip is retried once and a source that keeps failing is
skipped entirely until its cooldown has passed. ``guard`` turns every
failure into an empty result list.
"""

import asyncio
import logging
import random
import time
from enum import Enum
from typing import Any, Callable, Dict

__all__ = [
    "BreakerState",
    "CircuitBreaker",
    "breaker_for",
    "breaker_states",
    "configure_breakers",
    "reset_circuit_breakers",
    "retry_transient",
]

DEFAULT_FAILURE_THRESHOLD = 3
DEFAULT_COOLDOWN_SECONDS = 120.0
MAX_BACKOFF_SECONDS = 5.0

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Circuit Breaker
# ══════════════════════════════════════════════════════════════════════════════


class BreakerState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Skips a knowledge source after repeated consecutive failures.

    After ``failure_threshold`` failures in a row the breaker opens and
    searches get no results from that source. Once ``cooldown`` seconds
    have elapsed a single trial search is let through: success closes the
    breaker, failure re-opens it for another cooldown.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        cooldown: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.failure_threshold = failure_threshold
        self.cooldown = cooldown
        self._clock = clock

        self.state = BreakerState.CLOSED
        self.consecutive_failures = 0
        self._opened_at = 0.0
        self._trial_in_flight = False

    def allows_request(self) -> bool:
        if self.state is BreakerState.OPEN:
            if self._clock() - self._opened_at < self.cooldown:
                return False
            self.state = BreakerState.HALF_OPEN
            logger.info(f"{self.name}: cooldown over, trying source again")
        if self.state is BreakerState.HALF_OPEN:
            return not self._trial_in_flight
        return True

    async def guard(self, func: Callable, *args, **kwargs) -> list:
        """Run ``func`` unless the breaker is open. Failures yield []."""
        if not self.allows_request():
            logger.debug(f"{self.name}: circuit open, skipping search")
            return []

        trial = self.state is BreakerState.HALF_OPEN
        if trial:
            self._trial_in_flight = True
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            self._record_failure(e)
            return []
        finally:
            # Also reached on cancellation, so the next caller can try
            if trial:
                self._trial_in_flight = False

        if self.state is not BreakerState.CLOSED:
            logger.info(f"{self.name}: source recovered, circuit closed")
        self.state = BreakerState.CLOSED
        self.consecutive_failures = 0
        return result

    def _record_failure(self, error: Exception) -> None:
        self.consecutive_failures += 1
        logger.warning(f"{self.name} failed: {type(error).__name__}: {error}")

        if (
            self.state is BreakerState.HALF_OPEN
            or self.consecutive_failures >= self.failure_threshold
        ):
            self.state = BreakerState.OPEN
            self._opened_at = self._clock()
            self.consecutive_failures = 0
            logger.warning(
                f"{self.name}: circuit opened for {self.cooldown:.0f}s"
            )

    def status(self) -> str:
        return self.state.value


# One breaker per source, shared by every adapter instance for that source
_breakers: Dict[str, CircuitBreaker] = {}
_settings: Dict[str, Any] = {
    "failure_threshold": DEFAULT_FAILURE_THRESHOLD,
    "cooldown": DEFAULT_COOLDOWN_SECONDS,
}


def configure_breakers(
    failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
    cooldown: float = DEFAULT_COOLDOWN_SECONDS,
) -> None:
    """Set thresholds for breakers created from now on."""
    _settings["failure_threshold"] = failure_threshold
    _settings["cooldown"] = cooldown


def breaker_for(source: str) -> CircuitBreaker:
    if source not in _breakers:
        _breakers[source] = CircuitBreaker(source, **_settings)
    return _breakers[source]


def breaker_states() -> Dict[str, str]:
    return {name: breaker.status() for name, breaker in _breakers.items()}


def reset_circuit_breakers() -> None:
    _breakers.clear()
    configure_breakers()


# ══════════════════════════════════════════════════════════════════════════════
# Retry
# ══════════════════════════════════════════════════════════════════════════════


def _backoff_delay(attempt: int, backoff: float) -> float:
    delay = min(backoff * (2**attempt), MAX_BACKOFF_SECONDS)
    return delay + random.uniform(0, 0.1 * delay)


async def retry_transient(
    func: Callable,
    *args,
    retries: int = 1,
    backoff: float = 0.5,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    **kwargs,
) -> Any:
    """
    Call ``func``, retrying errors listed in ``retry_on``.

    Args:
        func: Async callable to run
        retries: Extra attempts after the first one
        backoff: Base delay in seconds, doubled on each retry
        retry_on: Exception types worth another attempt

    Raises:
        The last error once every attempt failed, or any error not in
        ``retry_on`` straight away
    """
    attempt = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except retry_on as e:
            if attempt >= retries:
                raise
            delay = _backoff_delay(attempt, backoff)
            logger.info(
                f"Retry {attempt + 1}/{retries} after {type(e).__name__}, "
                f"waiting {delay:.1f}s"
            )
            attempt += 1
            await asyncio.sleep(delay)
