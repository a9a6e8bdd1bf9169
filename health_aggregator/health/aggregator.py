"""Health aggregator — registers checks and caches the combined Status.

The cached Status is recomputed lazily: reading ``Health.status`` after the
expiration window has passed evaluates every registered check, synchronously,
under a lock. Concurrent readers block until the single recompute finishes
and then all see the same Status.

Known limitation: there is no per-check timeout. A slow or blocking check
holds the lock, and every reader with it, until it returns.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol, TypeVar

from ..config import settings
from .checks import HealthCheck, HealthCheckClosure, RegisteredCheck
from .status import State, Status
from .timeutil import current_time_millis

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="HealthCheck | HealthCheckClosure")


class HealthProtocol(Protocol):
    """What an embedding application needs from a health aggregator."""

    @property
    def status(self) -> Status: ...

    def register_check(self, check: C) -> C: ...


class Health:
    """Registry of health checks with a time-windowed Status cache."""

    def __init__(
        self,
        status_expiration_ms: int | None = None,
        clock: Callable[[], int] = current_time_millis,
    ) -> None:
        if status_expiration_ms is None:
            status_expiration_ms = settings.status_expiration_ms
        if status_expiration_ms < 0:
            raise ValueError(f"status_expiration_ms must be >= 0, got {status_expiration_ms}")
        self._expiration_ms = status_expiration_ms
        self._clock = clock
        self._checks: list[RegisteredCheck] = []
        self._closure_checks: list[RegisteredCheck] = []
        self._lock = threading.Lock()
        self._last_status = Status(State.UP, timestamp=self._clock())

    @property
    def status_expiration_ms(self) -> int:
        return self._expiration_ms

    # ── Registration ─────────────────────────────────────────────────────────

    def register_check(self, check: C) -> C:
        """Register an object-style check or a closure.

        Returns the check unchanged, so closures can be registered with
        ``@health.register_check``.
        """
        registered = RegisteredCheck.wrap(check)
        if registered.is_closure:
            self._closure_checks.append(registered)
        else:
            self._checks.append(registered)
        logger.debug("Registered health check %s (%d total)", registered.name, self.check_count)
        return check

    add_check = register_check

    @property
    def check_count(self) -> int:
        return len(self._checks) + len(self._closure_checks)

    def __len__(self) -> int:
        return self.check_count

    # ── Status ───────────────────────────────────────────────────────────────

    @property
    def status(self) -> Status:
        """Cached Status, recomputed first if older than the expiration window."""
        with self._lock:
            elapsed = self._clock() - self._last_status.timestamp_millis
            # Clock skew: a non-positive age counts as fresh.
            if elapsed > 0 and elapsed > self._expiration_ms:
                self._update_status()
            return self._last_status

    def force_update_status(self) -> Status:
        """Evaluate every check now, bypassing the cache window."""
        with self._lock:
            return self._update_status()

    def _update_status(self) -> Status:
        # Snapshots so a registration racing with a read can't disturb iteration.
        details = [
            detail
            for check in [*self._checks, *self._closure_checks]
            if (detail := check.failure_detail()) is not None
        ]
        state = State.DOWN if details else State.UP
        previous = self._last_status
        self._last_status = Status(state, details, timestamp=self._clock())

        logger.debug("Health status recomputed: %s (%d checks)", state.value, self.check_count)
        if previous.state is not state:
            if state is State.DOWN:
                logger.warning("Health status changed UP → DOWN: %s", "; ".join(details))
            else:
                logger.info("Health status changed DOWN → UP")
        return self._last_status
