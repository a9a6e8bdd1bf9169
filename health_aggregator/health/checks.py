"""Health check variants — object-style checks and bare closures."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .status import State

# Closures carry no description, so every failing one reports this.
CLOSURE_DOWN_DETAIL = "A health check closure reported status as DOWN."

HealthCheckClosure = Callable[[], State]


class HealthCheck(ABC):
    """Base class for object-style health checks.

    Subclasses provide ``name``, ``description`` and ``evaluate()``. The
    description is what ends up in ``Status.details`` when the check is DOWN.
    A check that can fail should report DOWN rather than raise.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    @abstractmethod
    def evaluate(self) -> State: ...


class RegisteredCheck:
    """Uniform wrapper around either check variant."""

    __slots__ = ("target", "is_closure")

    def __init__(self, target: Any, is_closure: bool) -> None:
        self.target = target
        self.is_closure = is_closure

    @classmethod
    def wrap(cls, check: HealthCheck | HealthCheckClosure) -> RegisteredCheck:
        if inspect.isclass(check):
            raise TypeError(
                f"Cannot register class {check.__name__!r}: register an instance instead"
            )
        if hasattr(check, "evaluate"):
            return cls(check, is_closure=False)
        if callable(check):
            return cls(check, is_closure=True)
        raise TypeError(
            f"Cannot register {type(check).__name__!r}: expected an object with "
            "evaluate() or a zero-argument callable returning State"
        )

    @property
    def name(self) -> str:
        if self.is_closure:
            return getattr(self.target, "__name__", "closure")
        return getattr(self.target, "name", type(self.target).__name__)

    @property
    def description(self) -> str:
        if self.is_closure:
            return CLOSURE_DOWN_DETAIL
        return getattr(self.target, "description", type(self.target).__name__)

    def evaluate(self) -> State:
        result = self.target() if self.is_closure else self.target.evaluate()
        return State(result)

    def failure_detail(self) -> str | None:
        """Evaluate the check; return its failure detail if DOWN, else None."""
        return self.description if self.evaluate() is State.DOWN else None
