"""Status snapshot — aggregate UP/DOWN state, failure details, timestamp.

A Status is immutable once built. The timestamp is held as epoch
milliseconds; the string form (``yyyy-MM-dd'T'HH:mm:ssZ``, UTC) is derived
from it and is what goes over the wire.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from .timeutil import current_time_millis, datetime_to_millis, format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


# ── Errors ───────────────────────────────────────────────────────────────────


class InvalidDataError(ValueError):
    """Raised when a Status cannot be encoded or decoded."""

    kind: str = "invalid"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DeserializationError(InvalidDataError):
    kind = "deserialization"


class SerializationError(InvalidDataError):
    kind = "serialization"


# ── Models ───────────────────────────────────────────────────────────────────


class State(str, Enum):
    UP = "UP"
    DOWN = "DOWN"


class StatusPayload(BaseModel):
    """Wire shape of a Status: ``status``, ``details``, ``timestamp``."""

    model_config = {"extra": "ignore"}

    status: str
    details: list[str]
    timestamp: str

    @field_validator("status")
    @classmethod
    def _known_state(cls, value: str) -> str:
        if value not in {s.value for s in State}:
            raise ValueError(f"'{value}' is not a valid status value.")
        return value

    @field_validator("timestamp")
    @classmethod
    def _fixed_format(cls, value: str) -> str:
        try:
            parse_timestamp(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a valid timestamp value.") from None
        return value


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value").removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


class Status:
    """Immutable snapshot of aggregate health at a point in time."""

    __slots__ = ("_state", "_details", "_timestamp_millis")

    def __init__(
        self,
        state: State | str = State.UP,
        details: Iterable[str] = (),
        timestamp: str | int | datetime | None = None,
    ) -> None:
        object.__setattr__(self, "_state", State(state))
        if isinstance(details, str):
            details = (details,)
        object.__setattr__(self, "_details", tuple(details))
        object.__setattr__(self, "_timestamp_millis", self._resolve_timestamp(timestamp))

    @staticmethod
    def _resolve_timestamp(timestamp: str | int | datetime | None) -> int:
        if timestamp is None:
            return current_time_millis()
        if isinstance(timestamp, datetime):
            return datetime_to_millis(timestamp)
        if isinstance(timestamp, int):
            return timestamp
        try:
            return parse_timestamp(timestamp)
        except ValueError:
            logger.warning(
                "Provided timestamp value '%s' is not valid; using current time value instead.",
                timestamp,
            )
            return current_time_millis()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ── Accessors ────────────────────────────────────────────────────────────

    @property
    def state(self) -> State:
        return self._state

    @property
    def details(self) -> tuple[str, ...]:
        return self._details

    @property
    def timestamp_millis(self) -> int:
        return self._timestamp_millis

    @property
    def timestamp(self) -> str:
        """UTC timestamp string, second precision."""
        return format_timestamp(self._timestamp_millis)

    @property
    def is_up(self) -> bool:
        return self._state is State.UP

    # Equality follows the wire form: the timestamp is compared as its
    # formatted string so a decoded Status equals the one that was encoded.
    def _key(self) -> tuple[State, tuple[str, ...], str]:
        return (self._state, self._details, self.timestamp)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Status(state={self._state.value!r}, details={list(self._details)!r}, timestamp={self.timestamp!r})"

    # ── Representations ──────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Full representation: ``status``, ``details`` and ``timestamp``."""
        return {
            "status": self._state.value,
            "details": list(self._details),
            "timestamp": self.timestamp,
        }

    def to_simple_dict(self) -> dict[str, Any]:
        """Simple representation: ``status`` only."""
        return {"status": self._state.value}

    # ── Structured encode / decode ───────────────────────────────────────────

    def to_payload(self) -> StatusPayload:
        try:
            return StatusPayload(
                status=self._state.value,
                details=list(self._details),
                timestamp=self.timestamp,
            )
        except ValidationError as e:
            raise SerializationError(f"Status cannot be encoded: {_validation_message(e)}") from e

    def to_json(self) -> str:
        return self.to_payload().model_dump_json()

    @classmethod
    def from_payload(cls, payload: StatusPayload) -> Status:
        return cls(
            state=State(payload.status),
            details=payload.details,
            timestamp=parse_timestamp(payload.timestamp),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Status:
        """Decode a Status from its full representation.

        Raises DeserializationError for an unknown status value, a timestamp
        outside the fixed format, or a payload of the wrong shape.
        """
        try:
            payload = StatusPayload.model_validate(data)
        except ValidationError as e:
            raise DeserializationError(_validation_message(e)) from e
        return cls.from_payload(payload)

    @classmethod
    def from_json(cls, data: str | bytes) -> Status:
        try:
            payload = StatusPayload.model_validate_json(data)
        except ValidationError as e:
            raise DeserializationError(_validation_message(e)) from e
        return cls.from_payload(payload)
