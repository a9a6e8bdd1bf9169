"""In-process health status aggregator with a time-windowed cache."""

from .health import (
    CLOSURE_DOWN_DETAIL,
    DeserializationError,
    Health,
    HealthCheck,
    HealthCheckClosure,
    HealthProtocol,
    InvalidDataError,
    SerializationError,
    State,
    Status,
)

__version__ = "0.1.0"

__all__ = [
    "CLOSURE_DOWN_DETAIL",
    "DeserializationError",
    "Health",
    "HealthCheck",
    "HealthCheckClosure",
    "HealthProtocol",
    "InvalidDataError",
    "SerializationError",
    "State",
    "Status",
]
