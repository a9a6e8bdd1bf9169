"""Health subsystem — Status snapshot, check variants, caching aggregator."""

from .aggregator import Health, HealthProtocol
from .checks import CLOSURE_DOWN_DETAIL, HealthCheck, HealthCheckClosure
from .status import (
    DeserializationError,
    InvalidDataError,
    SerializationError,
    State,
    Status,
)
