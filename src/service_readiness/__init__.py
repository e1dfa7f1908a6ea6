"""Polling readiness probes for provisioned services."""

from .exceptions import InvalidSpecError
from .probe import (
    AsyncReadinessProbe,
    CancellationToken,
    CompositeTarget,
    HttpTarget,
    PidFileTarget,
    PortExpectation,
    PortTarget,
    ProbeOutcome,
    ProbeResult,
    ProbeSpec,
    ReadinessProbe,
    deadline_in,
)
from .settings import Settings, get_settings  # noqa: F401

__all__ = [
    "AsyncReadinessProbe",
    "CancellationToken",
    "CompositeTarget",
    "HttpTarget",
    "InvalidSpecError",
    "PidFileTarget",
    "PortExpectation",
    "PortTarget",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeSpec",
    "ReadinessProbe",
    "Settings",
    "deadline_in",
    "get_settings",
]
