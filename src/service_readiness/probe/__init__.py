"""Readiness probe runtime.

This module provides polling readiness probes for managed processes:
- Point-in-time target checks (TCP port, HTTP status, pid file, composite)
- Blocking and asyncio probes polling a check until ready or out of budget
- Immutable ProbeSpec in, immutable ProbeResult out
- Cooperative cancellation through CancellationToken

Timeouts and cancellation are regular outcomes; only an invalid spec raises.
"""

from .async_probe import AsyncReadinessProbe
from .base import TargetCheck
from .cancellation import CancellationToken
from .checks import CompositeCheck, HttpStatusCheck, PidFileCheck, PortCheck, build_check
from .enums import CheckStatus, PortExpectation, ProbeOutcome
from .models import (
    CheckObservation,
    CompositeTarget,
    HttpTarget,
    PidFileTarget,
    PortTarget,
    ProbeResult,
    ProbeSpec,
    Target,
    deadline_in,
)
from .probe import ReadinessProbe
from .validation import validate_probe_spec, validate_target

__all__ = [
    # Models
    "CheckObservation",
    "CheckStatus",
    "CompositeTarget",
    "HttpTarget",
    "PidFileTarget",
    "PortExpectation",
    "PortTarget",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeSpec",
    "Target",
    "deadline_in",
    # Checks
    "TargetCheck",
    "CompositeCheck",
    "HttpStatusCheck",
    "PidFileCheck",
    "PortCheck",
    "build_check",
    # Probes
    "AsyncReadinessProbe",
    "CancellationToken",
    "ReadinessProbe",
    "validate_probe_spec",
    "validate_target",
]
