"""Enums for the readiness probe runtime.

This module contains basic enums to avoid circular dependencies.
"""

from enum import StrEnum


class CheckStatus(StrEnum):
    """Status of a single point-in-time check evaluation."""

    SUCCESS = "success"
    FAILED = "failed"  # Not ready yet, includes transport failures
    ERROR = "error"  # Check itself is broken, polling must stop


class ProbeOutcome(StrEnum):
    """Terminal outcome of a wait_until_ready run."""

    READY = "ready"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    ERROR = "error"


class PortExpectation(StrEnum):
    """What a port check expects to observe on (host, port)."""

    LISTENING = "listening"
    CLOSED = "closed"
