"""Data models for the readiness probe runtime.

This module contains the Pydantic models shared by the probe, the checks and
the CLI: target descriptions, the immutable ``ProbeSpec`` passed per call, the
per-attempt ``CheckObservation`` and the final ``ProbeResult``.
"""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, Literal

import arrow
from pydantic import BaseModel, Field

from service_readiness.constants import DEFAULT_ACCEPTABLE_STATUSES, DEFAULT_HOST, DEFAULT_HTTP_METHOD

from .enums import CheckStatus, PortExpectation, ProbeOutcome


class PortTarget(BaseModel):
    """A TCP listener on (host, port), or its absence when ``expect`` is CLOSED."""

    model_config = {"frozen": True}

    kind: Literal["port"] = "port"
    host: str = DEFAULT_HOST
    port: int = Field(ge=1, le=65535)
    expect: PortExpectation = PortExpectation.LISTENING

    def describe(self) -> str:
        return f"tcp://{self.host}:{self.port} {self.expect}"


class HttpTarget(BaseModel):
    """An HTTP endpoint answering with one of the acceptable status codes."""

    model_config = {"frozen": True}

    kind: Literal["http"] = "http"
    url: str
    method: str = DEFAULT_HTTP_METHOD
    acceptable_statuses: frozenset[int] = DEFAULT_ACCEPTABLE_STATUSES
    follow_redirects: bool = False

    def describe(self) -> str:
        return f"{self.method.upper()} {self.url}"


class PidFileTarget(BaseModel):
    """A pid file naming a process that is still alive."""

    model_config = {"frozen": True}

    kind: Literal["pid_file"] = "pid_file"
    path: Path

    def describe(self) -> str:
        return f"pid file {self.path}"


class CompositeTarget(BaseModel):
    """Ordered checks that must all succeed within the same attempt."""

    model_config = {"frozen": True}

    kind: Literal["composite"] = "composite"
    checks: list["Target"] = Field(min_length=1)

    def describe(self) -> str:
        return " -> ".join(check.describe() for check in self.checks)


Target = Annotated[PortTarget | HttpTarget | PidFileTarget | CompositeTarget, Field(discriminator="kind")]

CompositeTarget.model_rebuild()


def deadline_in(seconds: float) -> datetime:
    """Return a timezone-aware deadline ``seconds`` from now."""
    return arrow.utcnow().shift(seconds=seconds).datetime


class ProbeSpec(BaseModel):
    """Immutable description of one wait_until_ready run.

    At least one of ``max_attempts`` and ``deadline`` must be set; whichever is
    reached first stops polling. Durations are in seconds.
    """

    model_config = {"frozen": True}

    target: Target
    interval: float
    max_attempts: int | None = None
    deadline: datetime | None = None
    attempt_timeout: float | None = None
    name: str | None = None

    @property
    def effective_attempt_timeout(self) -> float:
        """Per-attempt network timeout, never longer than the interval."""
        if self.attempt_timeout is None:
            return self.interval
        return min(self.attempt_timeout, self.interval)

    def describe(self) -> str:
        return self.name or self.target.describe()


class CheckObservation(BaseModel):
    """Raw outcome of one point-in-time check evaluation."""

    model_config = {"use_enum_values": True}

    status: CheckStatus
    message: str
    check_name: str
    details: dict[str, Any] = Field(default_factory=dict)
    evaluated_checks: list[str] = Field(default_factory=list)
    executed_at: str | None = None  # ISO 8601 UTC timestamp
    execution_time_ms: float | None = None

    @property
    def ready(self) -> bool:
        return self.status == CheckStatus.SUCCESS


class ProbeResult(BaseModel):
    """Final result of a wait_until_ready run, produced exactly once per call."""

    model_config = {"frozen": True}

    outcome: ProbeOutcome
    attempts: int = 0
    elapsed: float = 0.0  # seconds
    last_observation: CheckObservation | None = None
    target_description: str = ""
    message: str = ""
    started_at: str = Field(default_factory=lambda: arrow.utcnow().isoformat())
    finished_at: str = Field(default_factory=lambda: arrow.utcnow().isoformat())

    @property
    def is_ready(self) -> bool:
        return self.outcome == ProbeOutcome.READY

    def summary(self) -> str:
        """One line an operator can act on without re-running with verbose logging."""
        observation = self.last_observation.message if self.last_observation else "no observation"
        return (
            f"{self.target_description}: {self.outcome} after {self.attempts} attempt(s) in {self.elapsed:.1f}s "
            f"(last observation: {observation})"
        )
