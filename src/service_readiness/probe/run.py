"""Bookkeeping for a single wait_until_ready run.

A ProbeRun is created fresh for every call and discarded afterwards, which is
what keeps ReadinessProbe itself stateless and reentrant. It owns the attempt
counter, the last observation, the clock and the tenacity stop/wait policies
shared by the blocking and the asyncio probe.
"""

import time

import arrow
from loguru import logger
from tenacity import RetryCallState, stop_after_attempt, stop_any

from .base import TargetCheck
from .cancellation import CancellationToken
from .enums import CheckStatus, ProbeOutcome
from .models import CheckObservation, ProbeResult, ProbeSpec


class ProbeRun:
    """State of one polling run: Start -> Polling -> {Ready, TimedOut, Cancelled, Error}."""

    def __init__(self, spec: ProbeSpec, check: TargetCheck, token: CancellationToken):
        self.spec = spec
        self.check = check
        self.token = token
        self.attempts = 0
        self.last_observation: CheckObservation | None = None
        self.started_at = arrow.utcnow().isoformat()
        self._start = time.monotonic()
        self._deadline: float | None = None
        if spec.deadline is not None:
            remaining = (spec.deadline - arrow.utcnow().datetime).total_seconds()
            self._deadline = self._start + remaining

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start

    @property
    def timeout(self) -> float:
        return self.spec.effective_attempt_timeout

    def record(self, observation: CheckObservation) -> CheckObservation:
        """Record the observation of a completed attempt."""
        self.attempts += 1
        self.last_observation = observation

        if not observation.ready:
            logger.bind(
                target=self.spec.describe(),
                attempt=self.attempts,
                observation=observation.message,
                elapsed=round(self.elapsed, 3),
            ).info("Probe attempt {} on {} not ready: {}", self.attempts, self.spec.describe(), observation.message)
        return observation

    def should_retry(self, observation: CheckObservation) -> bool:
        return observation.status == CheckStatus.FAILED

    def stop_strategy(self) -> stop_any:
        """Stop on cancellation, at the deadline, or after max_attempts."""
        stops = [self._cancelled, self._deadline_reached]
        if self.spec.max_attempts is not None:
            stops.append(stop_after_attempt(self.spec.max_attempts))
        return stop_any(*stops)

    def wait_strategy(self, retry_state: RetryCallState) -> float:
        """Sleep for the interval, clamped so the last attempt lands on the deadline."""
        if self._deadline is None:
            return self.spec.interval
        remaining = self._deadline - time.monotonic()
        return max(0.0, min(self.spec.interval, remaining))

    def last_result(self, retry_state: RetryCallState) -> CheckObservation:
        """Return the last observation instead of raising RetryError once stopped."""
        return retry_state.outcome.result()

    def _cancelled(self, retry_state: RetryCallState) -> bool:
        return self.token.cancelled

    def _deadline_reached(self, retry_state: RetryCallState) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def finish(self) -> ProbeResult:
        """Build the one and only result of this run."""
        observation = self.last_observation

        if observation is not None and observation.ready:
            outcome = ProbeOutcome.READY
            message = f"Ready after {self.attempts} attempt(s)"
        elif observation is not None and observation.status == CheckStatus.ERROR:
            outcome = ProbeOutcome.ERROR
            message = f"Check failed with an error on attempt {self.attempts}: {observation.message}"
        elif self.token.cancelled:
            outcome = ProbeOutcome.CANCELLED
            message = f"Cancelled after {self.attempts} attempt(s)"
        else:
            outcome = ProbeOutcome.TIMED_OUT
            message = f"Not ready after {self.attempts} attempt(s)"

        result = ProbeResult(
            outcome=outcome,
            attempts=self.attempts,
            elapsed=self.elapsed,
            last_observation=observation,
            target_description=self.spec.describe(),
            message=message,
            started_at=self.started_at,
        )

        if outcome == ProbeOutcome.READY:
            logger.info("{}: {}", result.target_description, message)
        else:
            logger.warning(result.summary())
        return result
