"""Attempt execution for readiness probes.

This module provides the CheckExecutor class responsible for running one poll
attempt against a target check. It handles timing, converts programming errors
raised by a check into ERROR observations, and enriches observations with
execution timestamps.

Key Features:
- Single attempt execution with timing measurement
- Exception handling and conversion to ERROR observations
- Result enrichment with execution timestamps
- Blocking and asyncio entry points sharing the same bookkeeping
"""

import arrow
from loguru import logger

from .base import TargetCheck
from .enums import CheckStatus
from .models import CheckObservation

# Transport failures never reach this level; checks fold them into FAILED
# observations. What does arrive here is a broken check.
CHECK_ERRORS = (ValueError, TypeError, RuntimeError, AttributeError)


class CheckExecutor:
    """Handles execution of a single poll attempt.

    The CheckExecutor runs a TargetCheck, measures its execution time and
    guarantees that the caller always receives an observation. It provides a
    clean separation between the polling loop (handled by ReadinessProbe) and
    the mechanics of a single attempt.

    Attributes:
        None (stateless executor - all state is in the observations)
    """

    def execute(self, check: TargetCheck, timeout: float) -> CheckObservation:
        """Execute one attempt and return its enriched observation.

        Args:
            check: The check to evaluate
            timeout: Per-attempt network timeout in seconds

        Returns:
            CheckObservation: Observation with timing and timestamp set. A
                check raising a programming error yields an ERROR observation.
        """
        logger.trace("Running check: {}", check.name)
        start_time = arrow.utcnow().float_timestamp
        executed_at = arrow.utcnow().isoformat()

        try:
            observation = check.run(timeout)
        except CHECK_ERRORS as e:
            return self._handle_check_exception(check, e, start_time)

        return self._enrich(observation, start_time, executed_at)

    async def execute_async(self, check: TargetCheck, timeout: float) -> CheckObservation:
        """Async counterpart of ``execute``."""
        logger.trace("Running check: {}", check.name)
        start_time = arrow.utcnow().float_timestamp
        executed_at = arrow.utcnow().isoformat()

        try:
            observation = await check.run_async(timeout)
        except CHECK_ERRORS as e:
            return self._handle_check_exception(check, e, start_time)

        return self._enrich(observation, start_time, executed_at)

    def _enrich(self, observation: CheckObservation, start_time: float, executed_at: str) -> CheckObservation:
        observation.executed_at = executed_at
        observation.execution_time_ms = (arrow.utcnow().float_timestamp - start_time) * 1000
        return observation

    def _handle_check_exception(self, check: TargetCheck, e: Exception, start_time: float) -> CheckObservation:
        """Convert an exception raised by a check into an ERROR observation.

        Args:
            check: The check that raised
            e: The exception raised during evaluation
            start_time: Timestamp when the attempt started

        Returns:
            CheckObservation: An ERROR observation with exception details
        """
        observation = CheckObservation(
            status=CheckStatus.ERROR,
            message=f"Check execution failed: {e}",
            check_name=check.name,
            evaluated_checks=[check.name],
            executed_at=arrow.utcnow().isoformat(),
            execution_time_ms=(arrow.utcnow().float_timestamp - start_time) * 1000,
            details={"exception": str(e), "type": type(e).__name__},
        )

        logger.error("Check {} threw exception: {}", check.name, e)
        return observation
