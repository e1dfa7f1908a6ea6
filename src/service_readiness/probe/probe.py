"""Blocking readiness probe.

This module provides the ReadinessProbe class, the primary interface for
waiting until a managed process is ready after it has been started (or until
its port is released after it has been stopped).

Key Features:
- Immediate first attempt, then ``interval`` after each completed attempt
- Mandatory attempt and/or deadline bound, so every call terminates
- Transport failures fold into "not ready yet" observations
- Cooperative cancellation through a CancellationToken
- One structured log record per failed attempt

Typical Usage:
    spec = ProbeSpec(
        target=CompositeTarget(checks=[
            PortTarget(port=8080),
            HttpTarget(url="http://127.0.0.1:8080/job/test/config.xml"),
        ]),
        interval=1.0,
        deadline=deadline_in(120),
    )

    result = ReadinessProbe().wait_until_ready(spec)
    if not result.is_ready:
        print(result.summary())
"""

from loguru import logger
from tenacity import Retrying, retry_if_result

from service_readiness.constants import DEFAULT_ATTEMPT_TIMEOUT
from service_readiness.exceptions import ProbeCancelledError

from .base import TargetCheck
from .cancellation import CancellationToken
from .check_executor import CheckExecutor
from .checks import build_check
from .models import ProbeResult, ProbeSpec, Target
from .run import ProbeRun
from .validation import validate_probe_spec, validate_target


class ReadinessProbe:
    """Polls a target until it is ready, the budget runs out, or the caller cancels.

    The probe owns no state between invocations: every call to
    ``wait_until_ready`` builds a fresh ProbeRun, so one instance may be
    shared by any number of threads.
    """

    def __init__(self):
        self._check_executor = CheckExecutor()

    def wait_until_ready(self, spec: ProbeSpec, cancel_token: CancellationToken | None = None) -> ProbeResult:
        """Block until the target is ready or polling stops.

        Args:
            spec: What to probe and how long to keep trying
            cancel_token: Optional token the caller may cancel from another thread

        Returns:
            ProbeResult: Outcome READY, TIMED_OUT, CANCELLED or ERROR

        Raises:
            InvalidSpecError: If ``spec`` is invalid; no I/O is performed
        """
        validate_probe_spec(spec)
        check = build_check(spec.target)
        run = ProbeRun(spec, check, cancel_token or CancellationToken())

        if run.token.cancelled:
            logger.info("Probe for {} cancelled before the first attempt", spec.describe())
            return run.finish()

        logger.debug("Waiting for {} (interval={}s, max_attempts={}, deadline={})", spec.describe(), spec.interval, spec.max_attempts, spec.deadline)

        def sleep(seconds: float) -> None:
            if run.token.wait(seconds):
                raise ProbeCancelledError()

        retrying = Retrying(
            stop=run.stop_strategy(),
            wait=run.wait_strategy,
            retry=retry_if_result(run.should_retry),
            sleep=sleep,
            retry_error_callback=run.last_result,
        )

        try:
            retrying(self._attempt, run)
        except ProbeCancelledError:
            logger.debug("Probe for {} cancelled while waiting between attempts", spec.describe())

        return run.finish()

    def is_ready(self, target: Target | TargetCheck, timeout: float = DEFAULT_ATTEMPT_TIMEOUT) -> bool:
        """Evaluate the target once, without polling.

        Args:
            target: A target description or an already built check
            timeout: Network timeout in seconds for this evaluation

        Returns:
            bool: True if the target's success condition holds right now

        Raises:
            InvalidSpecError: If a target description is invalid
        """
        if isinstance(target, TargetCheck):
            check = target
        else:
            validate_target(target)
            check = build_check(target)
        observation = self._check_executor.execute(check, timeout)
        logger.debug("{}: {}", check.describe(), observation.message)
        return observation.ready

    def _attempt(self, run: ProbeRun):
        return run.record(self._check_executor.execute(run.check, run.timeout))

    def __repr__(self) -> str:
        return "ReadinessProbe()"
