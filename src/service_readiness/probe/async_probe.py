"""Asyncio readiness probe.

Same contract as ReadinessProbe for callers running inside an event loop,
e.g. probing several services concurrently with ``asyncio.gather``. Checks
use native asyncio I/O where they have it, and waiting between attempts never
blocks the loop.

Cancelling the surrounding task raises ``asyncio.CancelledError`` as usual;
the CancellationToken is the cooperative path that yields a CANCELLED result.
"""

from loguru import logger
from tenacity import AsyncRetrying, retry_if_result

from service_readiness.constants import DEFAULT_ATTEMPT_TIMEOUT
from service_readiness.exceptions import ProbeCancelledError

from .base import TargetCheck
from .cancellation import CancellationToken
from .check_executor import CheckExecutor
from .checks import build_check
from .models import ProbeResult, ProbeSpec, Target
from .run import ProbeRun
from .validation import validate_probe_spec, validate_target


class AsyncReadinessProbe:
    """Asyncio counterpart of ReadinessProbe. Stateless between invocations."""

    def __init__(self):
        self._check_executor = CheckExecutor()

    async def wait_until_ready(self, spec: ProbeSpec, cancel_token: CancellationToken | None = None) -> ProbeResult:
        """Wait until the target is ready or polling stops.

        Args:
            spec: What to probe and how long to keep trying
            cancel_token: Optional token the caller may cancel from any thread or task

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

        async def sleep(seconds: float) -> None:
            if await run.token.wait_async(seconds):
                raise ProbeCancelledError()

        retrying = AsyncRetrying(
            stop=run.stop_strategy(),
            wait=run.wait_strategy,
            retry=retry_if_result(run.should_retry),
            sleep=sleep,
            retry_error_callback=run.last_result,
        )

        try:
            await retrying(self._attempt, run)
        except ProbeCancelledError:
            logger.debug("Probe for {} cancelled while waiting between attempts", spec.describe())

        return run.finish()

    async def is_ready(self, target: Target | TargetCheck, timeout: float = DEFAULT_ATTEMPT_TIMEOUT) -> bool:
        """Evaluate the target once, without polling."""
        if isinstance(target, TargetCheck):
            check = target
        else:
            validate_target(target)
            check = build_check(target)
        observation = await self._check_executor.execute_async(check, timeout)
        logger.debug("{}: {}", check.describe(), observation.message)
        return observation.ready

    async def _attempt(self, run: ProbeRun):
        return run.record(await self._check_executor.execute_async(run.check, run.timeout))

    def __repr__(self) -> str:
        return "AsyncReadinessProbe()"
