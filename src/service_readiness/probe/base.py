"""Base abstractions for readiness target checks."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from .enums import CheckStatus
from .models import CheckObservation


class TargetCheck(ABC):
    """Abstract base class for point-in-time target checks.

    A check never retries internally and never raises for transport failures:
    a refused connection or a request timeout is reported as a FAILED
    observation so the caller can poll again.
    """

    def __init__(self, name: str):
        """Initialize the target check.

        Args:
            name: The name of this check (used in observation.check_name)
        """
        self.name = name

    @abstractmethod
    def _execute(self, timeout: float) -> CheckObservation:
        """Evaluate the target once.

        This method should be implemented by subclasses.

        Args:
            timeout: Upper bound in seconds for any network operation

        Returns:
            CheckObservation: The observed state of the target
        """

    async def _execute_async(self, timeout: float) -> CheckObservation:
        """Evaluate the target once without blocking the event loop.

        Subclasses doing network I/O override this with a native asyncio
        implementation; the default runs the blocking check in a worker thread.
        """
        return await asyncio.to_thread(self._execute, timeout)

    def run(self, timeout: float) -> CheckObservation:
        """Evaluate the target once and record which checks were evaluated."""
        observation = self._execute(timeout)
        if not observation.evaluated_checks:
            observation.evaluated_checks = [self.name]
        return observation

    async def run_async(self, timeout: float) -> CheckObservation:
        """Async counterpart of ``run``."""
        observation = await self._execute_async(timeout)
        if not observation.evaluated_checks:
            observation.evaluated_checks = [self.name]
        return observation

    def describe(self) -> str:
        """Human-readable description of what is being checked."""
        return self.name

    def success(self, message: str, details: dict[str, Any] | None = None) -> CheckObservation:
        """Return a successful observation."""
        return CheckObservation(
            check_name=self.name,
            status=CheckStatus.SUCCESS,
            message=message,
            details=details or {},
        )

    def failed(self, message: str, details: dict[str, Any] | None = None) -> CheckObservation:
        """Return a not-ready-yet observation."""
        return CheckObservation(
            check_name=self.name,
            status=CheckStatus.FAILED,
            message=message,
            details=details or {},
        )

    def __str__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}')"
