"""TCP port check: is a process accepting connections on (host, port)?"""

import asyncio
import socket

from loguru import logger

from service_readiness.probe.base import TargetCheck
from service_readiness.probe.enums import PortExpectation
from service_readiness.probe.models import CheckObservation, PortTarget


class PortCheck(TargetCheck):
    """Observes a TCP listener with a direct connect attempt.

    A completed connection means something is listening and a refused one
    means nothing is. Any other failure (timeout, DNS error, unreachable
    host) is inconclusive and never satisfies either expectation.
    """

    def __init__(self, target: PortTarget, name: str | None = None):
        super().__init__(name or f"port_{target.host}_{target.port}_{target.expect}")
        self.target = target

    def describe(self) -> str:
        return self.target.describe()

    def _execute(self, timeout: float) -> CheckObservation:
        try:
            with socket.create_connection((self.target.host, self.target.port), timeout=timeout):
                pass
        except OSError as e:
            return self._observe(e)
        return self._observe(None)

    async def _execute_async(self, timeout: float) -> CheckObservation:
        try:
            _, writer = await asyncio.wait_for(asyncio.open_connection(self.target.host, self.target.port), timeout)
        except OSError as e:
            return self._observe(e)

        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.trace("Ignoring error while closing probe connection: {}", e)
        return self._observe(None)

    def _observe(self, error: OSError | None) -> CheckObservation:
        """Map the connect outcome onto the expected port state."""
        details = {"host": self.target.host, "port": self.target.port, "expect": str(self.target.expect)}

        if error is None:
            if self.target.expect == PortExpectation.LISTENING:
                return self.success("port listening", details)
            return self.failed("port still listening", details)

        details["error"] = str(error)
        details["type"] = type(error).__name__

        if isinstance(error, ConnectionRefusedError):
            if self.target.expect == PortExpectation.CLOSED:
                return self.success("port closed", details)
            return self.failed("port closed", details)

        if isinstance(error, TimeoutError):
            return self.failed("connect timed out", details)

        return self.failed(f"connect failed: {error}", details)
