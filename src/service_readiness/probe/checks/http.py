"""HTTP readiness check backed by httpx."""

import httpx

from service_readiness.probe.base import TargetCheck
from service_readiness.probe.models import CheckObservation, HttpTarget


class HttpStatusCheck(TargetCheck):
    """Succeeds when the endpoint answers with an acceptable status code.

    Answering at all, even with 404 for an unmapped path, shows that the
    application server is serving requests. Which codes count is up to the
    target's ``acceptable_statuses``.
    """

    def __init__(
        self,
        target: HttpTarget,
        name: str | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the HTTP check.

        Args:
            target: Endpoint and acceptable statuses
            name: Name of this check, derived from the URL when omitted
            transport: Optional httpx transport (tests use httpx.MockTransport)
            async_transport: Optional httpx transport for the asyncio path
        """
        super().__init__(name or f"http_{target.url}")
        self.target = target
        self.transport = transport
        self.async_transport = async_transport

    def describe(self) -> str:
        return self.target.describe()

    def _execute(self, timeout: float) -> CheckObservation:
        try:
            with httpx.Client(timeout=timeout, follow_redirects=self.target.follow_redirects, transport=self.transport) as client:
                response = client.request(self.target.method.upper(), self.target.url)
        except httpx.HTTPError as e:
            return self._transport_failure(e)
        return self._observe(response)

    async def _execute_async(self, timeout: float) -> CheckObservation:
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=self.target.follow_redirects,
                transport=self.async_transport,
            ) as client:
                response = await client.request(self.target.method.upper(), self.target.url)
        except httpx.HTTPError as e:
            return self._transport_failure(e)
        return self._observe(response)

    def _observe(self, response: httpx.Response) -> CheckObservation:
        details = {"url": self.target.url, "status_code": response.status_code}
        message = f"HTTP {response.status_code}"
        if response.status_code in self.target.acceptable_statuses:
            return self.success(message, details)
        return self.failed(message, details)

    def _transport_failure(self, error: httpx.HTTPError) -> CheckObservation:
        kind = "request timed out" if isinstance(error, httpx.TimeoutException) else "request failed"
        return self.failed(
            f"{kind}: {error}" if str(error) else kind,
            {"url": self.target.url, "error": str(error), "type": type(error).__name__},
        )
