"""Cancellation token shared between a probe run and its caller."""

import asyncio
import threading


class CancellationToken:
    """Thread-safe, one-shot cancellation signal.

    The caller keeps a reference and calls ``cancel()`` from any thread (or a
    signal handler); the probe waits on the token instead of sleeping so that
    cancellation interrupts the pause between attempts immediately.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Block for up to ``timeout`` seconds; return True if cancelled meanwhile."""
        return self._event.wait(timeout)

    async def wait_async(self, timeout: float, poll_interval: float = 0.05) -> bool:
        """Async counterpart of ``wait``.

        threading.Event cannot be awaited, so the token is polled in short
        slices; the slice bounds cancellation latency inside the event loop.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not self._event.is_set():
            remaining = deadline - loop.time()
            if remaining <= 0:
                return False
            await asyncio.sleep(min(poll_interval, remaining))
        return True

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
