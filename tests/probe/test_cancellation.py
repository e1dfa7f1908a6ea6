"""Tests for CancellationToken."""

import asyncio
import threading
import time

import pytest

from service_readiness.probe import CancellationToken


class TestCancellationToken:
    def test_initially_not_cancelled(self):
        token = CancellationToken()

        assert not token.cancelled
        assert token.wait(0.01) is False

    def test_cancel_is_idempotent(self):
        token = CancellationToken()
        token.cancel()
        token.cancel()

        assert token.cancelled
        assert token.wait(10) is True

    def test_cancel_from_other_thread_interrupts_wait(self):
        """A waiting thread wakes up as soon as another thread cancels."""
        token = CancellationToken()
        threading.Timer(0.05, token.cancel).start()

        start = time.monotonic()
        assert token.wait(5) is True
        assert time.monotonic() - start < 1

    @pytest.mark.asyncio
    async def test_wait_async_times_out(self):
        assert await CancellationToken().wait_async(0.05) is False

    @pytest.mark.asyncio
    async def test_wait_async_interrupted(self):
        token = CancellationToken()
        asyncio.get_running_loop().call_later(0.05, token.cancel)

        start = time.monotonic()
        assert await token.wait_async(5) is True
        assert time.monotonic() - start < 1
