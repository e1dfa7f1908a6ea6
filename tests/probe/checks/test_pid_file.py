"""Tests for PidFileCheck."""

import os
from unittest.mock import patch

import pytest

from service_readiness.probe import (
    AsyncReadinessProbe,
    CheckStatus,
    PidFileCheck,
    PidFileTarget,
    ProbeOutcome,
    ProbeSpec,
    ReadinessProbe,
)


class TestPidFileCheck:
    """Process liveness from a pid file."""

    def test_running_process(self, tmp_path):
        """The pid of the test process itself is alive."""
        pid_file = tmp_path / "service.pid"
        pid_file.write_text(f"{os.getpid()}\n")

        observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.SUCCESS
        assert observation.details["pid"] == os.getpid()

    def test_missing_pid_file(self, tmp_path):
        observation = PidFileCheck(PidFileTarget(path=tmp_path / "missing.pid")).run(1.0)

        assert observation.status == CheckStatus.FAILED
        assert observation.message == "pid file missing"

    def test_garbage_pid_file(self, tmp_path):
        pid_file = tmp_path / "service.pid"
        pid_file.write_text("not-a-pid")

        observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.FAILED
        assert "holds no pid" in observation.message

    def test_dead_process(self, tmp_path):
        pid_file = tmp_path / "service.pid"
        pid_file.write_text("424242")

        with patch("service_readiness.probe.checks.pid_file.os.kill", side_effect=ProcessLookupError()):
            observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.FAILED
        assert observation.message == "process 424242 not running"

    def test_process_owned_by_other_user(self, tmp_path):
        """Permission denied on signal 0 still proves the process exists."""
        pid_file = tmp_path / "service.pid"
        pid_file.write_text("1")

        with patch("service_readiness.probe.checks.pid_file.os.kill", side_effect=PermissionError()):
            observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.SUCCESS

    def test_non_positive_pid(self, tmp_path):
        """Signalling pid 0 or negative pids would target process groups."""
        pid_file = tmp_path / "service.pid"
        pid_file.write_text("0")

        with patch("service_readiness.probe.checks.pid_file.os.kill") as kill:
            observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.FAILED
        kill.assert_not_called()

    def test_pid_beyond_platform_range(self, tmp_path):
        """A number too large for a pid is reported as not ready instead of raising."""
        pid_file = tmp_path / "service.pid"
        pid_file.write_text("99999999999999999999999")

        observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.FAILED
        assert observation.message == "invalid pid 99999999999999999999999"

    def test_undecodable_pid_file(self, tmp_path):
        """Binary garbage is a pid file without a pid, not a broken check."""
        pid_file = tmp_path / "service.pid"
        pid_file.write_bytes(b"\xff\xfe12")

        observation = PidFileCheck(PidFileTarget(path=pid_file)).run(1.0)

        assert observation.status == CheckStatus.FAILED
        assert "holds no pid" in observation.message


class TestPidFileWait:
    """Malformed pid files keep polling until the budget runs out."""

    @pytest.mark.parametrize("content", [b"99999999999999999999999", b"\xff\xfe12"])
    def test_times_out_with_result(self, tmp_path, content):
        pid_file = tmp_path / "service.pid"
        pid_file.write_bytes(content)
        spec = ProbeSpec(target=PidFileTarget(path=pid_file), interval=0.01, max_attempts=2)

        result = ReadinessProbe().wait_until_ready(spec)

        assert result.outcome == ProbeOutcome.TIMED_OUT
        assert result.attempts == 2

    @pytest.mark.asyncio
    async def test_async_times_out_with_result(self, tmp_path):
        pid_file = tmp_path / "service.pid"
        pid_file.write_text("99999999999999999999999")
        spec = ProbeSpec(target=PidFileTarget(path=pid_file), interval=0.01, max_attempts=2)

        result = await AsyncReadinessProbe().wait_until_ready(spec)

        assert result.outcome == ProbeOutcome.TIMED_OUT
        assert result.attempts == 2
