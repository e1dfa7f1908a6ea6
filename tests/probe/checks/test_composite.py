"""Tests for CompositeCheck and the check factory."""

from pathlib import Path

import pytest

from service_readiness.probe import (
    CheckObservation,
    CheckStatus,
    CompositeCheck,
    CompositeTarget,
    HttpStatusCheck,
    HttpTarget,
    PidFileCheck,
    PidFileTarget,
    PortCheck,
    PortTarget,
    TargetCheck,
    build_check,
)


class CountingCheck(TargetCheck):
    """Check with a fixed answer that counts its evaluations."""

    def __init__(self, name: str, ready: bool):
        super().__init__(name)
        self.ready = ready
        self.calls = 0

    def _execute(self, timeout: float) -> CheckObservation:
        self.calls += 1
        if self.ready:
            return self.success(f"{self.name} ok", {"sub": self.name})
        return self.failed(f"{self.name} down", {"sub": self.name})


class TestCompositeCheck:
    """Ordered evaluation within one attempt."""

    def test_all_pass(self):
        first, second = CountingCheck("first", True), CountingCheck("second", True)

        observation = CompositeCheck([first, second]).run(1.0)

        assert observation.status == CheckStatus.SUCCESS
        assert observation.message == "all 2 checks passed"
        assert observation.evaluated_checks == ["first", "second"]

    def test_stops_at_first_failure(self):
        """A later sub-check is not evaluated once an earlier one failed."""
        first, second, third = CountingCheck("first", True), CountingCheck("second", False), CountingCheck("third", True)

        observation = CompositeCheck([first, second, third]).run(1.0)

        assert observation.status == CheckStatus.FAILED
        assert observation.message == "second down"
        assert observation.details["failed_check"] == "second"
        assert observation.details["sub"] == "second"
        assert observation.evaluated_checks == ["first", "second"]
        assert (first.calls, second.calls, third.calls) == (1, 1, 0)

    def test_nested_composites_report_leaf_checks(self):
        inner = CompositeCheck([CountingCheck("a", True), CountingCheck("b", True)], name="inner")
        outer = CompositeCheck([inner, CountingCheck("c", False)])

        observation = outer.run(1.0)

        assert observation.evaluated_checks == ["a", "b", "c"]
        assert observation.details["failed_check"] == "c"

    def test_empty_composite_rejected(self):
        with pytest.raises(ValueError):
            CompositeCheck([])

    @pytest.mark.asyncio
    async def test_async_ordering(self):
        first, second = CountingCheck("first", False), CountingCheck("second", True)

        observation = await CompositeCheck([first, second]).run_async(1.0)

        assert observation.status == CheckStatus.FAILED
        assert second.calls == 0


class TestBuildCheck:
    """Target descriptions to checks."""

    def test_builds_each_kind(self):
        assert isinstance(build_check(PortTarget(port=80)), PortCheck)
        assert isinstance(build_check(HttpTarget(url="http://localhost/")), HttpStatusCheck)
        assert isinstance(build_check(PidFileTarget(path=Path("/run/x.pid"))), PidFileCheck)

    def test_builds_composite_in_order(self):
        target = CompositeTarget(checks=[PortTarget(port=8080), HttpTarget(url="http://localhost:8080/")])

        check = build_check(target)

        assert isinstance(check, CompositeCheck)
        assert [type(sub) for sub in check.checks] == [PortCheck, HttpStatusCheck]
        assert check.describe() == "tcp://127.0.0.1:8080 listening -> GET http://localhost:8080/"

    def test_unknown_target(self):
        with pytest.raises(TypeError):
            build_check("port 80")
