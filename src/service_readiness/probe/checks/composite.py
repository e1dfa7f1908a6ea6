"""Composite check: ordered sub-checks that must all pass in the same attempt."""

from service_readiness.probe.base import TargetCheck
from service_readiness.probe.models import CheckObservation


class CompositeCheck(TargetCheck):
    """Evaluates sub-checks in declared order, stopping at the first one not ready.

    A later sub-check is only evaluated when every earlier one passed in the
    same attempt, e.g. the HTTP endpoint is not requested while the port is
    still closed.
    """

    def __init__(self, checks: list[TargetCheck], name: str | None = None):
        if not checks:
            raise ValueError("A composite check needs at least one sub-check")
        super().__init__(name or "+".join(check.name for check in checks))
        self.checks = checks

    def describe(self) -> str:
        return " -> ".join(check.describe() for check in self.checks)

    def _execute(self, timeout: float) -> CheckObservation:
        evaluated: list[str] = []
        for check in self.checks:
            observation = check.run(timeout)
            evaluated.extend(observation.evaluated_checks)
            if not observation.ready:
                return self._stopped_at(check, observation, evaluated)
        return self._all_passed(evaluated)

    async def _execute_async(self, timeout: float) -> CheckObservation:
        evaluated: list[str] = []
        for check in self.checks:
            observation = await check.run_async(timeout)
            evaluated.extend(observation.evaluated_checks)
            if not observation.ready:
                return self._stopped_at(check, observation, evaluated)
        return self._all_passed(evaluated)

    def _stopped_at(self, check: TargetCheck, observation: CheckObservation, evaluated: list[str]) -> CheckObservation:
        """Report the first sub-check that is not ready as this attempt's observation."""
        return CheckObservation(
            status=observation.status,
            message=observation.message,
            check_name=self.name,
            details={**observation.details, "failed_check": check.name, "failed_target": check.describe()},
            evaluated_checks=evaluated,
        )

    def _all_passed(self, evaluated: list[str]) -> CheckObservation:
        observation = self.success(f"all {len(self.checks)} checks passed", {"checks": [check.name for check in self.checks]})
        observation.evaluated_checks = evaluated
        return observation
