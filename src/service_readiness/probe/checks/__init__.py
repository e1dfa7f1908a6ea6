"""Target check implementations and the factory turning target descriptions into checks."""

from service_readiness.probe.base import TargetCheck
from service_readiness.probe.models import CompositeTarget, HttpTarget, PidFileTarget, PortTarget, Target

from .composite import CompositeCheck
from .http import HttpStatusCheck
from .pid_file import PidFileCheck
from .port import PortCheck


def build_check(target: Target) -> TargetCheck:
    """Build the check for a target description.

    Composite targets are built recursively, keeping the declared order.

    Args:
        target: Port, HTTP, pid file or composite target

    Returns:
        TargetCheck: A check ready to be evaluated

    Raises:
        TypeError: If the target kind is unknown
    """
    if isinstance(target, PortTarget):
        return PortCheck(target)
    if isinstance(target, HttpTarget):
        return HttpStatusCheck(target)
    if isinstance(target, PidFileTarget):
        return PidFileCheck(target)
    if isinstance(target, CompositeTarget):
        return CompositeCheck([build_check(check) for check in target.checks])
    raise TypeError(f"Unsupported target: {type(target).__name__}")


__all__ = [
    "build_check",
    "CompositeCheck",
    "HttpStatusCheck",
    "PidFileCheck",
    "PortCheck",
]
