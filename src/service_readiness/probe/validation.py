"""Probe spec validation.

Everything here runs before the first attempt so that an invalid spec never
causes network I/O.
"""

import arrow
import httpx

from service_readiness.constants import ALLOWED_HTTP_METHODS
from service_readiness.exceptions import InvalidSpecError

from .models import CompositeTarget, HttpTarget, ProbeSpec, Target


def _target_problems(target: Target) -> list[str]:
    """Collect problems of a target, descending into composites."""
    if isinstance(target, CompositeTarget):
        return [problem for check in target.checks for problem in _target_problems(check)]

    if not isinstance(target, HttpTarget):
        return []

    problems = []
    try:
        url = httpx.URL(target.url)
    except httpx.InvalidURL as e:
        return [f"malformed URL {target.url!r}: {e}"]

    if url.scheme not in ("http", "https"):
        problems.append(f"URL {target.url!r} must use http or https")
    if not url.host:
        problems.append(f"URL {target.url!r} has no host")
    if target.method.upper() not in ALLOWED_HTTP_METHODS:
        problems.append(f"HTTP method {target.method!r} is not one of {', '.join(sorted(ALLOWED_HTTP_METHODS))}")
    if not target.acceptable_statuses:
        problems.append(f"no acceptable status codes for {target.url!r}")
    return problems


def validate_probe_spec(spec: ProbeSpec) -> None:
    """Validate a probe spec at call time.

    Args:
        spec: The spec about to be run

    Raises:
        InvalidSpecError: With every problem found, if any
    """
    problems = []

    if spec.interval <= 0:
        problems.append(f"interval must be > 0, got {spec.interval}")
    if spec.max_attempts is not None and spec.max_attempts < 1:
        problems.append(f"max_attempts must be >= 1, got {spec.max_attempts}")
    if spec.max_attempts is None and spec.deadline is None:
        problems.append("either max_attempts or deadline must be set")
    if spec.deadline is not None:
        if spec.deadline.tzinfo is None:
            problems.append("deadline must be timezone-aware")
        elif spec.deadline <= arrow.utcnow().datetime:
            problems.append(f"deadline {spec.deadline.isoformat()} is not in the future")
    if spec.attempt_timeout is not None and spec.attempt_timeout <= 0:
        problems.append(f"attempt_timeout must be > 0, got {spec.attempt_timeout}")

    problems.extend(_target_problems(spec.target))

    if problems:
        raise InvalidSpecError(problems)


def validate_target(target: Target) -> None:
    """Validate a single target before a one-off evaluation.

    Raises:
        InvalidSpecError: With every problem found, if any
    """
    problems = _target_problems(target)
    if problems:
        raise InvalidSpecError(problems)
