"""Common exceptions for service readiness probes.

Only spec validation problems are reported to callers as exceptions. Timeouts,
cancellation and transport failures are regular ``ProbeResult`` outcomes.
"""


class InvalidSpecError(ValueError):
    """Raised when a probe spec cannot be run.

    Validation happens before any I/O, so a caller receiving this error knows
    that no connection or request was attempted.
    """

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__(f"Invalid probe spec: {'; '.join(problems)}")


class ProbeCancelledError(Exception):
    """Raised internally when the cancellation token fires while waiting between attempts."""
