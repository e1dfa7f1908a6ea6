"""CLI utility functions shared across commands.

This module contains generic CLI utilities for:
- Building probe targets from command line options
- Cancelling a running probe on Ctrl-C
- Console output and exit codes
"""

import signal
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from service_readiness.constants import DEFAULT_ACCEPTABLE_STATUSES
from service_readiness.exceptions import InvalidSpecError
from service_readiness.probe import (
    CancellationToken,
    CompositeTarget,
    HttpTarget,
    PidFileTarget,
    PortTarget,
    ProbeOutcome,
    ProbeResult,
    Target,
)

console = Console()

EXIT_CODES = {
    ProbeOutcome.READY: 0,
    ProbeOutcome.TIMED_OUT: 1,
    ProbeOutcome.ERROR: 2,
    ProbeOutcome.CANCELLED: 130,
}


def build_target(
    host: str,
    port: int | None,
    url: str | None,
    statuses: list[int] | None,
    pid_file: Path | None,
    follow_redirects: bool = False,
) -> Target:
    """Build a target from CLI options.

    Checks run in the order a service comes up: its pid file is written,
    then it binds its port, then it answers HTTP.

    Raises:
        typer.Exit: If no check was requested
    """
    checks: list[Target] = []
    if pid_file is not None:
        checks.append(PidFileTarget(path=pid_file))
    if port is not None:
        checks.append(PortTarget(host=host, port=port))
    if url is not None:
        acceptable = frozenset(statuses) if statuses else DEFAULT_ACCEPTABLE_STATUSES
        checks.append(HttpTarget(url=url, acceptable_statuses=acceptable, follow_redirects=follow_redirects))

    if not checks:
        console.print("[red]Error: nothing to check, pass at least one of --port, --url or --pid-file[/red]")
        raise typer.Exit(2)

    if len(checks) == 1:
        return checks[0]
    return CompositeTarget(checks=checks)


def exit_invalid_spec(error: InvalidSpecError) -> None:
    """Print every problem of an invalid spec and exit with code 2.

    Raises:
        typer.Exit: Always
    """
    console.print("[red]Error: invalid probe options[/red]")
    for problem in error.problems:
        console.print(f"  - {escape(problem)}")
    raise typer.Exit(2) from error


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Generator[CancellationToken]:
    """Cancel ``token`` on SIGINT instead of raising KeyboardInterrupt.

    Signal handlers can only be installed from the main thread; elsewhere the
    default behavior is kept.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    def _handler(signum, frame):
        console.print("\n[yellow]Interrupted, cancelling...[/yellow]")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


def report_result(result: ProbeResult) -> None:
    """Print the probe result and exit with the matching code.

    Raises:
        typer.Exit: If the outcome is not READY
    """
    if result.is_ready:
        console.print(f"[green]{escape(result.target_description)} is ready[/green] [dim]({result.attempts} attempt(s), {result.elapsed:.1f}s)[/dim]")
        return

    color = "yellow" if result.outcome == ProbeOutcome.CANCELLED else "red"
    console.print(f"[{color}]{escape(result.target_description)}: {result.outcome}[/{color}]")
    console.print(f"  attempts: {result.attempts}")
    console.print(f"  elapsed: {result.elapsed:.1f}s")
    if result.last_observation is not None:
        console.print(f"  last observation: {escape(result.last_observation.message)}")
        failed_target = result.last_observation.details.get("failed_target")
        if failed_target:
            console.print(f"  waiting on: {escape(failed_target)}")
    raise typer.Exit(EXIT_CODES[result.outcome])
