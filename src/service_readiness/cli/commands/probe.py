"""Probe commands: wait for a service to come up, go down, or check it once."""

from pathlib import Path

import typer
from rich.markup import escape

from service_readiness.cli.utils import build_target, cancel_on_interrupt, console, exit_invalid_spec, report_result
from service_readiness.constants import DEFAULT_RELEASE_ATTEMPTS
from service_readiness.exceptions import InvalidSpecError
from service_readiness.probe import (
    CancellationToken,
    PortExpectation,
    PortTarget,
    ProbeSpec,
    ReadinessProbe,
    Target,
    deadline_in,
)
from service_readiness.settings import get_settings

app = typer.Typer(help="Readiness probes")


def _run(spec: ProbeSpec) -> None:
    """Run a probe spec with Ctrl-C cancellation and report its result."""
    try:
        with cancel_on_interrupt(CancellationToken()) as token:
            result = ReadinessProbe().wait_until_ready(spec, token)
    except InvalidSpecError as e:
        exit_invalid_spec(e)
    report_result(result)


def _build_spec(
    target: Target,
    interval: float | None,
    max_attempts: int | None,
    timeout: float | None,
    attempt_timeout: float | None,
) -> ProbeSpec:
    settings = get_settings()
    if max_attempts is None:
        max_attempts = settings.max_attempts
    if timeout is None and max_attempts is None:
        timeout = settings.timeout
    return ProbeSpec(
        target=target,
        interval=interval if interval is not None else settings.interval,
        max_attempts=max_attempts,
        deadline=deadline_in(timeout) if timeout is not None else None,
        attempt_timeout=attempt_timeout if attempt_timeout is not None else settings.attempt_timeout,
    )


@app.command()
def wait(
    port: int | None = typer.Option(None, "--port", "-p", min=1, max=65535, help="TCP port the service listens on"),
    url: str | None = typer.Option(None, "--url", "-u", help="HTTP URL the service must answer"),
    status: list[int] | None = typer.Option(
        None,
        "--status",
        "-s",
        help="Acceptable HTTP status code (repeatable); default: any 2xx or 404",
    ),
    pid_file: Path | None = typer.Option(None, "--pid-file", help="Pid file naming the service process"),
    host: str | None = typer.Option(None, "--host", "-H", help="Host for the port check"),
    interval: float | None = typer.Option(None, "--interval", "-i", help="Seconds between attempts"),
    max_attempts: int | None = typer.Option(None, "--max-attempts", "-n", help="Give up after this many attempts"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Give up after this many seconds"),
    attempt_timeout: float | None = typer.Option(None, "--attempt-timeout", help="Network timeout of one attempt"),
    follow_redirects: bool = typer.Option(False, "--follow-redirects", help="Follow HTTP redirects"),
):
    """Wait until a service is up: pid file alive, port listening, HTTP answering.

    Checks run in that order within each attempt; a later check only runs
    once the earlier ones pass.

    Examples:
        service-readiness probe wait --port 8080 --url http://127.0.0.1:8080/login
        service-readiness probe wait -p 5432 --timeout 30
    """
    target = build_target(host or get_settings().host, port, url, status, pid_file, follow_redirects)
    spec = _build_spec(target, interval, max_attempts, timeout, attempt_timeout)
    console.print(f"[bold]Waiting for {escape(spec.describe())}...[/bold]")
    _run(spec)


@app.command("wait-closed")
def wait_closed(
    port: int = typer.Option(..., "--port", "-p", min=1, max=65535, help="TCP port the stopped service listened on"),
    host: str | None = typer.Option(None, "--host", "-H", help="Host for the port check"),
    interval: float | None = typer.Option(None, "--interval", "-i", help="Seconds between attempts"),
    max_attempts: int = typer.Option(DEFAULT_RELEASE_ATTEMPTS, "--max-attempts", "-n", help="Give up after this many attempts"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Give up after this many seconds"),
):
    """Wait until nothing listens on a port any more.

    A service stop command may return before the process has exited; run this
    before starting it again.

    Examples:
        service-readiness probe wait-closed --port 8080
    """
    target = PortTarget(host=host or get_settings().host, port=port, expect=PortExpectation.CLOSED)
    spec = _build_spec(target, interval, max_attempts, timeout, None)
    console.print(f"[bold]Waiting for port {port} to be released...[/bold]")
    _run(spec)


@app.command()
def check(
    port: int | None = typer.Option(None, "--port", "-p", min=1, max=65535, help="TCP port the service listens on"),
    url: str | None = typer.Option(None, "--url", "-u", help="HTTP URL the service must answer"),
    status: list[int] | None = typer.Option(None, "--status", "-s", help="Acceptable HTTP status code (repeatable)"),
    pid_file: Path | None = typer.Option(None, "--pid-file", help="Pid file naming the service process"),
    host: str | None = typer.Option(None, "--host", "-H", help="Host for the port check"),
    attempt_timeout: float | None = typer.Option(None, "--attempt-timeout", help="Network timeout"),
):
    """Check once whether a service is ready, without waiting.

    Exits with code 0 when ready and 1 otherwise.

    Examples:
        service-readiness probe check --port 8080 --url http://127.0.0.1:8080/
    """
    settings = get_settings()
    target = build_target(host or settings.host, port, url, status, pid_file)
    try:
        ready = ReadinessProbe().is_ready(target, attempt_timeout or settings.attempt_timeout)
    except InvalidSpecError as e:
        exit_invalid_spec(e)

    if not ready:
        console.print(f"[red]{escape(target.describe())} is not ready[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{escape(target.describe())} is ready[/green]")
