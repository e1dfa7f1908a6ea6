"""Main CLI application."""

import typer

from service_readiness.cli.commands import plugins, probe
from service_readiness.logging import CLI_FORMAT, setup_logging
from service_readiness.settings import get_settings

app = typer.Typer(
    name="service-readiness",
    help="Service readiness CLI - wait for provisioned services to come up",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="TRACE, DEBUG, INFO, WARNING or ERROR"),
):
    """Global options for all commands."""
    setup_logging(log_level or get_settings().log_level, CLI_FORMAT)


# Register command groups
app.add_typer(probe.app, name="probe")
app.add_typer(plugins.app, name="plugins")
