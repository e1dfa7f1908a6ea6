"""Plugin manifest commands."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from service_readiness.plugins import diff_manifests, load_manifest, save_manifest, scan_plugins
from service_readiness.settings import get_settings

app = typer.Typer(help="Plugin change detection")
console = Console()


@app.command()
def record(
    directory: Path = typer.Argument(..., help="Plugin directory"),
    manifest: Path = typer.Option(..., "--manifest", "-m", help="Manifest file to write"),
    pattern: str | None = typer.Option(None, "--pattern", help="Glob selecting plugin files"),
):
    """Record the digests of the installed plugins.

    Run this right after the service was (re)started so the manifest matches
    what the running process loaded.

    Examples:
        service-readiness plugins record /var/lib/jenkins/plugins -m /var/lib/jenkins/plugins.json
    """
    current = scan_plugins(directory, pattern or get_settings().plugin_pattern)
    save_manifest(current, manifest)
    console.print(f"[green]Recorded {len(current.digests)} plugin(s) in {manifest}[/green]")


@app.command()
def status(
    directory: Path = typer.Argument(..., help="Plugin directory"),
    manifest: Path = typer.Option(..., "--manifest", "-m", help="Manifest recorded at the last start"),
    pattern: str | None = typer.Option(None, "--pattern", help="Glob selecting plugin files"),
):
    """Report whether plugins changed since the manifest was recorded.

    Exits with code 1 when a restart is required and 2 when the manifest is corrupt.

    Examples:
        service-readiness plugins status /var/lib/jenkins/plugins -m /var/lib/jenkins/plugins.json
    """
    current = scan_plugins(directory, pattern or get_settings().plugin_pattern)
    try:
        previous = load_manifest(manifest)
    except ValidationError as e:
        console.print(f"[red]Error: manifest {escape(str(manifest))} is not a valid plugin manifest[/red]")
        console.print(f"  {e.error_count()} problem(s), re-record it with 'plugins record'")
        raise typer.Exit(2) from e
    changes = diff_manifests(previous, current)

    if not changes.restart_required:
        console.print("[green]Plugins unchanged, no restart required[/green]")
        return

    console.print("[yellow]Plugins changed, restart required:[/yellow]")
    for label, names in (("added", changes.added), ("modified", changes.modified), ("removed", changes.removed)):
        for name in names:
            console.print(f"  {label}: {name}")
    raise typer.Exit(1)
