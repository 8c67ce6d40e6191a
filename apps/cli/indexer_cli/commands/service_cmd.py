"""Indexer service management commands."""

import subprocess
from dataclasses import replace
from typing import Optional

import typer
from indexer_service import ConfigManager, ServiceActions
from indexer_service.errors import ConfigError
from indexer_service.models import ActionResult
from m24_logging import configure_from_config
from rich.console import Console
from rich.table import Table

console = Console()


def _get_service_actions() -> ServiceActions:
    """Get a ServiceActions instance built from the user's config."""
    try:
        config = ConfigManager().config
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=2)

    configure_from_config(config)
    return ServiceActions(config)


def _report(result: ActionResult) -> None:
    if result.success:
        console.print(f"[green]✓[/green] {result.message}")
        return

    kind = f" [dim]({result.error.value})[/dim]" if result.error else ""
    console.print(f"[red]✗[/red] {result.message}{kind}")
    raise typer.Exit(code=1)


def install():
    """Install the indexer as a login launch agent."""
    console.print("[yellow]Installing indexer service...[/yellow]")
    _report(_get_service_actions().install())


def uninstall():
    """Unload the indexer and remove its launch agent."""
    console.print("[yellow]Uninstalling indexer service...[/yellow]")
    _report(_get_service_actions().uninstall())


def restart():
    """Reload the installed indexer launch agent."""
    console.print("[yellow]Restarting indexer service...[/yellow]")
    _report(_get_service_actions().restart())


def status():
    """Show whether launchd has the indexer loaded."""
    result = _get_service_actions().status()
    data = result.data or {}

    table = Table(title="Indexer Service Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Loaded", "✓ Yes" if data.get("loaded") else "✗ No")
    table.add_row("PID", str(data["pid"]) if data.get("pid") else "N/A")
    if "last_exit_status" in data:
        table.add_row("Last Exit Status", str(data["last_exit_status"]))
    table.add_row("Plist", data.get("plist_path", ""))
    plist_exists = data.get("plist_exists")
    if plist_exists is None:
        table.add_row("Plist Present", "? Unknown")
    else:
        table.add_row("Plist Present", "✓ Yes" if plist_exists else "✗ No")

    console.print(table)


def logs(
    err: bool = typer.Option(False, "--err", help="Show the stderr log instead of stdout"),
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow log output"),
    lines: int = typer.Option(50, "-n", help="Number of lines to show"),
):
    """View the indexer worker's logs."""
    stdout_log, stderr_log = _get_service_actions().get_log_paths()
    log_file = stderr_log if err else stdout_log

    if not log_file.exists():
        console.print(f"[red]✗[/red] Log file not found: {log_file}")
        raise typer.Exit(code=1)

    try:
        if follow:
            subprocess.run(["tail", "-f", str(log_file)], check=False)
        else:
            subprocess.run(["tail", "-n", str(lines), str(log_file)], check=False)
    except OSError as e:
        console.print(f"[red]✗[/red] Failed to read logs: {e}")
        raise typer.Exit(code=1)


def configure(
    packaged: Optional[bool] = typer.Option(
        None, "--packaged/--not-packaged", help="Override packaged-build detection"
    ),
    rebuild_on_restart: Optional[bool] = typer.Option(
        None,
        "--rebuild-on-restart/--no-rebuild-on-restart",
        help="Regenerate the plist before each restart",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds to wait for each launchctl call"
    ),
):
    """Update the service config file."""
    try:
        manager = ConfigManager()
        changes = {
            key: value
            for key, value in {
                "packaged": packaged,
                "rebuild_on_restart": rebuild_on_restart,
                "launchctl_timeout": timeout,
            }.items()
            if value is not None
        }
        config = replace(manager.config, **changes)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=2)

    try:
        manager.save_config(config)
    except OSError as e:
        console.print(f"[red]✗[/red] Failed to save config: {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Config saved to {manager.config_path}")
