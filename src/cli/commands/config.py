"""Configuration commands for the dsp CLI."""

import sys

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(help="Configuration management")


@app.command()
def show() -> None:
    """Show the effective configuration."""
    from src.core.config import config

    console = Console()
    table = Table(title="Effective Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("HOST", config.host)
    table.add_row("PORT", str(config.port))
    table.add_row("LOG_LEVEL", config.log_level)
    table.add_row("UPSTREAM_BASE_URL", config.upstream_base_url)
    table.add_row("UPSTREAM_API_KEY", config.api_key_hash)
    table.add_row("REQUEST_TIMEOUT", f"{config.request_timeout}s")
    table.add_row("STREAMING_CONNECT_TIMEOUT_SECONDS", f"{config.streaming_connect_timeout}s")
    table.add_row("SANITIZE_ENABLED", str(config.sanitize_enabled).lower())

    console.print(table)


@app.command()
def validate() -> None:
    """Validate every configuration environment variable."""
    from src.core.config import validate_all

    console = Console()
    errors = validate_all()
    if not errors:
        console.print("[green]✅ Configuration is valid[/green]")
        return

    for error in errors:
        console.print(f"[red]❌ {error}[/red]")
    sys.exit(1)
