"""Start command for the dsp CLI."""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table


def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Start the proxy server."""
    from src.core.config import config
    from src.core.logging import configure_root_logging

    console = Console()

    server_host = host or config.host
    server_port = port or config.port

    table = Table(title="Dialect Sanitizer Proxy Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Server URL", f"http://{server_host}:{server_port}")
    table.add_row("Upstream Base URL", config.upstream_base_url)
    table.add_row("Upstream API Key", config.api_key_hash)
    table.add_row("Sanitize Requests", "yes" if config.sanitize_enabled else "no")

    console.print(table)

    log_level = configure_root_logging()
    uvicorn.run(
        "src.main:app",
        host=server_host,
        port=server_port,
        reload=reload,
        log_level=log_level.lower(),
    )
