"""Main CLI entry point for the dialect sanitizer proxy."""

import typer
from rich.console import Console

from src.cli.commands import config, sanitize, start

app = typer.Typer(
    name="dsp",
    help="Dialect Sanitizer Proxy CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config.app, name="config", help="Configuration management")
app.command(name="start", help="Start the proxy server")(start.start)
app.command(name="sanitize", help="Sanitize a JSON request body")(sanitize.sanitize)


@app.command()
def version() -> None:
    """Show version information."""
    from src import __version__

    console = Console()
    console.print(f"[bold cyan]dsp[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Dialect Sanitizer Proxy CLI."""
    if verbose:
        from src.core.logging import configure_root_logging

        configure_root_logging("DEBUG")


if __name__ == "__main__":
    app()
