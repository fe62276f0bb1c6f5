"""Sanitize command for the dsp CLI.

Runs the request sanitization pipeline over a JSON body offline, which is
handy for checking what the proxy will forward for a captured request.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

from src.cli.presenters.stats import SanitizeStatsPresenter
from src.conversion.request_sanitizer import sanitize_request_body


def sanitize(
    file: Path = typer.Argument(
        None, exists=True, dir_okay=False, help="JSON request file (default: stdin)"
    ),
    stats: bool = typer.Option(False, "--stats", help="Print change statistics to stderr"),
) -> None:
    """Sanitize a JSON request body and print the result."""
    body = file.read_bytes() if file else sys.stdin.buffer.read()

    sanitized, sanitize_stats = sanitize_request_body(body)

    typer.echo(sanitized.decode("utf-8", errors="replace"))

    if stats:
        SanitizeStatsPresenter(Console(stderr=True)).present(sanitize_stats)
