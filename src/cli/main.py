"""CLI entry point (Typer).

Thin layer: builds settings, runs one `execute` and renders the outcome.
All request/decoding rules live in `adapters.http_client`.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.http_client import HttpxRequestExecutor
from cli import doctor
from cli.ui_components import build_error_panel, build_value_panel
from core.config import AppSettings
from core.domain.http import Err, HTTPMethod, Result
from core.logging import init_logging

app = typer.Typer(no_args_is_help=True, help="Typed JSON API client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Verbose logging on stderr."),
) -> None:
    settings = AppSettings()
    init_logging(debug=debug or settings.debug, json_output=settings.log_json)


async def _fetch(url: str, method: HTTPMethod, settings: AppSettings) -> Result[Any]:
    async with HttpxRequestExecutor(settings) as executor:
        return await executor.execute(url, method, Any)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="Absolute URL of a JSON endpoint."),
    method: HTTPMethod = typer.Option(HTTPMethod.GET, "--method", "-X", case_sensitive=False),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.001, help="Override the request timeout (seconds)."),
    raw: bool = typer.Option(False, "--raw", help="Print plain JSON on stdout (no panel)."),
) -> None:
    """Send one request and print the decoded JSON body."""

    settings = AppSettings()
    if timeout is not None:
        settings = settings.model_copy(update={"http_timeout_seconds": timeout})

    result = asyncio.run(_fetch(url, method, settings))

    if isinstance(result, Err):
        _console.print(build_error_panel(result, title=f"{method.value} {url}"))
        raise typer.Exit(code=1)

    if raw:
        typer.echo(json.dumps(result.value, ensure_ascii=False))
    else:
        _console.print(build_value_panel(result.value, title=f"{method.value} {url}"))


def run() -> None:
    app()
