"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxRequestExecutor
from cli.ui_components import build_settings_table
from core.config import AppSettings, get_user_env_file
from core.domain.http import Err, HTTPMethod

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

DEFAULT_CHECK_URL = "https://api.github.com"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    async with HttpxRequestExecutor(settings) as executor:
        result = await executor.execute(url, HTTPMethod.GET, dict[str, Any])
    if isinstance(result, Err):
        return False, f"{result.message} ({result.kind.value})"
    return True, f"{len(result.value)} top-level keys decoded"


@app.command()
def run(
    url: str = typer.Option(DEFAULT_CHECK_URL, "--url", help="JSON endpoint used for the connectivity check."),
) -> None:
    """Check connectivity and JSON decoding against a known endpoint."""

    settings = AppSettings()

    table = Table(title="apiclient doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_http, detail_http = asyncio.run(_check_http(url, settings))
    table.add_row("HTTP + JSON decode", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="settings")
def show_settings() -> None:
    """Print the effective settings (environment + .env files)."""

    _console.print(build_settings_table(AppSettings()))
