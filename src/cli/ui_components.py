"""CLI UI components (Rich).

Keeps presentation out of the command functions so `fetch` and `doctor`
render results the same way.
"""

from __future__ import annotations

import json
from typing import Any

from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.http import Err


def build_value_panel(value: Any, *, title: str) -> Panel:
    """Panel with the decoded value rendered as highlighted JSON."""

    body = JSON(json.dumps(value, ensure_ascii=False, default=str))
    return Panel(body, title=Text(title, style="bold green"), border_style="green")


def build_error_panel(error: Err, *, title: str) -> Panel:
    body = Text()
    body.append(error.message, style="bold")
    body.append(f"\nkind: {error.kind.value}", style="dim")
    if error.detail:
        body.append(f"\n\n{error.detail}", style="dim")
    return Panel(body, title=Text(title, style="bold red"), border_style="red")


def build_settings_table(settings: AppSettings) -> Table:
    table = Table(title="Effective settings")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    return table
