"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en todos los subcomandos de recursos.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import HttpError, ZendeskError


def print_banner(console: Console) -> None:
    title = Text("zendesk-rest", style="bold cyan")
    subtitle = Text("Tags • Ticket fields • NPS • Voice", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        return f"<{type(value).__name__}:{len(value)}>"
    return str(value)


def build_records_table(
    records: Iterable[dict[str, Any]],
    *,
    title: str,
    columns: Sequence[str],
) -> Table:
    """Tabla Rich con las columnas indicadas; las claves ausentes quedan vacías."""

    table = Table(title=title)
    for index, column in enumerate(columns):
        table.add_column(column, style="cyan" if index == 0 else "white", no_wrap=index == 0)
    for record in records:
        table.add_row(*(_cell(record.get(column)) for column in columns))
    return table


def build_record_panel(record: Any, *, title: str) -> Panel:
    """Panel clave/valor para una entidad suelta."""

    body = Text()
    if isinstance(record, dict):
        for key in sorted(record):
            body.append(f"{key}: ", style="bold")
            body.append(f"{_cell(record[key])}\n")
    else:
        body.append(_cell(record))
    return Panel(body, title=Text(title, style="bold green"), border_style="green")


def build_error_panel(error: ZendeskError) -> Panel:
    body = Text()
    body.append(f"{type(error).__name__}: {error.message}\n", style="bold")
    if isinstance(error, HttpError) and error.body:
        body.append(error.body[:2000] + "\n", style="dim")
    if error.pages_retrieved is not None:
        body.append(f"Pages retrieved before failure: {error.pages_retrieved}", style="yellow")
    return Panel(body, title=Text("Error", style="bold red"), border_style="red")
