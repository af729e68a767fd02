"""CLI principal (Typer + Rich).

Por qué una CLI:
- Permite explorar la API (listar, crear, borrar) sin escribir código.
- Reutiliza exactamente los mismos wrappers que usaría una integración.

Cada comando abre un cliente, ejecuta una sola operación y lo cierra.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Sequence

import typer
from rich.console import Console

from adapters.json_exporter import dumps_result, export_result_json
from cli import doctor
from cli.ui_components import build_error_panel, build_record_panel, build_records_table, print_banner
from core.config import AppSettings
from core.domain.errors import ZendeskError
from core.logging_setup import setup_logger
from core.services.client_factory import ZendeskClient, create_client

app = typer.Typer(no_args_is_help=True, help="Command line client for the Zendesk REST API.")
tags_app = typer.Typer(no_args_is_help=True, help="Tags.")
ticket_fields_app = typer.Typer(no_args_is_help=True, help="Ticket fields and their options.")
invitations_app = typer.Typer(no_args_is_help=True, help="NPS survey invitations.")
queue_activity_app = typer.Typer(no_args_is_help=True, help="Voice historical queue activity.")

app.add_typer(tags_app, name="tags")
app.add_typer(ticket_fields_app, name="ticket-fields")
app.add_typer(invitations_app, name="invitations")
app.add_typer(queue_activity_app, name="queue-activity")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_TAG_COLUMNS = ("id", "name", "resource_type", "created_at")
_FIELD_COLUMNS = ("id", "type", "title", "active", "required")
_OPTION_COLUMNS = ("id", "name", "value", "position")
_INVITATION_COLUMNS = ("id", "survey_id", "status", "created_at")


@dataclass
class OutputOptions:
    as_json: bool = False
    output: Path | None = None


@app.callback()
def main(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result as JSON to this file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    banner: bool = typer.Option(False, "--banner", help="Show the banner before running."),
) -> None:
    settings = AppSettings()
    setup_logger(log_level or settings.log_level)
    if banner and not as_json:
        print_banner(_console)
    ctx.obj = OutputOptions(as_json=as_json, output=output)


def _parse_json(value: str) -> dict[str, Any]:
    try:
        data = json.loads(value)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise typer.BadParameter("Expected a JSON object")
    return data


def _render(result: Any, options: OutputOptions, *, title: str, columns: Sequence[str]) -> None:
    if options.output is not None:
        path = export_result_json(result=result, output_path=options.output)
        _console.print(f"[green]Saved:[/green] {path}")
        return
    if options.as_json:
        typer.echo(dumps_result(result))
        return
    if result is None:
        _console.print(f"[green]{title}: done[/green]")
    elif isinstance(result, list):
        _console.print(build_records_table(result, title=f"{title} ({len(result)})", columns=columns))
    else:
        _console.print(build_record_panel(result, title=title))


def _execute(
    ctx: typer.Context,
    action: Callable[[ZendeskClient], Awaitable[Any]],
    *,
    title: str,
    columns: Sequence[str] = ("id",),
) -> None:
    options: OutputOptions = ctx.obj or OutputOptions()

    async def _go() -> Any:
        async with create_client(AppSettings()) as client:
            return await action(client)

    try:
        result = asyncio.run(_go())
    except ZendeskError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    _render(result, options, title=title, columns=columns)


# -- tags ---------------------------------------------------------------------


@tags_app.command("list")
def tags_list(ctx: typer.Context) -> None:
    """List every tag (follows pagination)."""

    _execute(ctx, lambda c: c.tags.list(), title="Tags", columns=_TAG_COLUMNS)


@tags_app.command("show")
def tags_show(ctx: typer.Context, tag_id: int = typer.Argument(..., help="Tag ID.")) -> None:
    _execute(ctx, lambda c: c.tags.show(tag_id), title=f"Tag {tag_id}")


@tags_app.command("create")
def tags_create(
    ctx: typer.Context,
    data: str = typer.Option(..., "--data", help='JSON object, e.g. \'{"name": "vip", "resource_type": "contact"}\'.'),
) -> None:
    payload = _parse_json(data)
    _execute(ctx, lambda c: c.tags.create(payload), title="Created tag")


@tags_app.command("update")
def tags_update(
    ctx: typer.Context,
    tag_id: int = typer.Argument(..., help="Tag ID."),
    data: str = typer.Option(..., "--data", help="JSON object with the fields to change."),
) -> None:
    payload = _parse_json(data)
    _execute(ctx, lambda c: c.tags.update(tag_id, payload), title=f"Updated tag {tag_id}")


@tags_app.command("delete")
def tags_delete(ctx: typer.Context, tag_id: int = typer.Argument(..., help="Tag ID.")) -> None:
    _execute(ctx, lambda c: c.tags.delete(tag_id), title=f"Delete tag {tag_id}")


# -- ticket fields ------------------------------------------------------------


@ticket_fields_app.command("list")
def ticket_fields_list(ctx: typer.Context) -> None:
    _execute(ctx, lambda c: c.ticketfields.list(), title="Ticket fields", columns=_FIELD_COLUMNS)


@ticket_fields_app.command("show")
def ticket_fields_show(ctx: typer.Context, field_id: int = typer.Argument(..., help="Ticket field ID.")) -> None:
    _execute(ctx, lambda c: c.ticketfields.show(field_id), title=f"Ticket field {field_id}")


@ticket_fields_app.command("count")
def ticket_fields_count(ctx: typer.Context) -> None:
    _execute(ctx, lambda c: c.ticketfields.count(), title="Ticket field count")


@ticket_fields_app.command("create")
def ticket_fields_create(
    ctx: typer.Context,
    data: str = typer.Option(..., "--data", help='JSON object, e.g. \'{"type": "text", "title": "Age"}\'.'),
) -> None:
    payload = _parse_json(data)
    _execute(ctx, lambda c: c.ticketfields.create(payload), title="Created ticket field")


@ticket_fields_app.command("update")
def ticket_fields_update(
    ctx: typer.Context,
    field_id: int = typer.Argument(..., help="Ticket field ID."),
    data: str = typer.Option(..., "--data", help="JSON object with the fields to change."),
) -> None:
    payload = _parse_json(data)
    _execute(ctx, lambda c: c.ticketfields.update(field_id, payload), title=f"Updated ticket field {field_id}")


@ticket_fields_app.command("delete")
def ticket_fields_delete(ctx: typer.Context, field_id: int = typer.Argument(..., help="Ticket field ID.")) -> None:
    _execute(ctx, lambda c: c.ticketfields.delete(field_id), title=f"Delete ticket field {field_id}")


@ticket_fields_app.command("options")
def ticket_fields_options(ctx: typer.Context, field_id: int = typer.Argument(..., help="Ticket field ID.")) -> None:
    _execute(ctx, lambda c: c.ticketfields.list_options(field_id), title="Options", columns=_OPTION_COLUMNS)


@ticket_fields_app.command("option")
def ticket_fields_option(
    ctx: typer.Context,
    field_id: int = typer.Argument(..., help="Ticket field ID."),
    option_id: int = typer.Argument(..., help="Option ID."),
) -> None:
    _execute(ctx, lambda c: c.ticketfields.show_option(field_id, option_id), title=f"Option {option_id}")


@ticket_fields_app.command("set-option")
def ticket_fields_set_option(
    ctx: typer.Context,
    field_id: int = typer.Argument(..., help="Ticket field ID."),
    data: str = typer.Option(..., "--data", help='JSON object, e.g. \'{"name": "Gold", "value": "gold"}\'.'),
) -> None:
    """Create an option, or update it when the payload carries an `id`."""

    payload = _parse_json(data)
    _execute(ctx, lambda c: c.ticketfields.create_or_update_option(field_id, payload), title="Option")


@ticket_fields_app.command("delete-option")
def ticket_fields_delete_option(
    ctx: typer.Context,
    field_id: int = typer.Argument(..., help="Ticket field ID."),
    option_id: int = typer.Argument(..., help="Option ID."),
) -> None:
    _execute(ctx, lambda c: c.ticketfields.delete_option(field_id, option_id), title=f"Delete option {option_id}")


# -- NPS invitations ----------------------------------------------------------


@invitations_app.command("list")
def invitations_list(ctx: typer.Context, survey_id: str = typer.Argument(..., help="Survey ID.")) -> None:
    _execute(ctx, lambda c: c.invitations.list(survey_id), title="Invitations", columns=_INVITATION_COLUMNS)


@invitations_app.command("show")
def invitations_show(
    ctx: typer.Context,
    survey_id: str = typer.Argument(..., help="Survey ID."),
    invitation_id: str = typer.Argument(..., help="Invitation ID."),
) -> None:
    _execute(ctx, lambda c: c.invitations.show(survey_id, invitation_id), title=f"Invitation {invitation_id}")


@invitations_app.command("create")
def invitations_create(
    ctx: typer.Context,
    survey_id: str = typer.Argument(..., help="Survey ID."),
    data: str = typer.Option(..., "--data", help='JSON object, e.g. \'{"invitation": {"recipients": [...]}}\'.'),
) -> None:
    payload = _parse_json(data)
    _execute(ctx, lambda c: c.invitations.create(survey_id, payload), title="Created invitation")


# -- voice --------------------------------------------------------------------


@queue_activity_app.command("show")
def queue_activity_show(ctx: typer.Context) -> None:
    _execute(ctx, lambda c: c.historicalqueueactivity.show(), title="Historical queue activity")


def run() -> None:
    app()
