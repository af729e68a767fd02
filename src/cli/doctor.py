"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ZendeskError
from core.services.client_factory import create_client

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and credential setup.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Call `users/me` with the configured credentials."""

    try:
        async with create_client(settings) as client:
            me = await client.core.get(["users", "me"], ["user"])
    except ZendeskError as exc:
        return False, f"{type(exc).__name__}: {exc.message}"
    if isinstance(me, dict) and me.get("id"):
        return True, f"Authenticated as {me.get('email') or me.get('name')} ({me.get('role')})"
    return False, "Anonymous user: check credentials"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="zendesk-rest Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    endpoint = settings.endpoint_uri()
    table.add_row("Endpoint", "OK" if endpoint else "FAIL", endpoint or "Set ZENDESK_SUBDOMAIN or ZENDESK_REMOTE_URI")

    if settings.oauth_token:
        table.add_row("Credentials", "OK", "OAuth token")
    elif settings.username and settings.token:
        table.add_row("Credentials", "OK", f"API token for {settings.username}")
    elif settings.username and settings.password:
        table.add_row("Credentials", "WARN", "Password auth (prefer an API token)")
    else:
        table.add_row("Credentials", "FAIL", "No credentials configured")

    table.add_row("Retries", "OK", f"max_retries={settings.max_retries}")

    ok_api = False
    if endpoint:
        ok_api, detail_api = asyncio.run(_check_api(settings))
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print("\n[yellow]Tip:[/yellow] run `zendesk-rest doctor setup` to store credentials.")
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    subdomain = typer.prompt("Subdomain (<subdomain>.zendesk.com)").strip()
    username = typer.prompt("Agent email").strip()
    token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()

    if not subdomain or not username or not token:
        raise typer.BadParameter("subdomain, email and token are required")

    env_path = write_user_env_vars(
        {
            "ZENDESK_SUBDOMAIN": subdomain,
            "ZENDESK_USERNAME": username,
            "ZENDESK_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
