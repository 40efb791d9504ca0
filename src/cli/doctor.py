"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}…{secret[-4:]}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="MailCheck Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", _mask(settings.api_key))
    else:
        table.add_row("API key", "MISSING", "Set MAILCHECK_API_KEY or run `mailcheck doctor setup`")
    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "NONE", str(get_user_env_file()))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.api_key:
        _console.print("\n[yellow]Note:[/yellow] commands still accept an explicit `--api-key`.")


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores the API key in the user config .env)."""

    api_key = typer.prompt("MailCheck API key", hide_input=True, confirmation_prompt=False).strip()
    base_url = typer.prompt(
        "API base URL",
        default=AppSettings.model_fields["api_base_url"].default,
        show_default=True,
    ).strip()

    if not api_key:
        raise typer.BadParameter("API key is required")

    env_path = write_user_env_vars(
        {
            "MAILCHECK_API_KEY": api_key,
            "MAILCHECK_API_BASE_URL": base_url,
        }
    )

    _console.print(f"[green]Saved MailCheck config to:[/green] {env_path}")
