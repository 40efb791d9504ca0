"""CLI principal (Typer).

Por qué una CLI además de la skill:
- Permite probar los comandos de verificación sin el framework anfitrión.
- Reutiliza exactamente los mismos `SkillCommand` que registra la skill.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_result_json
from cli import doctor
from cli.ui_components import (
    build_auth_panel,
    build_bulk_table,
    build_commands_table,
    build_error_panel,
    build_verify_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import (
    AuthVerifyResult,
    BulkVerifyResult,
    CommandResult,
    ErrorResult,
    VerifyResult,
)
from core.services.skill import build_skill

app = typer.Typer(no_args_is_help=True, help="MailCheck email verification from the terminal.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Logging con RichHandler; `--verbose` fuerza DEBUG."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid MAILCHECK_* configuration: {exc}") from exc

    level: int | str = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=Console(stderr=True))],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    setup_logging(verbose)


def _run_command(name: str, args: dict[str, Any]) -> CommandResult:
    skill = build_skill()
    command = skill.get(name)
    assert command is not None
    return asyncio.run(command.run(args))


def _emit(result: CommandResult, *, as_json: bool, output: Path | None) -> None:
    if output is not None:
        export_result_json(result=result, output_path=output)

    if as_json:
        typer.echo(json.dumps(result.to_output(), ensure_ascii=False, indent=2))
    else:
        print_banner(_console)
        if isinstance(result, ErrorResult):
            _console.print(build_error_panel(result))
        elif isinstance(result, VerifyResult):
            _console.print(build_verify_table(result))
        elif isinstance(result, BulkVerifyResult):
            _console.print(build_bulk_table(result))
        elif isinstance(result, AuthVerifyResult):
            _console.print(build_auth_panel(result))
        if output is not None:
            _console.print(f"[green]Saved:[/green] {output}")

    if isinstance(result, ErrorResult):
        raise typer.Exit(code=1)


def read_email_file(path: Path) -> list[str]:
    """Una dirección por línea; ignora líneas vacías y comentarios `#`."""

    emails: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line and not line.startswith("#"):
            emails.append(line)
    return emails


@app.command()
def verify(
    email: str = typer.Argument(..., help="Email address to verify."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="MailCheck API key (else MAILCHECK_API_KEY)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result object as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also export the result to a JSON file."),
) -> None:
    """Verify a single email address."""

    result = _run_command("email-verify", {"email": email, "api_key": api_key})
    _emit(result, as_json=as_json, output=output)


@app.command()
def bulk(
    emails: Optional[List[str]] = typer.Argument(None, help="Email addresses to verify (max 100)."),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="File with one email per line."
    ),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="MailCheck API key (else MAILCHECK_API_KEY)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result object as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also export the result to a JSON file."),
) -> None:
    """Verify multiple email addresses in a single request."""

    collected = list(emails or [])
    if file is not None:
        collected.extend(read_email_file(file))
    if not collected:
        raise typer.BadParameter("provide EMAILS or --file")

    result = _run_command("email-bulk-verify", {"emails": collected, "api_key": api_key})
    _emit(result, as_json=as_json, output=output)


@app.command()
def auth(
    headers_file: Optional[Path] = typer.Option(
        None, "--headers-file", exists=True, dir_okay=False, help="Raw email headers (default: stdin)."
    ),
    trusted_domain: Optional[List[str]] = typer.Option(
        None, "--trusted-domain", "-t", help="Trusted domain for lookalike detection (repeatable)."
    ),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="MailCheck API key (else MAILCHECK_API_KEY)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result object as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also export the result to a JSON file."),
) -> None:
    """Analyze email headers for authenticity (SPF/DKIM/DMARC, phishing)."""

    if headers_file is not None:
        headers = headers_file.read_text(encoding="utf-8")
    else:
        headers = typer.get_text_stream("stdin").read()

    args = {"headers": headers, "trusted_domains": list(trusted_domain or []), "api_key": api_key}
    result = _run_command("email-auth-verify", args)
    _emit(result, as_json=as_json, output=output)


@app.command()
def commands(
    as_json: bool = typer.Option(False, "--json", help="Print the skill manifest as JSON."),
) -> None:
    """List the commands the skill exposes to the host framework."""

    manifest = build_skill().describe()
    if as_json:
        typer.echo(json.dumps(manifest, indent=2))
        return
    _console.print(build_commands_table(manifest))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
