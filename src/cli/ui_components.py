"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AuthVerifyResult, BulkVerifyResult, ErrorResult, VerifyResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo, nunca con --json)."""

    title = Text("MailCheck", style="bold cyan")
    subtitle = Text("Email verification • Bulk • Header authenticity", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _fmt(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def build_error_panel(result: ErrorResult) -> Panel:
    body = Text(result.error, style="bold red")
    if result.message:
        body.append(f"\n{result.message}", style="dim")
    return Panel(body, title=Text(f"Error ({result.kind.value})", style="red"), border_style="red")


def build_verify_table(result: VerifyResult) -> Table:
    table = Table(title="Email verification", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Email", _fmt(result.email))
    table.add_row("Valid", _fmt(result.valid))
    table.add_row("Score", _fmt(result.score))
    table.add_row("Reason", _fmt(result.reason))
    table.add_row("Risk level", _fmt(result.risk_level))
    if isinstance(result.checks, dict):
        for check, outcome in result.checks.items():
            table.add_row(f"check: {check}", _fmt(outcome))
    return table


def build_bulk_table(result: BulkVerifyResult) -> Table:
    caption = (
        f"valid {result.summary.valid} • invalid {result.summary.invalid} • "
        f"credits remaining {_fmt(result.credits_remaining)}"
    )
    table = Table(title="Bulk verification", caption=caption)
    table.add_column("Email", style="white")
    table.add_column("Valid", style="green")
    table.add_column("Score", style="magenta")
    table.add_column("Reason", style="dim")
    for item in result.results or []:
        if not isinstance(item, dict):
            continue
        table.add_row(
            _fmt(item.get("email")),
            _fmt(item.get("valid")),
            _fmt(item.get("score")),
            _fmt(item.get("reason")),
        )
    return table


def build_auth_panel(result: AuthVerifyResult) -> Panel:
    """Panel para presentar el análisis de autenticidad de cabeceras."""

    body = Text()
    body.append(f"Verdict: {_fmt(result.verdict)}\n", style="bold")
    body.append(f"Trust score: {_fmt(result.trust_score)}\n")
    body.append(f"From: {_fmt(result.from_)}\n")
    if isinstance(result.authentication, dict):
        body.append("\nAuthentication:\n", style="bold")
        for mechanism, outcome in result.authentication.items():
            body.append(f"- {mechanism}: {_fmt(outcome)}\n")
    if isinstance(result.anomalies, list) and result.anomalies:
        body.append("\nAnomalies:\n", style="bold")
        for anomaly in result.anomalies:
            body.append(f"- {_fmt(anomaly)}\n")
    if result.lookalike:
        body.append(f"\nLookalike: {_fmt(result.lookalike)}", style="yellow")

    return Panel(body, title=Text("Header authenticity", style="bold yellow"), border_style="yellow")


def build_commands_table(manifest: dict[str, Any]) -> Table:
    table = Table(title=f"{manifest['name']} v{manifest['version']}")
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Parameters", style="dim")
    for command in manifest["commands"]:
        params = ", ".join(f"{p['name']}: {p['type']}" for p in command["parameters"])
        table.add_row(command["name"], command["description"], params)
    return table
