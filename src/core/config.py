"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que los comandos lean la API key y la URL base de forma consistente.

La API key NO se cachea: cada invocación construye un `AppSettings` nuevo
(ver `env_credential`).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "mailcheck"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "mailcheck"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "mailcheck"
    return Path.home() / ".config" / "mailcheck"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# MailCheck skill user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la skill.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar los comandos.
    - `MAILCHECK_API_KEY` cae directamente en `api_key` gracias al prefijo.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAILCHECK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key de MailCheck (fallback cuando no llega `api_key` en la invocación).",
    )
    api_base_url: str = Field(
        default="https://api.mailcheck.dev",
        min_length=8,
        description="URL base de la API de MailCheck.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="mailcheck-skill/1.0",
        min_length=1,
        description="User-Agent de las peticiones a la API.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Nivel de logging por defecto de la CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


def env_credential() -> str | None:
    """Proveedor de credencial por defecto: lee `MAILCHECK_API_KEY` en cada llamada."""

    return AppSettings().api_key


def resolve_api_key(explicit: object, provider=env_credential) -> str | None:
    """Resuelve la API key para UNA invocación.

    Precedencia:
    1) `explicit` si es un string no vacío.
    2) `provider()` (entorno / .env por defecto).
    """

    if isinstance(explicit, str) and explicit:
        return explicit
    value = provider()
    return value or None
