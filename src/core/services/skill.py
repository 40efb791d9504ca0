"""Skill MailCheck: manifest + despacho de comandos.

Este módulo es la costura con el framework anfitrión. El anfitrión puede:
- registrar cada comando vía `MailCheckSkill.register(register_fn)`, o
- invocar directamente `await skill.invoke(name, args)`.

En ambos casos el resultado es un dict plano (`to_output()`); ningún fallo
esperado se propaga como excepción al anfitrión.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Iterable, Mapping

import httpx

from adapters.commands import AuthVerifyCommand, BulkVerifyCommand, VerifyEmailCommand
from core.config import AppSettings, env_credential
from core.domain.models import ErrorResult
from core.interfaces.command import SkillCommand

logger = logging.getLogger(__name__)

SKILL_NAME = "mailcheck-email-verification"
SKILL_VERSION = "1.0.0"

CommandHandler = Callable[[Mapping[str, Any]], Awaitable[dict[str, Any]]]
RegisterFn = Callable[[str, str, list[dict[str, str]], CommandHandler], Any]


class MailCheckSkill:
    """Agrupa los comandos y expone el manifest de la skill."""

    name = SKILL_NAME
    version = SKILL_VERSION

    def __init__(self, commands: Iterable[SkillCommand]) -> None:
        self._commands: dict[str, SkillCommand] = {}
        for command in commands:
            if command.name in self._commands:
                raise ValueError(f"Duplicate command name: {command.name}")
            self._commands[command.name] = command

    @property
    def commands(self) -> list[SkillCommand]:
        return list(self._commands.values())

    def get(self, name: str) -> SkillCommand | None:
        return self._commands.get(name)

    def describe(self) -> dict[str, Any]:
        """Manifest JSON-able (nombre, versión, comandos y parámetros)."""

        return {
            "name": self.name,
            "version": self.version,
            "commands": [
                {
                    "name": command.name,
                    "description": command.description,
                    "parameters": [p.model_dump() for p in command.parameters],
                }
                for command in self.commands
            ],
        }

    async def invoke(self, name: str, args: Mapping[str, Any] | None = None) -> dict[str, Any]:
        command = self.get(name)
        if command is None:
            logger.debug("Unknown command requested: %s", name)
            return ErrorResult.validation(f"Unknown command: {name}").to_output()
        result = await command.run(args or {})
        return result.to_output()

    def handler_for(self, command: SkillCommand) -> CommandHandler:
        async def _handler(args: Mapping[str, Any]) -> dict[str, Any]:
            result = await command.run(args or {})
            return result.to_output()

        _handler.__name__ = f"handle_{command.name.replace('-', '_')}"
        return _handler

    def register(self, register_fn: RegisterFn) -> None:
        """Registra cada comando en el anfitrión: `register_fn(name, description, params, handler)`."""

        for command in self.commands:
            params = [p.model_dump() for p in command.parameters]
            register_fn(command.name, command.description, params, self.handler_for(command))
            logger.debug("Registered command %s", command.name)


def build_skill(
    settings: AppSettings | None = None,
    *,
    credential_provider: Callable[[], str | None] = env_credential,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MailCheckSkill:
    """Construye la skill con los tres comandos de verificación."""

    settings = settings or AppSettings()
    options: dict[str, Any] = {"credential_provider": credential_provider, "transport": transport}
    return MailCheckSkill(
        [
            VerifyEmailCommand(settings, **options),
            BulkVerifyCommand(settings, **options),
            AuthVerifyCommand(settings, **options),
        ]
    )
