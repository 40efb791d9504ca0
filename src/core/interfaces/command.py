"""Contrato de comandos de la skill.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la skill (y los tests) traten los tres comandos de forma
  intercambiable sin acoplarse a implementaciones concretas.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.models import CommandParameter, CommandResult


@runtime_checkable
class SkillCommand(Protocol):
    """Contrato mínimo para un comando expuesto al framework anfitrión.

    Reglas de diseño:
    - `run` es asíncrono porque hace exactamente un round trip HTTP.
    - Nunca lanza por fallos esperados: devuelve `ErrorResult`.
    """

    name: str
    description: str
    parameters: list[CommandParameter]

    async def run(self, args: Mapping[str, Any]) -> CommandResult:
        """Valida `args`, llama a la API y devuelve el resultado normalizado."""

        ...
