"""Contratos del Core.

Por qué:
- `SkillCommand` (Protocol) es lo único que la skill necesita saber de un comando.
- Los comandos concretos viven en `adapters.commands`.
"""
