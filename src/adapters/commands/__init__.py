"""Comandos concretos de la skill.

Cada módulo implementa `core.interfaces.command.SkillCommand`.
"""

from adapters.commands.verify_auth import AuthVerifyCommand
from adapters.commands.verify_bulk import BulkVerifyCommand, MAX_BULK_EMAILS
from adapters.commands.verify_single import VerifyEmailCommand

__all__ = [
	"AuthVerifyCommand",
	"BulkVerifyCommand",
	"MAX_BULK_EMAILS",
	"VerifyEmailCommand",
]
