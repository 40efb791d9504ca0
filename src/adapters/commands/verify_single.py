"""Comando `email-verify`: verificación de una única dirección.

Consulta `POST /v1/verify` y aplana `details.risk_level` al nivel superior.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import httpx

from adapters.mailcheck_api import VERIFY_PATH, post_json
from core.config import AppSettings, env_credential, resolve_api_key
from core.domain.models import CommandParameter, CommandResult, ErrorResult, VerifyResult
from core.interfaces.command import SkillCommand

logger = logging.getLogger(__name__)

MISSING_API_KEY = "API key required. Set MAILCHECK_API_KEY env var or provide api_key parameter."


class VerifyEmailCommand(SkillCommand):
    name = "email-verify"
    description = "Verify a single email address"
    parameters = [
        CommandParameter(name="email", type="string", description="Email address to verify"),
        CommandParameter(
            name="api_key",
            type="string",
            description="MailCheck API key (falls back to env MAILCHECK_API_KEY)",
        ),
    ]

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        credential_provider: Callable[[], str | None] = env_credential,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._credential_provider = credential_provider
        self._transport = transport

    async def run(self, args: Mapping[str, Any]) -> CommandResult:
        email = args.get("email")
        if not isinstance(email, str) or not email:
            logger.debug("email-verify rejected: missing email")
            return ErrorResult.validation("Email address is required")

        api_key = resolve_api_key(args.get("api_key"), self._credential_provider)
        if not api_key:
            logger.debug("email-verify rejected: no API key resolved")
            return ErrorResult.credential(MISSING_API_KEY)

        try:
            reply = await post_json(
                path=VERIFY_PATH,
                payload={"email": email},
                api_key=api_key,
                settings=self._settings,
                transport=self._transport,
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("email-verify failed: %s", exc)
            return ErrorResult.transport("Failed to verify email", exc)

        if not reply.ok:
            logger.warning("email-verify rejected by API (HTTP %s)", reply.status_code)
            return ErrorResult.api(reply.data)

        return VerifyResult.from_payload(reply.data)
