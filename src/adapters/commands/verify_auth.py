"""Comando `email-auth-verify`: análisis de autenticidad de cabeceras.

SPF/DKIM/DMARC, anomalías y dominios lookalike los calcula la API; aquí solo
se reenvían las cabeceras en crudo y los dominios de confianza.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import httpx

from adapters.commands.verify_single import MISSING_API_KEY
from adapters.mailcheck_api import AUTH_VERIFY_PATH, post_json
from core.config import AppSettings, env_credential, resolve_api_key
from core.domain.models import AuthVerifyResult, CommandParameter, CommandResult, ErrorResult
from core.interfaces.command import SkillCommand

logger = logging.getLogger(__name__)


def _trusted_domains(value: object) -> list[str] | None:
    # Ausente/vacío => []; cualquier otra cosa que no sea lista de strings => None.
    if not value:
        return []
    if not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(domain, str) for domain in value):
        return None
    return list(value)


class AuthVerifyCommand(SkillCommand):
    name = "email-auth-verify"
    description = "Analyze email headers for authenticity (SPF/DKIM/DMARC, phishing detection)"
    parameters = [
        CommandParameter(name="headers", type="string", description="Email headers to analyze"),
        CommandParameter(
            name="trusted_domains",
            type="string[]",
            description="Optional: trusted domains for lookalike detection",
        ),
        CommandParameter(name="api_key", type="string", description="MailCheck API key"),
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
        headers = args.get("headers")
        if not isinstance(headers, str) or not headers:
            logger.debug("email-auth-verify rejected: missing headers")
            return ErrorResult.validation("Email headers are required")

        trusted_domains = _trusted_domains(args.get("trusted_domains"))
        if trusted_domains is None:
            logger.debug("email-auth-verify rejected: malformed trusted_domains")
            return ErrorResult.validation("Trusted domains must be an array of strings")

        api_key = resolve_api_key(args.get("api_key"), self._credential_provider)
        if not api_key:
            logger.debug("email-auth-verify rejected: no API key resolved")
            return ErrorResult.credential(MISSING_API_KEY)

        try:
            reply = await post_json(
                path=AUTH_VERIFY_PATH,
                payload={"headers": headers, "trusted_domains": trusted_domains},
                api_key=api_key,
                settings=self._settings,
                transport=self._transport,
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("email-auth-verify failed: %s", exc)
            return ErrorResult.transport("Failed to analyze email", exc)

        if not reply.ok:
            logger.warning("email-auth-verify rejected by API (HTTP %s)", reply.status_code)
            return ErrorResult.api(reply.data)

        return AuthVerifyResult.from_payload(reply.data)
