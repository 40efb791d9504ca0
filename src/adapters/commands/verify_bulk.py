"""Comando `email-bulk-verify`: hasta 100 direcciones en una sola petición.

El resumen `{valid, invalid}` se calcula localmente a partir de `results`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import httpx

from adapters.commands.verify_single import MISSING_API_KEY
from adapters.mailcheck_api import BULK_VERIFY_PATH, post_json
from core.config import AppSettings, env_credential, resolve_api_key
from core.domain.models import BulkVerifyResult, CommandParameter, CommandResult, ErrorResult
from core.interfaces.command import SkillCommand

logger = logging.getLogger(__name__)

MAX_BULK_EMAILS = 100


class BulkVerifyCommand(SkillCommand):
    name = "email-bulk-verify"
    description = f"Verify multiple email addresses (up to {MAX_BULK_EMAILS})"
    parameters = [
        CommandParameter(name="emails", type="string[]", description="Array of email addresses"),
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
        emails = args.get("emails")
        if not isinstance(emails, (list, tuple)):
            logger.debug("email-bulk-verify rejected: emails is %s", type(emails).__name__)
            return ErrorResult.validation("Emails array is required")

        if len(emails) > MAX_BULK_EMAILS:
            logger.debug("email-bulk-verify rejected: %d emails over limit", len(emails))
            return ErrorResult.limit(f"Maximum {MAX_BULK_EMAILS} emails allowed per request")

        api_key = resolve_api_key(args.get("api_key"), self._credential_provider)
        if not api_key:
            logger.debug("email-bulk-verify rejected: no API key resolved")
            return ErrorResult.credential(MISSING_API_KEY)

        try:
            reply = await post_json(
                path=BULK_VERIFY_PATH,
                payload={"emails": list(emails)},
                api_key=api_key,
                settings=self._settings,
                transport=self._transport,
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("email-bulk-verify failed: %s", exc)
            return ErrorResult.transport("Failed to verify emails", exc)

        if not reply.ok:
            logger.warning("email-bulk-verify rejected by API (HTTP %s)", reply.status_code)
            return ErrorResult.api(reply.data)

        return BulkVerifyResult.from_payload(reply.data)
