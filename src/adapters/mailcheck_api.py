"""Transporte hacia la API de MailCheck.

Responsabilidad:
- Emitir un único POST JSON autenticado (Bearer) y decodificar la respuesta.
- No reintenta ni cachea: un fallo de red sube como `httpx.HTTPError` y un
  body no-JSON como `ValueError`; el comando decide cómo reportarlo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings

logger = logging.getLogger(__name__)

VERIFY_PATH = "/v1/verify"
BULK_VERIFY_PATH = "/v1/verify/bulk"
AUTH_VERIFY_PATH = "/v1/verify/auth"


@dataclass(frozen=True)
class ApiReply:
    """Respuesta decodificada de la API."""

    status_code: int
    data: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


async def post_json(
    *,
    path: str,
    payload: dict[str, Any],
    api_key: str,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiReply:
    """POST `payload` a `path` y devuelve el JSON decodificado.

    Lanza:
    - `httpx.HTTPError` ante fallos de conexión/timeout.
    - `ValueError` (JSONDecodeError) si el body no es JSON.
    """

    headers = {"Authorization": f"Bearer {api_key}"}
    async with build_async_client(settings, extra_headers=headers, transport=transport) as client:
        logger.debug("POST %s", path)
        response = await client.post(path, json=payload)

    logger.debug("POST %s -> HTTP %s", path, response.status_code)
    # Se decodifica antes de mirar el status: un error no-JSON es fallo de transporte.
    data = response.json()
    return ApiReply(status_code=response.status_code, data=data)
