"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- La respuesta de la API no tiene esquema garantizado; cada campo leído es
  opcional. Campo ausente => campo no asignado (se omite en la salida);
  un `null` explícito de la API se conserva como `None`.
- Un tipo de resultado por comando + `ErrorResult` obliga a tratar ambas
  ramas de forma explícita.

Nota:
- Estos modelos describen *qué* devuelve un comando, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Mapping, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def _as_mapping(data: object) -> Mapping[str, Any]:
    # Un body JSON que no es objeto se proyecta como vacío.
    return data if isinstance(data, Mapping) else {}


def _pick(body: Mapping[str, Any], *names: str) -> dict[str, Any]:
    return {name: body[name] for name in names if name in body}


class ErrorKind(str, Enum):
    """Clases de fallo que un comando puede devolver."""

    VALIDATION = "validation"
    CREDENTIAL = "credential"
    LIMIT = "limit"
    API = "api"
    TRANSPORT = "transport"


class CommandParameter(BaseModel):
    """Parámetro declarado por un comando (lo consume el framework anfitrión)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="Tipo declarado: 'string' o 'string[]'.")
    description: str = Field(default="")


class _CommandOutput(BaseModel):
    def to_output(self) -> dict[str, Any]:
        """Objeto plano devuelto al anfitrión.

        Solo incluye los campos asignados (más `success`): lo ausente en la
        respuesta se omite y un `null` explícito se mantiene.
        """

        include = set(self.model_fields_set)
        if "success" in type(self).model_fields:
            include.add("success")
        include.discard("kind")
        return self.model_dump(mode="json", by_alias=True, include=include)


class ErrorResult(_CommandOutput):
    """Resultado de error uniforme: `{error, message?, raw?}`."""

    kind: ErrorKind = Field(..., exclude=True)
    error: str = Field(..., min_length=1)
    message: str | None = None
    raw: Any = None

    @property
    def success(self) -> bool:
        return False

    @classmethod
    def validation(cls, error: str) -> "ErrorResult":
        return cls(kind=ErrorKind.VALIDATION, error=error)

    @classmethod
    def credential(cls, error: str) -> "ErrorResult":
        return cls(kind=ErrorKind.CREDENTIAL, error=error)

    @classmethod
    def limit(cls, error: str) -> "ErrorResult":
        return cls(kind=ErrorKind.LIMIT, error=error)

    @classmethod
    def api(cls, data: object) -> "ErrorResult":
        """Error devuelto por la API (status no-2xx); conserva el body completo."""

        message = _as_mapping(data).get("message")
        if not isinstance(message, str) or not message:
            message = "API request failed"
        return cls(kind=ErrorKind.API, error=message, raw=data)

    @classmethod
    def transport(cls, error: str, exc: BaseException) -> "ErrorResult":
        return cls(kind=ErrorKind.TRANSPORT, error=error, message=str(exc) or type(exc).__name__)


class VerifyResult(_CommandOutput):
    """Resultado de `email-verify`."""

    success: Literal[True] = True
    email: Any = None
    valid: Any = None
    score: Any = None
    reason: Any = None
    risk_level: Any = None
    checks: Any = None
    details: Any = None

    @classmethod
    def from_payload(cls, data: object) -> "VerifyResult":
        body = _as_mapping(data)
        fields = _pick(body, "email", "valid", "score", "reason", "checks", "details")
        details = body.get("details")
        if isinstance(details, Mapping) and "risk_level" in details:
            fields["risk_level"] = details["risk_level"]
        return cls(**fields)


class BulkSummary(BaseModel):
    valid: int = Field(default=0, ge=0)
    invalid: int = Field(default=0, ge=0)

    @classmethod
    def tally(cls, results: object) -> "BulkSummary":
        """Cuenta válidos (`valid` truthy) e inválidos (todo lo demás)."""

        if not isinstance(results, list):
            return cls()
        valid = sum(1 for item in results if isinstance(item, Mapping) and item.get("valid"))
        return cls(valid=valid, invalid=len(results) - valid)


class BulkVerifyResult(_CommandOutput):
    """Resultado de `email-bulk-verify`."""

    success: Literal[True] = True
    results: list[Any] | None = None
    total: Any = None
    unique_verified: Any = None
    credits_remaining: Any = None
    summary: BulkSummary = Field(default_factory=BulkSummary)

    @classmethod
    def from_payload(cls, data: object) -> "BulkVerifyResult":
        body = _as_mapping(data)
        fields = _pick(body, "total", "unique_verified", "credits_remaining")
        results = body.get("results")
        if isinstance(results, list):
            fields["results"] = results
        return cls(**fields, summary=BulkSummary.tally(results))


class AuthVerifyResult(_CommandOutput):
    """Resultado de `email-auth-verify` (análisis de cabeceras)."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    trust_score: Any = None
    verdict: Any = None
    from_: Any = Field(default=None, alias="from")
    authentication: Any = None
    anomalies: Any = None
    lookalike: Any = None
    privacy: Any = None

    @classmethod
    def from_payload(cls, data: object) -> "AuthVerifyResult":
        body = _as_mapping(data)
        # `from` llega por alias.
        fields = _pick(
            body, "trust_score", "verdict", "from", "authentication", "anomalies", "lookalike", "privacy"
        )
        return cls(**fields)


CommandResult = Union[VerifyResult, BulkVerifyResult, AuthVerifyResult, ErrorResult]
