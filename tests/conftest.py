"""Fixtures compartidas: settings aislados del entorno y transporte HTTP simulado."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

API_KEY = "mc_test_key"


class RecordingTransport(httpx.MockTransport):
    """`httpx.MockTransport` que guarda cada request emitido."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_key=None,
        api_base_url="https://api.mailcheck.test",
        http_timeout_seconds=5.0,
    )


@pytest.fixture
def no_credential() -> Callable[[], str | None]:
    return lambda: None


@pytest.fixture
def json_transport() -> Callable[..., RecordingTransport]:
    """Construye un transporte que responde siempre `status` + `body` JSON."""

    def _make(body: Any, status: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status, json=body))

    return _make


@pytest.fixture
def failing_transport() -> RecordingTransport:
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return RecordingTransport(_fail)
