"""Tests del comando `email-auth-verify`."""

from __future__ import annotations

import logging

import pytest

from adapters.commands import AuthVerifyCommand
from core.domain.models import AuthVerifyResult, ErrorKind
from tests.conftest import API_KEY

RAW_HEADERS = (
    "From: PayPal <service@paypa1.com>\r\n"
    "Authentication-Results: mx.example.com; spf=fail; dkim=none; dmarc=fail\r\n"
    "Subject: Your account is limited\r\n"
)


def _command(settings, transport, provider=lambda: None) -> AuthVerifyCommand:
    return AuthVerifyCommand(settings, credential_provider=provider, transport=transport)


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [None, "", ["From: a@b.com"]])
async def test_headers_are_required(settings, json_transport, headers):
    transport = json_transport({})
    result = await _command(settings, transport).run({"headers": headers, "api_key": API_KEY})

    assert result.kind is ErrorKind.VALIDATION
    assert result.error == "Email headers are required"
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_trusted_domains_default_to_empty_list(settings, json_transport):
    transport = json_transport({"verdict": "suspicious"})
    await _command(settings, transport).run({"headers": RAW_HEADERS, "api_key": API_KEY})

    assert str(transport.requests[0].url).endswith("/v1/verify/auth")
    assert transport.last_json() == {"headers": RAW_HEADERS, "trusted_domains": []}


@pytest.mark.asyncio
async def test_trusted_domains_are_forwarded(settings, json_transport):
    transport = json_transport({})
    await _command(settings, transport).run(
        {"headers": RAW_HEADERS, "trusted_domains": ["paypal.com"], "api_key": API_KEY}
    )

    assert transport.last_json()["trusted_domains"] == ["paypal.com"]


@pytest.mark.asyncio
@pytest.mark.parametrize("domains", ["paypal.com", [1, 2], {"paypal.com": True}])
async def test_malformed_trusted_domains(settings, json_transport, domains):
    transport = json_transport({})
    result = await _command(settings, transport).run(
        {"headers": RAW_HEADERS, "trusted_domains": domains, "api_key": API_KEY}
    )

    assert result.kind is ErrorKind.VALIDATION
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_missing_credential(settings, json_transport):
    transport = json_transport({})
    result = await _command(settings, transport).run({"headers": RAW_HEADERS})

    assert result.kind is ErrorKind.CREDENTIAL
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_result_projection(settings, json_transport):
    body = {
        "trust_score": 12,
        "verdict": "phishing",
        "from": {"address": "service@paypa1.com", "domain": "paypa1.com"},
        "authentication": {"spf": "fail", "dkim": "none", "dmarc": "fail"},
        "anomalies": ["reply_to_mismatch"],
        "lookalike": {"domain": "paypa1.com", "similar_to": "paypal.com"},
        "privacy": {"tracking_pixels": 0},
        "request_id": "dropped",
    }
    result = await _command(settings, json_transport(body)).run({"headers": RAW_HEADERS, "api_key": API_KEY})

    assert isinstance(result, AuthVerifyResult)
    assert result.from_ == body["from"]
    expected = {key: value for key, value in body.items() if key != "request_id"}
    assert result.to_output() == {"success": True, **expected}


@pytest.mark.asyncio
async def test_transport_failure(settings, failing_transport):
    result = await _command(settings, failing_transport).run({"headers": RAW_HEADERS, "api_key": API_KEY})

    assert result.to_output() == {"error": "Failed to analyze email", "message": "connection refused"}


@pytest.mark.asyncio
async def test_malformed_trusted_domains_are_logged(settings, json_transport, caplog):
    with caplog.at_level(logging.DEBUG, logger="adapters.commands.verify_auth"):
        await _command(settings, json_transport({})).run(
            {"headers": RAW_HEADERS, "trusted_domains": "paypal.com", "api_key": API_KEY}
        )

    assert "email-auth-verify rejected: malformed trusted_domains" in caplog.text
