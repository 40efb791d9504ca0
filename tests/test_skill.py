"""Tests de la skill: manifest, despacho y registro en el anfitrión."""

from __future__ import annotations

import asyncio

import pytest

from core.interfaces.command import SkillCommand
from core.services.skill import SKILL_NAME, SKILL_VERSION, MailCheckSkill, build_skill
from tests.conftest import API_KEY


@pytest.fixture
def skill(settings, json_transport):
    transport = json_transport({"email": "a@b.com", "valid": True, "results": [{"valid": True}]})
    return build_skill(settings, credential_provider=lambda: None, transport=transport)


def test_manifest(skill):
    manifest = skill.describe()

    assert manifest["name"] == SKILL_NAME == "mailcheck-email-verification"
    assert manifest["version"] == SKILL_VERSION == "1.0.0"
    assert [c["name"] for c in manifest["commands"]] == [
        "email-verify",
        "email-bulk-verify",
        "email-auth-verify",
    ]
    auth = manifest["commands"][2]
    assert [p["name"] for p in auth["parameters"]] == ["headers", "trusted_domains", "api_key"]
    assert auth["parameters"][1]["type"] == "string[]"


def test_commands_satisfy_protocol(skill):
    assert all(isinstance(command, SkillCommand) for command in skill.commands)


def test_duplicate_command_names_are_rejected(skill):
    command = skill.get("email-verify")
    with pytest.raises(ValueError):
        MailCheckSkill([command, command])


@pytest.mark.asyncio
async def test_invoke_returns_plain_output(skill):
    output = await skill.invoke("email-verify", {"email": "a@b.com", "api_key": API_KEY})

    assert output == {"success": True, "email": "a@b.com", "valid": True}


@pytest.mark.asyncio
async def test_invoke_unknown_command(skill):
    output = await skill.invoke("email-teleport", {})

    assert output == {"error": "Unknown command: email-teleport"}


@pytest.mark.asyncio
async def test_invoke_without_args_is_a_validation_error(skill):
    assert await skill.invoke("email-bulk-verify") == {"error": "Emails array is required"}


@pytest.mark.asyncio
async def test_concurrent_invocations_use_their_own_keys(settings, json_transport):
    transport = json_transport({"results": []})
    skill = build_skill(settings, credential_provider=lambda: None, transport=transport)

    await asyncio.gather(
        *(skill.invoke("email-bulk-verify", {"emails": ["a@b.com"], "api_key": f"key-{i}"}) for i in range(5))
    )

    sent = sorted(r.headers["Authorization"] for r in transport.requests)
    assert sent == [f"Bearer key-{i}" for i in range(5)]


@pytest.mark.asyncio
async def test_register_binds_every_command(skill):
    registered: dict[str, tuple] = {}

    def register(name, description, parameters, handler):
        registered[name] = (description, parameters, handler)

    skill.register(register)

    assert set(registered) == {"email-verify", "email-bulk-verify", "email-auth-verify"}
    description, parameters, handler = registered["email-bulk-verify"]
    assert description == "Verify multiple email addresses (up to 100)"
    assert parameters[0] == {"name": "emails", "type": "string[]", "description": "Array of email addresses"}

    output = await handler({"emails": ["a@b.com"], "api_key": API_KEY})
    assert output["summary"] == {"valid": 1, "invalid": 0}
