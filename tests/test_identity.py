"""Tests for the Firebase identity provider client."""

import httpx
import pytest

from odontoapp.core.exceptions import AuthProviderException, RemoteCallException
from odontoapp.core.identity import (
    SIGN_IN_FAILED,
    FirebaseIdentityProvider,
    parse_error_code,
)


def provider_for(handler) -> FirebaseIdentityProvider:
    client = httpx.AsyncClient(
        base_url="https://identity.test/v1", transport=httpx.MockTransport(handler)
    )
    return FirebaseIdentityProvider(client, api_key="chave")


def error_body(message: str) -> dict:
    return {"error": {"code": 400, "message": message}}


def test_parse_error_code():
    assert parse_error_code(error_body("WEAK_PASSWORD : Password should be at least 6")) == (
        "WEAK_PASSWORD"
    )
    assert parse_error_code(error_body("EMAIL_EXISTS")) == "EMAIL_EXISTS"
    assert parse_error_code({"unexpected": True}) is None
    assert parse_error_code(None) is None


@pytest.mark.asyncio
async def test_sign_in_success():
    """Test a successful sign-in returns the account."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "localId": "uid-1",
                "email": "joana@example.com",
                "displayName": "joana",
                "idToken": "token",
            },
        )

    provider = provider_for(handler)
    account = await provider.sign_in("joana@example.com", "segredo")

    assert account.uid == "uid-1"
    assert account.display_name == "joana"
    assert requests[0].url.path == "/v1/accounts:signInWithPassword"
    assert requests[0].url.params["key"] == "chave"
    await provider.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message,expected",
    [
        ("EMAIL_EXISTS", "Este e-mail já está em uso."),
        ("WEAK_PASSWORD : Password should be at least 6 characters", "A senha é muito fraca."),
        ("INVALID_EMAIL", "E-mail inválido."),
    ],
)
async def test_sign_up_maps_provider_errors(message, expected):
    """Test known provider codes become friendly messages."""
    provider = provider_for(lambda request: httpx.Response(400, json=error_body(message)))

    with pytest.raises(AuthProviderException) as exc_info:
        await provider.sign_up("joana@example.com", "123")

    assert exc_info.value.message == expected
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_unknown_sign_in_error_uses_generic_message():
    provider = provider_for(lambda request: httpx.Response(400, json=error_body("SOMETHING_NEW")))

    with pytest.raises(AuthProviderException) as exc_info:
        await provider.sign_in("joana@example.com", "segredo")

    assert exc_info.value.message == SIGN_IN_FAILED
    assert exc_info.value.code == "SOMETHING_NEW"


@pytest.mark.asyncio
async def test_server_error_is_remote_failure():
    provider = provider_for(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(RemoteCallException) as exc_info:
        await provider.sign_in("joana@example.com", "segredo")

    assert exc_info.value.operation == "signInWithPassword"


@pytest.mark.asyncio
async def test_network_error_is_remote_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    provider = provider_for(handler)

    with pytest.raises(RemoteCallException):
        await provider.sign_up("joana@example.com", "segredo")


@pytest.mark.asyncio
async def test_update_display_name_sends_token():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = request.read()
        return httpx.Response(200, json={"localId": "uid-1"})

    provider = provider_for(handler)
    await provider.update_display_name("token", "joana")

    assert captured["path"] == "/v1/accounts:update"
    assert b'"displayName":"joana"' in captured["body"].replace(b" ", b"")
