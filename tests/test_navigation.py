"""Tests for screen navigation."""

import pytest
from httpx import AsyncClient

from odontoapp.core.exceptions import ConflictException, NotFoundException
from odontoapp.services.navigation_service import NavigationService, Screen, parse_screen


def test_navigate_and_back():
    navigation = NavigationService()

    navigation.navigate(Screen.REGISTRATION)
    assert navigation.current == Screen.REGISTRATION

    assert navigation.back() == Screen.LOGIN


def test_navigate_to_open_screen_returns_to_it():
    """Test opening a screen already on the stack pops back to it."""
    navigation = NavigationService(initial=Screen.HOME)
    navigation.navigate(Screen.APPOINTMENTS)
    navigation.navigate(Screen.PROFILE)

    navigation.navigate(Screen.HOME)

    assert navigation.stack == [Screen.HOME]


def test_back_at_root():
    with pytest.raises(ConflictException):
        NavigationService().back()


def test_reset_replaces_stack():
    navigation = NavigationService()
    navigation.navigate(Screen.REGISTRATION)

    navigation.reset(Screen.HOME)

    assert navigation.stack == [Screen.HOME]


def test_parse_screen():
    assert parse_screen("BuscarClinicas") == Screen.CLINIC_SEARCH
    with pytest.raises(NotFoundException):
        parse_screen("Configuracoes")


@pytest.mark.asyncio
async def test_navigation_endpoints(client: AsyncClient):
    response = await client.get("/api/v1/navigation/")
    assert response.json() == {"current": "Login", "stack": ["Login"]}

    response = await client.post("/api/v1/navigation/navigate", json={"screen": "Cadastro"})
    assert response.json()["stack"] == ["Login", "Cadastro"]

    response = await client.post("/api/v1/navigation/back")
    assert response.json()["current"] == "Login"

    response = await client.post("/api/v1/navigation/back")
    assert response.status_code == 409

    response = await client.post("/api/v1/navigation/navigate", json={"screen": "Nada"})
    assert response.status_code == 404

    response = await client.post("/api/v1/navigation/reset", json={"screen": "Alertas"})
    assert response.json() == {"current": "Alertas", "stack": ["Alertas"]}
