from collections.abc import AsyncGenerator
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

# Load environment variables from .env file
load_dotenv()

from odontoapp.core.document_store import APPOINTMENTS, USERS, MemoryDocumentStore
from odontoapp.core.identity import FirebaseIdentityProvider
from odontoapp.core.redis_client import SessionSlot
from odontoapp.main import app
from odontoapp.runtime import AppRuntime, build_runtime
from odontoapp.schemas.auth import IdentityAccount, SessionUser
from odontoapp.services.navigation_service import Screen

PATIENT_ID = "uid-paciente-1"
TODAY = date(2025, 5, 20)


@pytest.fixture
def patient() -> SessionUser:
    """Signed-in patient."""
    return SessionUser(id=PATIENT_ID, username="joana", email="joana@example.com")


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Document store seeded with one patient and one active appointment."""
    return MemoryDocumentStore(
        {
            USERS: {
                PATIENT_ID: {
                    "nome": "Joana Lima",
                    "username": "joana",
                    "email": "joana@example.com",
                    "cpf": "12345678901",
                    "pontos": 0,
                },
            },
            APPOINTMENTS: {
                "consulta-1": {
                    "dataConsulta": "2025-05-10T14:00:00",
                    "id_Paciente": PATIENT_ID,
                    "id_Dentista": 1,
                    "status": "Agendada",
                    "nomePaciente": "Joana Lima",
                    "nomeDentista": "Dra. Ana Souza",
                },
                "consulta-cancelada": {
                    "dataConsulta": "2025-04-01T14:00:00",
                    "id_Paciente": PATIENT_ID,
                    "id_Dentista": 3,
                    "status": "Cancelada",
                },
                "consulta-outro": {
                    "dataConsulta": "2025-05-11T14:00:00",
                    "id_Paciente": "uid-outro",
                    "id_Dentista": 2,
                    "status": "Agendada",
                },
            },
        }
    )


@pytest.fixture
def identity() -> AsyncMock:
    """Identity provider that accepts every account."""
    provider = AsyncMock(spec=FirebaseIdentityProvider)
    account = IdentityAccount(
        uid=PATIENT_ID,
        email="joana@example.com",
        display_name="joana",
        id_token="id-token",
    )
    provider.sign_up.return_value = account
    provider.sign_in.return_value = account
    return provider


@pytest.fixture
def mock_redis() -> MagicMock:
    redis_client = MagicMock()
    redis_client.get.return_value = None
    return redis_client


@pytest.fixture
def runtime(store, identity, mock_redis) -> AppRuntime:
    """Runtime with nobody signed in."""
    runtime = build_runtime(store, identity, slot=SessionSlot(mock_redis))
    runtime.profile.today = lambda: TODAY
    return runtime


@pytest.fixture
def signed_runtime(runtime: AppRuntime, patient: SessionUser) -> AppRuntime:
    """Runtime with the patient signed in on the home menu."""
    runtime.session.set_user(patient)
    runtime.navigation.reset(Screen.HOME)
    return runtime


async def _client_for(runtime: AppRuntime) -> AsyncGenerator[AsyncClient, None]:
    app.state.runtime = runtime
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    del app.state.runtime


@pytest_asyncio.fixture
async def client(runtime: AppRuntime) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client for a signed-out device."""
    async for client in _client_for(runtime):
        yield client


@pytest_asyncio.fixture
async def signed_client(signed_runtime: AppRuntime) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client for a device with the patient signed in."""
    async for client in _client_for(signed_runtime):
        yield client
