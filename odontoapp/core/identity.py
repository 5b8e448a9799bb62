"""Firebase Authentication client for email/password accounts.

The Admin SDK cannot check passwords, so sign-up, sign-in and profile
updates go through the Identity Toolkit REST API with the project's Web
API key, the same endpoints the mobile Firebase SDK calls.
"""

from typing import Any

import httpx
import structlog

from odontoapp.core.exceptions import AuthProviderException, RemoteCallException
from odontoapp.schemas.auth import IdentityAccount

logger = structlog.get_logger(__name__)

SIGN_IN_FAILED = "Falha ao fazer login. Verifique suas credenciais."
SIGN_UP_FAILED = "Falha ao criar conta."

ERROR_MESSAGES = {
    "EMAIL_EXISTS": "Este e-mail já está em uso.",
    "INVALID_EMAIL": "E-mail inválido.",
    "WEAK_PASSWORD": "A senha é muito fraca.",
    "USER_DISABLED": "Conta desativada.",
    "EMAIL_NOT_FOUND": "Usuário não encontrado.",
    "INVALID_PASSWORD": "Senha incorreta.",
    "INVALID_LOGIN_CREDENTIALS": SIGN_IN_FAILED,
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Muitas tentativas de login. Tente novamente mais tarde.",
}


def parse_error_code(body: Any) -> str | None:
    """
    Extract the provider error code from an Identity Toolkit error body.

    Messages look like ``"WEAK_PASSWORD : Password should be at least 6 characters"``.
    """
    try:
        message = body["error"]["message"]
    except (KeyError, TypeError):
        return None
    if not isinstance(message, str):
        return None
    return message.split(":", 1)[0].strip() or None


class FirebaseIdentityProvider:
    """Identity provider backed by Firebase Authentication."""

    def __init__(self, client: httpx.AsyncClient, api_key: str):
        """
        Initialize provider.

        Args:
            client: HTTP client whose base URL is the Identity Toolkit endpoint
            api_key: Firebase Web API key
        """
        self.client = client
        self.api_key = api_key

    async def _call(self, method: str, payload: dict[str, Any], default_message: str) -> dict:
        try:
            response = await self.client.post(
                f"/accounts:{method}",
                params={"key": self.api_key},
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error("identity_request_failed", method=method, error=str(e))
            raise RemoteCallException(
                "Serviço de autenticação indisponível", operation=method
            ) from e

        if response.status_code == 200:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = None

        code = parse_error_code(body)
        if response.status_code >= 500 or (code is None and response.status_code != 400):
            logger.error(
                "identity_request_failed", method=method, status_code=response.status_code
            )
            raise RemoteCallException("Serviço de autenticação indisponível", operation=method)

        logger.warning("identity_request_rejected", method=method, code=code)
        raise AuthProviderException(ERROR_MESSAGES.get(code or "", default_message), code=code)

    async def sign_up(self, email: str, password: str) -> IdentityAccount:
        """Create an email/password account and return it signed in."""
        data = await self._call(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
            SIGN_UP_FAILED,
        )
        logger.info("identity_account_created", uid=data.get("localId"))
        return IdentityAccount(
            uid=data["localId"],
            email=data.get("email", email),
            display_name=data.get("displayName", ""),
            id_token=data.get("idToken", ""),
            refresh_token=data.get("refreshToken", ""),
        )

    async def sign_in(self, email: str, password: str) -> IdentityAccount:
        """Sign in with email and password."""
        data = await self._call(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
            SIGN_IN_FAILED,
        )
        logger.info("identity_signed_in", uid=data.get("localId"))
        return IdentityAccount(
            uid=data["localId"],
            email=data.get("email", email),
            display_name=data.get("displayName", ""),
            id_token=data.get("idToken", ""),
            refresh_token=data.get("refreshToken", ""),
        )

    async def update_display_name(self, id_token: str, display_name: str) -> None:
        """Set the profile display name of the account behind ``id_token``."""
        await self._call(
            "update",
            {"idToken": id_token, "displayName": display_name, "returnSecureToken": False},
            SIGN_UP_FAILED,
        )

    async def sign_out(self) -> None:
        """Sign out locally; Firebase keeps no server-side session to end."""
        logger.info("identity_signed_out")

    async def close(self) -> None:
        await self.client.aclose()


def create_identity_provider(
    base_url: str, api_key: str, timeout: float = 10.0
) -> FirebaseIdentityProvider:
    """Build a provider with its own HTTP client."""
    client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
    return FirebaseIdentityProvider(client, api_key)
