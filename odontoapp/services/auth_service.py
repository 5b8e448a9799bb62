"""Account creation, sign-in and sign-out flows."""

from datetime import UTC, datetime

import structlog

from odontoapp.core.document_store import USERS, DocumentStore
from odontoapp.core.exceptions import RemoteCallException
from odontoapp.core.identity import FirebaseIdentityProvider
from odontoapp.core.session import SessionStore
from odontoapp.core.validation import validate_login, validate_registration
from odontoapp.schemas.auth import LoginForm, RegistrationForm, SessionUser
from odontoapp.services.navigation_service import NavigationService, Screen

logger = structlog.get_logger(__name__)


class AuthService:
    """Registration, login and logout screens."""

    REGISTRATION_SUCCESS = (
        "Cadastro realizado com sucesso! Você já pode fazer login com suas credenciais."
    )

    def __init__(
        self,
        identity: FirebaseIdentityProvider,
        store: DocumentStore,
        session: SessionStore,
        navigation: NavigationService,
    ):
        """Initialize service with its collaborators."""
        self.identity = identity
        self.store = store
        self.session = session
        self.navigation = navigation

    async def register(self, form: RegistrationForm) -> SessionUser:
        """
        Create an account and its ``users`` profile document.

        Args:
            form: Registration form

        Returns:
            The new, signed-in account

        Raises:
            ValidationException: If the form is invalid (nothing is sent)
            AuthProviderException: If the provider rejects the account
            RemoteCallException: If a remote call fails
        """
        validate_registration(form)

        account = await self.identity.sign_up(form.email, form.senha)
        await self.identity.update_display_name(account.id_token, form.username)

        user = SessionUser(id=account.uid, username=form.username, email=account.email)
        self.session.set_user(user)

        try:
            await self.store.set(
                USERS,
                account.uid,
                {
                    "nome": form.nome,
                    "username": form.username,
                    "email": form.email,
                    "cpf": form.cpf,
                    "telefone": form.telefone,
                    "createdAt": datetime.now(UTC).isoformat(),
                    "pontos": 0,
                },
                merge=True,
            )
        except RemoteCallException as e:
            logger.error("user_profile_save_failed", user_id=account.uid, error=str(e))
            raise

        logger.info("account_registered", user_id=account.uid)
        return user

    async def login(self, form: LoginForm) -> SessionUser:
        """
        Sign in and open the home menu.

        Raises:
            ValidationException: If the form is invalid (nothing is sent)
            AuthProviderException: If the credentials are rejected
        """
        validate_login(form)

        account = await self.identity.sign_in(form.email, form.senha)
        user = SessionUser(id=account.uid, username=account.display_name, email=account.email)
        self.session.set_user(user)
        self.navigation.reset(Screen.HOME)
        return user

    async def logout(self) -> None:
        """Sign out, drop every screen's state and go back to the login screen."""
        await self.identity.sign_out()
        self.session.teardown()
        self.navigation.reset(Screen.LOGIN)
