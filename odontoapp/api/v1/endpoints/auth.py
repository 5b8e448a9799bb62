"""Authentication endpoints: registration, login, logout and session."""

from fastapi import APIRouter, status

from odontoapp.core.session import restore_offline_user
from odontoapp.dependencies import Auth, Runtime
from odontoapp.schemas.auth import (
    LoginForm,
    RegistrationForm,
    RegistrationResponse,
    SessionResponse,
)
from odontoapp.services.auth_service import AuthService

router = APIRouter()


def _session_response(runtime: Runtime) -> SessionResponse:
    offline_user = None
    if not runtime.session.signed and runtime.slot is not None:
        offline_user = restore_offline_user(runtime.slot)

    return SessionResponse(
        signed=runtime.session.signed,
        user=runtime.session.current,
        offline_user=offline_user,
        screen=runtime.navigation.current.value,
    )


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def register(form: RegistrationForm, auth: Auth) -> RegistrationResponse:
    """
    Create an account from the registration form.

    Args:
        form: Registration form
        auth: Auth service

    Returns:
        Success message and the signed-in account
    """
    user = await auth.register(form)
    return RegistrationResponse(message=AuthService.REGISTRATION_SUCCESS, user=user)


@router.post(
    "/login",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with email and password",
)
async def login(form: LoginForm, auth: Auth, runtime: Runtime) -> SessionResponse:
    """
    Sign in and open the home menu.

    Args:
        form: Login form
        auth: Auth service
        runtime: App runtime

    Returns:
        New session state
    """
    await auth.login(form)
    return _session_response(runtime)


@router.post(
    "/logout",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign out",
)
async def logout(auth: Auth, runtime: Runtime) -> SessionResponse:
    """Sign out and return to the login screen."""
    await auth.logout()
    return _session_response(runtime)


@router.get(
    "/session",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Current session",
)
async def get_session(runtime: Runtime) -> SessionResponse:
    """
    Current session state.

    When nobody is signed in, the last persisted account is returned as
    ``offline_user`` for display only.
    """
    return _session_response(runtime)
