"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from odontoapp.core.session import SessionStore
from odontoapp.runtime import AppRuntime
from odontoapp.schemas.auth import SessionUser
from odontoapp.services.appointment_service import AppointmentService
from odontoapp.services.auth_service import AuthService
from odontoapp.services.clinic_service import ClinicService
from odontoapp.services.navigation_service import NavigationService
from odontoapp.services.notification_service import NotificationService
from odontoapp.services.profile_service import ProfileService


def get_runtime(request: Request) -> AppRuntime:
    """Runtime created by the application lifespan."""
    return request.app.state.runtime


def get_session(runtime: Annotated[AppRuntime, Depends(get_runtime)]) -> SessionStore:
    return runtime.session


def get_current_user(session: Annotated[SessionStore, Depends(get_session)]) -> SessionUser:
    """
    Signed-in account.

    Raises:
        UnauthorizedException: If nobody is signed in
    """
    return session.require_user()


def get_navigation(runtime: Annotated[AppRuntime, Depends(get_runtime)]) -> NavigationService:
    return runtime.navigation


def get_auth_service(runtime: Annotated[AppRuntime, Depends(get_runtime)]) -> AuthService:
    return runtime.auth


def get_appointment_service(
    runtime: Annotated[AppRuntime, Depends(get_runtime)],
) -> AppointmentService:
    return runtime.appointments


def get_clinic_service(runtime: Annotated[AppRuntime, Depends(get_runtime)]) -> ClinicService:
    return runtime.clinics


def get_notification_service(
    runtime: Annotated[AppRuntime, Depends(get_runtime)],
) -> NotificationService:
    return runtime.notifications


def get_profile_service(runtime: Annotated[AppRuntime, Depends(get_runtime)]) -> ProfileService:
    return runtime.profile


# Type aliases for dependency injection
Runtime = Annotated[AppRuntime, Depends(get_runtime)]
Session = Annotated[SessionStore, Depends(get_session)]
CurrentUser = Annotated[SessionUser, Depends(get_current_user)]
Navigation = Annotated[NavigationService, Depends(get_navigation)]
Auth = Annotated[AuthService, Depends(get_auth_service)]
Appointments = Annotated[AppointmentService, Depends(get_appointment_service)]
Clinics = Annotated[ClinicService, Depends(get_clinic_service)]
Notifications = Annotated[NotificationService, Depends(get_notification_service)]
Profile = Annotated[ProfileService, Depends(get_profile_service)]
