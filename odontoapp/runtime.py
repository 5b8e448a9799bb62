"""Per-process app runtime wiring the session and every screen together."""

from dataclasses import dataclass, field

from odontoapp.core.document_store import DocumentStore
from odontoapp.core.identity import FirebaseIdentityProvider
from odontoapp.core.redis_client import SessionSlot
from odontoapp.core.session import SessionStore, bind_session_slot
from odontoapp.services.appointment_service import AppointmentService
from odontoapp.services.auth_service import AuthService
from odontoapp.services.clinic_service import ClinicService
from odontoapp.services.navigation_service import NavigationService
from odontoapp.services.notification_service import NotificationService
from odontoapp.services.profile_service import ProfileService


@dataclass
class AppRuntime:
    """Everything one device session needs, created once at startup."""

    store: DocumentStore
    identity: FirebaseIdentityProvider
    session: SessionStore
    navigation: NavigationService
    auth: AuthService
    appointments: AppointmentService
    clinics: ClinicService
    notifications: NotificationService
    profile: ProfileService
    slot: SessionSlot | None = None
    _unsubscribers: list = field(default_factory=list)

    def reset_screens(self) -> None:
        """Drop every screen's local state."""
        self.appointments.reset()
        self.clinics.reset()
        self.notifications.reset()
        self.profile.reset()

    async def close(self) -> None:
        """Stop session mirroring and release remote clients."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        await self.identity.close()
        await self.store.close()


def build_runtime(
    store: DocumentStore,
    identity: FirebaseIdentityProvider,
    slot: SessionSlot | None = None,
    session: SessionStore | None = None,
) -> AppRuntime:
    """Create the session store and the screens that depend on it."""
    session = session or SessionStore()
    navigation = NavigationService()

    runtime = AppRuntime(
        store=store,
        identity=identity,
        session=session,
        navigation=navigation,
        auth=AuthService(identity, store, session, navigation),
        appointments=AppointmentService(store, session),
        clinics=ClinicService(store),
        notifications=NotificationService(),
        profile=ProfileService(store, session),
        slot=slot,
    )

    session.on_teardown(runtime.reset_screens)
    if slot is not None:
        runtime._unsubscribers.append(bind_session_slot(session, slot))

    return runtime
