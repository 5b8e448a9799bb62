"""Process-wide session store with explicit subscribe/notify semantics."""

from collections.abc import Callable

import redis
import structlog

from odontoapp.core.exceptions import UnauthorizedException
from odontoapp.core.redis_client import SessionSlot
from odontoapp.schemas.auth import SessionUser

logger = structlog.get_logger(__name__)

SessionListener = Callable[[SessionUser | None], None]


class SessionStore:
    """
    Holds the signed-in account for the whole process.

    Created once at startup and handed to every screen explicitly. Listeners
    are called synchronously, in subscription order, after every change.
    """

    def __init__(self) -> None:
        """Initialize an empty session."""
        self._user: SessionUser | None = None
        self._listeners: list[SessionListener] = []
        self._teardown_hooks: list[Callable[[], None]] = []

    @property
    def current(self) -> SessionUser | None:
        """Signed-in account, if any."""
        return self._user

    @property
    def signed(self) -> bool:
        """Whether an account is signed in."""
        return self._user is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener for session changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_teardown(self, hook: Callable[[], None]) -> None:
        """Register a hook run when the session is torn down on sign-out."""
        self._teardown_hooks.append(hook)

    def set_user(self, user: SessionUser) -> None:
        """Replace the signed-in account and notify listeners."""
        self._user = user
        logger.info("session_changed", user_id=user.id, signed=True)
        self._notify()

    def clear(self) -> None:
        """Forget the signed-in account and notify listeners."""
        self._user = None
        logger.info("session_changed", signed=False)
        self._notify()

    def teardown(self) -> None:
        """Clear the account and drop every per-screen state."""
        self.clear()
        for hook in self._teardown_hooks:
            hook()

    def require_user(self) -> SessionUser:
        """
        Get the signed-in account.

        Raises:
            UnauthorizedException: If nobody is signed in
        """
        if self._user is None:
            raise UnauthorizedException()
        return self._user

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._user)


def bind_session_slot(store: SessionStore, slot: SessionSlot) -> Callable[[], None]:
    """
    Mirror every session change into the persisted slot.

    Returns:
        Callable that stops mirroring
    """

    def persist(user: SessionUser | None) -> None:
        try:
            if user is None:
                slot.clear()
            else:
                slot.write(user.model_dump())
        except redis.RedisError as e:
            logger.warning("session_slot_write_failed", key=slot.key, error=str(e))

    return store.subscribe(persist)


def restore_offline_user(slot: SessionSlot) -> SessionUser | None:
    """Read the last signed-in account from the slot, for display only."""
    try:
        data = slot.read()
    except redis.RedisError as e:
        logger.warning("session_slot_read_failed", key=slot.key, error=str(e))
        return None

    if not data or "id" not in data:
        return None
    return SessionUser.model_validate(data)
