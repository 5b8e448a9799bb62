"""Patient profile screen with the gamified daily hygiene checklist."""

from collections.abc import Callable
from datetime import UTC, date, datetime

import structlog

from odontoapp.core.document_store import ACTIVITIES, USERS, DocumentStore
from odontoapp.core.exceptions import RemoteCallException
from odontoapp.core.session import SessionStore
from odontoapp.schemas.profile import (
    ACTIVITY_POINTS,
    ActivityField,
    DailyActivity,
    PatientProfile,
)

logger = structlog.get_logger(__name__)


def utc_today() -> date:
    return datetime.now(UTC).date()


def activity_key(user_id: str, day: date) -> str:
    """Document key of one account's checklist for one day."""
    return f"{user_id}_{day.isoformat()}"


class ProfileService:
    """Profile data plus today's checklist for the signed-in account."""

    def __init__(
        self,
        store: DocumentStore,
        session: SessionStore,
        today: Callable[[], date] = utc_today,
    ):
        """Initialize service with the document store, the session and a clock."""
        self.store = store
        self.session = session
        self.today = today
        self.profile: PatientProfile | None = None
        self.activities = DailyActivity()
        self.day: date | None = None
        self.saving = False

    def reset(self) -> None:
        self.profile = None
        self.activities = DailyActivity()
        self.day = None

    async def load(self) -> tuple[PatientProfile, DailyActivity]:
        """
        Load the profile document and today's checklist.

        A missing checklist document means nothing was done yet today.

        Raises:
            UnauthorizedException: If nobody is signed in
            RemoteCallException: If a read fails; the previous state is kept
        """
        user = self.session.require_user()
        day = self.today()

        try:
            user_data = await self.store.get(USERS, user.id) or {}
            activity_data = await self.store.get(ACTIVITIES, activity_key(user.id, day))
        except RemoteCallException as e:
            logger.error("profile_load_failed", user_id=user.id, error=str(e))
            raise

        self.profile = PatientProfile(
            id=user.id,
            nome=user_data.get("nome") or user.username,
            pontos=user_data.get("pontos") or 0,
            ultima_consulta=user_data.get("ultimaConsulta"),
            telefone=user_data.get("telefone"),
        )
        self.activities = DailyActivity.model_validate(activity_data or {})
        self.day = day
        return self.profile, self.activities

    async def check(self, field: ActivityField) -> tuple[PatientProfile, DailyActivity]:
        """
        Mark a checklist item done and award its points.

        Checked items are final: checking one again changes nothing and sends
        nothing. The day's checklist is upsert-merged first, then the new
        point total is written to the profile document. The two writes are not
        atomic: if the points write fails the flag stays stored as done and
        its points are not awarded.

        Raises:
            UnauthorizedException: If nobody is signed in
            RemoteCallException: If a write fails; local state is unchanged
        """
        user = self.session.require_user()
        profile = self.profile
        day = self.day
        if profile is None or profile.id != user.id or day != self.today():
            profile, _ = await self.load()
            day = self.day

        if self.activities.is_done(field):
            return profile, self.activities

        points = profile.pontos + ACTIVITY_POINTS[field]
        now = datetime.now(UTC).isoformat()

        self.saving = True
        try:
            await self.store.set(
                ACTIVITIES,
                activity_key(user.id, day),
                {
                    "userId": user.id,
                    "data": day.isoformat(),
                    field.value: True,
                    "updatedAt": now,
                },
                merge=True,
            )
            # Not rolled back if the points write below fails
            await self.store.set(USERS, user.id, {"pontos": points, "updatedAt": now}, merge=True)
        except RemoteCallException as e:
            logger.error("activity_save_failed", user_id=user.id, field=field.value, error=str(e))
            raise
        finally:
            self.saving = False

        self.profile = profile.model_copy(update={"pontos": points})
        self.activities = DailyActivity.model_validate(
            {**self.activities.model_dump(by_alias=True), field.value: True}
        )
        logger.info("activity_checked", user_id=user.id, field=field.value, points=points)
        return self.profile, self.activities
