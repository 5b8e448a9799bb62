"""Tests for the session store and its persisted slot."""

import json
from unittest.mock import MagicMock

import pytest
import redis

from odontoapp.core.exceptions import UnauthorizedException
from odontoapp.core.redis_client import SessionSlot
from odontoapp.core.session import SessionStore, bind_session_slot, restore_offline_user
from odontoapp.schemas.auth import SessionUser


@pytest.fixture
def user() -> SessionUser:
    return SessionUser(id="uid-1", username="joana", email="joana@example.com")


def test_listeners_notified_in_order(user):
    """Test every listener sees each change, in subscription order."""
    session = SessionStore()
    calls = []
    session.subscribe(lambda current: calls.append(("first", current)))
    session.subscribe(lambda current: calls.append(("second", current)))

    session.set_user(user)
    session.clear()

    assert calls == [("first", user), ("second", user), ("first", None), ("second", None)]


def test_unsubscribe_stops_notifications(user):
    session = SessionStore()
    listener = MagicMock()
    unsubscribe = session.subscribe(listener)

    unsubscribe()
    session.set_user(user)

    listener.assert_not_called()


def test_signed_follows_current_user(user):
    session = SessionStore()
    assert session.signed is False

    session.set_user(user)
    assert session.signed is True
    assert session.current == user


def test_require_user_when_signed_out():
    with pytest.raises(UnauthorizedException):
        SessionStore().require_user()


def test_teardown_runs_hooks_after_clearing(user):
    """Test teardown clears the session before dropping screen state."""
    session = SessionStore()
    seen = []
    session.on_teardown(lambda: seen.append(session.current))
    session.set_user(user)

    session.teardown()

    assert seen == [None]


def test_slot_mirrors_session_changes(user):
    """Test the slot is written on sign-in and emptied on sign-out."""
    mock_redis = MagicMock()
    session = SessionStore()
    bind_session_slot(session, SessionSlot(mock_redis))

    session.set_user(user)
    key, value = mock_redis.set.call_args.args
    assert key == "current-user"
    assert json.loads(value)["id"] == "uid-1"

    session.clear()
    mock_redis.delete.assert_called_once_with("current-user")


def test_slot_write_failure_does_not_break_session(user):
    mock_redis = MagicMock()
    mock_redis.set.side_effect = redis.ConnectionError("down")
    session = SessionStore()
    bind_session_slot(session, SessionSlot(mock_redis))

    session.set_user(user)

    assert session.current == user


def test_restore_offline_user():
    mock_redis = MagicMock()
    mock_redis.get.return_value = json.dumps({"id": "uid-1", "username": "joana"})

    restored = restore_offline_user(SessionSlot(mock_redis))

    assert restored is not None
    assert restored.id == "uid-1"
    assert restored.role == "User"


@pytest.mark.parametrize("stored", [None, "", "{not json", json.dumps({"username": "x"})])
def test_restore_offline_user_empty_or_unreadable(stored):
    mock_redis = MagicMock()
    mock_redis.get.return_value = stored

    assert restore_offline_user(SessionSlot(mock_redis)) is None


def test_restore_offline_user_redis_down():
    mock_redis = MagicMock()
    mock_redis.get.side_effect = redis.ConnectionError("down")

    assert restore_offline_user(SessionSlot(mock_redis)) is None
