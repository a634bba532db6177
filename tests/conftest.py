"""
Pytest configuration and shared fixtures for the admin shell tests.
"""

import os
from typing import Any, Callable, Dict, List, Optional
from unittest import mock
from unittest.mock import MagicMock

import pytest

# Add repo root to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from umpark_admin.backend import AuthEvent, Notification, Session, User  # noqa: E402
from umpark_admin.config import Settings  # noqa: E402
from umpark_admin.exceptions import ProfileLookupError, SignOutError  # noqa: E402
from umpark_admin.panels import PANELS, Panel  # noqa: E402
from umpark_admin.shell import AdminShell  # noqa: E402


class FakeSubscription:
    def __init__(self) -> None:
        self.unsubscribed = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True


class FakeAuthService:
    """In-memory auth service that fires SIGNED_OUT on sign-out like Supabase does."""

    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        error: Optional[Exception] = None,
        sign_out_error: Optional[Exception] = None,
    ) -> None:
        self.session = session
        self.error = error
        self.sign_out_error = sign_out_error
        self.sign_out_calls = 0
        self.subscriptions: List[tuple] = []

    def get_session(self) -> Optional[Session]:
        if self.error is not None:
            raise self.error
        return self.session

    def on_auth_state_change(self, callback: Callable) -> FakeSubscription:
        subscription = FakeSubscription()
        self.subscriptions.append((callback, subscription))
        return subscription

    def emit(self, event: Any, session: Optional[Session] = None) -> None:
        for callback, subscription in list(self.subscriptions):
            if not subscription.unsubscribed:
                callback(event, session)

    @property
    def active_listeners(self) -> int:
        return sum(1 for _, sub in self.subscriptions if not sub.unsubscribed)

    def sign_out(self) -> None:
        self.sign_out_calls += 1
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self.session = None
        self.emit(AuthEvent.SIGNED_OUT)


class FakeProfileStore:
    def __init__(
        self,
        roles: Optional[Dict[str, Optional[str]]] = None,
        *,
        error: Optional[Exception] = None,
        on_fetch: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.roles = roles or {}
        self.error = error
        self.on_fetch = on_fetch
        self.calls: List[str] = []

    def fetch_role(self, user_id: str) -> Optional[str]:
        self.calls.append(user_id)
        if self.on_fetch is not None:
            self.on_fetch(user_id)
        if self.error is not None:
            raise self.error
        return self.roles.get(user_id)


class RecordingNavigator:
    def __init__(self) -> None:
        self.routes: List[str] = []

    def redirect(self, route: str) -> None:
        self.routes.append(route)


class RecordingNotifier:
    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def titles(self) -> List[str]:
        return [n.title for n in self.notifications]


@pytest.fixture
def settings() -> Settings:
    """Settings with no environment overrides."""
    with mock.patch.dict(os.environ, {}, clear=True):
        return Settings()


@pytest.fixture
def admin_user() -> User:
    return User(id="user-1", email="admin@umpark.cz")


@pytest.fixture
def admin_session(admin_user: User) -> Session:
    return Session(user=admin_user, access_token="token-1")


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def renderers() -> Dict[Panel, MagicMock]:
    """One mock renderer per panel, each returning its panel id."""
    return {panel: MagicMock(name=f"render_{panel.value}", return_value=panel.value) for panel in PANELS}


@pytest.fixture
def make_shell(
    settings: Settings,
    navigator: RecordingNavigator,
    notifier: RecordingNotifier,
    renderers: Dict[Panel, MagicMock],
    admin_session: Session,
):
    """Build an AdminShell around fakes; returns (shell, auth, profiles)."""

    def _make(
        *,
        session: Any = "admin",
        role: Optional[str] = "admin",
        auth: Optional[FakeAuthService] = None,
        profiles: Optional[FakeProfileStore] = None,
        shell_settings: Optional[Settings] = None,
    ):
        if auth is None:
            auth = FakeAuthService(admin_session if session == "admin" else session)
        if profiles is None:
            profiles = FakeProfileStore({admin_session.user.id: role})
        shell = AdminShell(
            auth,
            profiles,
            navigator,
            notifier,
            renderers,
            settings=shell_settings or settings,
        )
        return shell, auth, profiles

    return _make


@pytest.fixture
def profile_error() -> ProfileLookupError:
    return ProfileLookupError("user-1", reason="connection reset")


@pytest.fixture
def sign_out_error() -> SignOutError:
    return SignOutError(reason="network down")
