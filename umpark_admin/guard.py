"""
Session guard: decides once per mount whether the viewer may see the dashboard.

State machine:
    PENDING --(admin role)--> AUTHORIZED
    PENDING --(no session | wrong role | lookup failure | error)--> DENIED
    AUTHORIZED --(SIGNED_OUT event)--> DENIED

DENIED is terminal. Every transition goes through `_transition`, which holds
the lock, so a SIGNED_OUT event delivered from the auth client's refresh
thread cannot be overwritten by a role check that finishes later.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any

from umpark_admin.backend import (
    AuthEvent,
    AuthService,
    Navigator,
    Notification,
    Notifier,
    ProfileStore,
    Session,
    User,
    Variant,
)
from umpark_admin.config import Settings, get_settings
from umpark_admin.exceptions import ProfileLookupError
from umpark_admin.logging_config import LogContext, LogLevel, PerformanceTracker, get_logger, log_error, log_event

logger = get_logger(__name__)


class AuthState(str, Enum):
    PENDING = "pending"
    AUTHORIZED = "authorized"
    DENIED = "denied"


class GuardOutcome(str, Enum):
    """How the guard reached its current state."""

    AUTHORIZED = "authorized"
    NO_SESSION = "no_session"
    PROFILE_ERROR = "profile_error"
    NOT_ADMIN = "not_admin"
    ERROR = "error"
    SIGNED_OUT = "signed_out"
    DISPOSED = "disposed"


ACCESS_DENIED = Notification(
    "Access denied",
    "You do not have permission to access the administration.",
    Variant.DESTRUCTIVE,
)
PERMISSIONS_UNVERIFIED = Notification(
    "Error",
    "Could not verify your permissions.",
    Variant.DESTRUCTIVE,
)
IDENTITY_UNVERIFIED = Notification(
    "Error",
    "Could not verify your identity.",
    Variant.DESTRUCTIVE,
)


class SessionGuard:
    """
    Gate in front of the dashboard.

    `check()` runs the session/role chain exactly once; later calls return the
    recorded outcome. `handle_auth_event()` is the auth-state listener and may
    be called from any thread.
    """

    def __init__(
        self,
        auth: AuthService,
        profiles: ProfileStore,
        navigator: Navigator,
        notifier: Notifier,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._auth = auth
        self._profiles = profiles
        self._navigator = navigator
        self._notifier = notifier
        self._settings = settings or get_settings()

        self._lock = threading.Lock()
        self._state = AuthState.PENDING
        self._outcome: GuardOutcome | None = None
        self._started = False
        self._disposed = False

        self.loading = False
        self.user: User | None = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def outcome(self) -> GuardOutcome | None:
        return self._outcome

    @property
    def authorized(self) -> bool:
        return self._state is AuthState.AUTHORIZED and not self._disposed

    @property
    def disposed(self) -> bool:
        return self._disposed

    def check(self) -> GuardOutcome:
        """Resolve the authorization state. Runs once per guard."""
        with self._lock:
            if self._disposed:
                return GuardOutcome.DISPOSED
            if self._started:
                return self._outcome or GuardOutcome.DISPOSED
            self._started = True
            self.loading = True

        try:
            with PerformanceTracker("session_check"):
                return self._run_check()
        finally:
            self.loading = False

    def _run_check(self) -> GuardOutcome:
        try:
            session: Session | None = self._auth.get_session()
            if session is None:
                return self._deny(GuardOutcome.NO_SESSION, redirect=self._settings.login_route)

            self.user = session.user
            LogContext.set_user_id(session.user.id)

            try:
                role = self._profiles.fetch_role(session.user.id)
            except ProfileLookupError as exc:
                log_error("profile_lookup_failed", exc, user_id=session.user.id)
                # Dead end: nothing renders, no redirect
                return self._deny(GuardOutcome.PROFILE_ERROR, notification=PERMISSIONS_UNVERIFIED)

            if role != self._settings.admin_role:
                return self._deny(
                    GuardOutcome.NOT_ADMIN,
                    notification=ACCESS_DENIED,
                    redirect=self._settings.home_route,
                    role=role,
                )

            return self._grant()
        except Exception as exc:
            log_error("session_check_failed", exc)
            return self._deny(
                GuardOutcome.ERROR,
                notification=IDENTITY_UNVERIFIED,
                redirect=self._settings.login_route,
            )

    def handle_auth_event(self, event: Any, session: Session | None = None) -> None:
        """Auth-state listener. SIGNED_OUT always sends the viewer to login."""
        parsed = AuthEvent.parse(event)
        if parsed is not AuthEvent.SIGNED_OUT:
            logger.debug("Ignoring auth event %s", getattr(event, "value", event))
            return

        if self._disposed:
            return
        if self._transition(AuthState.DENIED, GuardOutcome.SIGNED_OUT):
            log_event("admin_signed_out", source="auth_event")
        self._navigator.redirect(self._settings.login_route)

    def dispose(self) -> None:
        """Mark the guard unmounted; results that arrive later are dropped."""
        with self._lock:
            self._disposed = True

    def _transition(self, target: AuthState, outcome: GuardOutcome) -> bool:
        with self._lock:
            if self._disposed or self._state is AuthState.DENIED:
                return False
            if self._state is AuthState.AUTHORIZED and target is not AuthState.DENIED:
                return False
            self._state = target
            self._outcome = outcome
            return True

    def _late_outcome(self) -> GuardOutcome:
        if self._disposed:
            logger.info("Dropping guard result after unmount")
            return GuardOutcome.DISPOSED
        return self._outcome or GuardOutcome.DISPOSED

    def _grant(self) -> GuardOutcome:
        if not self._transition(AuthState.AUTHORIZED, GuardOutcome.AUTHORIZED):
            return self._late_outcome()
        log_event("admin_access_granted", email=self.user.email if self.user else None)
        return GuardOutcome.AUTHORIZED

    def _deny(
        self,
        outcome: GuardOutcome,
        *,
        notification: Notification | None = None,
        redirect: str | None = None,
        **fields: Any,
    ) -> GuardOutcome:
        if not self._transition(AuthState.DENIED, outcome):
            return self._late_outcome()

        log_event("admin_access_denied", LogLevel.WARNING, outcome=outcome.value, **fields)
        if notification is not None:
            self._notifier.notify(notification)
        if redirect is not None:
            self._navigator.redirect(redirect)
        return outcome
