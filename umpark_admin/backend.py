"""
Collaborator contracts for the admin shell.

The shell never reaches for a module-level client. Everything it talks to
(auth, the profiles table, navigation and notifications) is passed in as one
of the protocols below, so the authorization flow runs the same against
Supabase, Streamlit, or the fakes in the test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


@dataclass(frozen=True)
class User:
    id: str
    email: str | None = None


@dataclass(frozen=True)
class Session:
    """An authenticated identity issued by the auth service."""

    user: User
    access_token: str = ""


class AuthEvent(str, Enum):
    """Auth-state change events, named as the auth service emits them."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"

    @classmethod
    def parse(cls, value: object) -> AuthEvent | None:
        """Map a raw event name to an AuthEvent, or None when unknown."""
        raw = getattr(value, "value", value)
        try:
            return cls(str(raw).upper())
        except ValueError:
            return None


class Variant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = Variant.DEFAULT

    @property
    def destructive(self) -> bool:
        return self.variant is Variant.DESTRUCTIVE


AuthCallback = Callable[[AuthEvent, "Session | None"], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class AuthService(Protocol):
    def get_session(self) -> Session | None: ...

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription: ...

    def sign_out(self) -> None:
        """End the current session. Raises SignOutError on failure."""
        ...


class ProfileStore(Protocol):
    def fetch_role(self, user_id: str) -> str | None:
        """Return the role stored for user_id. Raises ProfileLookupError on failure."""
        ...


class Navigator(Protocol):
    def redirect(self, route: str) -> None: ...


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...
