"""
Supabase implementations of the auth service and the profiles store.

Usage:
    client = create_supabase_client(settings)
    auth = SupabaseAuthService(client)
    profiles = SupabaseProfileStore(client, table=settings.profiles_table)
"""

from __future__ import annotations

from typing import Any

from supabase import AuthError, Client, PostgrestAPIError, create_client

from umpark_admin.backend import AuthCallback, AuthEvent, Session, Subscription, User
from umpark_admin.config import Settings, get_settings
from umpark_admin.exceptions import AuthServiceError, ConfigurationError, ProfileLookupError, SignOutError
from umpark_admin.logging_config import get_logger

logger = get_logger(__name__)


def create_supabase_client(settings: Settings | None = None) -> Client:
    settings = settings or get_settings()
    url = settings.supabase_url
    key = settings.supabase_key

    if not url:
        raise ConfigurationError("Supabase is not configured", setting_name="SUPABASE_URL")
    if not key:
        raise ConfigurationError("Supabase is not configured", setting_name="SUPABASE_KEY")

    return create_client(url, key)


def to_session(raw: Any) -> Session | None:
    """Convert a supabase auth session into a Session."""
    if raw is None or getattr(raw, "user", None) is None:
        return None
    user = raw.user
    return Session(
        user=User(id=str(user.id), email=getattr(user, "email", None)),
        access_token=getattr(raw, "access_token", "") or "",
    )


class SupabaseAuthService:
    def __init__(self, client: Client) -> None:
        self._client = client

    def get_session(self) -> Session | None:
        try:
            raw = self._client.auth.get_session()
        except AuthError as exc:
            raise AuthServiceError("Could not read the current session", reason=str(exc)) from exc
        return to_session(raw)

    def restore_session(self, access_token: str, refresh_token: str) -> Session | None:
        """Adopt tokens handed over by the login page."""
        try:
            response = self._client.auth.set_session(access_token, refresh_token)
        except Exception as exc:
            # AuthError, or a transport failure (timeouts, DNS) that supabase leaves unwrapped
            raise AuthServiceError("Could not restore the session", reason=str(exc)) from exc
        return to_session(getattr(response, "session", None))

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        def _listener(event: Any, raw_session: Any) -> None:
            callback(AuthEvent.parse(event) or event, to_session(raw_session))

        return self._client.auth.on_auth_state_change(_listener)

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as exc:
            # AuthError, or a transport failure that supabase leaves unwrapped
            raise SignOutError(reason=str(exc)) from exc


class SupabaseProfileStore:
    def __init__(self, client: Client, *, table: str = "profiles") -> None:
        self._client = client
        self._table = table

    def fetch_role(self, user_id: str) -> str | None:
        try:
            response = (
                self._client.table(self._table)
                .select("role")
                .eq("id", user_id)
                .single()
                .execute()
            )
        except PostgrestAPIError as exc:
            raise ProfileLookupError(user_id, table=self._table, reason=getattr(exc, "message", None) or str(exc)) from exc
        except Exception as exc:
            # Transport failures (timeouts, DNS) surface as httpx errors
            raise ProfileLookupError(user_id, table=self._table, reason=str(exc)) from exc

        row = getattr(response, "data", None) or {}
        role = row.get("role") if isinstance(row, dict) else None
        logger.debug("Loaded role %r for user %s", role, user_id)
        return role
