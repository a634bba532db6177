"""
AdminShell: session guard, panel router and chrome actions behind one object.

The shell holds no UI code. Rendering layers read `view()` and call the
action methods; everything the shell needs from the outside world is passed
in through the protocols in `umpark_admin.backend`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from umpark_admin.backend import (
    AuthService,
    Navigator,
    Notification,
    Notifier,
    ProfileStore,
    Subscription,
    Variant,
)
from umpark_admin.config import Settings, get_settings
from umpark_admin.exceptions import SignOutError
from umpark_admin.guard import AuthState, GuardOutcome, SessionGuard
from umpark_admin.logging_config import get_logger, log_error, log_event
from umpark_admin.panels import DEFAULT_PANEL, PANELS, Panel, PanelRouter, Renderer, placeholder_text

logger = get_logger(__name__)


SIGNED_OUT = Notification("Signed out", "You have been signed out successfully.")
SIGN_OUT_FAILED = Notification("Error", "Could not sign you out.", Variant.DESTRUCTIVE)


class ShellPhase(str, Enum):
    LOADING = "loading"
    DASHBOARD = "dashboard"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class SidebarEntry:
    panel: Panel
    label: str
    icon: str
    active: bool


@dataclass(frozen=True)
class ShellView:
    """What the page should show right now."""

    phase: ShellPhase
    site_name: str
    title: str
    email: str | None = None
    selected: Panel | None = None
    sidebar: tuple[SidebarEntry, ...] = ()

    @property
    def heading(self) -> str | None:
        return self.selected.label if self.selected is not None else None


class AdminShell:
    def __init__(
        self,
        auth: AuthService,
        profiles: ProfileStore,
        navigator: Navigator,
        notifier: Notifier,
        renderers: Mapping[Panel, Renderer],
        *,
        placeholder: Callable[[str], Any] = placeholder_text,
        settings: Settings | None = None,
    ) -> None:
        self._auth = auth
        self._navigator = navigator
        self._notifier = notifier
        self._settings = settings or get_settings()

        self.guard = SessionGuard(auth, profiles, navigator, notifier, settings=self._settings)
        self.router = PanelRouter(
            renderers,
            default=Panel.coerce(self._settings.default_panel) or DEFAULT_PANEL,
            placeholder=placeholder,
        )
        self._subscription: Subscription | None = None
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> GuardOutcome:
        """Start listening for auth events and run the guard (once)."""
        if not self._mounted:
            self._mounted = True
            self._subscription = self._auth.on_auth_state_change(self.guard.handle_auth_event)
        return self.guard.check()

    def unmount(self) -> None:
        """Release the auth listener; later guard results are ignored."""
        self.guard.dispose()
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            try:
                subscription.unsubscribe()
            except Exception as exc:
                log_error("auth_unsubscribe_failed", exc)

    def __enter__(self) -> AdminShell:
        self.mount()
        return self

    def __exit__(self, *args: Any) -> None:
        self.unmount()

    def select_panel(self, panel_id: object) -> Panel:
        return self.router.select(panel_id)

    def render_content(self) -> Any:
        """Render the selected panel; nothing renders before authorization."""
        if not self.guard.authorized:
            return None
        return self.router.render()

    def sign_out(self) -> bool:
        try:
            self._auth.sign_out()
        except SignOutError as exc:
            log_error("sign_out_failed", exc)
            self._notifier.notify(SIGN_OUT_FAILED)
            return False

        log_event("admin_signed_out", source="header")
        self._notifier.notify(SIGNED_OUT)
        self._navigator.redirect(self._settings.login_route)
        self.unmount()
        return True

    def leave(self) -> None:
        """Back to the public site."""
        self._navigator.redirect(self._settings.home_route)

    def view(self) -> ShellView:
        guard = self.guard
        if guard.authorized:
            selected = self.router.selected
            return ShellView(
                phase=ShellPhase.DASHBOARD,
                site_name=self._settings.site_name,
                title=self._settings.dashboard_title,
                email=guard.user.email if guard.user else None,
                selected=selected,
                sidebar=tuple(
                    SidebarEntry(panel=p, label=p.label, icon=p.icon, active=p is selected) for p in PANELS
                ),
            )

        pending = guard.loading or (guard.state is AuthState.PENDING and not guard.disposed)
        return ShellView(
            phase=ShellPhase.LOADING if pending else ShellPhase.HIDDEN,
            site_name=self._settings.site_name,
            title=self._settings.dashboard_title,
        )
