"""
Streamlit UI entrypoint for the admin dashboard.
"""

from __future__ import annotations

import streamlit as st

from umpark_admin.config import settings
from umpark_admin.exceptions import AdminShellError, ConfigurationError
from umpark_admin.logging_config import LogContextManager, configure_logging, get_logger
from umpark_admin.shell import AdminShell, ShellPhase
from umpark_admin.supabase_backend import SupabaseAuthService, SupabaseProfileStore, create_supabase_client
from umpark_admin.ui.components import (
    render_content,
    render_header,
    render_loading,
    render_placeholder,
    render_sidebar,
)
from umpark_admin.ui.navigation import StreamlitNavigator, StreamlitNotifier
from umpark_admin.ui.sections import default_renderers
from umpark_admin.ui.session import (
    clear_shell,
    get_adapters,
    get_session_id,
    get_shell,
    has_handoff_tokens,
    init_session_state,
    pop_handoff_tokens,
    set_shell,
)
from umpark_admin.ui.styles import apply_styles

logger = get_logger(__name__)


def build_shell() -> tuple[AdminShell, StreamlitNavigator, StreamlitNotifier]:
    """Wire a shell to a per-browser-session Supabase client."""
    # Not cached across sessions: the client carries the viewer's auth state
    client = create_supabase_client(settings)
    auth = SupabaseAuthService(client)

    tokens = pop_handoff_tokens()
    if tokens is not None:
        try:
            auth.restore_session(*tokens)
        except AdminShellError as exc:
            # The guard then finds no session and sends the viewer to login
            exc.log()

    navigator = StreamlitNavigator(settings)
    notifier = StreamlitNotifier()
    shell = AdminShell(
        auth,
        SupabaseProfileStore(client, table=settings.profiles_table),
        navigator,
        notifier,
        default_renderers(),
        placeholder=render_placeholder,
        settings=settings,
    )
    return shell, navigator, notifier


def main() -> None:
    st.set_page_config(
        page_title=f"{settings.dashboard_title} | {settings.site_name}",
        page_icon="🅿️",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    configure_logging(environment="development" if settings.debug_mode else "production")
    apply_styles()
    init_session_state()

    if get_shell() is not None and has_handoff_tokens():
        # Signed in again in the same tab: start over with the new session
        clear_shell()

    shell = get_shell()
    navigator, notifier = get_adapters()
    if shell is None:
        try:
            shell, navigator, notifier = build_shell()
        except ConfigurationError as exc:
            exc.log()
            st.error(f"{exc.message}. Set SUPABASE_URL and SUPABASE_KEY in the environment or Streamlit secrets.")
            return
        set_shell(shell, navigator, notifier)

    with LogContextManager(session_id=get_session_id()):
        if not shell.mounted:
            with st.spinner("Verifying sign-in..."):
                shell.mount()

        notifier.flush()
        navigator.flush()

        view = shell.view()
        if view.phase is ShellPhase.LOADING:
            render_loading()
            return
        if view.phase is ShellPhase.HIDDEN:
            return

        render_header(shell, view)
        render_sidebar(shell, view)
        render_content(shell, view)


if __name__ == "__main__":
    main()
