"""
Session state helpers for the Streamlit UI.

One browser session is one mount of the admin shell: the shell and its
adapters live in `st.session_state` and are rebuilt only after a reload.
"""

from __future__ import annotations

import uuid
from typing import Any

import streamlit as st

from umpark_admin.logging_config import get_logger

logger = get_logger(__name__)

_SHELL_KEY = "_admin_shell"
_NAVIGATOR_KEY = "_admin_navigator"
_NOTIFIER_KEY = "_admin_notifier"


def init_session_state() -> None:
    if "_session_id" not in st.session_state:
        st.session_state["_session_id"] = uuid.uuid4().hex[:12]


def get_session_id() -> str:
    return st.session_state.get("_session_id", "default")


def get_shell() -> Any | None:
    return st.session_state.get(_SHELL_KEY)


def get_adapters() -> tuple[Any | None, Any | None]:
    return st.session_state.get(_NAVIGATOR_KEY), st.session_state.get(_NOTIFIER_KEY)


def set_shell(shell: Any, navigator: Any, notifier: Any) -> None:
    st.session_state[_SHELL_KEY] = shell
    st.session_state[_NAVIGATOR_KEY] = navigator
    st.session_state[_NOTIFIER_KEY] = notifier


def clear_shell() -> None:
    shell = st.session_state.pop(_SHELL_KEY, None)
    if shell is not None:
        shell.unmount()
    st.session_state.pop(_NAVIGATOR_KEY, None)
    st.session_state.pop(_NOTIFIER_KEY, None)


def pop_handoff_tokens() -> tuple[str, str] | None:
    """
    Take session tokens handed over by the login page in the query string.

    The tokens are removed from the URL right away so they do not linger in
    browser history.
    """
    access_token = st.query_params.get("access_token")
    refresh_token = st.query_params.get("refresh_token")
    if not access_token or not refresh_token:
        return None

    del st.query_params["access_token"]
    del st.query_params["refresh_token"]
    logger.info("Session tokens received from login page")
    return access_token, refresh_token


def has_handoff_tokens() -> bool:
    return "access_token" in st.query_params and "refresh_token" in st.query_params
