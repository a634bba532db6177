"""
Reusable UI components (header, sidebar, content area, loading state).
"""

from __future__ import annotations

import html
import logging

import streamlit as st

from umpark_admin.config import settings
from umpark_admin.panels import placeholder_text
from umpark_admin.shell import AdminShell, ShellView

logger = logging.getLogger(__name__)


def render_loading() -> None:
    st.markdown('<div class="admin-loading">Verifying sign-in...</div>', unsafe_allow_html=True)


def render_placeholder(name: str) -> None:
    st.caption(placeholder_text(name))


def header_title_html(title: str) -> str:
    return f'<p class="admin-header-title">{html.escape(title)}</p>'


def header_email_html(email: str | None) -> str:
    return f'<div class="admin-header-email">{html.escape(email or "")}</div>'


def render_header(shell: AdminShell, view: ShellView) -> None:
    with st.container():
        col_logo, col_title, col_email, col_back, col_out = st.columns([1, 4, 3, 2, 2], vertical_alignment="center")
        with col_logo:
            if settings.logo_path.exists():
                st.image(str(settings.logo_path), width=96)
            else:
                st.markdown(f"**{view.site_name}**")
        with col_title:
            st.markdown(header_title_html(view.title), unsafe_allow_html=True)
        with col_email:
            st.markdown(header_email_html(view.email), unsafe_allow_html=True)
        with col_back:
            if st.button("Back to site", key="header_back", use_container_width=True):
                shell.leave()
                st.rerun()
        with col_out:
            if st.button("Sign out", key="header_sign_out", icon=":material/logout:", use_container_width=True):
                shell.sign_out()
                st.rerun()
    st.divider()


def render_sidebar(shell: AdminShell, view: ShellView) -> None:
    st.sidebar.markdown(f"### {view.site_name}")
    for entry in view.sidebar:
        if st.sidebar.button(
            f"{entry.icon}  {entry.label}",
            key=f"panel_{entry.panel.value}",
            type="primary" if entry.active else "secondary",
            use_container_width=True,
        ):
            shell.select_panel(entry.panel)
            st.rerun()


def render_content(shell: AdminShell, view: ShellView) -> None:
    # Keyed per panel so a switch starts the new panel with fresh widgets
    with st.container(key="admin_content"):
        st.subheader(view.heading or "")
        with st.container(key=f"panel_body_{view.selected.value}"):
            shell.render_content()
