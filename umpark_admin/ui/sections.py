"""
Default renderers for the dashboard panels.

Each panel's editor is developed on its own; these entry points are what the
router dispatches to.
"""

from __future__ import annotations

import streamlit as st

from umpark_admin.panels import Panel, Renderer


def render_content_section() -> None:
    st.caption("Texts of the public pages: hero, about us, contact details.")


def render_gallery_section() -> None:
    st.caption("Photos shown in the public gallery, in display order.")


def render_services_section() -> None:
    st.caption("Services offered on the parking site and their descriptions.")


def render_pricing_section() -> None:
    st.caption("Price list items grouped by vehicle type and stay length.")


def render_reservations_section() -> None:
    st.caption("Incoming reservations and their status.")


def render_users_section() -> None:
    st.caption("Registered accounts and their roles.")


def render_layout_section() -> None:
    st.caption("Header navigation and footer contents shared by all pages.")


def default_renderers() -> dict[Panel, Renderer]:
    return {
        Panel.CONTENT: render_content_section,
        Panel.GALLERY: render_gallery_section,
        Panel.SERVICES: render_services_section,
        Panel.PRICING: render_pricing_section,
        Panel.RESERVATIONS: render_reservations_section,
        Panel.USERS: render_users_section,
        Panel.LAYOUT: render_layout_section,
    }
