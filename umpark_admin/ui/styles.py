"""
UI styling (CSS injected via st.markdown).
"""

from __future__ import annotations

import streamlit as st

THEME_CSS = """
<style>
  :root {
    --bg-primary: #ffffff;
    --bg-secondary: #f8f9fa;
    --text-primary: #1a1a1a;
    --text-muted: #6b7280;
    --border-color: #e5e7eb;
    --accent: #1d4ed8;
    --accent-foreground: #ffffff;
    --accent-soft: rgba(29, 78, 216, 0.08);
    --card-bg: #ffffff;
    --shadow-color: rgba(0, 0, 0, 0.08);
  }

  [data-testid="stAppViewContainer"] {
    background-color: var(--bg-primary);
  }

  [data-testid="stSidebar"] {
    background-color: var(--bg-secondary);
    border-right: 1px solid var(--border-color);
  }
</style>
"""

BASE_CSS = """
<style>
  .block-container { padding-top: 1.25rem; padding-bottom: 2rem; }

  /* Header bar */
  .admin-header-title { font-size: 1.15rem; font-weight: 600; margin: 0; }
  .admin-header-email { color: var(--text-muted); font-size: 0.875rem; text-align: right; }

  /* Sidebar entries: the active one is a primary button */
  [data-testid="stSidebar"] button {
    justify-content: flex-start;
    border-radius: 8px;
  }
  [data-testid="stSidebar"] button[kind="secondary"] {
    background: transparent;
    border-color: transparent;
  }
  [data-testid="stSidebar"] button[kind="secondary"]:hover {
    background: var(--accent-soft);
  }

  /* Content card */
  .st-key-admin_content {
    background: var(--card-bg);
    border: 1px solid var(--border-color);
    border-radius: 10px;
    padding: 1.5rem;
    box-shadow: 0 1px 3px var(--shadow-color);
  }

  .admin-loading {
    display: flex;
    height: 60vh;
    align-items: center;
    justify-content: center;
    color: var(--text-muted);
  }
</style>
"""


def apply_styles() -> None:
    st.markdown(THEME_CSS, unsafe_allow_html=True)
    st.markdown(BASE_CSS, unsafe_allow_html=True)
