"""
UM PARK administration dashboard.

A role-gated Streamlit shell over Supabase: the session guard decides who may
see the dashboard, the panel router decides which editor is shown.
"""

from __future__ import annotations

__version__ = "0.1.0"
