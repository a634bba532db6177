"""
Streamlit UI package for the admin dashboard.

Keeps Streamlit concerns in umpark_admin/ui/* so the shell, guard and router
stay importable without a running Streamlit server.
"""

from __future__ import annotations
