"""
Streamlit adapters for navigation and notifications.

Both queue what they are asked to do. The auth listener can call them from
the supabase refresh thread, where Streamlit commands are not allowed, so the
queues are drained by `flush()` on the next script run. A redirect queued
from that thread therefore waits for the viewer's next interaction.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import deque

import streamlit as st
import streamlit.components.v1 as components

from umpark_admin.backend import Notification
from umpark_admin.config import Settings, get_settings

logger = logging.getLogger(__name__)


class StreamlitNavigator:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._lock = threading.Lock()
        self._target: str | None = None

    def redirect(self, route: str) -> None:
        # Last request wins; a sign-out and a SIGNED_OUT event both aim at login
        with self._lock:
            self._target = route

    @property
    def pending(self) -> str | None:
        return self._target

    def flush(self) -> None:
        """Send the browser to the queued route and stop the script run."""
        with self._lock:
            target, self._target = self._target, None
        if target is None:
            return

        url = self._settings.url_for(target)
        logger.info("Redirecting to %s", url)
        components.html(
            f"<script>window.parent.location.href = {json.dumps(url)};</script>",
            height=0,
        )
        st.stop()


class StreamlitNotifier:
    def __init__(self) -> None:
        self._queue: deque[Notification] = deque()

    def notify(self, notification: Notification) -> None:
        self._queue.append(notification)

    def flush(self) -> None:
        while self._queue:
            item = self._queue.popleft()
            icon = "🚫" if item.destructive else "✅"
            st.toast(f"**{item.title}**  \n{item.description}", icon=icon)
