"""
Panel identifiers and the router that maps them onto renderers.

Each panel is an independently implemented editing surface. The router only
knows that a renderer is a zero-argument callable; what it draws is the
panel's own business.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from umpark_admin.exceptions import UnknownPanelError
from umpark_admin.logging_config import LogContext, get_logger, log_event

logger = get_logger(__name__)

Renderer = Callable[[], Any]


class Panel(str, Enum):
    CONTENT = "content"
    GALLERY = "gallery"
    SERVICES = "services"
    PRICING = "pricing"
    RESERVATIONS = "reservations"
    USERS = "users"
    LAYOUT = "layout"

    @property
    def label(self) -> str:
        return PANEL_LABELS[self]

    @property
    def icon(self) -> str:
        return PANEL_ICONS[self]

    @classmethod
    def coerce(cls, value: object) -> Panel | None:
        """Return the Panel for value (a Panel or its id), or None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


PANEL_LABELS = {
    Panel.CONTENT: "Content management",
    Panel.GALLERY: "Gallery",
    Panel.SERVICES: "Services",
    Panel.PRICING: "Pricing",
    Panel.RESERVATIONS: "Reservations",
    Panel.USERS: "Users",
    Panel.LAYOUT: "Header & Footer",
}

PANEL_ICONS = {
    Panel.CONTENT: "📝",
    Panel.GALLERY: "🖼️",
    Panel.SERVICES: "⚙️",
    Panel.PRICING: "🧾",
    Panel.RESERVATIONS: "📅",
    Panel.USERS: "👥",
    Panel.LAYOUT: "🧱",
}

# Sidebar order
PANELS: tuple[Panel, ...] = (
    Panel.CONTENT,
    Panel.GALLERY,
    Panel.SERVICES,
    Panel.PRICING,
    Panel.RESERVATIONS,
    Panel.USERS,
    Panel.LAYOUT,
)

DEFAULT_PANEL = Panel.CONTENT


def placeholder_text(name: str) -> str:
    return f"Section {name} is ready for implementation."


@dataclass(frozen=True)
class PanelMatch:
    panel: Panel
    renderer: Renderer


@dataclass(frozen=True)
class PanelPlaceholder:
    name: str

    @property
    def text(self) -> str:
        return placeholder_text(self.name)


PanelRoute = Union[PanelMatch, PanelPlaceholder]


class PanelRouter:
    """
    Holds the selected panel and dispatches it to its renderer.

    The selection is always a member of PANELS. Lookups for anything else
    resolve to a placeholder instead of raising, so a stale id coming from
    the browser cannot break the page.
    """

    def __init__(
        self,
        renderers: Mapping[Panel, Renderer],
        *,
        default: Panel = DEFAULT_PANEL,
        placeholder: Callable[[str], Any] = placeholder_text,
    ) -> None:
        self._renderers = dict(renderers)
        self._placeholder = placeholder
        self._selected = default

    @property
    def selected(self) -> Panel:
        return self._selected

    def select(self, panel_id: object) -> Panel:
        """Make panel_id the current selection. Raises UnknownPanelError."""
        panel = Panel.coerce(panel_id)
        if panel is None:
            raise UnknownPanelError(panel_id)
        if panel is not self._selected:
            self._selected = panel
            LogContext.set_panel(panel.value)
            log_event("admin_panel_selected", panel=panel.value)
        return panel

    def resolve(self, panel_id: object = None) -> PanelRoute:
        if panel_id is None:
            panel_id = self._selected
        panel = Panel.coerce(panel_id)
        if panel is None:
            return PanelPlaceholder(str(getattr(panel_id, "value", panel_id)))
        renderer = self._renderers.get(panel)
        if renderer is None:
            return PanelPlaceholder(panel.label.lower())
        return PanelMatch(panel, renderer)

    def render(self, panel_id: object = None) -> Any:
        route = self.resolve(panel_id)
        if isinstance(route, PanelPlaceholder):
            logger.warning("No renderer for section %r", route.name)
            return self._placeholder(route.name)
        return route.renderer()
