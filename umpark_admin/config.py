"""
UM PARK Admin - Configuration Management
========================================
Centralized configuration with environment variable support and validation.

Usage:
    from umpark_admin.config import settings

    login_url = settings.url_for(settings.login_route)
    supabase_url = settings.supabase_url
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


PANEL_IDS = (
    "content",
    "gallery",
    "services",
    "pricing",
    "reservations",
    "users",
    "layout",
)


def _read_secret(key: str) -> str | None:
    """Read a secret from the environment, then from Streamlit secrets."""
    value = os.environ.get(key, "").strip()
    if value:
        return value

    try:
        from streamlit import secrets as st_secrets

        value = st_secrets.get(key, "")
    except ImportError:
        return None
    except Exception as exc:
        # No secrets.toml outside a Streamlit deployment
        logger.debug("Streamlit secrets unavailable: %s", exc)
        return None

    return str(value).strip() or None


@dataclass
class Settings:
    """Application settings with environment variable overrides."""

    # Branding
    site_name: str = "UM PARK"
    dashboard_title: str = "Administration"
    logo_path: Path = field(default_factory=lambda: Path("static/logo.png"))

    # Routes on the public site
    site_base_url: str = ""
    login_route: str = "/login"
    home_route: str = "/"

    # Authorization
    profiles_table: str = "profiles"
    admin_role: str = "admin"

    # UI
    default_panel: str = "content"

    # Feature flags
    debug_mode: bool = False

    def __post_init__(self):
        """Load overrides from environment variables."""
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load configuration from environment variables."""
        # Branding
        if site_name := os.environ.get("ADMIN_SITE_NAME"):
            self.site_name = site_name
        if title := os.environ.get("ADMIN_DASHBOARD_TITLE"):
            self.dashboard_title = title
        if logo_path := os.environ.get("ADMIN_LOGO_PATH"):
            self.logo_path = Path(logo_path)

        # Routes
        if base_url := os.environ.get("ADMIN_SITE_BASE_URL"):
            self.site_base_url = base_url.rstrip("/")
        if login_route := os.environ.get("ADMIN_LOGIN_ROUTE"):
            self.login_route = login_route
        if home_route := os.environ.get("ADMIN_HOME_ROUTE"):
            self.home_route = home_route

        # Authorization
        if table := os.environ.get("ADMIN_PROFILES_TABLE"):
            self.profiles_table = table
        if role := os.environ.get("ADMIN_ROLE"):
            self.admin_role = role

        # UI
        if panel := os.environ.get("ADMIN_DEFAULT_PANEL", "").strip().lower():
            if panel in PANEL_IDS:
                self.default_panel = panel
            else:
                logger.warning(
                    "ADMIN_DEFAULT_PANEL=%r is not a known panel, using %r", panel, self.default_panel
                )

        # Feature flags
        if os.environ.get("DEBUG", "").lower() in ("1", "true"):
            self.debug_mode = True

    def url_for(self, route: str) -> str:
        """Join a site route onto the configured base URL."""
        if route.startswith(("http://", "https://")):
            return route
        if not route.startswith("/"):
            route = "/" + route
        return f"{self.site_base_url}{route}"

    @property
    def supabase_url(self) -> str | None:
        """Get the Supabase project URL (never stored in config)."""
        return _read_secret("SUPABASE_URL")

    @property
    def supabase_key(self) -> str | None:
        """Get the Supabase anon key (never stored in config)."""
        return _read_secret("SUPABASE_KEY")


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
        if _settings.debug_mode:
            logger.info("Settings loaded with debug mode enabled")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings


# Convenience alias
settings = get_settings()
