"""
Centralized exception hierarchy for the UM PARK admin shell.

Backend adapters translate client library failures into these types so the
session guard and the shell only ever deal with one family of errors.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception
# =============================================================================


class AdminShellError(RuntimeError):
    """
    Base exception for all admin shell errors.

    Attributes:
        message: Human-readable error message.
        detail: Additional error details (optional).
        error_code: Machine-readable error code.
        error_id: Unique identifier used to correlate logs (optional).
    """

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        error_code: str | None = None,
        error_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.error_code = error_code or self._default_error_code()
        self.error_id = error_id or uuid.uuid4().hex[:8]

    def _default_error_code(self) -> str:
        """Generate default error code from class name."""
        return f"admin_shell_{self.__class__.__name__.lower()}"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a loggable mapping."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.detail:
            result["detail"] = self.detail
        if self.error_id:
            result["error_id"] = self.error_id
        return result

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def log(self, level: int = logging.ERROR) -> None:
        """Log the exception with structured data."""
        logger.log(
            level,
            self.message,
            extra={
                "error_code": self.error_code,
                "detail": self.detail,
                "error_id": self.error_id,
                "exception_type": self.__class__.__name__,
            },
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(AdminShellError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        *,
        setting_name: str | None = None,
    ) -> None:
        self.setting_name = setting_name
        detail = f"Missing or invalid setting: {setting_name}" if setting_name else None
        super().__init__(
            message,
            detail=detail,
            error_code="configuration_error",
        )


# =============================================================================
# Backend Errors
# =============================================================================


class BackendError(AdminShellError):
    """Base class for failures talking to the hosted backend."""

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        reason: str | None = None,
        error_code: str = "backend_error",
    ) -> None:
        self.service = service
        self.reason = reason
        detail_parts = []
        if service:
            detail_parts.append(f"Service: {service}")
        if reason:
            detail_parts.append(f"Reason: {reason}")
        detail = "; ".join(detail_parts) if detail_parts else None
        super().__init__(
            message,
            detail=detail,
            error_code=error_code,
        )


class AuthServiceError(BackendError):
    """Raised when the auth service cannot be reached or rejects a call."""

    def __init__(
        self,
        message: str = "Auth service request failed",
        *,
        reason: str | None = None,
    ) -> None:
        super().__init__(
            message,
            service="auth",
            reason=reason,
            error_code="auth_service_error",
        )


class SignOutError(AuthServiceError):
    """Raised when ending the current session fails."""

    def __init__(self, *, reason: str | None = None) -> None:
        super().__init__("Sign-out failed", reason=reason)
        self.error_code = "sign_out_error"


class ProfileLookupError(BackendError):
    """Raised when the role of a user cannot be read from the profiles table."""

    def __init__(
        self,
        user_id: str,
        *,
        table: str = "profiles",
        reason: str | None = None,
    ) -> None:
        self.user_id = user_id
        self.table = table
        super().__init__(
            f"Could not load profile {user_id!r} from {table}",
            service="data",
            reason=reason,
            error_code="profile_lookup_error",
        )


# =============================================================================
# Navigation Errors
# =============================================================================


class UnknownPanelError(AdminShellError, ValueError):
    """Raised when a panel id outside the fixed panel set is selected."""

    def __init__(self, panel_id: object) -> None:
        self.panel_id = panel_id
        super().__init__(
            "Unknown panel",
            detail=f"No panel with id {panel_id!r}",
            error_code="unknown_panel",
        )
