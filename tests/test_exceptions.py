"""Tests for umpark_admin.exceptions"""

import logging

import pytest

from umpark_admin.exceptions import (
    AdminShellError,
    AuthServiceError,
    BackendError,
    ConfigurationError,
    ProfileLookupError,
    SignOutError,
    UnknownPanelError,
)


class TestAdminShellError:
    def test_to_dict(self):
        exc = AdminShellError("Something failed", detail="more", error_code="custom", error_id="abc12345")

        assert exc.to_dict() == {
            "error": "custom",
            "message": "Something failed",
            "detail": "more",
            "error_id": "abc12345",
        }

    def test_default_error_code(self):
        assert AdminShellError("x").error_code == "admin_shell_adminshellerror"

    def test_str_includes_detail(self):
        assert str(AdminShellError("Failed", detail="why")) == "Failed: why"
        assert str(AdminShellError("Failed")) == "Failed"

    def test_error_id_generated(self):
        assert len(AdminShellError("x").error_id) == 8

    def test_log(self, caplog):
        exc = ConfigurationError("Supabase is not configured", setting_name="SUPABASE_URL")

        with caplog.at_level(logging.ERROR, logger="umpark_admin.exceptions"):
            exc.log()

        record = caplog.records[-1]
        assert record.getMessage() == "Supabase is not configured"
        assert record.error_code == "configuration_error"


class TestHierarchy:
    def test_sign_out_error_is_auth_error(self):
        exc = SignOutError(reason="network down")

        assert isinstance(exc, AuthServiceError)
        assert isinstance(exc, BackendError)
        assert exc.error_code == "sign_out_error"
        assert "network down" in str(exc)

    def test_profile_lookup_error(self):
        exc = ProfileLookupError("user-1", reason="timeout")

        assert isinstance(exc, BackendError)
        assert exc.user_id == "user-1"
        assert exc.table == "profiles"
        assert exc.detail == "Service: data; Reason: timeout"

    def test_configuration_error_detail(self):
        exc = ConfigurationError("Supabase is not configured", setting_name="SUPABASE_KEY")

        assert exc.detail == "Missing or invalid setting: SUPABASE_KEY"

    def test_unknown_panel_is_value_error(self):
        with pytest.raises(ValueError):
            raise UnknownPanelError("billing")

    def test_all_are_runtime_errors(self):
        for exc in (
            ConfigurationError("x"),
            AuthServiceError(),
            SignOutError(),
            ProfileLookupError("u"),
            UnknownPanelError("p"),
        ):
            assert isinstance(exc, AdminShellError)
            assert isinstance(exc, RuntimeError)
