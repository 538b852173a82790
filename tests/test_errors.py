"""Tests for the error taxonomy."""

import pytest

from moodle_ws.errors import (
    ErrorKind,
    MoodleApiError,
    MoodleAuthError,
    MoodleError,
    MoodleNetworkError,
    MoodleValidationError,
    is_moodle_error_response,
)


class TestErrorVariants:
    """Each variant carries its discriminator and default code."""

    def test_auth_defaults(self):
        err = MoodleAuthError()
        assert err.kind is ErrorKind.AUTH
        assert err.code == "auth_failed"
        assert str(err) == "Authentication failed"

    def test_api_error_fields(self):
        err = MoodleApiError("Invalid token", "invalidtoken", "moodle_exception", "trace")
        assert err.kind is ErrorKind.API
        assert err.error_code == "invalidtoken"
        assert err.code == "invalidtoken"
        assert err.exception == "moodle_exception"
        assert err.debug_info == "trace"

    def test_network_error_wraps_cause(self):
        cause = ConnectionError("refused")
        err = MoodleNetworkError("refused", cause=cause, status_code=None)
        assert err.kind is ErrorKind.NETWORK
        assert err.code == "network_error"
        assert err.cause is cause

    def test_validation_error_field(self):
        err = MoodleValidationError("token is required", field="token")
        assert err.kind is ErrorKind.VALIDATION
        assert err.code == "validation_error"
        assert err.field == "token"

    @pytest.mark.parametrize("cls", [MoodleAuthError, MoodleApiError, MoodleNetworkError, MoodleValidationError])
    def test_all_variants_share_base(self, cls):
        assert issubclass(cls, MoodleError)

    def test_base_class_has_no_kind(self):
        assert not hasattr(MoodleError, "kind")
        assert not hasattr(MoodleError("x"), "kind")

    def test_kinds_are_distinct(self):
        kinds = {
            MoodleAuthError.kind,
            MoodleApiError.kind,
            MoodleNetworkError.kind,
            MoodleValidationError.kind,
        }
        assert kinds == set(ErrorKind)


class TestIsMoodleErrorResponse:
    """Classifying decoded bodies."""

    def test_errorcode(self):
        assert is_moodle_error_response({"message": "Invalid token", "errorcode": "invalidtoken"})

    def test_exception(self):
        assert is_moodle_error_response({"message": "x", "exception": "moodle_exception"})

    def test_message_alone_is_data(self):
        assert not is_moodle_error_response({"message": "x"})

    def test_missing_message(self):
        assert not is_moodle_error_response({"errorcode": "x"})

    def test_non_dict(self):
        assert not is_moodle_error_response([{"message": "x", "errorcode": "y"}])
        assert not is_moodle_error_response(None)
