"""Tests for result values and status classification (core/results.py)."""

from __future__ import annotations

import pytest

from lbcli.core.results import (
    AuthError,
    AuthErrorKind,
    Err,
    Ok,
    Operation,
    classify_failure,
    is_success,
)
from lbcli.exceptions import AuthFailedError, LinkboxError


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------

class TestIsSuccess:
    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_2xx(self, status: int) -> None:
        assert is_success(status)

    @pytest.mark.parametrize("status", [100, 199, 300, 301, 404, 500])
    def test_not_2xx(self, status: int) -> None:
        assert not is_success(status)


class TestClassifyFailure:
    def test_signin_is_invalid_credentials(self) -> None:
        assert classify_failure(Operation.SIGNIN, 401) == AuthError.invalid_credentials(
            Operation.SIGNIN,
        )

    @pytest.mark.parametrize("operation", [Operation.LIST_LINKS, Operation.GET_LINK])
    @pytest.mark.parametrize("status", [401, 403, 500])
    def test_reads_are_not_authorized(self, operation: Operation, status: int) -> None:
        error = classify_failure(operation, status)
        assert error.kind is AuthErrorKind.NOT_AUTHORIZED
        assert error.status_code is None

    @pytest.mark.parametrize("operation", [Operation.CREATE_LINK, Operation.DELETE_LINK])
    @pytest.mark.parametrize("status", [401, 422, 503])
    def test_writes_carry_status(self, operation: Operation, status: int) -> None:
        error = classify_failure(operation, status)
        assert error.kind is AuthErrorKind.SERVER_ERROR
        assert error.status_code == status

    def test_discover_has_no_mapping(self) -> None:
        with pytest.raises(ValueError, match="discover"):
            classify_failure(Operation.DISCOVER, 500)


# ---------------------------------------------------------------------------
# AuthError presentation
# ---------------------------------------------------------------------------

class TestAuthErrorMessages:
    def test_invalid_credentials(self) -> None:
        error = AuthError.invalid_credentials(Operation.SIGNIN)
        assert error.message == "invalid credentials"
        assert error.hint is not None

    def test_not_authorized_names_operation(self) -> None:
        error = AuthError.not_authorized(Operation.LIST_LINKS)
        assert str(error) == "not authorized to list links"
        assert "login" in (error.hint or "")

    def test_server_error_shows_status(self) -> None:
        error = AuthError.server_error(Operation.DELETE_LINK, 500)
        assert error.message == "server error: 500"
        assert error.hint is None


# ---------------------------------------------------------------------------
# Ok / Err
# ---------------------------------------------------------------------------

class TestResult:
    def test_ok_unwraps_value(self) -> None:
        result = Ok(3)
        assert result.is_ok()
        assert result.unwrap() == 3

    def test_err_unwrap_raises_with_error(self) -> None:
        error = AuthError.server_error(Operation.CREATE_LINK, 422)
        result = Err(error)

        assert not result.is_ok()
        with pytest.raises(AuthFailedError) as exc_info:
            result.unwrap()
        assert exc_info.value.error is error
        assert str(exc_info.value) == "server error: 422"

    def test_auth_failed_is_linkbox_error(self) -> None:
        assert issubclass(AuthFailedError, LinkboxError)

    def test_auth_failed_carries_hint(self) -> None:
        with pytest.raises(AuthFailedError) as exc_info:
            Err(AuthError.invalid_credentials(Operation.SIGNIN)).unwrap()
        assert exc_info.value.hint == "Check your username and password and try again."
