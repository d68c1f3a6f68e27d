"""Tests for structured client exceptions."""

import pytest
from httpx import Response

from admin_api_client.auth.exceptions import AuthError, SigningKeyError, TokenRequestError
from admin_api_client.errors.exceptions import ApiError, ClientError, DecodeError, TransportError


@pytest.mark.unit
def test_client_error_instantiation():
    """Test ClientError can be instantiated with all attributes."""
    response = Response(status_code=500)
    cause = ValueError("boom")

    error = ClientError(message="Test error", status_code=500, cause=cause, response=response)

    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.status_code == 500
    assert error.cause is cause
    assert error.response == response


@pytest.mark.unit
def test_exception_inheritance():
    """Test exception inheritance chain."""
    assert issubclass(TransportError, ClientError)
    assert issubclass(DecodeError, ClientError)
    assert issubclass(ApiError, ClientError)

    # Auth failures are client errors too
    assert issubclass(AuthError, ClientError)
    assert issubclass(SigningKeyError, AuthError)
    assert issubclass(TokenRequestError, AuthError)


@pytest.mark.unit
def test_api_error_display_with_status():
    """Test ApiError renders the status code and reason."""
    error = ApiError(message="not found", status_code=404, reason="Not Found")

    assert str(error) == "api error with status 404 Not Found: not found"


@pytest.mark.unit
def test_api_error_display_without_reason():
    """Test ApiError renders a bare status code when no reason is known."""
    error = ApiError(message="odd", status_code=599)

    assert str(error) == "api error with status 599: odd"


@pytest.mark.unit
def test_api_error_display_without_status():
    """Test ApiError without a status code."""
    error = ApiError(message="error building request: bad url")

    assert str(error) == "api error: error building request: bad url"
    assert error.status_code is None


@pytest.mark.unit
def test_api_error_is_unauthorized():
    """Test is_unauthorized detects rejected credentials."""
    assert ApiError(message="x", status_code=401).is_unauthorized
    assert not ApiError(message="x", status_code=403).is_unauthorized
    assert not ApiError(message="x").is_unauthorized


@pytest.mark.unit
def test_decode_error_keeps_body():
    """Test DecodeError stores the raw body."""
    error = DecodeError("failed to parse", body="<html>", status_code=200)

    assert error.body == "<html>"
    assert error.status_code == 200
    assert str(error) == "failed to parse"
