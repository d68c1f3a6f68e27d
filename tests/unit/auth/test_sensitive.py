"""Tests for the SensitiveString secret wrapper."""

import pytest

from admin_api_client.auth.sensitive import MASK, SensitiveString


@pytest.mark.unit
def test_str_and_repr_are_masked():
    """Test that the secret never appears in str() or repr()."""
    secret = SensitiveString("hunter2")

    assert str(secret) == MASK
    assert "hunter2" not in repr(secret)
    assert f"password={secret}" == "password=***"


@pytest.mark.unit
def test_secret_returns_value():
    """Test that secret() exposes the wrapped value."""
    assert SensitiveString("hunter2").secret() == "hunter2"


@pytest.mark.unit
def test_wrapping_is_idempotent():
    """Test that wrapping a SensitiveString does not nest it."""
    secret = SensitiveString(SensitiveString("hunter2"))

    assert secret.secret() == "hunter2"


@pytest.mark.unit
def test_equality_and_hash():
    """Test that equal secrets compare and hash equal."""
    assert SensitiveString("a") == SensitiveString("a")
    assert SensitiveString("a") != SensitiveString("b")
    assert hash(SensitiveString("a")) == hash(SensitiveString("a"))
    # Never equal to the plain string, so comparisons cannot leak by accident
    assert SensitiveString("a") != "a"


@pytest.mark.unit
def test_truthiness():
    """Test that an empty secret is falsy."""
    assert not SensitiveString("")
    assert SensitiveString("x")
