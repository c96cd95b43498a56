from __future__ import annotations

import pytest

from eventdesk.core.validators import (
    is_blank,
    is_valid_email,
    is_valid_phone,
    is_valid_username,
    missing_fields,
)


@pytest.mark.parametrize("email", ["a@x.com", "first.last@sub.example.org"])
def test_valid_emails(email: str) -> None:
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["", "a@x", "a x@y.com", "@x.com", "a@@x.com", "a@x.com\n"])
def test_invalid_emails(email: str) -> None:
    assert not is_valid_email(email)


@pytest.mark.parametrize("phone", ["+1-555-0100", "(420) 794-6000", "5551234", "+44 20 7946 0000"])
def test_valid_phones(phone: str) -> None:
    assert is_valid_phone(phone)


@pytest.mark.parametrize("phone", ["", "0123", "+", "call me", "+12345678901234567"])
def test_invalid_phones(phone: str) -> None:
    assert not is_valid_phone(phone)


def test_username_charset() -> None:
    assert is_valid_username("alice_123")
    assert not is_valid_username("alice-123")
    assert not is_valid_username("")


def test_blank_and_missing() -> None:
    assert is_blank(None)
    assert is_blank("  ")
    assert not is_blank("x")
    assert missing_fields({"a": "x", "b": " ", "d": None}, ["a", "b", "c", "d"]) == ["b", "c", "d"]
