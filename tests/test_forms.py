"""Unit tests for the sign-in form."""

from __future__ import annotations

import pytest

from core.forms import SignInForm

pytestmark = pytest.mark.unit


def test_identifier_is_trimmed() -> None:
    form = SignInForm(data={"identifier": "  alice@example.gr ", "password": " pw "})

    assert form.is_valid()
    assert form.cleaned_data["identifier"] == "alice@example.gr"
    assert form.cleaned_data["password"] == " pw "


@pytest.mark.parametrize("identifier", ["", "   ", "ali:ce"])
def test_invalid_identifiers_are_rejected(identifier: str) -> None:
    form = SignInForm(data={"identifier": identifier, "password": "pw"})

    assert not form.is_valid()
    assert "identifier" in form.errors
