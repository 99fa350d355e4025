"""Forms for core UI workflows."""

from __future__ import annotations

from django import forms


class SignInForm(forms.Form):
    """Collect platform credentials for a single sign-in attempt."""

    identifier = forms.CharField(
        label="Username or email",
        max_length=254,
        widget=forms.TextInput(attrs={"autocomplete": "username", "autofocus": True}),
    )
    password = forms.CharField(
        label="Password",
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )

    def clean_identifier(self) -> str:
        """Trim surrounding whitespace and reject blank identifiers.

        Returns:
            The trimmed identifier.
        """

        identifier = (self.cleaned_data.get("identifier") or "").strip()
        if not identifier:
            raise forms.ValidationError("Enter your username or email.")
        if ":" in identifier:
            raise forms.ValidationError("Usernames cannot contain ':'.")
        return identifier
