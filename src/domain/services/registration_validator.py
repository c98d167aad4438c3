"""Form checks that run before any call to the auth provider."""
from __future__ import annotations

import re
from typing import Mapping

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16

REGISTRATION_FIELDS = (
    "first_name",
    "last_name",
    "nickname",
    "username",
    "email",
    "password",
    "confirm_password",
)


class RegistrationValidator:
    """Validation rules for the login and registration forms.

    Each check returns the first failing message, or ``None`` when the form
    is acceptable. Rules are applied in a fixed order so the user always sees
    the most basic problem first.
    """

    @staticmethod
    def validate_password(password: str) -> str | None:
        if len(password) < PASSWORD_MIN_LENGTH or len(password) > PASSWORD_MAX_LENGTH:
            return f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters"
        if not re.search(r"[A-Z]", password):
            return "Password needs at least one uppercase letter"
        if not re.search(r"[a-z]", password):
            return "Password needs at least one lowercase letter"
        if not re.search(r"[0-9]", password):
            return "Password needs at least one number"
        if not SPECIAL_CHARACTERS.search(password):
            return "Password needs at least one special character"
        return None

    @classmethod
    def validate_registration(cls, form: Mapping[str, str | None]) -> str | None:
        for name in REGISTRATION_FIELDS:
            value = form.get(name)
            if not value or not value.strip():
                return "All fields are required. Spaces are not valid input."
        if not EMAIL_PATTERN.fullmatch(form["email"]):
            return "Please enter a valid email address"
        problem = cls.validate_password(form["password"])
        if problem:
            return problem
        if form["password"] != form["confirm_password"]:
            return "Passwords do not match"
        return None

    @staticmethod
    def validate_login(email: str | None, password: str | None) -> str | None:
        if not email or not password:
            return "All fields are required"
        return None
