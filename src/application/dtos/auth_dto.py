"""Form payloads posted by the login and registration pages."""
from __future__ import annotations

from pydantic import BaseModel, Field


class LoginForm(BaseModel):
    """Fields of the sign-in form. Emptiness is checked by the validator, not here."""
    email: str = Field("", description="Email address", example="ada@example.com")
    password: str = Field("", description="Account password")


class RegisterForm(BaseModel):
    """Fields of the create-account form."""
    first_name: str = Field("", description="Given name", example="Ada")
    last_name: str = Field("", description="Family name", example="Lovelace")
    nickname: str = Field("", description="Name shown to bill members", example="Ada")
    username: str = Field("", description="Unique handle", example="ada")
    email: str = Field("", description="Email address", example="ada@example.com")
    password: str = Field("", description="8-16 characters with upper, lower, digit and special")
    confirm_password: str = Field("", description="Must repeat the password")

    def profile_fields(self) -> dict[str, str]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "nickname": self.nickname,
            "username": self.username,
        }

    def echo(self) -> dict[str, str]:
        """Values safe to send back into the form after a failed submit."""
        return self.model_dump(exclude={"password", "confirm_password"})
