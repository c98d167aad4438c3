from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: str
    user: AuthUser

    def tokens(self) -> dict[str, str]:
        """Token pair as stored in the session cookie."""
        return {"access_token": self.access_token, "refresh_token": self.refresh_token}
