from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AccountType(str, Enum):
    GUEST = "guest"
    STANDARD = "standard"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: str | None) -> "AccountType":
        """Unknown or missing account types display as standard."""
        try:
            return cls(value)
        except ValueError:
            return cls.STANDARD


@dataclass(frozen=True)
class ProfileEntity:
    id: str  # user id from Supabase auth
    email: str | None
    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    username: str | None = None
    account_type: str | None = None
    created_at: datetime | None = None
