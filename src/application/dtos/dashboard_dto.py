from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities.profile import AccountType, ProfileEntity


class AccountBadge(BaseModel):
    """Display badge for an account type."""
    label: str = Field(..., description="Badge text", example="Standard")
    css_class: str = Field(..., description="Badge style class", example="badge-standard")


ACCOUNT_BADGES: dict[AccountType, AccountBadge] = {
    AccountType.GUEST: AccountBadge(label="Guest", css_class="badge-guest"),
    AccountType.STANDARD: AccountBadge(label="Standard", css_class="badge-standard"),
    AccountType.PREMIUM: AccountBadge(label="Premium ⭐", css_class="badge-premium"),
}


def badge_for(account_type: str | None) -> AccountBadge:
    return ACCOUNT_BADGES[AccountType.parse(account_type)]


def format_member_since(created_at: datetime | None) -> str:
    """Render a timestamp as e.g. ``January 5, 2024``."""
    if created_at is None:
        return ""
    return f"{created_at:%B} {created_at.day}, {created_at.year}"


class StatCard(BaseModel):
    label: str
    icon: str
    value: str = ""


class DetailRow(BaseModel):
    label: str
    icon: str
    value: str = ""


# Billing is not wired up yet; the widgets render with empty values.
STAT_CARDS = (
    StatCard(label="Total Bills", icon="🧾"),
    StatCard(label="Active Members", icon="👥"),
    StatCard(label="Total Expenses", icon="👛"),
)


class DashboardView(BaseModel):
    """Everything the dashboard template needs."""
    first_name: str = ""
    full_name: str = ""
    username: str = ""
    badge: AccountBadge = Field(default_factory=lambda: badge_for(None))
    stats: list[StatCard] = Field(default_factory=lambda: list(STAT_CARDS))
    details: list[DetailRow] = Field(default_factory=list)
    profile_loaded: bool = False

    @classmethod
    def from_profile(cls, profile: ProfileEntity | None) -> "DashboardView":
        if profile is None:
            return cls(details=_detail_rows(None))
        full_name = " ".join(part for part in (profile.first_name, profile.last_name) if part)
        return cls(
            first_name=profile.first_name or "",
            full_name=full_name,
            username=profile.username or "",
            badge=badge_for(profile.account_type),
            details=_detail_rows(profile),
            profile_loaded=True,
        )


def _detail_rows(profile: ProfileEntity | None) -> list[DetailRow]:
    return [
        DetailRow(label="Email", icon="✉️", value=(profile.email or "") if profile else ""),
        DetailRow(label="Nickname", icon="@", value=(profile.nickname or "") if profile else ""),
        DetailRow(label="Account Type", icon="🛡️", value=(profile.account_type or "") if profile else ""),
        DetailRow(
            label="Member Since",
            icon="📅",
            value=format_member_since(profile.created_at) if profile else "",
        ),
    ]
