from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.dtos.dashboard_dto import DashboardView
from src.domain.entities.session import AuthUser
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class LoadDashboardUseCase:
    profiles: ProfileRepository

    def execute(self, user: AuthUser) -> DashboardView:
        """
        Build the dashboard for ``user``.

        A missing or unreadable profile does not fail the page: the view is
        returned with ``profile_loaded`` unset so the caller can notify the user.
        """
        try:
            profile = self.profiles.get(user.id)
        except (LookupError, RuntimeError) as exc:
            logger.warning("Failed to load profile for %s: %s", user.id, exc)
            return DashboardView.from_profile(None)
        if profile.id != user.id:
            logger.warning("Profile id %s does not match user %s", profile.id, user.id)
            return DashboardView.from_profile(None)
        return DashboardView.from_profile(profile)
