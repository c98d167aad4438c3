from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.dtos.auth_dto import RegisterForm
from src.domain.services.registration_validator import RegistrationValidator
from src.infrastructure.auth.auth_context import AuthContext
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import SignUpResult

logger = logging.getLogger(__name__)


class RegistrationRejected(ValueError):
    """The form failed validation; no provider call was made."""


@dataclass
class RegisterUserUseCase:
    auth: AuthContext
    profiles: ProfileRepository

    def execute(self, form: RegisterForm) -> SignUpResult:
        """
        Validate the form, create the account and its profile row.

        Raises:
            RegistrationRejected: the form is invalid
            AuthProviderError: the provider refused the sign-up
        """
        problem = RegistrationValidator.validate_registration(form.model_dump())
        if problem:
            raise RegistrationRejected(problem)
        result = self.auth.sign_up(form.email, form.password, form.profile_fields())
        try:
            self.profiles.provision(result.user.id, result.user.email, form.profile_fields())
        except RuntimeError as exc:
            # the account exists; the dashboard reports the missing profile
            logger.error("Profile provisioning failed for %s: %s", result.user.id, exc)
        logger.info("Registered user %s", result.user.id)
        return result
