from __future__ import annotations

from dataclasses import dataclass

from src.application.dtos.auth_dto import LoginForm
from src.domain.entities.session import AuthSession
from src.domain.services.registration_validator import RegistrationValidator
from src.infrastructure.auth.auth_context import AuthContext


class SignInRejected(ValueError):
    """Required fields were missing; no provider call was made."""


@dataclass
class SignInUserUseCase:
    auth: AuthContext

    def execute(self, form: LoginForm) -> AuthSession:
        problem = RegistrationValidator.validate_login(form.email, form.password)
        if problem:
            raise SignInRejected(problem)
        return self.auth.sign_in(form.email, form.password)
