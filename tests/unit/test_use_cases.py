"""
Tests for the registration, sign-in and dashboard use cases.
"""
from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from src.application.dtos.auth_dto import LoginForm, RegisterForm
from src.application.dtos.dashboard_dto import badge_for, format_member_since
from src.application.use_cases.load_dashboard import LoadDashboardUseCase
from src.application.use_cases.register_user import RegisterUserUseCase, RegistrationRejected
from src.application.use_cases.sign_in_user import SignInRejected, SignInUserUseCase
from src.domain.entities.profile import ProfileEntity
from src.domain.entities.session import AuthUser
from src.infrastructure.database.supabase_client import AuthProviderError, SignUpResult

USER = AuthUser(id="user_1", email="ada@example.com")


def register_form(**overrides):
    values = dict(
        first_name="Ada",
        last_name="Lovelace",
        nickname="Countess",
        username="ada",
        email="ada@example.com",
        password="Secret#123",
        confirm_password="Secret#123",
    )
    values.update(overrides)
    return RegisterForm(**values)


class TestRegisterUser:
    def test_success_signs_up_and_provisions(self):
        auth, profiles = Mock(), Mock()
        auth.sign_up.return_value = SignUpResult(user=USER, session=None)

        result = RegisterUserUseCase(auth, profiles).execute(register_form())

        assert result.user == USER
        auth.sign_up.assert_called_once_with(
            "ada@example.com",
            "Secret#123",
            {"first_name": "Ada", "last_name": "Lovelace", "nickname": "Countess", "username": "ada"},
        )
        profiles.provision.assert_called_once()
        assert profiles.provision.call_args.args[0] == "user_1"

    def test_invalid_form_never_reaches_provider(self):
        auth, profiles = Mock(), Mock()
        with pytest.raises(RegistrationRejected, match="Passwords do not match"):
            RegisterUserUseCase(auth, profiles).execute(register_form(confirm_password="Other#123"))
        auth.sign_up.assert_not_called()
        profiles.provision.assert_not_called()

    def test_provider_error_propagates(self):
        auth, profiles = Mock(), Mock()
        auth.sign_up.side_effect = AuthProviderError("User already registered")
        with pytest.raises(AuthProviderError, match="already registered"):
            RegisterUserUseCase(auth, profiles).execute(register_form())
        profiles.provision.assert_not_called()


class TestSignInUser:
    def test_missing_password_rejected_locally(self):
        auth = Mock()
        with pytest.raises(SignInRejected):
            SignInUserUseCase(auth).execute(LoginForm(email="ada@example.com"))
        auth.sign_in.assert_not_called()

    def test_delegates_to_auth(self):
        auth = Mock()
        SignInUserUseCase(auth).execute(LoginForm(email="ada@example.com", password="Secret#123"))
        auth.sign_in.assert_called_once_with("ada@example.com", "Secret#123")


class TestLoadDashboard:
    def test_profile_rendered(self):
        profiles = Mock()
        profiles.get.return_value = ProfileEntity(
            id="user_1",
            email="ada@example.com",
            first_name="Ada",
            last_name="Lovelace",
            nickname="Countess",
            username="ada",
            account_type="premium",
            created_at=datetime(2024, 1, 5, tzinfo=timezone.utc),
        )

        view = LoadDashboardUseCase(profiles).execute(USER)

        assert view.profile_loaded
        assert view.full_name == "Ada Lovelace"
        assert view.badge.label == "Premium ⭐"
        details = {row.label: row.value for row in view.details}
        assert details["Member Since"] == "January 5, 2024"
        assert details["Nickname"] == "Countess"
        assert [s.label for s in view.stats] == ["Total Bills", "Active Members", "Total Expenses"]

    @pytest.mark.parametrize("error", [LookupError("missing"), RuntimeError("db down")])
    def test_load_failure_returns_blank_view(self, error):
        profiles = Mock()
        profiles.get.side_effect = error
        view = LoadDashboardUseCase(profiles).execute(USER)
        assert not view.profile_loaded
        assert view.first_name == ""

    def test_profile_of_another_user_rejected(self):
        profiles = Mock()
        profiles.get.return_value = ProfileEntity(id="user_2", email=None)
        assert not LoadDashboardUseCase(profiles).execute(USER).profile_loaded


def test_badges_default_to_standard():
    assert badge_for("guest").label == "Guest"
    assert badge_for(None).label == "Standard"
    assert badge_for("enterprise").label == "Standard"


def test_member_since_blank_without_timestamp():
    assert format_member_since(None) == ""


def test_register_survives_profile_provisioning_failure():
    auth, profiles = Mock(), Mock()
    auth.sign_up.return_value = SignUpResult(user=USER, session=None)
    profiles.provision.side_effect = RuntimeError("PostgreSQL provision profile failed")

    result = RegisterUserUseCase(auth, profiles).execute(register_form())

    assert result.user == USER
