from __future__ import annotations

from datetime import datetime
from unittest.mock import Mock

import httpx
import pytest
from postgrest.exceptions import APIError

from src.infrastructure.database.repositories.profile_repository import ProfileRepository

FIELDS = {"first_name": "Ada", "last_name": "Lovelace", "nickname": "Countess", "username": "ada"}


class TestInMemoryProfiles:
    def test_provision_then_get(self):
        repo = ProfileRepository(None)
        repo.provision("user_1", "ada@example.com", FIELDS)

        profile = ProfileRepository(None).get("user_1")
        assert profile.id == "user_1"
        assert profile.username == "ada"
        assert profile.account_type == "standard"
        assert isinstance(profile.created_at, datetime)

    def test_missing_profile_raises_lookup_error(self):
        with pytest.raises(LookupError):
            ProfileRepository(None).get("nobody")


@pytest.fixture
def supabase_repo(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "0")
    client = Mock()
    query = client.table.return_value.select.return_value.eq.return_value.single.return_value
    return ProfileRepository(client), client, query


class TestSupabaseProfiles:
    def test_single_row_lookup_by_id(self, supabase_repo):
        repo, client, query = supabase_repo
        query.execute.return_value = Mock(
            data={
                "id": "user_1",
                "email": "ada@example.com",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "nickname": "Countess",
                "username": "ada",
                "account_type": "premium",
                "created_at": "2024-01-05T10:00:00Z",
            }
        )

        profile = repo.get("user_1")

        client.table.assert_called_once_with("profiles")
        client.table.return_value.select.return_value.eq.assert_called_once_with("id", "user_1")
        assert profile.account_type == "premium"
        assert profile.created_at.year == 2024
        assert profile.created_at.tzinfo is not None

    def test_no_row_is_lookup_error(self, supabase_repo):
        repo, _, query = supabase_repo
        query.execute.side_effect = APIError({"message": "JSON object requested", "code": "PGRST116"})
        with pytest.raises(LookupError):
            repo.get("user_1")

    def test_backend_failure_is_runtime_error(self, supabase_repo):
        repo, _, query = supabase_repo
        query.execute.side_effect = APIError({"message": "permission denied", "code": "42501"})
        with pytest.raises(RuntimeError, match="permission denied"):
            repo.get("user_1")

    def test_provision_left_to_database_trigger(self, supabase_repo):
        repo, client, _ = supabase_repo
        assert repo.provision("user_1", "ada@example.com", FIELDS) is None
        client.table.assert_not_called()


def test_transport_failure_is_runtime_error(supabase_repo):
    repo, _, query = supabase_repo
    query.execute.side_effect = httpx.ConnectError("down")
    with pytest.raises(RuntimeError, match="down"):
        repo.get("user_1")


def test_transport_failure_gives_blank_dashboard(supabase_repo):
    from src.application.use_cases.load_dashboard import LoadDashboardUseCase
    from src.domain.entities.session import AuthUser

    repo, _, query = supabase_repo
    query.execute.side_effect = httpx.TimeoutException("timed out")
    view = LoadDashboardUseCase(repo).execute(AuthUser(id="user_1", email=None))
    assert not view.profile_loaded
