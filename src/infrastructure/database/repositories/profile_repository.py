from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from postgrest.exceptions import APIError
from supabase import Client

from src.domain.entities.profile import AccountType, ProfileEntity
from src.infrastructure.database.postgres_client import get_postgres_client

logger = logging.getLogger(__name__)

# In-memory profile rows for SUPABASE_DISABLED mode, shared across requests
_MEM_PROFILES: dict[str, ProfileEntity] = {}


def reset_memory_profiles() -> None:
    _MEM_PROFILES.clear()


class ProfileRepository:
    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
        self.use_local_db = os.getenv("USE_LOCAL_DB", "0") == "1"
        self.pg_client = get_postgres_client() if self.use_local_db else None

    def _row_to_entity(self, row: dict) -> ProfileEntity:
        """Convert database row to ProfileEntity."""
        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))

        return ProfileEntity(
            id=str(row["id"]),
            email=row.get("email"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            nickname=row.get("nickname"),
            username=row.get("username"),
            account_type=row.get("account_type"),
            created_at=created_at,
        )

    def get(self, user_id: str) -> ProfileEntity:
        """Fetch the single profile row keyed by ``user_id``.

        Raises:
            LookupError: no profile row exists for the user.
            RuntimeError: the backing store failed.
        """
        # PostgreSQL mode
        if self.use_local_db and self.pg_client:
            try:
                row = self.pg_client.execute_one("SELECT * FROM profiles WHERE id = %s", (user_id,))
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL get profile failed: {exc}") from exc
            if row is None:
                raise LookupError(f"Profile {user_id} not found")
            return self._row_to_entity(row)

        # In-memory mode
        if self.disabled or self.client is None:
            entity = _MEM_PROFILES.get(user_id)
            if entity is None:
                raise LookupError(f"Profile {user_id} not found")
            return entity

        # Supabase mode
        try:  # pragma: no cover - network
            res = self.client.table("profiles").select("*").eq("id", user_id).single().execute()
        except APIError as exc:
            # PGRST116: .single() matched no rows
            if exc.code == "PGRST116":
                raise LookupError(f"Profile {user_id} not found") from exc
            raise RuntimeError(f"DB get profile failed: {exc.message}") from exc
        except Exception as exc:
            raise RuntimeError(f"DB get profile failed: {exc}") from exc
        return self._row_to_entity(res.data)

    def provision(self, user_id: str, email: str | None, fields: dict[str, str]) -> ProfileEntity | None:
        """Create the profile row for a freshly signed-up user.

        The Supabase project fills ``profiles`` from an ``auth.users`` trigger,
        so in Supabase mode there is nothing to do and ``None`` is returned.
        """
        values = {
            "first_name": fields.get("first_name"),
            "last_name": fields.get("last_name"),
            "nickname": fields.get("nickname"),
            "username": fields.get("username"),
        }

        # PostgreSQL mode
        if self.use_local_db and self.pg_client:
            try:
                query = """
                    INSERT INTO profiles
                        (id, email, first_name, last_name, nickname, username, account_type, created_at)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (id) DO UPDATE SET email = EXCLUDED.email
                    RETURNING *
                """
                row = self.pg_client.execute_insert(
                    query,
                    (
                        user_id,
                        email,
                        values["first_name"],
                        values["last_name"],
                        values["nickname"],
                        values["username"],
                        AccountType.STANDARD.value,
                    ),
                )
                return self._row_to_entity(row)
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL provision profile failed: {exc}") from exc

        # In-memory mode
        if self.disabled or self.client is None:
            entity = ProfileEntity(
                id=user_id,
                email=email,
                account_type=AccountType.STANDARD.value,
                created_at=datetime.now(timezone.utc),
                **values,
            )
            _MEM_PROFILES[user_id] = entity
            return entity

        logger.debug("Profile for %s is created by the database trigger", user_id)
        return None
