"""Supabase authentication client."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from healmeal.domain.models import UserRecord
from healmeal.services.users import AuthClient


@dataclass
class SupabaseAuthClient(AuthClient):
    """Supabase implementation for email and password authentication."""

    client: Client

    def sign_up(self, email: str, password: str, name: str | None) -> UserRecord:
        """Register a user with the display name stored as metadata."""
        response = self.client.auth.sign_up(
            {
                "email": email,
                "password": password,
                "options": {"data": {"name": name or ""}},
            }
        )
        return _to_record(response.user)

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Authenticate a user with email and password."""
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        return _to_record(response.user)

    def sign_out(self) -> None:
        """End the backend session."""
        self.client.auth.sign_out()


def _to_record(user: object | None) -> UserRecord:
    if user is None:
        raise RuntimeError("Authentication returned no user")
    metadata = getattr(user, "user_metadata", None) or {}
    return UserRecord(
        id=UUID(str(user.id)),
        email=getattr(user, "email", None),
        name=metadata.get("name") or None,
    )
