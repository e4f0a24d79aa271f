"""Authentication state and sign-in lifecycle."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from healmeal.domain.models import UserRecord
from healmeal.services.notifications import NotificationService

AuthListener = Callable[[UserRecord | None], None]

_logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Authentication provided by the managed backend."""

    def sign_up(self, email: str, password: str, name: str | None) -> UserRecord:
        """Register a user and return it."""

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Authenticate a user and return it."""

    def sign_out(self) -> None:
        """End the backend session."""


@dataclass
class UserService:
    """Tracks the signed-in user and notifies services on changes."""

    auth_client: AuthClient
    notifications: NotificationService
    listeners: list[AuthListener] = field(default_factory=list)
    _current_user: UserRecord | None = field(default=None, init=False)

    @property
    def current_user(self) -> UserRecord | None:
        """Return the signed-in user, if any."""
        return self._current_user

    def sign_up(
        self, email: str, password: str, name: str | None = None
    ) -> UserRecord | None:
        """Register and sign in a new user."""
        try:
            user = self.auth_client.sign_up(email, password, name)
        except Exception:
            _logger.exception("Sign up failed")
            self.notifications.error("Sign up failed", "Could not create your account.")
            return None
        self._set_user(user)
        return user

    def sign_in(self, email: str, password: str) -> UserRecord | None:
        """Sign in an existing user."""
        try:
            user = self.auth_client.sign_in(email, password)
        except Exception:
            _logger.exception("Sign in failed")
            self.notifications.error("Sign in failed", "Invalid email or password.")
            return None
        self._set_user(user)
        return user

    def sign_out(self) -> None:
        """Sign out and tear down per-user state."""
        try:
            self.auth_client.sign_out()
        except Exception:
            _logger.exception("Backend sign out failed")
        self._set_user(None)

    def _set_user(self, user: UserRecord | None) -> None:
        self._current_user = user
        for listener in self.listeners:
            try:
                listener(user)
            except Exception:
                _logger.exception("Auth listener failed")
