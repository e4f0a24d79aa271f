"""Daily nutrition tracker."""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from healmeal.domain.meal_logs import MealLog, MealLogEntry
from healmeal.domain.meals import MealSource, MealType
from healmeal.domain.models import UserRecord
from healmeal.domain.nutrition import ZERO_MACROS, MacroProfile
from healmeal.services.catalog import CatalogService
from healmeal.services.notifications import NotificationService

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for meal logs and their entries."""

    def list_logs(self, user_id: UUID) -> list[MealLog]:
        """Return all logs of a user with their entries."""

    def create_log(self, user_id: UUID, log_date: date) -> str:
        """Create a log for a date and return its id."""

    def create_entry(self, log_id: str, entry: MealLogEntry) -> UUID:
        """Create an entry row and return its id."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""

    def delete_log(self, log_id: str) -> None:
        """Delete a log row."""


@dataclass
class MealLogService:
    """Keeps one log per date and mirrors persisted entries to the backend."""

    repository: MealLogRepository
    catalog: CatalogService
    notifications: NotificationService
    _logs: list[MealLog] = field(default_factory=list, init=False)
    _user: UserRecord | None = field(default=None, init=False)

    @property
    def logs(self) -> list[MealLog]:
        """Return the current logs."""
        return list(self._logs)

    def on_auth_change(self, user: UserRecord | None) -> None:
        """Load or discard logs when the user changes."""
        self._user = user
        self._logs = []
        if user is not None:
            self.load()

    def load(self) -> list[MealLog]:
        """Reload the signed-in user's logs from the backend."""
        if self._user is None:
            return []
        try:
            logs = self.repository.list_logs(self._user.id)
        except Exception:
            _logger.exception("Failed to load meal logs for %s", self._user.id)
            self.notifications.error(
                "Error loading meal logs", "Could not load your meal history."
            )
            return self.logs
        self._logs = []
        for log in logs:
            if self.get_by_date(log.date) is not None:
                _logger.warning(
                    "Ignoring duplicate meal log %s for %s", log.id, log.date
                )
                continue
            self._logs.append(log)
        return self.logs

    def add_entry(
        self,
        meal_id: str,
        log_date: date,
        meal_type: MealType,
        notes: str | None = None,
    ) -> MealLog | None:
        """Append an entry to the log for a date, creating the log if needed.

        Entries for meals that are not persisted in the backend are kept in
        memory only; a local log is promoted once a persisted entry joins it.
        """
        if self._user is None:
            self.notifications.error(
                "Login required", "Please login to use the meal tracker"
            )
            return None
        entry = MealLogEntry(
            meal_id=meal_id,
            meal_type=meal_type,
            time_consumed=datetime.now(tz=UTC),
            notes=notes or None,
        )
        meal = self.catalog.get_meal(meal_id)
        if meal is None:
            _logger.warning("Logging unresolvable meal %s locally", meal_id)
        existing = self.get_by_date(log_date)

        if meal is None or meal.source != MealSource.PERSISTED:
            if existing is not None:
                log = replace(existing, meals=(*existing.meals, entry))
            else:
                log = MealLog(
                    id=f"local-{uuid4().hex}",
                    user_id=self._user.id,
                    date=log_date,
                    meals=(entry,),
                    persisted=False,
                )
            self._store(log)
            self._notify_logged(meal_type, log_date)
            return log

        created_log_id: str | None = None
        try:
            if existing is not None and existing.persisted:
                log = existing
            else:
                created_log_id = self.repository.create_log(self._user.id, log_date)
                log = self._new_persisted_log(created_log_id, log_date, existing)
            entry_id = self.repository.create_entry(log.id, entry)
        except Exception:
            _logger.exception("Failed to add meal %s to log", meal_id)
            if created_log_id is not None:
                self._discard_log_row(created_log_id)
            self.notifications.error(
                "Error logging meal", "Could not add meal to your log."
            )
            return None
        if existing is not None and existing.id != log.id:
            self._logs = [item for item in self._logs if item.id != existing.id]
        log = replace(log, meals=(*log.meals, replace(entry, entry_id=entry_id)))
        self._store(log)
        self._notify_logged(meal_type, log_date)
        return log

    def remove_entry(self, log_id: str, meal_id: str) -> bool:
        """Remove the first entry for a meal; an emptied log is deleted."""
        log = self._find(log_id)
        if log is None:
            return False
        index = next(
            (i for i, entry in enumerate(log.meals) if entry.meal_id == meal_id),
            None,
        )
        if index is None:
            return False
        entry = log.meals[index]
        remaining = log.meals[:index] + log.meals[index + 1 :]
        try:
            if entry.entry_id is not None:
                self.repository.delete_entry(entry.entry_id)
            if not remaining and log.persisted:
                self.repository.delete_log(log.id)
        except Exception:
            _logger.exception("Failed to remove meal %s from log %s", meal_id, log_id)
            self.notifications.error(
                "Error removing meal", "Could not remove meal from your log."
            )
            return False
        if remaining:
            self._store(replace(log, meals=remaining))
        else:
            self._logs = [item for item in self._logs if item.id != log.id]
        self.notifications.info("Meal removed", "Removed meal from your log.")
        return True

    def get_by_date(self, log_date: date) -> MealLog | None:
        """Return the log for a date, if any."""
        for log in self._logs:
            if log.date == log_date:
                return log
        return None

    def daily_totals(self, log_date: date) -> MacroProfile:
        """Sum the macros of all resolvable meals logged on a date."""
        log = self.get_by_date(log_date)
        if log is None:
            return ZERO_MACROS
        total = ZERO_MACROS
        for entry in log.meals:
            meal = self.catalog.get_meal(entry.meal_id)
            if meal is not None:
                total = total + meal.macros
        return total

    def _new_persisted_log(
        self, log_id: str, log_date: date, existing: MealLog | None
    ) -> MealLog:
        if existing is None:
            return MealLog(id=log_id, user_id=self._user.id, date=log_date, meals=())
        return replace(existing, id=log_id, persisted=True)

    def _discard_log_row(self, log_id: str) -> None:
        try:
            self.repository.delete_log(log_id)
        except Exception:
            _logger.exception("Failed to delete unused meal log %s", log_id)

    def _store(self, log: MealLog) -> None:
        for index, existing in enumerate(self._logs):
            if existing.id == log.id:
                self._logs[index] = log
                return
        self._logs.append(log)

    def _find(self, log_id: str) -> MealLog | None:
        for log in self._logs:
            if log.id == log_id:
                return log
        return None

    def _notify_logged(self, meal_type: MealType, log_date: date) -> None:
        self.notifications.info(
            "Meal logged",
            f"Added to your {meal_type} log for {log_date.isoformat()}.",
        )
