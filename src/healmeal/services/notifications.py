"""User-visible notifications."""

from collections import deque
from dataclasses import dataclass, field
from typing import Literal

NoticeVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notice:
    """A short message shown to the user after an action."""

    title: str
    description: str
    variant: NoticeVariant = "default"


@dataclass
class NotificationService:
    """Collects notices until the UI drains them."""

    max_pending: int = 50
    _pending: deque[Notice] = field(init=False)

    def __post_init__(self) -> None:
        self._pending = deque(maxlen=self.max_pending)

    def info(self, title: str, description: str) -> Notice:
        """Queue an informational notice."""
        return self._push(Notice(title=title, description=description))

    def error(self, title: str, description: str) -> Notice:
        """Queue an error notice."""
        return self._push(
            Notice(title=title, description=description, variant="destructive")
        )

    def pending(self) -> list[Notice]:
        """Return queued notices without removing them."""
        return list(self._pending)

    def drain(self) -> list[Notice]:
        """Return and clear queued notices."""
        notices = list(self._pending)
        self._pending.clear()
        return notices

    def _push(self, notice: Notice) -> Notice:
        self._pending.append(notice)
        return notice
