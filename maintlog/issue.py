"""Issue class and its open/resolved lifecycle."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from .validation import require_choice, require_date, require_text


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: str) -> "Priority":
        return cls(str(value).strip().lower())


class Issue:
    """
    A defect or observation noticed on the vehicle.

    Issues start open. toggle() flips between open and resolved and keeps
    resolved_date in step: set while resolved, None while open. edit()
    replaces date/description/priority together or not at all.
    """

    def __init__(
        self,
        id: str,
        date: date,
        description: str,
        priority: Priority,
        created_at: datetime,
        resolved: bool = False,
        resolved_date: Optional[datetime] = None,
        last_modified: Optional[datetime] = None,
    ):
        self.id = id
        self.date = date
        self.description = description
        self.priority = priority
        self.created_at = created_at
        self.resolved = resolved
        self.resolved_date = resolved_date
        self.last_modified = last_modified

    @property
    def status_label(self) -> str:
        return "Resolved" if self.resolved else "Active"

    def resolve(self, now: datetime) -> None:
        self.resolved = True
        self.resolved_date = now

    def reopen(self) -> None:
        self.resolved = False
        self.resolved_date = None

    def toggle(self, now: datetime) -> bool:
        """Flip resolved state. Returns the new value of `resolved`."""
        if self.resolved:
            self.reopen()
        else:
            self.resolve(now)
        return self.resolved

    def edit(self, date, description: str, priority, now: datetime) -> None:
        """Update fields in place; raises ValidationError without changing anything."""
        new_date = require_date("date", date)
        new_description = require_text("description", description)
        new_priority = require_choice("priority", priority, Priority)

        self.date = new_date
        self.description = new_description
        self.priority = new_priority
        self.last_modified = now

    def __repr__(self) -> str:
        return f"Issue({self.id!r}, {self.date.isoformat()}, {self.priority.value}, resolved={self.resolved})"
