"""ServiceDue dataclass for calculated service status."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .service_type import ServiceType
from .status import Status

NOT_RECORDED = "Not recorded"
NOT_CALCULATED = "Not calculated"


@dataclass(frozen=True)
class ServiceDue:
    """Calculated service due information for one tracked service."""

    service_type: ServiceType
    status: Status
    last_done_date: Optional[date] = None
    last_done_mileage: Optional[int] = None
    next_due_mileage: Optional[int] = None
    miles_remaining: Optional[int] = None
    interval: Optional[int] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)

    @property
    def magnitude(self) -> Optional[int]:
        """Miles overdue (positive) when OVERDUE, otherwise miles remaining."""
        if self.miles_remaining is None:
            return None
        return abs(self.miles_remaining)

    @property
    def last_done_label(self) -> str:
        if self.last_done_date is None:
            return NOT_RECORDED
        return f"{self.last_done_date.isoformat()} ({self.last_done_mileage:,} miles)"

    @property
    def next_due_label(self) -> str:
        if self.next_due_mileage is None:
            return NOT_CALCULATED
        return f"{self.next_due_mileage:,} miles"

    @property
    def summary(self) -> str:
        if self.status == Status.OVERDUE:
            return f"Overdue by {self.magnitude:,} miles"
        if self.status == Status.DUE_SOON:
            return f"Due soon ({self.magnitude:,} miles)"
        if self.status == Status.OK:
            return f"OK ({self.magnitude:,} miles remaining)"
        return "Unknown"
