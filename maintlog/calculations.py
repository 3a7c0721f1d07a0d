"""Helper functions for service due calculations."""

from typing import Optional

from .service_type import DUE_SOON_FRACTION
from .status import Status


def calc_due_miles(last_miles: int, interval: Optional[int]) -> Optional[int]:
    """Next due mileage: last service mileage + interval."""
    if interval is None:
        return None
    return last_miles + interval


def due_soon_threshold(interval: float, fraction: float = DUE_SOON_FRACTION) -> float:
    """Remaining miles below which a service counts as due soon."""
    return interval * fraction


def check_status(miles_remaining: float, soon_threshold: float) -> Status:
    """
    Classify remaining miles before the next service.

    Overdue only once the due mileage has been passed; reaching it
    exactly is still due soon.
    """
    if miles_remaining < 0:
        return Status.OVERDUE
    if miles_remaining < soon_threshold:
        return Status.DUE_SOON
    return Status.OK
