"""Service status engine: turns the latest records into due status."""

import logging
from typing import Dict, Iterable, Mapping, Optional

from .calculations import calc_due_miles, check_status, due_soon_threshold
from .maintenance_record import MaintenanceRecord
from .selector import select_most_recent
from .service_due import ServiceDue
from .service_type import SERVICE_INTERVALS, TRACKED_SERVICES, ServiceType
from .status import Status

logger = logging.getLogger(__name__)


def resolve_interval(
    record: MaintenanceRecord,
    intervals: Mapping[ServiceType, int],
    service_type: Optional[ServiceType] = None,
) -> Optional[int]:
    """
    Find the interval for a record.

    The requested service type wins; the record's own type is the fallback.
    If both resolve and disagree, the requested type is used and a warning
    is logged.
    """
    by_key = intervals.get(service_type) if service_type is not None else None
    by_record = intervals.get(record.type)
    if by_key is not None and by_record is not None and by_key != by_record:
        logger.warning(
            "Interval mismatch for record %s: %s=%s but %s=%s; using %s",
            record.id,
            service_type.value,
            by_key,
            record.type.value,
            by_record,
            by_key,
        )
    return by_key if by_key is not None else by_record


def compute_status(
    record: Optional[MaintenanceRecord],
    current_mileage: int,
    intervals: Mapping[ServiceType, int] = SERVICE_INTERVALS,
    service_type: Optional[ServiceType] = None,
) -> ServiceDue:
    """
    Calculate when a service is next due.

    Logic:
    - No record: UNKNOWN, nothing recorded or calculated
    - No interval for the requested type or the record's type: UNKNOWN,
      last-done fields still filled in
    - Otherwise due at record mileage + interval, classified by the miles
      remaining against 10% of the interval
    """
    row = service_type or (record.type if record else None)
    if record is None:
        return ServiceDue(service_type=row, status=Status.UNKNOWN)

    interval = resolve_interval(record, intervals, service_type)
    if interval is None:
        return ServiceDue(
            service_type=row,
            status=Status.UNKNOWN,
            last_done_date=record.date,
            last_done_mileage=record.mileage,
        )

    due_miles = calc_due_miles(record.mileage, interval)
    miles_remaining = due_miles - current_mileage
    status = check_status(miles_remaining, due_soon_threshold(interval))

    return ServiceDue(
        service_type=row,
        status=status,
        last_done_date=record.date,
        last_done_mileage=record.mileage,
        next_due_mileage=due_miles,
        miles_remaining=miles_remaining,
        interval=interval,
    )


def build_schedule(
    records: Iterable[MaintenanceRecord],
    current_mileage: int,
    intervals: Mapping[ServiceType, int] = SERVICE_INTERVALS,
    tracked: Mapping[ServiceType, Iterable[ServiceType]] = TRACKED_SERVICES,
) -> Dict[ServiceType, ServiceDue]:
    """Calculate service status for every tracked service, in display order."""
    records = list(records)
    schedule = {}
    for row, types in tracked.items():
        last = select_most_recent(records, types)
        schedule[row] = compute_status(last, current_mileage, intervals, row)
    return schedule
