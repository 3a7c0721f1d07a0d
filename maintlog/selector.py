"""Selection of the most recent maintenance record for a service."""

from typing import Iterable, Optional, Union

from .maintenance_record import MaintenanceRecord
from .service_type import ServiceType


def select_most_recent(
    records: Iterable[MaintenanceRecord],
    service_type: Union[ServiceType, Iterable[ServiceType]],
) -> Optional[MaintenanceRecord]:
    """
    Get the latest record of the given type (or any of several types).

    Latest means greatest service date. Records on the same date are
    ordered by creation time, then by id, so the answer never depends on
    the order of `records`.
    """
    if isinstance(service_type, ServiceType):
        types = {service_type}
    else:
        types = set(service_type)

    matching = [r for r in records if r.type in types]
    if not matching:
        return None
    return max(matching, key=lambda r: (r.date, r.created_at, r.id))
