"""MaintenanceRecord class for services performed on the vehicle."""

from dataclasses import dataclass
from datetime import date, datetime

from .service_type import ServiceType


@dataclass(frozen=True)
class MaintenanceRecord:
    """A record of maintenance performed. Never changed after creation."""

    id: str
    date: date
    type: ServiceType
    mileage: int
    created_at: datetime
    notes: str = ""
    cost: float = 0.0

    @property
    def type_name(self) -> str:
        return self.type.display_name
