"""Service categories and the mileage intervals for recurring services."""

from enum import Enum
from typing import Dict, Tuple


class ServiceType(Enum):
    """Fixed set of maintenance categories."""

    OIL_CHANGE = "oil-change"
    VALVE_ADJUSTMENT = "valve-adjustment"
    TUNE_UP = "tune-up"
    BRAKES = "brakes"
    BRAKE_INSPECTION = "brake-inspection"
    ELECTRICAL = "electrical"
    ENGINE = "engine"
    TRANSMISSION = "transmission"
    SUSPENSION = "suspension"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: str) -> "ServiceType":
        """Look up a type by its value ("oil-change") or name ("OIL_CHANGE")."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls(text.lower())
        except ValueError:
            return cls[text.upper().replace("-", "_")]


_DISPLAY_NAMES = {
    ServiceType.OIL_CHANGE: "Oil Change",
    ServiceType.VALVE_ADJUSTMENT: "Valve Adjustment",
    ServiceType.TUNE_UP: "Tune-Up",
    ServiceType.BRAKES: "Brakes",
    ServiceType.BRAKE_INSPECTION: "Brake Inspection",
    ServiceType.ELECTRICAL: "Electrical",
    ServiceType.ENGINE: "Engine",
    ServiceType.TRANSMISSION: "Transmission",
    ServiceType.SUSPENSION: "Suspension",
    ServiceType.OTHER: "Other",
}

# Interval in miles between successive services
SERVICE_INTERVALS: Dict[ServiceType, int] = {
    ServiceType.OIL_CHANGE: 3000,
    ServiceType.VALVE_ADJUSTMENT: 6000,
    ServiceType.TUNE_UP: 12000,
    ServiceType.BRAKE_INSPECTION: 12000,
}

# Each schedule row and the record types that count as doing that service.
# The brakes row also picks up brake inspections, whose interval then
# comes from the record's own type.
TRACKED_SERVICES: Dict[ServiceType, Tuple[ServiceType, ...]] = {
    ServiceType.OIL_CHANGE: (ServiceType.OIL_CHANGE,),
    ServiceType.VALVE_ADJUSTMENT: (ServiceType.VALVE_ADJUSTMENT,),
    ServiceType.TUNE_UP: (ServiceType.TUNE_UP,),
    ServiceType.BRAKES: (ServiceType.BRAKES, ServiceType.BRAKE_INSPECTION),
}

DUE_SOON_FRACTION = 0.10
