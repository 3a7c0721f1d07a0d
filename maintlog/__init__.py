"""
Single-vehicle maintenance logbook.

This package provides:
- Status: Urgency levels (OVERDUE, DUE_SOON, OK, UNKNOWN)
- ServiceType: Maintenance categories and their mileage intervals
- VehicleInfo: Vehicle identification and current mileage
- MaintenanceRecord: Services performed
- Issue: Problems noticed, open or resolved
- RecordStore: Owned container for all of the above
- select_most_recent / compute_status / build_schedule: service due engine
- Logbook: Store plus YAML persistence
"""

from .status import Status
from .errors import LogbookError, ValidationError, PersistenceError
from .service_type import ServiceType, SERVICE_INTERVALS, TRACKED_SERVICES
from .vehicle_info import VehicleInfo
from .maintenance_record import MaintenanceRecord
from .issue import Issue, Priority
from .service_due import ServiceDue, NOT_RECORDED, NOT_CALCULATED
from .calculations import calc_due_miles, check_status, due_soon_threshold
from .selector import select_most_recent
from .schedule import compute_status, build_schedule
from .store import RecordStore, StoreSnapshot
from .loader import YamlStorage, load_snapshot, save_snapshot
from .logbook import Logbook, LogbookView

__all__ = [
    "Status",
    "LogbookError",
    "ValidationError",
    "PersistenceError",
    "ServiceType",
    "SERVICE_INTERVALS",
    "TRACKED_SERVICES",
    "VehicleInfo",
    "MaintenanceRecord",
    "Issue",
    "Priority",
    "ServiceDue",
    "NOT_RECORDED",
    "NOT_CALCULATED",
    "calc_due_miles",
    "check_status",
    "due_soon_threshold",
    "select_most_recent",
    "compute_status",
    "build_schedule",
    "RecordStore",
    "StoreSnapshot",
    "YamlStorage",
    "load_snapshot",
    "save_snapshot",
    "Logbook",
    "LogbookView",
]
