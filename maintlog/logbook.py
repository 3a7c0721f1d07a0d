"""Logbook - ties a RecordStore to its storage and saves after each change."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .issue import Issue
from .loader import YamlStorage
from .maintenance_record import MaintenanceRecord
from .service_due import ServiceDue
from .service_type import ServiceType
from .store import ALL_TYPES, RecordStore
from .vehicle_info import VehicleInfo

logger = logging.getLogger(__name__)


@dataclass
class LogbookView:
    """Everything a renderer needs after a change."""

    vehicle_info: VehicleInfo
    maintenance: List[MaintenanceRecord]
    active_issues: List[Issue]
    resolved_issues: List[Issue]
    schedule: Dict[ServiceType, ServiceDue]
    filter_type: str = ALL_TYPES


class Logbook:
    """
    Application layer over a RecordStore.

    Every mutating call changes the store and then writes the full snapshot.
    If the write fails, PersistenceError propagates but the in-memory change
    is kept; calling save() again retries.
    """

    def __init__(self, storage, store: Optional[RecordStore] = None):
        self.storage = storage
        self.store = store or RecordStore()

    @classmethod
    def open(cls, path, **store_kwargs) -> "Logbook":
        """Load from a YAML file, starting with defaults if it can't be read."""
        storage = YamlStorage(path)
        snapshot = storage.load()
        if snapshot is None:
            store = RecordStore(**store_kwargs)
        else:
            store = RecordStore.from_snapshot(snapshot, **store_kwargs)
        return cls(storage, store)

    def save(self) -> None:
        saved_at = self.store.now()
        snapshot = dataclasses.replace(self.store.snapshot(), last_saved=saved_at)
        self.storage.save(snapshot)
        self.store.last_saved = saved_at

    def view(self, filter_type=ALL_TYPES) -> LogbookView:
        """Re-derive the current view; nothing is cached between calls."""
        return LogbookView(
            vehicle_info=self.store.vehicle_info,
            maintenance=self.store.filter_maintenance(filter_type),
            active_issues=self.store.active_issues(),
            resolved_issues=self.store.resolved_issues(),
            schedule=self.store.service_schedule(),
            filter_type=getattr(filter_type, "value", filter_type) or ALL_TYPES,
        )

    def update_vehicle_info(self, **fields) -> VehicleInfo:
        info = self.store.update_vehicle_info(**fields)
        self.save()
        return info

    def add_maintenance(self, date, type, mileage, notes="", cost=0) -> MaintenanceRecord:
        record = self.store.add_maintenance(date, type, mileage, notes, cost)
        self.save()
        return record

    def delete_maintenance(self, record_id: str) -> bool:
        deleted = self.store.delete_maintenance(record_id)
        if deleted:
            self.save()
        return deleted

    def add_issue(self, date, description, priority) -> Issue:
        issue = self.store.add_issue(date, description, priority)
        self.save()
        return issue

    def toggle_issue(self, issue_id: str) -> Optional[Issue]:
        issue = self.store.toggle_issue(issue_id)
        if issue is not None:
            self.save()
        return issue

    def edit_issue(self, issue_id: str, date, description, priority) -> Optional[Issue]:
        issue = self.store.edit_issue(issue_id, date, description, priority)
        if issue is not None:
            self.save()
        return issue

    def delete_issue(self, issue_id: str) -> bool:
        deleted = self.store.delete_issue(issue_id)
        if deleted:
            self.save()
        return deleted
