"""RecordStore - the owned container for all vehicle data."""

import copy
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Set, Tuple

from .issue import Issue, Priority
from .maintenance_record import MaintenanceRecord
from .schedule import build_schedule
from .service_due import ServiceDue
from .service_type import ServiceType
from .validation import (
    require_choice,
    require_date,
    require_non_negative,
    require_text,
)
from .vehicle_info import VehicleInfo

logger = logging.getLogger(__name__)

ALL_TYPES = "all"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class StoreSnapshot:
    """Point-in-time copy of everything in a RecordStore."""

    vehicle_info: VehicleInfo = field(default_factory=VehicleInfo)
    maintenance: Tuple[MaintenanceRecord, ...] = ()
    issues: Tuple[Issue, ...] = ()
    last_saved: Optional[datetime] = None


class RecordStore:
    """
    Vehicle info, maintenance records and issues for one vehicle.

    All changes go through methods that validate first, so a rejected call
    leaves the store exactly as it was. Newly added records and issues go
    to the front of their lists (newest first for display). The store does
    not save itself; see Logbook for that.
    """

    def __init__(
        self,
        vehicle_info: Optional[VehicleInfo] = None,
        maintenance: Optional[List[MaintenanceRecord]] = None,
        issues: Optional[List[Issue]] = None,
        last_saved: Optional[datetime] = None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_id,
    ):
        self.vehicle_info = vehicle_info or VehicleInfo()
        self._maintenance = list(maintenance or [])
        self._issues = list(issues or [])
        self.last_saved = last_saved
        self._clock = clock
        self._id_factory = id_factory
        # Every id ever used per collection, deleted ones included
        self._maintenance_ids = {r.id for r in self._maintenance}
        self._issue_ids = {i.id for i in self._issues}

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot, **kwargs) -> "RecordStore":
        return cls(
            vehicle_info=copy.copy(snapshot.vehicle_info),
            maintenance=list(snapshot.maintenance),
            issues=[copy.copy(i) for i in snapshot.issues],
            last_saved=snapshot.last_saved,
            **kwargs,
        )

    def snapshot(self) -> StoreSnapshot:
        """Full read of the store; later changes to the store don't affect it."""
        return StoreSnapshot(
            vehicle_info=copy.copy(self.vehicle_info),
            maintenance=tuple(self._maintenance),
            issues=tuple(copy.copy(i) for i in self._issues),
            last_saved=self.last_saved,
        )

    def now(self) -> datetime:
        return self._clock()

    def _unique_id(self, issued: Set[str]) -> str:
        candidate = self._id_factory()
        while candidate in issued:
            candidate = self._id_factory()
        issued.add(candidate)
        return candidate

    # -------------------------------------------------------------------------
    # Vehicle info
    # -------------------------------------------------------------------------

    @property
    def current_mileage(self) -> int:
        return self.vehicle_info.mileage

    def update_vehicle_info(
        self,
        vin: Optional[str] = None,
        mileage: Optional[int] = None,
        year: Optional[int] = None,
        make: Optional[str] = None,
        model: Optional[str] = None,
    ) -> VehicleInfo:
        """Update the given fields (None = leave unchanged)."""
        if mileage is not None:
            mileage = require_non_negative("mileage", mileage)
        if year is not None:
            year = require_non_negative("year", year)
        if make is not None:
            make = require_text("make", make)
        if model is not None:
            model = require_text("model", model)

        info = self.vehicle_info
        if vin is not None:
            info.vin = vin.strip()
        if mileage is not None:
            info.mileage = mileage
        if year is not None:
            info.year = year
        if make is not None:
            info.make = make
        if model is not None:
            info.model = model
        logger.debug("Vehicle info updated: %r", info)
        return info

    # -------------------------------------------------------------------------
    # Maintenance records
    # -------------------------------------------------------------------------

    @property
    def maintenance(self) -> List[MaintenanceRecord]:
        return list(self._maintenance)

    def add_maintenance(
        self,
        date,
        type,
        mileage: int,
        notes: str = "",
        cost: float = 0,
    ) -> MaintenanceRecord:
        """Validate and add a maintenance record."""
        fields = dict(
            date=require_date("date", date),
            type=require_choice("type", type, ServiceType),
            mileage=require_non_negative("mileage", mileage),
            notes=(notes or "").strip(),
            cost=require_non_negative("cost", cost or 0, float),
        )
        record = MaintenanceRecord(
            id=self._unique_id(self._maintenance_ids),
            created_at=self.now(),
            **fields,
        )
        self._maintenance.insert(0, record)
        logger.debug("Added maintenance record %s (%s)", record.id, record.type.value)
        return record

    def get_maintenance(self, record_id: str) -> Optional[MaintenanceRecord]:
        for record in self._maintenance:
            if record.id == record_id:
                return record
        return None

    def delete_maintenance(self, record_id: str) -> bool:
        """Remove a record. Returns False if no record has that id."""
        record = self.get_maintenance(record_id)
        if record is None:
            return False
        self._maintenance.remove(record)
        logger.debug("Deleted maintenance record %s", record_id)
        return True

    def filter_maintenance(self, service_type=ALL_TYPES) -> List[MaintenanceRecord]:
        """Records of exactly one type, or all records for "all"."""
        if service_type in (None, ALL_TYPES):
            return self.maintenance
        wanted = require_choice("type", service_type, ServiceType)
        return [r for r in self._maintenance if r.type == wanted]

    @property
    def last_service(self) -> Optional[MaintenanceRecord]:
        """Get the most recent maintenance record of any type."""
        if not self._maintenance:
            return None
        return max(self._maintenance, key=lambda r: (r.date, r.created_at, r.id))

    @property
    def total_cost(self) -> float:
        return sum(r.cost for r in self._maintenance)

    def service_schedule(self) -> Dict[ServiceType, ServiceDue]:
        """Status of every tracked service at the current mileage."""
        return build_schedule(self._maintenance, self.current_mileage)

    # -------------------------------------------------------------------------
    # Issues
    # -------------------------------------------------------------------------

    @property
    def issues(self) -> List[Issue]:
        return list(self._issues)

    def add_issue(self, date, description: str, priority=Priority.MEDIUM) -> Issue:
        """Validate and add a new, open issue."""
        fields = dict(
            date=require_date("date", date),
            description=require_text("description", description),
            priority=require_choice("priority", priority, Priority),
        )
        issue = Issue(id=self._unique_id(self._issue_ids), created_at=self.now(), **fields)
        self._issues.insert(0, issue)
        logger.debug("Added issue %s (%s)", issue.id, issue.priority.value)
        return issue

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        for issue in self._issues:
            if issue.id == issue_id:
                return issue
        return None

    def toggle_issue(self, issue_id: str) -> Optional[Issue]:
        """Resolve an open issue or reopen a resolved one. None if not found."""
        issue = self.get_issue(issue_id)
        if issue is None:
            return None
        issue.toggle(self.now())
        logger.debug("Issue %s resolved=%s", issue_id, issue.resolved)
        return issue

    def edit_issue(self, issue_id: str, date, description: str, priority) -> Optional[Issue]:
        """Replace an issue's date, description and priority. None if not found."""
        issue = self.get_issue(issue_id)
        if issue is None:
            return None
        issue.edit(date, description, priority, self.now())
        logger.debug("Edited issue %s", issue_id)
        return issue

    def delete_issue(self, issue_id: str) -> bool:
        issue = self.get_issue(issue_id)
        if issue is None:
            return False
        self._issues.remove(issue)
        logger.debug("Deleted issue %s", issue_id)
        return True

    def active_issues(self) -> List[Issue]:
        return [i for i in self._issues if not i.resolved]

    def resolved_issues(self) -> List[Issue]:
        return [i for i in self._issues if i.resolved]
