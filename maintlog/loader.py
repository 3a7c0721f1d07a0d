"""YAML loading and saving of the logbook data file."""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dateutil.parser import isoparse
from jsonschema import ValidationError as SchemaError
from jsonschema import validate

from .errors import PersistenceError
from .issue import Issue, Priority
from .maintenance_record import MaintenanceRecord
from .service_type import ServiceType
from .store import StoreSnapshot
from .vehicle_info import VehicleInfo

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"

# Stand-in for timestamps missing from older files
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

_TOP_LEVEL_KEYS = {"vehicleInfo", "maintenance", "issues", "lastSaved"}
_VEHICLE_KEYS = {"year", "make", "model", "vin", "mileage"}


def load_schema() -> dict:
    """Load the JSON schema describing the data file."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    stamp = isoparse(value)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _vehicle_from_dict(dct: Dict[str, Any]) -> VehicleInfo:
    """Loaded fields win; anything missing keeps the default."""
    defaults = VehicleInfo()
    return VehicleInfo(
        year=dct.get("year", defaults.year),
        make=dct.get("make", defaults.make),
        model=dct.get("model", defaults.model),
        vin=dct.get("vin") or defaults.vin,
        mileage=dct.get("mileage", defaults.mileage),
    )


def _parse_object(dct: Dict[str, Any]) -> Any:
    """Parse dictionary into appropriate object type."""
    # Issue
    if "id" in dct and "priority" in dct:
        resolved = bool(dct.get("resolved"))
        resolved_date = _parse_timestamp(dct.get("resolvedDate"))
        if resolved and resolved_date is None:
            raise ValueError(f"Issue {dct['id']} is resolved but has no resolvedDate")
        return Issue(
            id=dct["id"],
            date=date.fromisoformat(dct["date"]),
            description=dct["description"],
            priority=Priority.parse(dct["priority"]),
            created_at=_parse_timestamp(dct.get("createdAt")) or _EPOCH,
            resolved=resolved,
            resolved_date=resolved_date if resolved else None,
            last_modified=_parse_timestamp(dct.get("lastModified")),
        )
    # Maintenance record
    elif "id" in dct and "type" in dct:
        return MaintenanceRecord(
            id=dct["id"],
            date=date.fromisoformat(dct["date"]),
            type=ServiceType.parse(dct["type"]),
            mileage=dct["mileage"],
            created_at=_parse_timestamp(dct.get("createdAt")) or _EPOCH,
            notes=dct.get("notes") or "",
            cost=float(dct.get("cost") or 0),
        )
    # Top-level snapshot
    elif dct and set(dct) <= _TOP_LEVEL_KEYS:
        vehicle = dct.get("vehicleInfo")
        if not isinstance(vehicle, VehicleInfo):
            vehicle = _vehicle_from_dict(vehicle or {})
        return StoreSnapshot(
            vehicle_info=vehicle,
            maintenance=tuple(dct.get("maintenance") or ()),
            issues=tuple(dct.get("issues") or ()),
            last_saved=_parse_timestamp(dct.get("lastSaved")),
        )
    # Vehicle info (inside 'vehicleInfo' key)
    elif dct and set(dct) <= _VEHICLE_KEYS:
        return _vehicle_from_dict(dct)
    else:
        return dct


def to_jsonable(data: Any) -> Any:
    """Plain JSON types only; YAML dates and timestamps become ISO strings."""
    return json.loads(json.dumps(data, default=str))


def _check_unique_ids(kind: str, items) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate {kind} id: {item.id}")
        seen.add(item.id)


def parse_snapshot(data: Any) -> StoreSnapshot:
    """Convert raw (already YAML-decoded) data into a StoreSnapshot."""
    if not data:
        return StoreSnapshot()
    json_data = json.dumps(data, default=str)
    parsed = json.loads(json_data, object_hook=_parse_object)
    if not isinstance(parsed, StoreSnapshot):
        raise ValueError("Data file has no recognizable logbook content")
    _check_unique_ids("maintenance", parsed.maintenance)
    _check_unique_ids("issue", parsed.issues)
    return parsed


def load_snapshot(filename: Union[str, Path]) -> StoreSnapshot:
    """
    Load a snapshot from a YAML data file.

    Raises OSError, yaml.YAMLError, jsonschema.ValidationError or ValueError
    on unreadable or malformed files.
    """
    with open(filename, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    if data:
        validate(instance=to_jsonable(data), schema=load_schema())
    return parse_snapshot(data)


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "date": record.date.isoformat(),
        "type": record.type.value,
        "mileage": record.mileage,
        "notes": record.notes,
        "cost": record.cost,
        "createdAt": _format_timestamp(record.created_at),
    }


def _issue_to_dict(issue: Issue) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": issue.id,
        "date": issue.date.isoformat(),
        "description": issue.description,
        "priority": issue.priority.value,
        "resolved": issue.resolved,
        "resolvedDate": _format_timestamp(issue.resolved_date),
    }
    # Only present once the issue has been edited
    if issue.last_modified is not None:
        d["lastModified"] = _format_timestamp(issue.last_modified)
    d["createdAt"] = _format_timestamp(issue.created_at)
    return d


def snapshot_to_dict(snapshot: StoreSnapshot) -> Dict[str, Any]:
    """Serialize a snapshot to the data file layout (camelCase keys)."""
    info = snapshot.vehicle_info
    return {
        "vehicleInfo": {
            "year": info.year,
            "make": info.make,
            "model": info.model,
            "vin": info.vin,
            "mileage": info.mileage,
        },
        "maintenance": [_record_to_dict(r) for r in snapshot.maintenance],
        "issues": [_issue_to_dict(i) for i in snapshot.issues],
        "lastSaved": _format_timestamp(snapshot.last_saved),
    }


def save_snapshot(filename: Union[str, Path], snapshot: StoreSnapshot) -> None:
    """Write the whole snapshot to a YAML data file."""
    with open(filename, "w") as fp:
        yaml.dump(
            snapshot_to_dict(snapshot),
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


class YamlStorage:
    """Persistence for a logbook backed by one YAML file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[StoreSnapshot]:
        """The stored snapshot, or None when the file is missing or unusable."""
        if not self.path.exists():
            logger.info("No data file at %s; starting empty", self.path)
            return None
        try:
            return load_snapshot(self.path)
        except (OSError, yaml.YAMLError, SchemaError, ValueError, KeyError) as e:
            logger.warning("Could not load %s (%s); starting empty", self.path, e)
            return None

    def save(self, snapshot: StoreSnapshot) -> None:
        """Write the snapshot, raising PersistenceError on failure."""
        try:
            save_snapshot(self.path, snapshot)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f"Could not save {self.path}: {e}") from e
        logger.debug("Saved %s", self.path)
