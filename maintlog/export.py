"""Read-only exports of the issue list: printable report, email, CSV."""

from datetime import date, datetime
from typing import Iterable, Tuple
from urllib.parse import quote

from .issue import Issue
from .store import RecordStore

CSV_HEADER = "Date,Description,Priority,Status,Resolved Date"
RULE = "-" * 80


def _vehicle_lines(store: RecordStore, generated_at: datetime):
    info = store.vehicle_info
    mileage = f"{info.mileage:,}" if info.mileage else "Not specified"
    return [
        f"{info.name.upper()} ISSUES REPORT",
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M')}",
        f"VIN/Chassis: {info.vin or 'Not specified'}",
        f"Current Mileage: {mileage} miles",
    ]


def issues_report(store: RecordStore, generated_at: datetime) -> str:
    """Plain-text report of active and resolved issues, for printing."""
    active = store.active_issues()
    resolved = store.resolved_issues()

    lines = _vehicle_lines(store, generated_at)
    lines += ["", f"ACTIVE ISSUES ({len(active)})", RULE]
    if not active:
        lines.append("No active issues.")
    for n, issue in enumerate(active, 1):
        lines.append(f"{n}. {issue.date.isoformat()} - PRIORITY: {issue.priority.value.upper()}")
        lines.append(f"   {issue.description}")

    lines += ["", f"RESOLVED ISSUES ({len(resolved)})", RULE]
    if not resolved:
        lines.append("No resolved issues.")
    for n, issue in enumerate(resolved, 1):
        when = issue.resolved_date.date().isoformat() if issue.resolved_date else "Unknown"
        lines.append(f"{n}. {issue.date.isoformat()} - RESOLVED: {when}")
        lines.append(f"   {issue.description}")

    return "\n".join(lines) + "\n"


def email_issues(store: RecordStore, generated_at: datetime) -> Tuple[str, str]:
    """Subject and body of an email listing the active issues only."""
    active = store.active_issues()
    subject = f"{store.vehicle_info.name} Issues Report"

    lines = _vehicle_lines(store, generated_at)
    lines += ["", f"ACTIVE ISSUES ({len(active)}):", ""]
    if not active:
        lines.append("No active issues.")
    for n, issue in enumerate(active, 1):
        lines.append(f"{n}. {issue.date.isoformat()} - PRIORITY: {issue.priority.value.upper()}")
        lines.append(f"   {issue.description}")
        lines.append("")

    return subject, "\n".join(lines).rstrip("\n") + "\n"


def mailto_link(subject: str, body: str) -> str:
    return f"mailto:?subject={quote(subject)}&body={quote(body)}"


def _csv_quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def issues_csv(issues: Iterable[Issue]) -> str:
    """One row per issue under a fixed header. Description is always quoted."""
    rows = [CSV_HEADER]
    for issue in issues:
        resolved_date = issue.resolved_date.date().isoformat() if issue.resolved_date else ""
        rows.append(
            ",".join(
                [
                    issue.date.isoformat(),
                    _csv_quote(issue.description),
                    issue.priority.value,
                    issue.status_label,
                    resolved_date,
                ]
            )
        )
    return "\n".join(rows) + "\n"


def csv_filename(today: date) -> str:
    return f"vehicle_issues_{today.isoformat()}.csv"
