#!/usr/bin/env python3
"""
Unified CLI for the vehicle maintenance logbook.

Commands:
  info          - Show or update vehicle info and current mileage
  status        - Show which services are due, due soon, or overdue
  history       - View maintenance records
  log           - Add a maintenance record
  delete        - Delete a maintenance record
  issues        - List active and resolved issues
  issue-add     - Record a new issue
  issue-toggle  - Resolve an open issue or reopen a resolved one
  issue-edit    - Change an issue's date, description or priority
  issue-delete  - Delete an issue
  export        - Print the issues report, email text, or CSV
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from maintlog import (
    Issue,
    Logbook,
    LogbookError,
    MaintenanceRecord,
    Priority,
    ServiceDue,
    ServiceType,
)
from maintlog.coerce import parse_cost, parse_mileage
from maintlog.config import Settings, configure_logging
from maintlog.export import csv_filename, email_issues, issues_csv, issues_report

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[int]) -> str:
    """Format mileage for display."""
    return f"{miles:,}" if miles is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_status_table(schedule: List[ServiceDue]) -> List[List[str]]:
    """Convert schedule results to table rows."""
    return [
        [svc.service_type.display_name, svc.last_done_label, svc.next_due_label, svc.summary]
        for svc in schedule
    ]


def make_history_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    return [
        [
            r.id[:8],
            r.date.isoformat(),
            r.type_name,
            format_miles(r.mileage),
            format_cost(r.cost),
            truncate(r.notes),
        ]
        for r in records
    ]


def make_issue_table(issues: List[Issue], resolved: bool = False) -> List[List[str]]:
    """Convert issues to table rows."""
    rows = []
    for issue in issues:
        row = [issue.id[:8], issue.date.isoformat(), issue.priority.label, truncate(issue.description, 50)]
        if resolved:
            row.append(issue.resolved_date.date().isoformat() if issue.resolved_date else "-")
        else:
            row.append(issue.last_modified.date().isoformat() if issue.last_modified else "-")
        rows.append(row)
    return rows


def find_by_prefix(items, prefix: str):
    """Match an id or a unique id prefix (tables show the first 8 chars)."""
    matches = [item for item in items if item.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


# =============================================================================
# Commands
# =============================================================================


def cmd_info(book: Logbook, args) -> int:
    """Show or update vehicle info."""
    updates = {}
    if args.vin is not None:
        updates["vin"] = args.vin
    if args.mileage is not None:
        updates["mileage"] = parse_mileage(args.mileage)
    if args.year is not None:
        updates["year"] = args.year
    if args.make is not None:
        updates["make"] = args.make
    if args.model is not None:
        updates["model"] = args.model

    if updates:
        book.update_vehicle_info(**updates)
        print("Vehicle information saved.")

    info = book.store.vehicle_info
    print(f"Vehicle: {info.name}")
    print(f"VIN/Chassis: {info.vin or 'Not specified'}")
    print(f"Current mileage: {info.mileage:,}")
    last = book.store.last_service
    if last is not None:
        print(f"Last service: {last.date.isoformat()} {last.type_name} at {last.mileage:,} miles")
    if book.store.last_saved:
        print(f"Last saved: {book.store.last_saved.isoformat(timespec='seconds')}")
    return 0


def cmd_status(book: Logbook, args) -> int:
    """Show the service schedule."""
    view = book.view()
    print(f"Vehicle: {view.vehicle_info.name}")
    print(f"Current mileage: {view.vehicle_info.mileage:,}")
    print()
    headers = ["Service", "Last Done", "Next Due", "Status"]
    rows = make_status_table(list(view.schedule.values()))
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    due = [svc for svc in view.schedule.values() if svc.is_due]
    if due:
        print()
        print(f"{len(due)} service(s) due: " + ", ".join(svc.service_type.display_name for svc in due))
    return 0


def cmd_history(book: Logbook, args) -> int:
    """View maintenance records, newest first."""
    view = book.view(args.type)
    records = view.maintenance
    total_cost = book.store.total_cost

    print(f"Vehicle: {view.vehicle_info.name}")
    print(f"Total services: {len(book.store.maintenance)}")
    if args.type != "all":
        print(f"Showing: {len(records)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: ${total_cost:,.2f}")
    print()

    if not records:
        print("No maintenance records found.")
        return 0

    headers = ["ID", "Date", "Type", "Mileage", "Cost", "Notes"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    return 0


def cmd_log(book: Logbook, args) -> int:
    """Add a maintenance record."""
    mileage = parse_mileage(args.mileage)
    if not mileage:
        print("Error: Please fill in all required fields (mileage)")
        return 1
    service_date = args.date or date.today().isoformat()

    print(f"Adding maintenance record to {book.storage.path}:")
    print(f"  Type:    {args.type}")
    print(f"  Date:    {service_date}")
    print(f"  Mileage: {mileage:,}")
    if args.notes:
        print(f"  Notes:   {args.notes}")
    if args.cost:
        print(f"  Cost:    {format_cost(parse_cost(args.cost))}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    record = book.add_maintenance(service_date, args.type, mileage, args.notes or "", parse_cost(args.cost))
    print(f"Record saved ({record.id[:8]}).")
    return 0


def cmd_delete(book: Logbook, args) -> int:
    """Delete a maintenance record."""
    record = find_by_prefix(book.store.maintenance, args.id)
    if record is None:
        print(f"Error: No maintenance record '{args.id}'")
        return 1
    if not args.yes:
        print(f"Would delete {record.date.isoformat()} {record.type_name}; pass --yes to confirm")
        return 1
    book.delete_maintenance(record.id)
    print("Record deleted.")
    return 0


def cmd_issues(book: Logbook, args) -> int:
    """List active and resolved issues."""
    view = book.view()
    print(f"ACTIVE ISSUES ({len(view.active_issues)}):")
    if view.active_issues:
        headers = ["ID", "Date", "Priority", "Description", "Updated"]
        print(tabulate(make_issue_table(view.active_issues), headers=headers, tablefmt="simple"))
    else:
        print("  No active issues")
    print()
    print(f"RESOLVED ISSUES ({len(view.resolved_issues)}):")
    if view.resolved_issues:
        headers = ["ID", "Date", "Priority", "Description", "Resolved"]
        print(tabulate(make_issue_table(view.resolved_issues, resolved=True), headers=headers, tablefmt="simple"))
    else:
        print("  No resolved issues")
    return 0


def cmd_issue_add(book: Logbook, args) -> int:
    issue = book.add_issue(args.date or date.today().isoformat(), args.description, args.priority)
    print(f"Issue added ({issue.id[:8]}).")
    return 0


def cmd_issue_toggle(book: Logbook, args) -> int:
    issue = find_by_prefix(book.store.issues, args.id)
    if issue is None:
        print(f"Error: No issue '{args.id}'")
        return 1
    issue = book.toggle_issue(issue.id)
    print("Issue resolved." if issue.resolved else "Issue reopened.")
    return 0


def cmd_issue_edit(book: Logbook, args) -> int:
    issue = find_by_prefix(book.store.issues, args.id)
    if issue is None:
        print(f"Error: No issue '{args.id}'")
        return 1
    book.edit_issue(
        issue.id,
        args.date if args.date is not None else issue.date,
        args.description if args.description is not None else issue.description,
        args.priority or issue.priority,
    )
    print("Issue updated.")
    return 0


def cmd_issue_delete(book: Logbook, args) -> int:
    issue = find_by_prefix(book.store.issues, args.id)
    if issue is None:
        print(f"Error: No issue '{args.id}'")
        return 1
    if not args.yes:
        print(f"Would delete issue '{truncate(issue.description)}'; pass --yes to confirm")
        return 1
    book.delete_issue(issue.id)
    print("Issue deleted.")
    return 0


def cmd_export(book: Logbook, args) -> int:
    now = datetime.now()
    if args.format == "report":
        text = issues_report(book.store, now)
    elif args.format == "email":
        subject, body = email_issues(book.store, now)
        text = f"Subject: {subject}\n\n{body}"
    else:
        text = issues_csv(book.store.issues)

    if args.output is None and args.format == "csv":
        args.output = Path(csv_filename(now.date()))
    if args.output is None:
        print(text, end="")
    else:
        try:
            args.output.write_text(text)
        except OSError as e:
            print(f"Error: Could not write {args.output}: {e}")
            return 1
        print(f"Wrote {args.output}")
    return 0


COMMANDS = {
    "info": cmd_info,
    "status": cmd_status,
    "history": cmd_history,
    "log": cmd_log,
    "delete": cmd_delete,
    "issues": cmd_issues,
    "issue-add": cmd_issue_add,
    "issue-toggle": cmd_issue_toggle,
    "issue-edit": cmd_issue_edit,
    "issue-delete": cmd_issue_delete,
    "export": cmd_export,
}


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    type_choices = [t.value for t in ServiceType]
    priority_choices = [p.value for p in Priority]

    parser = argparse.ArgumentParser(
        description="Vehicle maintenance logbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s info --mileage 12900 --vin 119123456
  %(prog)s log oil-change --mileage 10000 --date 2024-01-01 --cost 24.50
  %(prog)s status
  %(prog)s history --type oil-change
  %(prog)s issue-add "Oil leak at pushrod tubes" --priority high
  %(prog)s export csv
""",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        help="Path to the YAML data file (default: $MAINTLOG_DATA_FILE or maintlog.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Show or update vehicle info")
    info_parser.add_argument("--vin", type=str, help="VIN or chassis number")
    info_parser.add_argument("--mileage", type=str, help="Current odometer reading")
    info_parser.add_argument("--year", type=int, help="Model year")
    info_parser.add_argument("--make", type=str, help="Manufacturer")
    info_parser.add_argument("--model", type=str, help="Model name")

    subparsers.add_parser("status", help="Show which services are due")

    history_parser = subparsers.add_parser("history", help="View maintenance records")
    history_parser.add_argument(
        "--type",
        choices=["all"] + type_choices,
        default="all",
        help="Only show one service type (default: all)",
    )

    log_parser = subparsers.add_parser("log", help="Add a maintenance record")
    log_parser.add_argument("type", choices=type_choices, help="Service type")
    log_parser.add_argument("--mileage", type=str, required=True, help="Odometer reading at service")
    log_parser.add_argument("--date", type=str, help="Service date in YYYY-MM-DD format (default: today)")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument("--cost", type=str, help="Cost of service")
    log_parser.add_argument("--dry-run", action="store_true", help="Show what would be added without saving")

    delete_parser = subparsers.add_parser("delete", help="Delete a maintenance record")
    delete_parser.add_argument("id", type=str, help="Record id (or unique prefix)")
    delete_parser.add_argument("--yes", action="store_true", help="Confirm deletion")

    subparsers.add_parser("issues", help="List active and resolved issues")

    issue_add_parser = subparsers.add_parser("issue-add", help="Record a new issue")
    issue_add_parser.add_argument("description", type=str, help="What was noticed")
    issue_add_parser.add_argument("--date", type=str, help="Date noticed (default: today)")
    issue_add_parser.add_argument("--priority", choices=priority_choices, default="medium", help="Priority (default: medium)")

    toggle_parser = subparsers.add_parser("issue-toggle", help="Resolve or reopen an issue")
    toggle_parser.add_argument("id", type=str, help="Issue id (or unique prefix)")

    edit_parser = subparsers.add_parser("issue-edit", help="Edit an issue")
    edit_parser.add_argument("id", type=str, help="Issue id (or unique prefix)")
    edit_parser.add_argument("--date", type=str, help="New date noticed")
    edit_parser.add_argument("--description", type=str, help="New description")
    edit_parser.add_argument("--priority", choices=priority_choices, help="New priority")

    issue_delete_parser = subparsers.add_parser("issue-delete", help="Delete an issue")
    issue_delete_parser.add_argument("id", type=str, help="Issue id (or unique prefix)")
    issue_delete_parser.add_argument("--yes", action="store_true", help="Confirm deletion")

    export_parser = subparsers.add_parser("export", help="Export issues")
    export_parser.add_argument("format", choices=["report", "email", "csv"], help="Export format")
    export_parser.add_argument("--output", type=Path, help="Write to a file instead of stdout")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    book = Logbook.open(args.data_file or settings.data_file)
    try:
        return COMMANDS[args.command](book, args)
    except LogbookError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
