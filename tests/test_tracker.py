#!/usr/bin/env python3
"""Tests for the tracker CLI."""
from datetime import date

import pytest

from maintlog import Logbook, ServiceDue, ServiceType, Status
from tracker import (
    format_cost,
    format_miles,
    main,
    make_history_table,
    make_status_table,
    truncate,
)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "maintlog.yaml"


def run(data_file, *args):
    return main(["--data-file", str(data_file), *args])


class TestFormatting:
    """Tests for formatting helpers."""

    def test_format_miles(self):
        assert format_miles(50000) == "50,000"
        assert format_miles(None) == "-"

    def test_format_cost(self):
        assert format_cost(75.5) == "$75.50"
        assert format_cost(None) == "-"

    def test_truncate(self):
        assert truncate(None) == "-"
        assert truncate("") == "-"
        assert truncate("short") == "short"
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."

    def test_status_table_rows(self):
        svc = ServiceDue(service_type=ServiceType.OIL_CHANGE, status=Status.UNKNOWN)
        assert make_status_table([svc]) == [["Oil Change", "Not recorded", "Not calculated", "Unknown"]]

    def test_history_table_rows(self, store):
        record = store.add_maintenance("2024-01-01", "oil-change", 10000, "Castrol", 24.5)
        rows = make_history_table([record])
        assert rows[0][0] == record.id[:8]
        assert rows[0][1:] == ["2024-01-01", "Oil Change", "10,000", "$24.50", "Castrol"]


class TestCommands:
    """End-to-end runs against a temporary data file."""

    def test_info_updates_and_saves(self, data_file, capsys):
        assert run(data_file, "info", "--vin", "118123456", "--mileage", "12900") == 0
        out = capsys.readouterr().out
        assert "Vehicle information saved." in out
        assert "Current mileage: 12,900" in out
        assert Logbook.open(data_file).store.vehicle_info.vin == "118123456"

    def test_info_coerces_bad_mileage_to_zero(self, data_file):
        assert run(data_file, "info", "--mileage", "lots") == 0
        assert Logbook.open(data_file).store.current_mileage == 0

    def test_log_and_status(self, data_file, capsys):
        run(data_file, "info", "--mileage", "12900")
        assert run(data_file, "log", "oil-change", "--mileage", "10000", "--date", "2024-01-01") == 0
        capsys.readouterr()

        assert run(data_file, "status") == 0
        out = capsys.readouterr().out
        assert "Due soon (100 miles)" in out
        assert "Valve Adjustment" in out
        assert "Not recorded" in out
        assert "1 service(s) due: Oil Change" in out

        assert run(data_file, "info") == 0
        assert "Last service: 2024-01-01 Oil Change at 10,000 miles" in capsys.readouterr().out

    def test_log_zero_mileage_rejected(self, data_file, capsys):
        assert run(data_file, "log", "oil-change", "--mileage", "0") == 1
        assert "required" in capsys.readouterr().out
        assert not data_file.exists()

    def test_log_bad_date_rejected(self, data_file, capsys):
        assert run(data_file, "log", "oil-change", "--mileage", "100", "--date", "yesterday") == 1
        assert "Error: date" in capsys.readouterr().out

    def test_log_dry_run(self, data_file, capsys):
        assert run(data_file, "log", "tune-up", "--mileage", "100", "--dry-run") == 0
        assert "dry run" in capsys.readouterr().out
        assert not data_file.exists()

    def test_history_filter(self, data_file, capsys):
        run(data_file, "log", "oil-change", "--mileage", "100", "--cost", "20")
        run(data_file, "log", "engine", "--mileage", "200", "--notes", "Rebuilt carb")
        capsys.readouterr()

        assert run(data_file, "history", "--type", "engine") == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Total cost: $20.00" in out
        assert "Rebuilt carb" in out
        assert "Oil Change" not in out

    def test_delete_requires_yes(self, data_file, capsys):
        run(data_file, "log", "oil-change", "--mileage", "100")
        record_id = Logbook.open(data_file).store.maintenance[0].id
        assert run(data_file, "delete", record_id[:8]) == 1
        assert len(Logbook.open(data_file).store.maintenance) == 1
        assert run(data_file, "delete", record_id[:8], "--yes") == 0
        assert Logbook.open(data_file).store.maintenance == []

    def test_delete_unknown(self, data_file, capsys):
        assert run(data_file, "delete", "nope", "--yes") == 1

    def test_issue_lifecycle(self, data_file, capsys):
        assert run(data_file, "issue-add", "Oil leak", "--priority", "high", "--date", "2024-05-01") == 0
        issue_id = Logbook.open(data_file).store.issues[0].id

        assert run(data_file, "issue-toggle", issue_id) == 0
        assert "Issue resolved." in capsys.readouterr().out
        assert Logbook.open(data_file).store.issues[0].resolved is True

        assert run(data_file, "issue-toggle", issue_id) == 0
        assert "Issue reopened." in capsys.readouterr().out
        issue = Logbook.open(data_file).store.issues[0]
        assert issue.resolved is False
        assert issue.resolved_date is None

        assert run(data_file, "issue-edit", issue_id, "--priority", "critical") == 0
        issue = Logbook.open(data_file).store.issues[0]
        assert issue.priority.value == "critical"
        assert issue.description == "Oil leak"
        assert issue.date == date(2024, 5, 1)

        assert run(data_file, "issue-edit", issue_id, "--description", " ") == 1
        assert Logbook.open(data_file).store.issues[0].description == "Oil leak"

        capsys.readouterr()
        assert run(data_file, "issues") == 0
        out = capsys.readouterr().out
        assert "ACTIVE ISSUES (1):" in out
        assert "Critical" in out

        assert run(data_file, "issue-delete", issue_id, "--yes") == 0
        assert Logbook.open(data_file).store.issues == []

    def test_export_csv_to_file(self, data_file, tmp_path):
        run(data_file, "issue-add", "Oil leak", "--date", "2024-05-01")
        out_file = tmp_path / "issues.csv"
        assert run(data_file, "export", "csv", "--output", str(out_file)) == 0
        assert out_file.read_text().splitlines() == [
            "Date,Description,Priority,Status,Resolved Date",
            '2024-05-01,"Oil leak",medium,Active,',
        ]

    def test_export_unwritable_path_reported(self, data_file, tmp_path, capsys):
        out_file = tmp_path / "nope" / "issues.csv"
        assert run(data_file, "export", "csv", "--output", str(out_file)) == 1
        assert "Error: Could not write" in capsys.readouterr().out
        assert not out_file.exists()

    def test_export_report_to_stdout(self, data_file, capsys):
        run(data_file, "issue-add", "Oil leak", "--date", "2024-05-01")
        capsys.readouterr()
        assert run(data_file, "export", "report") == 0
        out = capsys.readouterr().out
        assert "ISSUES REPORT" in out
        assert "1. 2024-05-01 - PRIORITY: MEDIUM" in out

    def test_export_email(self, data_file, capsys):
        assert run(data_file, "export", "email") == 0
        assert capsys.readouterr().out.startswith("Subject: 1969 Volkswagen Beetle Issues Report")

    def test_save_failure_reported(self, tmp_path, capsys):
        data_file = tmp_path / "missing-dir" / "maintlog.yaml"
        assert run(data_file, "info", "--mileage", "5") == 1
        assert "Could not save" in capsys.readouterr().out
