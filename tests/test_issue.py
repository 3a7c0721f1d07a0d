#!/usr/bin/env python3
"""Tests for Issue lifecycle."""
from datetime import date, datetime, timezone

import pytest

from maintlog import Issue, Priority, ValidationError

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
LATER = datetime(2024, 6, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def issue():
    return Issue("i1", date(2024, 5, 30), "Generator light flickers", Priority.HIGH, created_at=NOW)


class TestIssueToggle:
    """Tests for resolve/reopen."""

    def test_new_issue_is_open(self, issue):
        assert issue.resolved is False
        assert issue.resolved_date is None
        assert issue.last_modified is None
        assert issue.status_label == "Active"

    def test_resolve_stamps_date(self, issue):
        assert issue.toggle(NOW) is True
        assert issue.resolved_date == NOW
        assert issue.status_label == "Resolved"

    def test_reopen_clears_date(self, issue):
        issue.toggle(NOW)
        assert issue.toggle(LATER) is False
        assert issue.resolved_date is None

    def test_re_resolving_sets_new_date(self, issue):
        issue.toggle(NOW)
        issue.toggle(NOW)
        issue.toggle(LATER)
        assert issue.resolved is True
        assert issue.resolved_date == LATER


class TestIssueEdit:
    """Tests for Issue.edit."""

    def test_updates_fields_and_stamps_last_modified(self, issue):
        issue.edit("2024-05-31", "  Generator light stays on  ", "critical", LATER)
        assert issue.date == date(2024, 5, 31)
        assert issue.description == "Generator light stays on"
        assert issue.priority == Priority.CRITICAL
        assert issue.last_modified == LATER

    def test_edit_keeps_resolved_state(self, issue):
        issue.toggle(NOW)
        issue.edit(issue.date, "Fixed by new regulator", Priority.LOW, LATER)
        assert issue.resolved is True
        assert issue.resolved_date == NOW

    def test_empty_description_rejected(self, issue):
        with pytest.raises(ValidationError) as exc:
            issue.edit("2024-05-31", "   ", "low", LATER)
        assert exc.value.field == "description"
        assert issue.description == "Generator light flickers"
        assert issue.date == date(2024, 5, 30)
        assert issue.priority == Priority.HIGH
        assert issue.last_modified is None

    def test_empty_date_rejected(self, issue):
        with pytest.raises(ValidationError):
            issue.edit("", "Something", "low", LATER)
        assert issue.description == "Generator light flickers"

    def test_bad_priority_rejected(self, issue):
        with pytest.raises(ValidationError):
            issue.edit("2024-05-31", "Something", "urgent", LATER)
        assert issue.priority == Priority.HIGH


class TestPriority:
    def test_parse(self):
        assert Priority.parse(" High ") == Priority.HIGH

    def test_label(self):
        assert Priority.CRITICAL.label == "Critical"
