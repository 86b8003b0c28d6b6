"""
Tests for the best-effort sync runner and the drift log it writes.
"""

import logging
import pytest

from app import models
from app.models.sync_log import SyncStatus
from app.services.budget.budget_sync import SyncReport
from app.services.sync_log import list_entries, record, run_sync


def _entries(session):
    return session.query(models.SyncLogEntry).all()


class TestRunSync:

    def test_success_is_recorded(self, test_db_session, project):
        result = run_sync(
            test_db_session, "budget.sync_on_update", lambda x: x * 2, 21,
            project_id=project.id, entity_kind="cast", entity_id="c1",
        )

        assert result == 42
        (entry,) = _entries(test_db_session)
        assert entry.status == SyncStatus.ok
        assert entry.operation == "budget.sync_on_update"
        assert (entry.project_id, entry.entity_kind, entry.entity_id) == (project.id, "cast", "c1")
        assert entry.error is None

    def test_failure_is_swallowed_logged_and_recorded(self, test_db_session, project, caplog):
        def explode():
            raise RuntimeError("store unavailable")

        with caplog.at_level(logging.WARNING, logger="app.services.sync_log"):
            result = run_sync(
                test_db_session, "schedule.reconcile", explode,
                project_id=project.id, entity_kind="scene", entity_id="s1",
            )

        assert result is None
        assert "schedule.reconcile failed for scene s1" in caplog.text
        (entry,) = _entries(test_db_session)
        assert entry.status == SyncStatus.failed
        assert entry.error == "store unavailable"

    def test_partial_report_counts_as_failed(self, test_db_session, project):
        report = SyncReport(matched=3, updated=2, failed=["item-9"])

        result = run_sync(
            test_db_session, "budget.sync_on_update", lambda: report,
            project_id=project.id, entity_kind="crew", entity_id="w1",
        )

        assert result is report
        (entry,) = _entries(test_db_session)
        assert entry.status == SyncStatus.failed
        assert "item-9" in entry.error

    def test_keyword_arguments_reach_the_pass(self, test_db_session):
        seen = {}

        def capture(a, b=None):
            seen.update(a=a, b=b)

        run_sync(test_db_session, "op", capture, 1, b=2, entity_id="e1")

        assert seen == {"a": 1, "b": 2}


class TestListEntries:

    def test_filters_by_status_and_project(self, test_db_session, project, sample_project):
        other = sample_project(name="Other")
        record(test_db_session, "op", SyncStatus.ok, project_id=project.id)
        record(test_db_session, "op", SyncStatus.failed, project_id=project.id, error="x")
        record(test_db_session, "op", SyncStatus.failed, project_id=other.id, error="y")

        failed = list_entries(test_db_session, project.id, status=SyncStatus.failed)

        assert [e.error for e in failed] == ["x"]
        assert len(list_entries(test_db_session, project.id)) == 2

    def test_limit(self, test_db_session, project):
        for _ in range(5):
            record(test_db_session, "op", SyncStatus.ok, project_id=project.id)

        assert len(list_entries(test_db_session, project.id, limit=3)) == 3
