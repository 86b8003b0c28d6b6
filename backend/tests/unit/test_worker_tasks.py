"""
Tests for the RQ bulk schedule sync task.
"""

import pytest
from unittest.mock import MagicMock, patch

from app import models
from app.models.sync_log import SyncStatus
from app.workers.tasks import reconcile_project_task


class TestReconcileProjectTask:

    def test_reconciles_and_logs(self, test_db_session, project, sample_day, sample_scene, sample_shot):
        day = sample_day()
        scene = sample_scene(shooting_day_ids=[day.id])
        sample_shot(scene)
        sample_scene(scene_number="2")
        project_id = project.id

        with patch("app.workers.tasks.SessionLocal", return_value=test_db_session):
            result = reconcile_project_task(project_id)

        assert result == {"synced": 1, "skipped": 1, "errors": []}
        assert test_db_session.query(models.ScheduleEvent).count() == 1
        entry = test_db_session.query(models.SyncLogEntry).one()
        assert entry.operation == "schedule.reconcile_all"
        assert entry.status == SyncStatus.ok

    def test_missing_project_raises_and_closes_session(self):
        db = MagicMock()
        db.get.return_value = None

        with patch("app.workers.tasks.SessionLocal", return_value=db):
            with pytest.raises(Exception):
                reconcile_project_task("missing")

        db.rollback.assert_called_once()
        db.close.assert_called_once()
