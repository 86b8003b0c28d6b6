"""
Tests for the EntityStore adapter.
"""

import pytest
from unittest.mock import patch

from app import models
from app.services.errors import NotFoundError, ValidationError
from app.services.store import EntityStore


class TestEntityStore:

    def test_create_get_update_delete(self, test_db_session, project):
        store = EntityStore(test_db_session)

        location = store.create(models.Location, project_id=project.id, name="Harbor", rental_cost=10.0)
        assert store.get(models.Location, location.id).name == "Harbor"

        store.update(location, name="Dock", rental_cost=None)
        assert store.get(models.Location, location.id).rental_cost is None

        store.delete(location)
        assert store.get(models.Location, location.id) is None

    def test_get_with_empty_id(self, test_db_session):
        assert EntityStore(test_db_session).get(models.Scene, None) is None

    def test_query_and_first(self, test_db_session, project, sample_scene):
        sample_scene(scene_number="1")
        sample_scene(scene_number="2")
        store = EntityStore(test_db_session)

        assert len(store.query(models.Scene, project_id=project.id)) == 2
        assert store.first(models.Scene, scene_number="2").scene_number == "2"
        assert store.first(models.Scene, scene_number="9") is None

    def test_failed_commit_rolls_back(self, test_db_session, project):
        store = EntityStore(test_db_session)

        with patch.object(test_db_session, "commit", side_effect=RuntimeError("disk full")):
            with patch.object(test_db_session, "rollback", wraps=test_db_session.rollback) as rollback:
                with pytest.raises(RuntimeError):
                    store.create(models.Location, project_id=project.id, name="Harbor")

        rollback.assert_called_once()


def test_error_messages():
    assert str(NotFoundError("Scene", "s1")) == "Scene s1 not found"
    err = ValidationError("bad kind", field="kind")
    assert (err.message, err.field) == ("bad kind", "kind")
