"""
API tests for shot endpoints: inheritance from the scene, schedule sync on
day changes and scene status roll-up.
"""

from datetime import date

from app import models

API = "/api/v1"


class TestShotEndpoints:

    def test_create_inherits_scene_assignments(self, test_client, test_db_session, sample_day, sample_scene, sample_location):
        day = sample_day()
        location = sample_location()
        scene = sample_scene(shooting_day_ids=[day.id], crew_ids=["crew-1"], location_id=location.id)

        response = test_client.post(
            f"{API}/shots/",
            json={"scene_id": scene.id, "shot_number": "1A", "cast_ids": ["cast-7"]},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["project_id"] == scene.project_id
        assert body["shooting_day_ids"] == [day.id]
        assert body["crew_ids"] == ["crew-1"]
        assert body["cast_ids"] == ["cast-7"]
        assert body["location_ids"] == [location.id]

        event = test_db_session.query(models.ScheduleEvent).one()
        assert (event.shot_id, event.shooting_day_id) == (body["id"], day.id)
        assert event.location_id == location.id

    def test_create_without_days_does_not_sync(self, test_client, test_db_session, sample_scene):
        scene = sample_scene()

        response = test_client.post(f"{API}/shots/", json={"scene_id": scene.id, "shot_number": "1A"})

        assert response.status_code == 201
        assert test_db_session.query(models.SyncLogEntry).count() == 0

    def test_day_override_moves_only_that_shot(self, test_client, test_db_session, sample_day, sample_scene, sample_shot):
        scene_day = sample_day(day=date(2024, 4, 1))
        pickup_day = sample_day(day=date(2024, 4, 9))
        scene = sample_scene(shooting_day_ids=[scene_day.id])
        stays = sample_shot(scene, shot_number="1A")
        moves = sample_shot(scene, shot_number="1B")

        response = test_client.patch(f"{API}/shots/{moves.id}", json={"shooting_day_ids": [pickup_day.id]})

        assert response.status_code == 200
        events = test_db_session.query(models.ScheduleEvent).all()
        assert sorted((e.shot_id, e.shooting_day_id) for e in events) == sorted([
            (stays.id, scene_day.id),
            (moves.id, pickup_day.id),
        ])

    def test_shot_days_schedule_under_unscheduled_scene(self, test_client, test_db_session, sample_day, sample_scene, sample_shot):
        pickup_day = sample_day(day=date(2024, 4, 9))
        scene = sample_scene()
        shot = sample_shot(scene, shot_number="1A")

        response = test_client.patch(f"{API}/shots/{shot.id}", json={"shooting_day_ids": [pickup_day.id]})

        assert response.status_code == 200
        events = test_db_session.query(models.ScheduleEvent).all()
        assert [(e.shot_id, e.shooting_day_id) for e in events] == [(shot.id, pickup_day.id)]

        created = test_client.post(
            f"{API}/shots/",
            json={"scene_id": scene.id, "shot_number": "1B", "shooting_day_ids": [pickup_day.id]},
        )

        assert created.status_code == 201
        events = test_db_session.query(models.ScheduleEvent).all()
        assert sorted((e.shot_id, e.shooting_day_id) for e in events) == sorted([
            (shot.id, pickup_day.id),
            (created.json()["id"], pickup_day.id),
        ])

    def test_status_change_rolls_up_to_scene(self, test_client, test_db_session, sample_scene, sample_shot):
        scene = sample_scene()
        first = sample_shot(scene, shot_number="1A")
        second = sample_shot(scene, shot_number="1B")

        test_client.patch(f"{API}/shots/{first.id}", json={"status": "completed"})
        test_db_session.refresh(scene)
        assert scene.status == "in-progress"

        test_client.patch(f"{API}/shots/{second.id}", json={"status": "completed"})
        test_db_session.refresh(scene)
        assert scene.status == "completed"

    def test_invalid_status(self, test_client, sample_scene, sample_shot):
        shot = sample_shot(sample_scene())

        assert test_client.patch(f"{API}/shots/{shot.id}", json={"status": "wrapped"}).status_code == 422

    def test_list_for_scene(self, test_client, sample_scene, sample_shot):
        scene = sample_scene()
        sample_shot(scene, shot_number="1A")
        sample_shot(sample_scene(scene_number="2"), shot_number="2A")

        response = test_client.get(f"{API}/shots/scene/{scene.id}")

        assert [s["shot_number"] for s in response.json()] == ["1A"]
