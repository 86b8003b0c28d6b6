"""
API tests for projects, shooting days, call sheets, budget items and the
sync log.
"""

from datetime import date

from app import models
from app.models.budget import LinkKind
from app.models.sync_log import SyncStatus
from app.services.sync_log import record

API = "/api/v1"


def test_health(test_client):
    assert test_client.get(f"{API}/health").json() == {"status": "ok"}


class TestProjects:

    def test_creator_becomes_owner(self, test_client, test_db_session):
        response = test_client.post(f"{API}/projects/", json={"name": "Pilot"})

        assert response.status_code == 201
        member = test_db_session.query(models.ProjectMember).filter_by(project_id=response.json()["id"]).one()
        assert member.role == "owner"

    def test_add_member(self, test_client, project):
        response = test_client.post(
            f"{API}/projects/{project.id}/members", json={"user_id": "ana", "role": "dept_head"},
        )

        assert response.status_code == 201
        assert test_client.get(f"{API}/projects/{project.id}", headers={"X-User-Id": "ana"}).status_code == 200


class TestSchedule:

    def test_days_events_and_call_sheet(self, test_client, project, sample_scene, sample_shot, sample_cast):
        response = test_client.post(
            f"{API}/schedule/days",
            json={"project_id": project.id, "date": "2024-08-01", "day_number": 1, "call_time": "07:00"},
        )
        assert response.status_code == 201
        day_id = response.json()["id"]

        actor = sample_cast(actor_name="Jane Doe")
        scene = sample_scene(scene_number="8", shooting_day_ids=[day_id], cast_ids=[actor.id])
        sample_shot(scene, title="Close-up")
        test_client.post(f"{API}/scenes/{scene.id}/sync-schedule")

        days = test_client.get(f"{API}/schedule/days/project/{project.id}").json()
        assert [d["id"] for d in days] == [day_id]

        events = test_client.get(f"{API}/schedule/days/{day_id}/events").json()
        assert [(e["kind"], e["description"], e["scene_number"]) for e in events] == [("shot", "Close-up", "8")]

        sheet = test_client.get(f"{API}/schedule/days/{day_id}/call-sheet").json()
        assert sheet["date"] == "2024-08-01"
        assert sheet["call_time"] == "07:00"
        assert [s["scene_number"] for s in sheet["scenes"]] == ["8"]
        assert [c["actor_name"] for c in sheet["cast"]] == ["Jane Doe"]

    def test_unknown_day(self, test_client):
        assert test_client.get(f"{API}/schedule/days/missing/call-sheet").status_code == 404


class TestBudgetItems:

    def test_link_must_be_complete(self, test_client, project):
        response = test_client.post(
            f"{API}/budget/items",
            json={"project_id": project.id, "description": "Lead", "linked_kind": "cast"},
        )
        assert response.status_code == 400

    def test_link_must_exist_in_project(self, test_client, project):
        response = test_client.post(
            f"{API}/budget/items",
            json={"project_id": project.id, "description": "Lead", "linked_kind": "cast", "linked_id": "nobody"},
        )
        assert response.status_code == 400

    def test_create_linked_item(self, test_client, project, sample_cast):
        actor = sample_cast()

        response = test_client.post(
            f"{API}/budget/items",
            json={
                "project_id": project.id,
                "description": "Jane Doe as Detective",
                "linked_kind": "cast",
                "linked_id": actor.id,
                "unit": "days",
                "quantity": 5,
                "unit_rate": 500,
                "estimated_amount": 2500,
            },
        )

        assert response.status_code == 201
        assert response.json()["linked_kind"] == "cast"
        listed = test_client.get(f"{API}/budget/items/project/{project.id}").json()
        assert [i["id"] for i in listed] == [response.json()["id"]]

    def test_small_rate_edit_updates_source(self, test_client, test_db_session, sample_crew, sample_budget_item):
        crew = sample_crew(rate=400.0)
        item = sample_budget_item(linked_kind=LinkKind.crew, linked_id=crew.id, unit_rate=400.0)

        response = test_client.patch(f"{API}/budget/items/{item.id}", json={"unit_rate": 402})

        assert response.status_code == 200
        test_db_session.refresh(crew)
        assert crew.rate == 402.0

    def test_large_rate_edit_leaves_source(self, test_client, test_db_session, sample_crew, sample_budget_item):
        crew = sample_crew(rate=400.0)
        item = sample_budget_item(linked_kind=LinkKind.crew, linked_id=crew.id, unit_rate=400.0)

        test_client.patch(f"{API}/budget/items/{item.id}", json={"unit_rate": 500})

        test_db_session.refresh(crew)
        assert crew.rate == 400.0


class TestSyncLog:

    def test_lists_failures(self, test_client, test_db_session, project):
        record(test_db_session, "schedule.reconcile", SyncStatus.ok, project_id=project.id)
        record(test_db_session, "schedule.reconcile", SyncStatus.failed, project_id=project.id, error="boom")

        response = test_client.get(f"{API}/sync-log/project/{project.id}", params={"status": "failed"})

        assert response.status_code == 200
        assert [e["error"] for e in response.json()] == ["boom"]

    def test_editors_only(self, test_client, project, sample_member):
        sample_member("crew-member", role="member")

        response = test_client.get(f"{API}/sync-log/project/{project.id}", headers={"X-User-Id": "crew-member"})

        assert response.status_code == 403
