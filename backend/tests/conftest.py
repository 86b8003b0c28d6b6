"""
Pytest configuration and fixtures for backend tests.

Provides shared fixtures for:
- Test database sessions (in-memory SQLite)
- Sample data factories for projects, schedule and budget records
- FastAPI test client with the database dependency overridden
"""

import os
import pytest
from datetime import date
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RECONCILE_LOCK_ENABLED"] = "false"

from app import models
from app.db.base import Base

OWNER_ID = "user-owner"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    def _fk_pragma_on_connect(dbapi_con, con_record):
        dbapi_con.execute("pragma foreign_keys=ON")

    event.listen(engine, "connect", _fk_pragma_on_connect)

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def _save(session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


# ============================================================================
# Sample Data Factories
# ============================================================================

@pytest.fixture
def sample_project(test_db_session):
    """Factory for projects; the owner membership is created alongside."""
    def _create(name="Night Shoot", owner_id=OWNER_ID):
        project = _save(test_db_session, models.Project(name=name))
        _save(test_db_session, models.ProjectMember(project_id=project.id, user_id=owner_id, role="owner"))
        return project
    return _create


@pytest.fixture
def project(sample_project):
    return sample_project()


@pytest.fixture
def sample_member(test_db_session, project):
    def _create(user_id, role="member", project_id=None):
        return _save(
            test_db_session,
            models.ProjectMember(project_id=project_id or project.id, user_id=user_id, role=role),
        )
    return _create


@pytest.fixture
def sample_day(test_db_session, project):
    def _create(day=None, day_number=None, project_id=None, **kwargs):
        return _save(
            test_db_session,
            models.ShootingDay(
                project_id=project_id or project.id,
                date=day or date(2024, 3, 1),
                day_number=day_number,
                **kwargs,
            ),
        )
    return _create


@pytest.fixture
def sample_scene(test_db_session, project):
    def _create(scene_number="1", project_id=None, **kwargs):
        return _save(
            test_db_session,
            models.Scene(project_id=project_id or project.id, scene_number=scene_number, **kwargs),
        )
    return _create


@pytest.fixture
def sample_shot(test_db_session):
    def _create(scene, shot_number="1A", **kwargs):
        return _save(
            test_db_session,
            models.Shot(project_id=scene.project_id, scene_id=scene.id, shot_number=shot_number, **kwargs),
        )
    return _create


@pytest.fixture
def sample_event(test_db_session, project):
    """Factory for raw schedule events, e.g. legacy or duplicate rows."""
    def _create(shooting_day_id, kind=models.ScheduleEventKind.shot, **kwargs):
        return _save(
            test_db_session,
            models.ScheduleEvent(
                project_id=kwargs.pop("project_id", project.id),
                shooting_day_id=shooting_day_id,
                kind=kind,
                **kwargs,
            ),
        )
    return _create


@pytest.fixture
def sample_cast(test_db_session, project):
    def _create(actor_name="Jane Doe", character_name="Detective", rate=500.0, **kwargs):
        return _save(
            test_db_session,
            models.CastMember(
                project_id=kwargs.pop("project_id", project.id),
                actor_name=actor_name,
                character_name=character_name,
                rate=rate,
                **kwargs,
            ),
        )
    return _create


@pytest.fixture
def sample_crew(test_db_session, project):
    def _create(name="Sam Lee", role="Gaffer", rate=400.0, rate_type="daily", **kwargs):
        return _save(
            test_db_session,
            models.CrewMember(
                project_id=kwargs.pop("project_id", project.id),
                name=name,
                role=role,
                rate=rate,
                rate_type=rate_type,
                **kwargs,
            ),
        )
    return _create


@pytest.fixture
def sample_equipment(test_db_session, project):
    def _create(name="ARRI Alexa", daily_rate=800.0, weekly_rate=3200.0, **kwargs):
        return _save(
            test_db_session,
            models.Equipment(
                project_id=kwargs.pop("project_id", project.id),
                name=name,
                daily_rate=daily_rate,
                weekly_rate=weekly_rate,
                **kwargs,
            ),
        )
    return _create


@pytest.fixture
def sample_location(test_db_session, project):
    def _create(name="Warehouse", rental_cost=1500.0, **kwargs):
        return _save(
            test_db_session,
            models.Location(
                project_id=kwargs.pop("project_id", project.id),
                name=name,
                rental_cost=rental_cost,
                **kwargs,
            ),
        )
    return _create


@pytest.fixture
def sample_budget_item(test_db_session, project):
    def _create(description="Line item", linked_kind=None, linked_id=None, **kwargs):
        kwargs.setdefault("estimated_amount", 0)
        kwargs.setdefault("actual_amount", 0)
        return _save(
            test_db_session,
            models.BudgetItem(
                project_id=kwargs.pop("project_id", project.id),
                description=description,
                linked_kind=linked_kind,
                linked_id=linked_id,
                **kwargs,
            ),
        )
    return _create


# ============================================================================
# FastAPI Test Client Fixture
# ============================================================================

@pytest.fixture
def test_client(test_db_session):
    """Create a test client for FastAPI application."""
    from fastapi.testclient import TestClient
    from app.api.dependencies import get_db
    from app.main import app

    def get_test_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = get_test_db

    with TestClient(app) as client:
        client.headers.update({"X-User-Id": OWNER_ID})
        yield client

    app.dependency_overrides.clear()
