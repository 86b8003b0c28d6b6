from .project import Project, ProjectCreate, ProjectMember, ProjectMemberCreate
from .scene import Scene, SceneCreate, SceneUpdate
from .shot import Shot, ShotCreate, ShotUpdate
from .schedule import ShootingDay, ShootingDayCreate, ScheduleEvent
from .sources import (
    CastMember,
    CastMemberCreate,
    CastMemberUpdate,
    CrewMember,
    CrewMemberCreate,
    CrewMemberUpdate,
    Equipment,
    EquipmentCreate,
    EquipmentUpdate,
    Location,
    LocationCreate,
    LocationUpdate,
)
from .budget import BudgetCategory, BudgetCategoryCreate, BudgetItem, BudgetItemCreate, BudgetItemUpdate
from .sync import (
    CallSheet,
    Conflicts,
    ReconcileResult,
    ReconcileSummary,
    SceneBudgetResult,
    SceneCost,
    SyncJob,
    SyncLogEntry,
)

__all__ = [
    "Project",
    "ProjectCreate",
    "ProjectMember",
    "ProjectMemberCreate",
    "Scene",
    "SceneCreate",
    "SceneUpdate",
    "Shot",
    "ShotCreate",
    "ShotUpdate",
    "ShootingDay",
    "ShootingDayCreate",
    "ScheduleEvent",
    "CastMember",
    "CastMemberCreate",
    "CastMemberUpdate",
    "CrewMember",
    "CrewMemberCreate",
    "CrewMemberUpdate",
    "Equipment",
    "EquipmentCreate",
    "EquipmentUpdate",
    "Location",
    "LocationCreate",
    "LocationUpdate",
    "BudgetCategory",
    "BudgetCategoryCreate",
    "BudgetItem",
    "BudgetItemCreate",
    "BudgetItemUpdate",
    "CallSheet",
    "Conflicts",
    "ReconcileResult",
    "ReconcileSummary",
    "SceneBudgetResult",
    "SceneCost",
    "SyncJob",
    "SyncLogEntry",
]
