from app.db.base import Base
from .project import Project, ProjectMember
from .scene import Scene
from .shot import Shot
from .schedule import ShootingDay, ShootingDayStatus, ScheduleEvent, ScheduleEventKind
from .sources import CastMember, CrewMember, Equipment, Location
from .budget import BudgetCategory, BudgetItem, LinkKind
from .sync_log import SyncLogEntry, SyncStatus

__all__ = [
    "Base",
    "Project",
    "ProjectMember",
    "Scene",
    "Shot",
    "ShootingDay",
    "ShootingDayStatus",
    "ScheduleEvent",
    "ScheduleEventKind",
    "CastMember",
    "CrewMember",
    "Equipment",
    "Location",
    "BudgetCategory",
    "BudgetItem",
    "LinkKind",
    "SyncLogEntry",
    "SyncStatus",
]
