from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class ProjectBase(BaseModel):
    name: str
    description: Optional[str] = None


class ProjectCreate(ProjectBase):
    pass


class Project(ProjectBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class ProjectMemberCreate(BaseModel):
    user_id: str
    role: str = Field("member", pattern="^(owner|admin|dept_head|member)$")


class ProjectMember(ProjectMemberCreate):
    id: str
    project_id: str

    class Config:
        from_attributes = True
