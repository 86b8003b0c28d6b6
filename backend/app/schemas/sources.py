from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class CastMemberBase(BaseModel):
    actor_name: str
    character_name: Optional[str] = None
    rate: Optional[float] = None
    agent: Optional[str] = None


class CastMemberCreate(CastMemberBase):
    project_id: str


class CastMemberUpdate(BaseModel):
    actor_name: Optional[str] = None
    character_name: Optional[str] = None
    rate: Optional[float] = None
    agent: Optional[str] = None


class CastMember(CastMemberBase):
    id: str
    project_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class CrewMemberBase(BaseModel):
    name: str
    role: Optional[str] = None
    department: Optional[str] = None
    rate: Optional[float] = None
    rate_type: str = "daily"


class CrewMemberCreate(CrewMemberBase):
    project_id: str


class CrewMemberUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    rate: Optional[float] = None
    rate_type: Optional[str] = None


class CrewMember(CrewMemberBase):
    id: str
    project_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class EquipmentBase(BaseModel):
    name: str
    category: Optional[str] = None
    daily_rate: Optional[float] = None
    weekly_rate: Optional[float] = None
    rental_vendor: Optional[str] = None


class EquipmentCreate(EquipmentBase):
    project_id: str


class EquipmentUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    daily_rate: Optional[float] = None
    weekly_rate: Optional[float] = None
    rental_vendor: Optional[str] = None


class Equipment(EquipmentBase):
    id: str
    project_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class LocationBase(BaseModel):
    name: str
    address: Optional[str] = None
    rental_cost: Optional[float] = None


class LocationCreate(LocationBase):
    project_id: str


class LocationUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    rental_cost: Optional[float] = None


class Location(LocationBase):
    id: str
    project_id: str
    created_at: datetime

    class Config:
        from_attributes = True
