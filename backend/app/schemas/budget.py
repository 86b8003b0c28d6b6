from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from app.models.budget import LinkKind


class BudgetCategoryCreate(BaseModel):
    project_id: str
    name: str
    department: Optional[str] = None
    phase: Optional[str] = None


class BudgetCategory(BudgetCategoryCreate):
    id: str

    class Config:
        from_attributes = True


class BudgetItemBase(BaseModel):
    description: str
    category_id: Optional[str] = None
    estimated_amount: float = Field(0, ge=0)
    actual_amount: float = Field(0, ge=0)
    unit: Optional[str] = None
    quantity: Optional[float] = Field(1, ge=0)
    unit_rate: Optional[float] = Field(None, ge=0)
    status: str = "estimated"
    vendor: Optional[str] = None
    phase: Optional[str] = None
    linked_kind: Optional[LinkKind] = None
    linked_id: Optional[str] = None


class BudgetItemCreate(BudgetItemBase):
    project_id: str


class BudgetItemUpdate(BaseModel):
    description: Optional[str] = None
    category_id: Optional[str] = None
    estimated_amount: Optional[float] = Field(None, ge=0)
    actual_amount: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    unit_rate: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None
    vendor: Optional[str] = None


class BudgetItem(BudgetItemBase):
    id: str
    project_id: str
    linked_scene_id: Optional[str] = None
    last_synced_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
