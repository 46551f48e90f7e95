from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from enum import Enum


class Area(str, Enum):
    wealth = "wealth"
    health = "health"
    relationships = "relationships"
    soul = "soul"


# --- Goals (goals.user_id -> auth.users.id) ---
class Goal(BaseModel):
    id: str
    title: str
    description: str = ""
    area: List[Area] = []
    start_date: date
    expected_completion_date: date
    actual_completion_date: Optional[date] = None
    expected_amount: Optional[float] = None
    actual_amount: Optional[float] = None
    image_url: Optional[str] = None
    completed: bool = False
    user_id: str
    created_at: datetime
    updated_at: datetime


class GoalDetail(Goal):
    progress_percentage: float = 0
    is_completed: bool = False
    is_overdue: bool = False


class CreateGoal(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    area: List[Area] = Field(..., min_length=1, description="At least one life area")
    start_date: date
    expected_completion_date: date
    expected_amount: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None


class UpdateGoal(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    area: Optional[List[Area]] = None
    start_date: Optional[date] = None
    expected_completion_date: Optional[date] = None
    actual_completion_date: Optional[date] = None
    expected_amount: Optional[float] = Field(None, ge=0)
    actual_amount: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None
    completed: Optional[bool] = None

    class Config:
        extra = "ignore"

    @field_validator("title", "description", "area", "start_date", "expected_completion_date", "completed")
    @classmethod
    def not_null(cls, value):
        # Only the actual_* fields, expected_amount and image_url may be cleared
        if value is None:
            raise ValueError("may not be null")
        return value


class GoalImage(BaseModel):
    filename: str
    content: bytes
    content_type: Optional[str] = None


class CreatedGoal(BaseModel):
    id: str


class UploadedImage(BaseModel):
    image_url: str


class AreaSummary(BaseModel):
    area: Area
    display_name: str
    icon: str
    count: int
