from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from uuid import UUID


class ActivityCreate(BaseModel):
    title: str = Field(min_length=1)
    occurs_at: datetime


class CreateActivityResponse(BaseModel):
    activity_id: UUID = Field(serialization_alias="activityId")


class ActivityResponse(BaseModel):
    id: UUID
    title: str
    occurs_at: datetime

    model_config = {"from_attributes": True}


class DayActivitiesResponse(BaseModel):
    date: datetime
    activities: List[ActivityResponse]


class TripActivitiesResponse(BaseModel):
    activities: List[DayActivitiesResponse]
