from fastapi import APIRouter, Depends, status
from journey.dependencies.services import get_activity_service
from journey.schemas.itineraries.activity import (
    ActivityCreate,
    CreateActivityResponse,
    TripActivitiesResponse,
)
from journey.services.itineraries.activity_service import ActivityService


router = APIRouter(prefix="/trips/{trip_id}/activities", tags=["Activities"])


@router.post("", response_model=CreateActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    trip_id: str,
    activity_data: ActivityCreate,
    activity_service: ActivityService = Depends(get_activity_service)
):
    activity_id = await activity_service.create_activity(trip_id, activity_data)
    return CreateActivityResponse(activity_id=activity_id)


# 🔹 Get a trip's activities grouped by day
@router.get("", response_model=TripActivitiesResponse)
async def get_trip_activities(
    trip_id: str,
    activity_service: ActivityService = Depends(get_activity_service)
):
    return await activity_service.get_trip_activities(trip_id)
