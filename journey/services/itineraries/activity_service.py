from uuid import UUID

from journey.core.exceptions import ValidationError
from journey.core.logger import logger
from journey.repositories.base import TripRepositoryPort
from journey.schemas.itineraries.activity import (
    ActivityCreate,
    ActivityResponse,
    DayActivitiesResponse,
    TripActivitiesResponse,
)
from journey.utils.activity_grouping import group_activities_by_day
from journey.utils.validation import parse_id, to_utc


class ActivityService:
    def __init__(self, repository: TripRepositoryPort):
        self.repository = repository

    async def create_activity(self, trip_id: str, activity_data: ActivityCreate) -> UUID:
        trip_uuid = parse_id(trip_id, "trip")
        title = (activity_data.title or "").strip()
        if not title:
            raise ValidationError("title is required")
        occurs_at = to_utc(activity_data.occurs_at, "occurs_at")

        await self.repository.get_trip_by_id(trip_uuid)
        activity_id = await self.repository.create_activity(trip_uuid, title, occurs_at)

        logger.info(f"Activity {activity_id} created for trip {trip_uuid}")
        return activity_id

    async def get_trip_activities(self, trip_id: str) -> TripActivitiesResponse:
        trip_uuid = parse_id(trip_id, "trip")
        await self.repository.get_trip_by_id(trip_uuid)

        activities = await self.repository.list_activities_by_trip(trip_uuid)
        days = group_activities_by_day(activities)

        return TripActivitiesResponse(
            activities=[
                DayActivitiesResponse(
                    date=day.date,
                    activities=[ActivityResponse.model_validate(a) for a in day.activities],
                )
                for day in days
            ]
        )
