from fastapi import Depends, Request

from journey.core.redis_lifecyle import get_cache
from journey.services.itineraries.activity_service import ActivityService
from journey.services.trips.participant_service import ParticipantService
from journey.services.trips.trip_service import TripService


def get_repository(request: Request):
    return request.app.state.repository


def get_dispatcher(request: Request):
    return request.app.state.dispatcher


async def get_trip_service(
    repository=Depends(get_repository),
    dispatcher=Depends(get_dispatcher),
    cache=Depends(get_cache),
) -> TripService:
    return TripService(repository, dispatcher, cache)


async def get_participant_service(repository=Depends(get_repository)) -> ParticipantService:
    return ParticipantService(repository)


async def get_activity_service(repository=Depends(get_repository)) -> ActivityService:
    return ActivityService(repository)
