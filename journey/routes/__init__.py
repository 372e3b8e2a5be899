# journey/routes/__init__.py
from fastapi import APIRouter
from journey.routes.trip import trip_routes, participant_routes
from journey.routes.itineraries import activity_routes


api_router = APIRouter()

# Trip routes
api_router.include_router(trip_routes.router)
api_router.include_router(participant_routes.router)

# Activity routes
api_router.include_router(activity_routes.router)
