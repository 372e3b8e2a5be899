from fastapi import APIRouter, Depends, Response, status
from journey.dependencies.services import get_participant_service
from journey.schemas.trip.participant import ParticipantsResponse
from journey.services.trips.participant_service import ParticipantService

router = APIRouter(tags=["Participants"])


@router.get("/trips/{trip_id}/participants", response_model=ParticipantsResponse)
async def get_trip_participants(
    trip_id: str,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    participants = await participant_service.get_trip_participants(trip_id)
    return ParticipantsResponse(participants=participants)


@router.patch("/participants/{participant_id}/confirm", status_code=status.HTTP_204_NO_CONTENT)
async def confirm_participant(
    participant_id: str,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    await participant_service.confirm_participant(participant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
