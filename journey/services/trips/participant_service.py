from typing import List

from journey.core.logger import logger
from journey.repositories.base import TripRepositoryPort
from journey.schemas.trip.participant import ParticipantOut
from journey.utils.validation import parse_id


class ParticipantService:
    def __init__(self, repository: TripRepositoryPort):
        self.repository = repository

    async def get_trip_participants(self, trip_id: str) -> List[ParticipantOut]:
        trip_uuid = parse_id(trip_id, "trip")
        # raises NotFoundError for unknown trips instead of returning an empty list
        await self.repository.get_trip_by_id(trip_uuid)

        participants = await self.repository.list_participants_by_trip(trip_uuid)
        return [ParticipantOut.model_validate(p) for p in participants]

    async def confirm_participant(self, participant_id: str) -> None:
        """Confirm a participant. Does not depend on the trip being confirmed."""
        participant_uuid = parse_id(participant_id, "participant")

        await self.repository.set_participant_confirmed(participant_uuid)

        logger.info(f"Participant {participant_uuid} confirmed")
