"""Storage contract consumed by the trip services and the email notifier."""

from datetime import datetime
from typing import List, Protocol
from uuid import UUID

from journey.models import Activity, Participant, Trip


class TripRepositoryPort(Protocol):
    async def create_trip_atomic(
        self,
        trip_id: UUID,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        owner_name: str,
        owner_email: str,
        invited_emails: List[str],
    ) -> UUID: ...

    async def get_trip_by_id(self, trip_id: UUID) -> Trip: ...

    async def list_trips(self) -> List[Trip]: ...

    async def replace_trip_fields(
        self, trip_id: UUID, destination: str, starts_at: datetime, ends_at: datetime
    ) -> None: ...

    async def set_trip_confirmed(self, trip_id: UUID) -> None: ...

    async def list_participants_by_trip(self, trip_id: UUID) -> List[Participant]: ...

    async def get_participant_by_id(self, participant_id: UUID) -> Participant: ...

    async def set_participant_confirmed(self, participant_id: UUID) -> None: ...

    async def list_activities_by_trip(self, trip_id: UUID) -> List[Activity]: ...

    async def create_activity(self, trip_id: UUID, title: str, occurs_at: datetime) -> UUID: ...
