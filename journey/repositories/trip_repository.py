from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from journey.core.exceptions import AlreadyConfirmedError, NotFoundError, StorageError
from journey.core.logger import logger
from journey.models import Activity, Participant, Trip


class TripRepository:
    """SQLAlchemy implementation of ``TripRepositoryPort``. One session per call."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    @staticmethod
    def _storage_failure(operation: str, entity_id, exc: Exception) -> StorageError:
        logger.error(f"Storage failure during {operation} (id={entity_id}): {exc}")
        return StorageError(operation, entity_id)

    async def create_trip_atomic(
        self,
        trip_id: UUID,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        owner_name: str,
        owner_email: str,
        invited_emails: List[str],
    ) -> UUID:
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    session.add(Trip(
                        id=trip_id,
                        destination=destination,
                        starts_at=starts_at,
                        ends_at=ends_at,
                        is_confirmed=False,
                        owner_name=owner_name,
                        owner_email=owner_email,
                    ))
                    # trip row must exist before the participant FKs point at it
                    await session.flush()

                    session.add(Participant(
                        trip_id=trip_id,
                        email=owner_email,
                        name=owner_name,
                        is_confirmed=True,
                    ))
                    session.add_all([
                        Participant(trip_id=trip_id, email=email, is_confirmed=False)
                        for email in invited_emails
                    ])
            except SQLAlchemyError as exc:
                raise self._storage_failure("create_trip", trip_id, exc) from exc
        return trip_id

    async def get_trip_by_id(self, trip_id: UUID) -> Trip:
        async with self.session_factory() as session:
            try:
                trip = await session.get(Trip, trip_id)
            except SQLAlchemyError as exc:
                raise self._storage_failure("get_trip", trip_id, exc) from exc
        if trip is None:
            raise NotFoundError("trip", trip_id)
        return trip

    async def list_trips(self) -> List[Trip]:
        async with self.session_factory() as session:
            try:
                result = await session.execute(select(Trip).order_by(Trip.created_at))
            except SQLAlchemyError as exc:
                raise self._storage_failure("list_trips", None, exc) from exc
            return list(result.scalars().all())

    async def replace_trip_fields(
        self, trip_id: UUID, destination: str, starts_at: datetime, ends_at: datetime
    ) -> None:
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    result = await session.execute(
                        update(Trip)
                        .where(Trip.id == trip_id)
                        .values(destination=destination, starts_at=starts_at, ends_at=ends_at)
                        .execution_options(synchronize_session=False)
                    )
            except SQLAlchemyError as exc:
                raise self._storage_failure("update_trip", trip_id, exc) from exc
        if result.rowcount == 0:
            raise NotFoundError("trip", trip_id)

    async def set_trip_confirmed(self, trip_id: UUID) -> None:
        await self._confirm(Trip, "trip", trip_id)

    async def list_participants_by_trip(self, trip_id: UUID) -> List[Participant]:
        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    select(Participant)
                    .where(Participant.trip_id == trip_id)
                    .order_by(Participant.created_at)
                )
            except SQLAlchemyError as exc:
                raise self._storage_failure("list_participants", trip_id, exc) from exc
            return list(result.scalars().all())

    async def get_participant_by_id(self, participant_id: UUID) -> Participant:
        async with self.session_factory() as session:
            try:
                participant = await session.get(Participant, participant_id)
            except SQLAlchemyError as exc:
                raise self._storage_failure("get_participant", participant_id, exc) from exc
        if participant is None:
            raise NotFoundError("participant", participant_id)
        return participant

    async def set_participant_confirmed(self, participant_id: UUID) -> None:
        await self._confirm(Participant, "participant", participant_id)

    async def list_activities_by_trip(self, trip_id: UUID) -> List[Activity]:
        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    select(Activity)
                    .where(Activity.trip_id == trip_id)
                    .order_by(Activity.created_at)
                )
            except SQLAlchemyError as exc:
                raise self._storage_failure("list_activities", trip_id, exc) from exc
            return list(result.scalars().all())

    async def create_activity(self, trip_id: UUID, title: str, occurs_at: datetime) -> UUID:
        activity_id = uuid4()
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    session.add(Activity(
                        id=activity_id,
                        trip_id=trip_id,
                        title=title,
                        occurs_at=occurs_at,
                    ))
            except SQLAlchemyError as exc:
                raise self._storage_failure("create_activity", trip_id, exc) from exc
        return activity_id

    async def _confirm(self, model, entity: str, entity_id: UUID) -> None:
        """
        Flip ``is_confirmed`` with a single conditional UPDATE so that two
        concurrent confirmations cannot both succeed. When no row changed, an
        existence check tells "unknown id" apart from "already confirmed".
        """
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    result = await session.execute(
                        update(model)
                        .where(model.id == entity_id, model.is_confirmed.is_(False))
                        .values(is_confirmed=True)
                        .execution_options(synchronize_session=False)
                    )
                    if result.rowcount == 1:
                        return
                    existing = await session.scalar(select(model.id).where(model.id == entity_id))
            except SQLAlchemyError as exc:
                raise self._storage_failure(f"confirm_{entity}", entity_id, exc) from exc
        if existing is None:
            raise NotFoundError(entity, entity_id)
        raise AlreadyConfirmedError(entity, entity_id)
