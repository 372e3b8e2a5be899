from typing import List, Optional
from uuid import UUID, uuid4

from redis.exceptions import RedisError

from journey.core.cache import RedisCache
from journey.core.config import settings
from journey.core.exceptions import NotFoundError, StorageError, ValidationError
from journey.core.logger import logger
from journey.models import Trip
from journey.repositories.base import TripRepositoryPort
from journey.schemas.trip.trip_schema import TripCreate, TripResponse, TripUpdate
from journey.services.notifications.dispatcher import NotificationKind, NotificationScheduler
from journey.utils.validation import (
    normalize_invites,
    parse_id,
    validate_destination,
    validate_email_address,
    validate_period,
)


class TripService:
    """
    Trip lifecycle: draft trips are created, edited and confirmed exactly once.

    Holds no state of its own; the repository, the notification dispatcher and
    the optional cache are handed in by the caller.

    The cache never decides the outcome of a call. Redis errors are logged and
    the request carries on against storage. Reads only fill an empty slot
    (``SET NX``) while updates and confirmations overwrite it with the row
    they just committed, so a slow reader cannot put an older trip back.
    """

    def __init__(
        self,
        repository: TripRepositoryPort,
        dispatcher: NotificationScheduler,
        cache: Optional[RedisCache] = None,
    ):
        self.repository = repository
        self.dispatcher = dispatcher
        self.cache = cache

    @staticmethod
    def _cache_key(trip_id: UUID) -> str:
        return RedisCache.build_key("trips", "id", trip_id)

    async def _get_cached_trip(self, trip_id: UUID) -> Optional[dict]:
        if self.cache is None:
            return None
        try:
            return await self.cache.get(self._cache_key(trip_id))
        except RedisError as exc:
            logger.warning(f"Cache read failed for trip {trip_id}: {exc}")
            return None

    async def _cache_trip(self, trip: Trip, overwrite: bool) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set(
                self._cache_key(trip.id),
                trip.to_dict(),
                expire=settings.TRIP_CACHE_TTL_SECONDS,
                nx=not overwrite,
            )
        except RedisError as exc:
            logger.warning(f"Cache write failed for trip {trip.id}: {exc}")

    async def _drop_cached_trip(self, trip_id: UUID) -> None:
        try:
            await self.cache.delete(self._cache_key(trip_id))
        except RedisError as exc:
            logger.error(f"Cache entry for trip {trip_id} may be stale: {exc}")

    async def _refresh_trip_cache(self, trip_id: UUID) -> None:
        """Replace the cached trip with what storage holds now."""
        if self.cache is None:
            return
        try:
            trip = await self.repository.get_trip_by_id(trip_id)
        except (NotFoundError, StorageError) as exc:
            logger.warning(f"Could not reload trip {trip_id} for the cache: {exc.message}")
            await self._drop_cached_trip(trip_id)
            return
        await self._cache_trip(trip, overwrite=True)

    async def create_trip(self, trip_data: TripCreate) -> UUID:
        destination = validate_destination(trip_data.destination)
        starts_at, ends_at = validate_period(trip_data.starts_at, trip_data.ends_at)
        owner_name = (trip_data.owner_name or "").strip()
        if not owner_name:
            raise ValidationError("owner_name is required")
        owner_email = validate_email_address(trip_data.owner_email)
        invited_emails = normalize_invites(owner_email, trip_data.emails_to_invite)

        trip_id = await self.repository.create_trip_atomic(
            trip_id=uuid4(),
            destination=destination,
            starts_at=starts_at,
            ends_at=ends_at,
            owner_name=owner_name,
            owner_email=owner_email,
            invited_emails=invited_emails,
        )

        self.dispatcher.schedule(NotificationKind.TRIP_CREATED, trip_id)

        logger.info(f"Trip {trip_id} created with {len(invited_emails)} invited participants")
        return trip_id

    async def get_trip(self, trip_id: str) -> TripResponse:
        trip_uuid = parse_id(trip_id, "trip")

        cached_trip = await self._get_cached_trip(trip_uuid)
        if cached_trip:
            logger.info(f"Trip ID {trip_uuid} retrieved from cache")
            return TripResponse.model_validate(cached_trip)

        trip = await self.repository.get_trip_by_id(trip_uuid)
        await self._cache_trip(trip, overwrite=False)

        return TripResponse.model_validate(trip)

    async def list_trips(self) -> List[TripResponse]:
        trips = await self.repository.list_trips()
        return [TripResponse.model_validate(trip) for trip in trips]

    async def update_trip(self, trip_id: str, trip_data: TripUpdate) -> None:
        trip_uuid = parse_id(trip_id, "trip")
        destination = validate_destination(trip_data.destination)
        starts_at, ends_at = validate_period(trip_data.starts_at, trip_data.ends_at)

        await self.repository.replace_trip_fields(trip_uuid, destination, starts_at, ends_at)
        logger.info(f"Trip ID {trip_uuid} updated")

        await self._refresh_trip_cache(trip_uuid)

    async def confirm_trip(self, trip_id: str) -> None:
        trip_uuid = parse_id(trip_id, "trip")

        await self.repository.set_trip_confirmed(trip_uuid)

        # the transition is complete here, whatever happens to the cache or the emails
        self.dispatcher.schedule(NotificationKind.TRIP_CONFIRMED, trip_uuid)
        logger.info(f"Trip ID {trip_uuid} confirmed")

        await self._refresh_trip_cache(trip_uuid)
