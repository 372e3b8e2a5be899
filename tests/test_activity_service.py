"""Unit tests for activity creation and the per-day listing."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
import pytest_asyncio

from journey.core.exceptions import NotFoundError, ValidationError
from journey.schemas.itineraries.activity import ActivityCreate
from journey.services.itineraries.activity_service import ActivityService


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def service(repository):
    return ActivityService(repository)


@pytest_asyncio.fixture
async def trip_id(repository):
    trip_id = uuid4()
    await repository.create_trip_atomic(
        trip_id=trip_id,
        destination="Rio",
        starts_at=_utc(2024, 1, 1),
        ends_at=_utc(2024, 1, 5),
        owner_name="Ana",
        owner_email="ana@x.com",
        invited_emails=[],
    )
    return trip_id


@pytest.mark.asyncio
async def test_activities_grouped_in_first_seen_order(service, trip_id):
    first = await service.create_activity(str(trip_id), ActivityCreate(title="Beach", occurs_at=_utc(2024, 1, 3, 9)))
    second = await service.create_activity(str(trip_id), ActivityCreate(title="Arrival", occurs_at=_utc(2024, 1, 1, 15)))
    third = await service.create_activity(str(trip_id), ActivityCreate(title="Dinner", occurs_at=_utc(2024, 1, 3, 20)))

    response = await service.get_trip_activities(str(trip_id))

    assert [day.date for day in response.activities] == [_utc(2024, 1, 3), _utc(2024, 1, 1)]
    assert [a.id for a in response.activities[0].activities] == [first, third]
    assert [a.id for a in response.activities[1].activities] == [second]
    assert response.activities[0].activities[1].title == "Dinner"


@pytest.mark.asyncio
async def test_trip_without_activities(service, trip_id):
    response = await service.get_trip_activities(str(trip_id))
    assert response.activities == []


@pytest.mark.asyncio
async def test_activity_for_unknown_trip(service, repository):
    with pytest.raises(NotFoundError):
        await service.create_activity(str(uuid4()), ActivityCreate(title="Museum", occurs_at=_utc(2024, 1, 2)))
    assert repository.activities == []


@pytest.mark.asyncio
async def test_blank_title_is_rejected(service, trip_id, repository):
    repository.calls.clear()
    with pytest.raises(ValidationError):
        await service.create_activity(
            str(trip_id), ActivityCreate.model_construct(title="   ", occurs_at=_utc(2024, 1, 2))
        )
    assert repository.calls == []


@pytest.mark.asyncio
async def test_listing_unknown_trip(service):
    with pytest.raises(NotFoundError):
        await service.get_trip_activities(str(uuid4()))
