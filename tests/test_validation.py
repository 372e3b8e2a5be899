"""Unit tests for input checks shared by the services."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from journey.core.exceptions import ValidationError
from journey.utils.validation import (
    normalize_invites,
    parse_id,
    to_utc,
    validate_destination,
    validate_email_address,
    validate_period,
)


def test_parse_id_accepts_uuid_text():
    trip_id = uuid4()
    assert parse_id(str(trip_id), "trip") == trip_id


@pytest.mark.parametrize("value", ["", "not-a-uuid", "1234", None])
def test_parse_id_rejects_malformed_values(value):
    with pytest.raises(ValidationError, match="Invalid trip ID"):
        parse_id(value, "trip")


def test_to_utc_converts_aware_and_tags_naive():
    plus_two = timezone(timedelta(hours=2))
    assert to_utc(datetime(2024, 1, 1, 12, 0, tzinfo=plus_two), "x") == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert to_utc(datetime(2024, 1, 1, 12, 0), "x").tzinfo == timezone.utc


def test_validate_period_rejects_end_before_start():
    with pytest.raises(ValidationError):
        validate_period(datetime(2024, 6, 10), datetime(2024, 6, 1))


def test_validate_period_allows_same_instant():
    moment = datetime(2024, 6, 1, tzinfo=timezone.utc)
    assert validate_period(moment, moment) == (moment, moment)


def test_validate_period_requires_both_ends():
    with pytest.raises(ValidationError, match="starts_at is required"):
        validate_period(None, datetime(2024, 6, 1))


@pytest.mark.parametrize("destination", ["", "   ", None])
def test_blank_destination_is_rejected(destination):
    with pytest.raises(ValidationError):
        validate_destination(destination)


def test_destination_is_trimmed():
    assert validate_destination("  Rio ") == "Rio"


def test_invalid_email_is_rejected():
    with pytest.raises(ValidationError, match="Invalid email"):
        validate_email_address("not-an-email")


def test_normalize_invites_drops_duplicates_and_owner():
    invites = normalize_invites(
        "ana@example.com",
        ["bob@example.com", "BOB@example.com", "ana@example.com", "carl@example.com"],
    )

    assert [i.lower() for i in invites] == ["bob@example.com", "carl@example.com"]
