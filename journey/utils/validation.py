from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

from pydantic_core import PydanticCustomError
from pydantic.networks import validate_email

from journey.core.exceptions import ValidationError


def parse_id(value, label: str) -> UUID:
    """Parse a textual id coming from the request boundary."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID") from None


def to_utc(value: Optional[datetime], field: str) -> datetime:
    """Naive timestamps are taken as UTC, aware ones are converted to UTC."""
    if value is None:
        raise ValidationError(f"{field} is required")
    if not isinstance(value, datetime):
        raise ValidationError(f"{field} must be a timestamp")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_destination(destination: Optional[str]) -> str:
    destination = (destination or "").strip()
    if not destination:
        raise ValidationError("destination is required")
    return destination


def validate_period(starts_at: Optional[datetime], ends_at: Optional[datetime]):
    starts_at = to_utc(starts_at, "starts_at")
    ends_at = to_utc(ends_at, "ends_at")
    if ends_at < starts_at:
        raise ValidationError("ends_at must not precede starts_at")
    return starts_at, ends_at


def validate_email_address(email: Optional[str]) -> str:
    if not email:
        raise ValidationError("email is required")
    try:
        _, normalized = validate_email(str(email))
    except PydanticCustomError:
        raise ValidationError(f"Invalid email: {email}") from None
    return normalized


def normalize_invites(owner_email: str, emails: Iterable[str]) -> List[str]:
    """Validate invited emails, dropping duplicates and the owner's own address."""
    seen = {owner_email.lower()}
    invites = []
    for email in emails or []:
        normalized = validate_email_address(email)
        if normalized.lower() in seen:
            continue
        seen.add(normalized.lower())
        invites.append(normalized)
    return invites
