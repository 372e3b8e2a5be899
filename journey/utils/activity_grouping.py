from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List


@dataclass
class ActivityDay:
    date: datetime
    activities: List[Any] = field(default_factory=list)


def _utc_day(occurs_at: datetime) -> date:
    if occurs_at.tzinfo is not None:
        occurs_at = occurs_at.astimezone(timezone.utc)
    return occurs_at.date()


def group_activities_by_day(activities: Iterable[Any]) -> List[ActivityDay]:
    """
    Bucket activities by the UTC calendar day of their ``occurs_at``.

    Buckets come out in the order their date is first seen in the input, not
    sorted chronologically, and each bucket keeps the input order of its
    activities. Naive timestamps are treated as UTC.
    """
    buckets: Dict[date, ActivityDay] = {}
    for activity in activities:
        day = _utc_day(activity.occurs_at)
        bucket = buckets.get(day)
        if bucket is None:
            bucket = ActivityDay(
                date=datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
            )
            buckets[day] = bucket
        bucket.activities.append(activity)
    return list(buckets.values())
