"""Unit tests for the notification dispatcher and the email notifier."""

import asyncio
import smtplib
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from journey.core.exceptions import NotificationError
from journey.services.email_service import EmailNotifier
from journey.services.notifications.dispatcher import NotificationDispatcher, NotificationKind
from tests.fakes import RecordingNotifier, failing_notifier


async def _seed_trip(repository, invited):
    trip_id = uuid4()
    await repository.create_trip_atomic(
        trip_id=trip_id,
        destination="Rio",
        starts_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
        ends_at=datetime(2024, 6, 10, tzinfo=timezone.utc),
        owner_name="Ana",
        owner_email="ana@x.com",
        invited_emails=invited,
    )
    return trip_id


class SentMail:
    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.sent = []

    def __call__(self, to_email, subject, body):
        if to_email in self.fail_for:
            raise smtplib.SMTPRecipientsRefused({to_email: (550, b"mailbox unavailable")})
        self.sent.append((to_email, subject, body))


@pytest.mark.asyncio
async def test_dispatcher_delivers_scheduled_jobs():
    notifier = RecordingNotifier()
    dispatcher = NotificationDispatcher(notifier)
    dispatcher.start()
    trip_id = uuid4()

    dispatcher.schedule(NotificationKind.TRIP_CREATED, trip_id)
    dispatcher.schedule(NotificationKind.TRIP_CONFIRMED, trip_id)
    await dispatcher.join()
    await dispatcher.stop()

    assert notifier.calls == [("owner", trip_id), ("participants", trip_id)]
    assert not dispatcher.running


@pytest.mark.asyncio
async def test_schedule_does_not_wait_for_delivery():
    notifier = RecordingNotifier()
    dispatcher = NotificationDispatcher(notifier)
    dispatcher.start()

    dispatcher.schedule(NotificationKind.TRIP_CREATED, uuid4())
    assert notifier.calls == []

    await dispatcher.stop()
    assert len(notifier.calls) == 1


@pytest.mark.asyncio
async def test_failed_notification_does_not_stop_the_worker():
    notifier = failing_notifier()
    dispatcher = NotificationDispatcher(notifier)
    dispatcher.start()

    dispatcher.schedule(NotificationKind.TRIP_CREATED, uuid4())
    dispatcher.schedule(NotificationKind.TRIP_CONFIRMED, uuid4())
    await dispatcher.join()

    assert len(notifier.calls) == 2
    assert dispatcher.running
    await dispatcher.stop()


@pytest.mark.asyncio
async def test_full_queue_drops_the_job():
    dispatcher = NotificationDispatcher(RecordingNotifier(), max_queue_size=1)

    dispatcher.schedule(NotificationKind.TRIP_CREATED, uuid4())
    dispatcher.schedule(NotificationKind.TRIP_CREATED, uuid4())

    assert dispatcher._queue.qsize() == 1


@pytest.mark.asyncio
async def test_stop_drops_jobs_that_outlive_the_drain_timeout():
    class SlowNotifier(RecordingNotifier):
        async def notify_owner_trip_created(self, trip_id):
            await asyncio.sleep(10)

    dispatcher = NotificationDispatcher(SlowNotifier())
    dispatcher.start()
    dispatcher.schedule(NotificationKind.TRIP_CREATED, uuid4())

    await dispatcher.stop(drain_timeout=0.05)

    assert not dispatcher.running


@pytest.mark.asyncio
async def test_owner_email_reads_trip_at_send_time(repository):
    trip_id = await _seed_trip(repository, ["bob@x.com"])
    await repository.replace_trip_fields(
        trip_id, "Rio de Janeiro",
        datetime(2024, 6, 2, tzinfo=timezone.utc), datetime(2024, 6, 9, tzinfo=timezone.utc),
    )
    mail = SentMail()

    await EmailNotifier(repository, sender=mail).notify_owner_trip_created(trip_id)

    assert len(mail.sent) == 1
    to_email, subject, body = mail.sent[0]
    assert to_email == "ana@x.com"
    assert subject == "Confirm your trip"
    assert "Rio de Janeiro" in body
    assert "2024-06-02" in body


@pytest.mark.asyncio
async def test_participants_email_skips_owner(repository):
    trip_id = await _seed_trip(repository, ["bob@x.com", "carl@x.com"])
    mail = SentMail()

    await EmailNotifier(repository, sender=mail).notify_participants_trip_confirmed(trip_id)

    assert sorted(m[0] for m in mail.sent) == ["bob@x.com", "carl@x.com"]
    assert "Ana" in mail.sent[0][2]


@pytest.mark.asyncio
async def test_failing_recipient_does_not_abort_the_rest(repository):
    trip_id = await _seed_trip(repository, ["bob@x.com", "carl@x.com", "dora@x.com"])
    mail = SentMail(fail_for={"carl@x.com"})

    with pytest.raises(NotificationError, match="1 of 3 recipients failed"):
        await EmailNotifier(repository, sender=mail).notify_participants_trip_confirmed(trip_id)

    assert sorted(m[0] for m in mail.sent) == ["bob@x.com", "dora@x.com"]


@pytest.mark.asyncio
async def test_unknown_trip_becomes_notification_error(repository):
    with pytest.raises(NotificationError):
        await EmailNotifier(repository, sender=SentMail()).notify_owner_trip_created(uuid4())


@pytest.mark.asyncio
async def test_smtp_connection_failure_becomes_notification_error(repository):
    trip_id = await _seed_trip(repository, [])

    def refuse(*args):
        raise ConnectionRefusedError("mail server down")

    with pytest.raises(NotificationError, match="mail server down"):
        await EmailNotifier(repository, sender=refuse).notify_owner_trip_created(trip_id)
