import asyncio
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Callable, Protocol
from uuid import UUID

from journey.core.config import settings
from journey.core.exceptions import NotFoundError, NotificationError, StorageError
from journey.core.logger import logger
from journey.repositories.base import TripRepositoryPort

SENDER_NAME = settings.APP_NAME


def send_email_text(to_email: str, subject: str, body: str) -> None:
    msg = MIMEText(body)
    msg["Subject"] = subject
    msg["From"] = formataddr((SENDER_NAME, settings.MAIL_FROM))
    msg["To"] = to_email

    smtp_class = smtplib.SMTP_SSL if settings.SMTP_USE_SSL else smtplib.SMTP
    with smtp_class(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
        server.sendmail(settings.MAIL_FROM, [to_email], msg.as_string())


class NotificationPort(Protocol):
    async def notify_owner_trip_created(self, trip_id: UUID) -> None: ...

    async def notify_participants_trip_confirmed(self, trip_id: UUID) -> None: ...


def _owner_body(trip) -> str:
    return (
        f"Hello, {trip.owner_name}!\n\n"
        f"Your trip to {trip.destination} starting on {trip.starts_at.date().isoformat()} "
        f"needs to be confirmed.\n"
        f"Confirm it to let your participants know.\n"
    )


def _participant_body(trip) -> str:
    return (
        f"Hello!\n\n"
        f"Your trip with {trip.owner_name} to {trip.destination} starting on "
        f"{trip.starts_at.date().isoformat()} needs your confirmation.\n"
        f"Confirm your presence to join the trip.\n"
    )


class EmailNotifier:
    """
    Sends trip confirmation emails.

    Trip and participant data are read from the repository when the job runs,
    not captured when it was scheduled. SMTP calls are blocking and run in a
    worker thread.
    """

    def __init__(self, repository: TripRepositoryPort, sender: Callable[[str, str, str], None] = send_email_text):
        self.repository = repository
        self.sender = sender

    async def _send(self, to_email: str, subject: str, body: str) -> None:
        await asyncio.to_thread(self.sender, to_email, subject, body)

    async def notify_owner_trip_created(self, trip_id: UUID) -> None:
        operation = "notify_owner_trip_created"
        try:
            trip = await self.repository.get_trip_by_id(trip_id)
        except (NotFoundError, StorageError) as exc:
            raise NotificationError(operation, trip_id, exc.message) from exc

        try:
            await self._send(trip.owner_email, "Confirm your trip", _owner_body(trip))
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(operation, trip_id, str(exc)) from exc

        logger.info(f"Trip confirmation email sent to owner of trip {trip_id}")

    async def notify_participants_trip_confirmed(self, trip_id: UUID) -> None:
        operation = "notify_participants_trip_confirmed"
        try:
            trip = await self.repository.get_trip_by_id(trip_id)
            participants = await self.repository.list_participants_by_trip(trip_id)
        except (NotFoundError, StorageError) as exc:
            raise NotificationError(operation, trip_id, exc.message) from exc

        # the owner got their own email when the trip was created
        recipients = [
            p for p in participants
            if p.email.lower() != trip.owner_email.lower()
        ]

        failed = []
        body = _participant_body(trip)
        for participant in recipients:
            try:
                await self._send(participant.email, "Confirm your trip", body)
            except (smtplib.SMTPException, OSError) as exc:
                logger.error(f"Failed to email participant {participant.id} of trip {trip_id}: {exc}")
                failed.append(participant.email)

        if failed:
            raise NotificationError(
                operation, trip_id, f"{len(failed)} of {len(recipients)} recipients failed"
            )

        logger.info(f"Trip confirmation emails sent to {len(recipients)} participants of trip {trip_id}")
