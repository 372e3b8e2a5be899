import asyncio
import enum
from typing import Optional, Protocol
from uuid import UUID

from journey.core.exceptions import NotificationError
from journey.core.logger import logger
from journey.services.email_service import NotificationPort


class NotificationKind(str, enum.Enum):
    TRIP_CREATED = "trip_created"
    TRIP_CONFIRMED = "trip_confirmed"


class NotificationScheduler(Protocol):
    def schedule(self, kind: NotificationKind, trip_id: UUID) -> None: ...


class NotificationDispatcher:
    """
    Runs notification jobs detached from the request that scheduled them.

    ``schedule`` only enqueues; a single worker task drains the queue. There is
    no retry and no backpressure: when the queue is full the job is dropped.
    Jobs still queued when ``stop`` gives up draining are dropped as well.
    """

    def __init__(self, notifier: NotificationPort, max_queue_size: int = 0):
        self.notifier = notifier
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)
        self._worker: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="notification-dispatcher")
        logger.info("Notification dispatcher started")

    def schedule(self, kind: NotificationKind, trip_id: UUID) -> None:
        try:
            self._queue.put_nowait((kind, trip_id))
        except asyncio.QueueFull:
            logger.error(f"Notification queue full, dropping {kind.value} for trip {trip_id}")

    async def join(self) -> None:
        """Wait until every job enqueued so far has been handled."""
        await self._queue.join()

    async def stop(self, drain_timeout: float = 5.0) -> None:
        if self._worker is None:
            return
        if self.running and drain_timeout > 0:
            try:
                await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Notification drain timed out, dropping {self._queue.qsize()} queued jobs")

        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info("Notification dispatcher stopped")

    async def _run(self) -> None:
        while True:
            kind, trip_id = await self._queue.get()
            try:
                await self._deliver(kind, trip_id)
            except NotificationError as exc:
                logger.error(f"Notification failed: {exc}")
            except Exception:
                logger.exception(f"Unexpected error delivering {kind.value} for trip {trip_id}")
            finally:
                self._queue.task_done()

    async def _deliver(self, kind: NotificationKind, trip_id: UUID) -> None:
        if kind is NotificationKind.TRIP_CREATED:
            await self.notifier.notify_owner_trip_created(trip_id)
        elif kind is NotificationKind.TRIP_CONFIRMED:
            await self.notifier.notify_participants_trip_confirmed(trip_id)
