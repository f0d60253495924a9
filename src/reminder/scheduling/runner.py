"""Schedule runner — waits for each occurrence and fires a notification.

A runner owns one recurrence and one notification. Every iteration computes
the next occurrence fresh from the current time, so a runner never fires
twice for the same occurrence and never accumulates drift.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from reminder.scheduling.recurrence import RecurrenceCalculator
from reminder.scheduling.types import DeliveryError, Notification, NotificationSink

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sleeper = Callable[[float], Awaitable[None]]


def utc_now() -> datetime:
    return datetime.now(UTC)


async def sleep_monotonic(seconds: float) -> None:
    """Sleep until a deadline on the event loop's monotonic clock.

    Wall-clock adjustments during the wait do not change its length.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + seconds
    while (remaining := deadline - loop.time()) > 0:
        await asyncio.sleep(remaining)


class ScheduleRunner:
    """Fires a notification at every occurrence of a recurrence.

    Example:
        runner = ScheduleRunner(
            "sunday-2pm",
            RecurrenceCalculator.parse("0 0 14 * * SUN"),
            slack_client,
            Notification(channel="C123", text="Weekly reminder"),
        )
        await runner.run()
    """

    def __init__(
        self,
        name: str,
        calculator: RecurrenceCalculator,
        sink: NotificationSink,
        notification: Notification,
        *,
        clock: Clock = utc_now,
        sleep: Sleeper = sleep_monotonic,
    ):
        self._name = name
        self._calculator = calculator
        self._sink = sink
        self._notification = notification
        self._clock = clock
        self._sleep = sleep
        self._running = False
        self.sent_count = 0
        self.failed_count = 0
        self.skipped_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def calculator(self) -> RecurrenceCalculator:
        return self._calculator

    @property
    def notification(self) -> Notification:
        return self._notification

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Stop after the current iteration."""
        self._running = False

    async def run(self) -> None:
        """Run until stopped or the recurrence is exhausted."""
        self._running = True
        logger.info(
            f"Runner {self._name} started ({self._calculator.expression})",
            extra={"schedule.name": self._name},
        )
        try:
            while self._running:
                now = self._clock()
                occurrence = self._calculator.next_after(now)
                if occurrence is None:
                    logger.error(
                        f"No upcoming occurrence for {self._name}, stopping runner",
                        extra={"schedule.cron": self._calculator.expression},
                    )
                    return

                wait = (occurrence - self._clock()).total_seconds()
                if wait <= 0:
                    self.skipped_count += 1
                    logger.warning(
                        f"Occurrence {occurrence.isoformat()} for {self._name} "
                        "is already in the past, skipping"
                    )
                    continue

                logger.info(
                    f"Next reminder for {self._name} scheduled at "
                    f"{occurrence.isoformat()}"
                )
                await self._sleep(wait)
                if not self._running:
                    return

                await self._deliver()
        finally:
            self._running = False

    async def _deliver(self) -> None:
        """Send the notification once, absorbing any failure."""
        try:
            outcome = await self._sink.send(self._notification)
        except DeliveryError as e:
            self.failed_count += 1
            logger.error(f"Error sending message for {self._name}: {e}")
            return
        except Exception:
            self.failed_count += 1
            logger.exception(f"Unexpected error sending message for {self._name}")
            return

        if outcome.ok:
            self.sent_count += 1
            logger.info(
                f"Message for {self._name} sent successfully at "
                f"{self._clock().isoformat()}"
            )
        else:
            self.failed_count += 1
            logger.error(
                f"Failed to send message for {self._name}: {outcome.body or outcome.error}",
                extra={"http.status_code": outcome.status_code},
            )
