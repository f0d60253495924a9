"""Reminder service — runs one schedule runner per configured schedule."""

import asyncio
import logging
import signal

from reminder.config.models import ReminderConfig
from reminder.scheduling import (
    Notification,
    NotificationSink,
    RecurrenceCalculator,
    ScheduleRunner,
)
from reminder.slack import SlackClient

logger = logging.getLogger(__name__)


class ReminderService:
    """Runs every configured schedule concurrently until stopped.

    Schedules share nothing but the read-only config and the sink. A runner
    that ends (exhausted recurrence) does not affect the others.
    """

    def __init__(self, config: ReminderConfig, sink: NotificationSink):
        self._config = config
        self._sink = sink
        self._runners: list[ScheduleRunner] = []
        self._shutdown = asyncio.Event()

    @property
    def runners(self) -> list[ScheduleRunner]:
        return list(self._runners)

    def build_runners(self) -> list[ScheduleRunner]:
        """Parse every schedule and create its runner.

        All expressions are parsed before any runner exists, so one invalid
        schedule prevents the whole service from starting.

        Raises:
            RecurrenceParseError: If any cron expression is invalid.
            ConfigError: If a schedule has no destination channel.
        """
        runners = []
        for schedule in self._config.schedules:
            calculator = RecurrenceCalculator.parse(schedule.cron)
            notification = Notification(
                channel=self._config.channel_for(schedule),
                text=schedule.text,
            )
            runners.append(
                ScheduleRunner(schedule.name, calculator, self._sink, notification)
            )
        self._runners = runners
        return runners

    def stop(self) -> None:
        """Request shutdown; safe to call from a signal handler."""
        self._shutdown.set()

    async def run(self, install_signal_handlers: bool = False) -> None:
        """Run all schedules until they finish or shutdown is requested."""
        if not self._runners:
            self.build_runners()

        if install_signal_handlers:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGTERM, signal.SIGINT):
                loop.add_signal_handler(sig, self.stop)

        tasks = [
            asyncio.create_task(runner.run(), name=f"runner:{runner.name}")
            for runner in self._runners
        ]
        shutdown_task = asyncio.create_task(self._shutdown.wait())
        logger.info(f"Reminder service running with {len(tasks)} schedule(s)")

        try:
            pending = set(tasks)
            while pending and not self._shutdown.is_set():
                done, pending = await asyncio.wait(
                    pending | {shutdown_task},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                pending.discard(shutdown_task)
                for task in done:
                    if task is shutdown_task:
                        continue
                    if not task.cancelled() and (exc := task.exception()):
                        logger.error(
                            f"Runner task {task.get_name()} failed: {exc}",
                            exc_info=exc,
                        )
                    else:
                        logger.warning(f"Runner task {task.get_name()} finished")

            if not pending:
                logger.error("All schedule runners have stopped")
        finally:
            for runner in self._runners:
                runner.stop()
            for task in [*tasks, shutdown_task]:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, shutdown_task, return_exceptions=True)
            if install_signal_handlers:
                loop = asyncio.get_running_loop()
                for sig in (signal.SIGTERM, signal.SIGINT):
                    loop.remove_signal_handler(sig)
            logger.info("Reminder service stopped")


async def run_service(config: ReminderConfig) -> None:
    """Run the service against Slack until terminated.

    Raises:
        ConfigError: If credentials are missing.
        RecurrenceParseError: If any schedule is invalid.
    """
    token, _ = config.require_credentials()
    async with SlackClient(
        token,
        base_url=config.slack.base_url,
        timeout=config.slack.timeout,
    ) as slack:
        service = ReminderService(config, slack)
        service.build_runners()
        for runner in service.runners:
            logger.info(
                f"Schedule {runner.name}: '{runner.calculator.expression}' "
                f"-> {runner.notification.channel}"
            )
        await service.run(install_signal_handlers=True)
