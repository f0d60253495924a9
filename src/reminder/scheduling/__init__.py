"""Scheduling subsystem — recurring notification delivery.

Public API:
- RecurrenceCalculator: Parses six-field cron expressions into occurrences
- ScheduleRunner: Waits for each occurrence and fires a notification

Types:
- Notification: Channel/text pair sent at each occurrence
- NotificationSink: Async delivery capability used by runners
- SendOutcome: Result of one delivery attempt
"""

from reminder.scheduling.recurrence import (
    FIELD_NAMES,
    RecurrenceCalculator,
    RecurrenceParseError,
)
from reminder.scheduling.runner import ScheduleRunner, sleep_monotonic
from reminder.scheduling.types import (
    DeliveryError,
    Notification,
    NotificationSink,
    SendOutcome,
)

__all__ = [
    "FIELD_NAMES",
    "DeliveryError",
    "Notification",
    "NotificationSink",
    "RecurrenceCalculator",
    "RecurrenceParseError",
    "ScheduleRunner",
    "SendOutcome",
    "sleep_monotonic",
]
