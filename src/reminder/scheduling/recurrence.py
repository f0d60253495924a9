"""Recurrence calculator for six-field cron expressions.

Expressions use the field order ``second minute hour day_of_month month
day_of_week``. Each field accepts literals, ``*``, ranges, steps, lists and
three-letter month/day names, e.g. ``0 0 14 * * SUN`` for every Sunday at
14:00:00 UTC.

When both day-of-month and day-of-week are restricted, a date matches if
either field matches (the classic cron convention).

Day-of-week numbers run 0-6 from Sunday; ``7`` is also accepted as Sunday.
"""

import logging
from collections.abc import Iterator
from datetime import UTC, datetime
from itertools import islice

from croniter import CroniterBadDateError, croniter

logger = logging.getLogger(__name__)

FIELD_NAMES = (
    "second",
    "minute",
    "hour",
    "day_of_month",
    "month",
    "day_of_week",
)


class RecurrenceParseError(ValueError):
    """Raised when a recurrence expression cannot be parsed."""

    def __init__(
        self,
        expression: str,
        reason: str,
        field: str | None = None,
        value: str | None = None,
    ):
        self.expression = expression
        self.reason = reason
        self.field = field
        self.value = value
        if field:
            message = (
                f"Invalid {field} field {value!r} in recurrence "
                f"{expression!r}: {reason}"
            )
        else:
            message = f"Invalid recurrence {expression!r}: {reason}"
        super().__init__(message)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _normalize_day_of_week(value: str) -> str:
    """Map the alternate Sunday literal ``7`` onto ``0``.

    Handles ``7`` alone, as a list item, and as the end of a range
    (``5-7`` becomes ``5,6,0``). Anything else is left for croniter to judge.
    """
    parts: list[str] = []
    for part in value.split(","):
        span, slash, step = part.partition("/")
        start, dash, end = span.partition("-")
        if span == "7" and not slash:
            parts.append("0")
        elif (
            dash
            and end == "7"
            and start.isdigit()
            and int(start) <= 7
            and (not slash or (step.isdigit() and int(step) > 0))
        ):
            days = range(int(start), 8, int(step) if slash else 1)
            parts.extend(str(day % 7) for day in days)
        else:
            parts.append(part)
    return ",".join(dict.fromkeys(parts))


def _build(expression: str, start: datetime | None = None) -> croniter:
    return croniter(
        expression,
        start,
        day_or=True,
        second_at_beginning=True,
    )


class RecurrenceCalculator:
    """Produces future occurrences of a parsed recurrence expression.

    Example:
        calc = RecurrenceCalculator.parse("0 0 14 * * SUN")
        for when in calc.upcoming(datetime.now(UTC)):
            ...
    """

    def __init__(self, expression: str):
        self._expression = expression

    @property
    def expression(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f"RecurrenceCalculator({self._expression!r})"

    @classmethod
    def parse(cls, expression: str) -> "RecurrenceCalculator":
        """Parse and validate an expression.

        Raises:
            RecurrenceParseError: If the field count is wrong or any field is
                invalid. The error names the first offending field.
        """
        normalized = " ".join(expression.split())
        fields = normalized.split(" ") if normalized else []
        if len(fields) != len(FIELD_NAMES):
            raise RecurrenceParseError(
                expression,
                f"expected {len(FIELD_NAMES)} fields "
                f"({' '.join(FIELD_NAMES)}), got {len(fields)}",
            )
        raw_fields = list(fields)
        fields[-1] = _normalize_day_of_week(fields[-1])
        normalized = " ".join(fields)

        # Check each field alone against wildcards so the error identifies it
        for index, (name, value) in enumerate(zip(FIELD_NAMES, raw_fields)):
            candidate = ["*"] * len(FIELD_NAMES)
            candidate[index] = fields[index]
            try:
                _build(" ".join(candidate))
            except (ValueError, KeyError) as e:
                raise RecurrenceParseError(
                    expression, str(e), field=name, value=value
                ) from e

        # Fields can be individually valid but impossible together
        try:
            _build(normalized)
        except (ValueError, KeyError) as e:
            raise RecurrenceParseError(expression, str(e)) from e

        return cls(normalized)

    def upcoming(self, after: datetime) -> Iterator[datetime]:
        """Yield occurrences strictly after ``after`` in increasing order.

        Naive datetimes are taken as UTC. The sequence is lazy and ends only
        if no further occurrence can be found.
        """
        itr = _build(self._expression, _to_utc(after))
        while True:
            try:
                occurrence = itr.get_next(datetime)
            except CroniterBadDateError:
                logger.debug(f"Recurrence {self._expression!r} has no further dates")
                return
            yield _to_utc(occurrence)

    def next_after(self, after: datetime) -> datetime | None:
        """Get the first occurrence strictly after ``after``, or None."""
        return next(self.upcoming(after), None)

    def preview(self, count: int, after: datetime | None = None) -> list[datetime]:
        """Get up to ``count`` upcoming occurrences (defaults to now)."""
        if count < 0:
            raise ValueError("count must be non-negative")
        start = after if after is not None else datetime.now(UTC)
        return list(islice(self.upcoming(start), count))
