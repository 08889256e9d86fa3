"""
Cron schedules evaluated in a configurable timezone.

Field parsing and matching are done by croniter, which reads the standard
five fields with names, ranges, steps and the @ macros, plus ``L`` (last day
of month), ``#`` (nth weekday) and an optional trailing seconds field. When
both day fields are restricted a day matches if either one matches, as in
Vixie cron.

This module resolves the schedule's timezone and maps croniter's wall-clock
results back to instants, skipping wall times that a DST transition removes
and visiting both passes through a repeated hour.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from croniter import CroniterError, croniter

from ..errors import InvalidConfigurationError, InvalidScheduleError
from ..utils.time import ensure_utc, utc_now

# One Gregorian cycle; every calendar date recurs on every weekday within it
MAX_YEARS_BETWEEN_MATCHES = 400

_DAY_OF_MONTH = 2
_DAY_OF_WEEK = 4

# Last weekday of the month, "5L" in Quartz notation and "L5" in croniter's
_LAST_WEEKDAY = re.compile(r"^([0-7])L$", re.IGNORECASE)


def resolve_timezone(name: Union[str, tzinfo, None]) -> tzinfo:
    """
    Resolve a timezone name to a tzinfo.

    Raises:
        InvalidConfigurationError: If the name is not a known IANA zone
    """
    if name is None:
        return timezone.utc
    if isinstance(name, tzinfo):
        return name
    if not isinstance(name, str):
        raise InvalidConfigurationError(
            f"Timezone must be a string, got {type(name).__name__}",
            field="schedule.timezone",
            value=name,
        )
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidConfigurationError(
            f"Unknown timezone: {name}",
            field="schedule.timezone",
            value=name,
        ) from e


def normalize_expression(expression: str) -> str:
    """Rewrite day-field spellings croniter does not read into ones it does."""
    parts = expression.split()
    if len(parts) < 5:
        return " ".join(parts)

    for index in (_DAY_OF_MONTH, _DAY_OF_WEEK):
        if parts[index] == "?":
            parts[index] = "*"
    parts[_DAY_OF_WEEK] = _LAST_WEEKDAY.sub(r"L\1", parts[_DAY_OF_WEEK])
    return " ".join(parts)


@dataclass(frozen=True)
class CronSchedule:
    """Immutable cron expression bound to the timezone it is evaluated in."""

    expression: str
    fields: str
    zone: tzinfo = timezone.utc

    @classmethod
    def parse(cls, expression: str, zone: Union[str, tzinfo, None] = None) -> "CronSchedule":
        """
        Parse a cron expression.

        Args:
            expression: Cron expression or one of the @ macros
            zone: Timezone the fields are evaluated in, UTC by default

        Returns:
            Parsed schedule

        Raises:
            InvalidScheduleError: If the expression is malformed or can never match
            InvalidConfigurationError: If the timezone is unknown
        """
        if not isinstance(expression, str):
            raise InvalidScheduleError(
                f"Cron expression must be a string, got {type(expression).__name__}",
                expression=expression,
            )

        fields = normalize_expression(expression.strip())
        if not croniter.is_valid(fields):
            raise InvalidScheduleError(
                f"Invalid cron expression: {expression!r}",
                expression=expression,
            )

        schedule = cls(expression=expression, fields=fields, zone=resolve_timezone(zone))

        try:
            schedule.next(utc_now())
        except InvalidScheduleError as e:
            raise InvalidScheduleError(
                f"Cron expression never matches any date: {expression!r}",
                expression=expression,
            ) from e

        return schedule

    def matches(self, instant: datetime) -> bool:
        """Check whether the minute (or second) containing instant satisfies every field."""
        local = ensure_utc(instant).astimezone(self.zone).replace(tzinfo=None)
        return bool(croniter.match(self.fields, local))

    def next(self, from_time: datetime) -> datetime:
        """
        Return the first occurrence strictly after from_time.

        Naive datetimes are taken to be UTC. The result is expressed in the
        schedule's timezone.

        Raises:
            InvalidScheduleError: If nothing matches within MAX_YEARS_BETWEEN_MATCHES
        """
        start = ensure_utc(from_time)
        local = start.astimezone(self.zone)
        wall = local.replace(tzinfo=None)

        # From the first pass through a repeated hour, the second pass
        # revisits wall times that are already behind
        repeated = local.replace(fold=0).utcoffset() - local.replace(fold=1).utcoffset()
        if not local.fold and repeated > timedelta(0):
            wall -= repeated

        best: Optional[datetime] = None
        try:
            iterator = croniter(
                self.fields, wall,
                max_years_between_matches=MAX_YEARS_BETWEEN_MATCHES,
            )
            while True:
                instants = self._localize(iterator.get_next(datetime))
                if best is not None and instants and instants[0] >= best:
                    return best.astimezone(self.zone)
                for instant in instants:
                    if instant > start and (best is None or instant < best):
                        best = instant
        except CroniterError as e:
            # The last occurrence of a schedule restricted by year
            if best is not None:
                return best.astimezone(self.zone)
            raise InvalidScheduleError(
                f"No occurrence found within {MAX_YEARS_BETWEEN_MATCHES} years: {self.expression!r}",
                expression=self.expression,
            ) from e

    def _localize(self, wall: datetime) -> list[datetime]:
        """UTC instants at which the zone's clock reads wall, earliest first."""
        instants = []
        for fold in (0, 1):
            as_utc = wall.replace(tzinfo=self.zone, fold=fold).astimezone(timezone.utc)
            if as_utc.astimezone(self.zone).replace(tzinfo=None) != wall:
                continue
            if as_utc not in instants:
                instants.append(as_utc)
        return sorted(instants)

    def __str__(self) -> str:
        return self.expression
