"""Helper functions for maintenance alert calculations."""

from datetime import date, datetime
from typing import Optional, Union

from dateutil import tz
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .severity import Severity


def parse_timestamp(value: Union[str, date, datetime]) -> datetime:
    """
    Coerce an ISO date/datetime string (or date object) to an aware UTC datetime.

    Plain dates become midnight. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    else:
        moment = isoparse(value)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz.UTC)
    return moment.astimezone(tz.UTC)


def months_elapsed(
    since: Union[date, datetime], until: Union[date, datetime]
) -> int:
    """
    Whole calendar months between two instants.

    Month ends clamp: Jan 31 -> Feb 28 is 1 month, Jan 31 -> Feb 27 is 0.
    Partial months don't count, down to the time of day: Jan 15 18:00 ->
    Feb 15 10:00 is 0 months. Negative if `since` is after `until`.
    """
    delta = relativedelta(parse_timestamp(until), parse_timestamp(since))
    return delta.years * 12 + delta.months


def calc_remaining_km(
    current_km: float, last_km: Optional[float], interval: float
) -> float:
    """
    Distance left before the next service is due.

    - With history: measured from the recorded km of the last service
    - Without history: measured from 0
    """
    baseline = last_km if last_km is not None else 0
    return interval - (current_km - baseline)


def calc_remaining_months(
    last_date: Union[date, datetime], interval: float, now: Union[date, datetime]
) -> float:
    """Months left before the next service is due (negative when overdue)."""
    return interval - months_elapsed(last_date, now)


def distance_severity(remaining: float, high_threshold: float = 500) -> Severity:
    """Severity for a distance-based alert with `remaining` km left."""
    if remaining <= 0:
        return Severity.CRITICAL
    if remaining <= high_threshold:
        return Severity.HIGH
    return Severity.MEDIUM


def format_amount(value: float):
    """Render whole-number floats as ints for messages (1000.0 -> 1000)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
