"""
Civil Date Utilities (fixed UTC+05:30)

Every date string in the tracker is a civil date in a fixed UTC+05:30 offset,
formatted YYYY-MM-DD. The host's local timezone and DST rules are never
consulted.

CRITICAL RULES:
- Always derive "today" through today(), never date.today()
- Always do day arithmetic on calendar dates (timedelta(days=...)), never
  by subtracting elapsed seconds from a timestamp
- Never mix host-local dates with these strings
"""

import calendar
import logging
from datetime import date, datetime, timedelta, timezone
from typing import List

import pytz

logger = logging.getLogger(__name__)

# +05:30 expressed in minutes
CIVIL_OFFSET_MINUTES = 330
CIVIL_TZ = pytz.FixedOffset(CIVIL_OFFSET_MINUTES)

DATE_FORMAT = "%Y-%m-%d"


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)

    Returns:
        Current datetime in UTC with timezone info
    """
    return datetime.now(timezone.utc)


def to_civil(dt: datetime) -> datetime:
    """
    Convert a datetime to the civil offset

    Args:
        dt: Datetime to convert (naive values are assumed to be UTC)

    Returns:
        Timezone-aware datetime at UTC+05:30
    """
    if dt.tzinfo is None:
        logger.warning(f"Received naive datetime, assuming UTC: {dt}")
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(CIVIL_TZ)


def now() -> datetime:
    """Current instant shifted to UTC+05:30"""
    return to_civil(now_utc())


def timestamp_ms() -> int:
    """Current instant as epoch milliseconds (used for updatedAt / createdAt)"""
    return int(now_utc().timestamp() * 1000)


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD"""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date(date_str: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date

    Raises:
        ValueError: If date_str is not in YYYY-MM-DD format
    """
    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid date format '{date_str}'. Expected YYYY-MM-DD") from e


def today_date() -> date:
    """Today's civil date as a date object"""
    return now().date()


def today() -> str:
    """Today's civil date as YYYY-MM-DD"""
    return format_date(today_date())


def is_today(date_str: str) -> bool:
    """Check if a date string is today's civil date"""
    return date_str == today()


def days_ago(n: int) -> str:
    """
    Get the date string n calendar days before today

    Negative n yields future dates.
    """
    return format_date(today_date() - timedelta(days=n))


def dates_in_month(year: int, month: int) -> List[str]:
    """
    Get every date of a month, in order

    Args:
        year: Calendar year
        month: 0-indexed month (0 = January); values outside 0-11 roll into
            the neighbouring years

    Returns:
        List of YYYY-MM-DD strings, one per day of the month
    """
    year += month // 12
    month = month % 12
    days_in_month = calendar.monthrange(year, month + 1)[1]
    return [format_date(date(year, month + 1, day)) for day in range(1, days_in_month + 1)]


def day_of_week(date_str: str) -> int:
    """
    Day of week for a plain calendar date

    Returns:
        0 = Sunday ... 6 = Saturday
    """
    # date.weekday() is 0 = Monday
    return (parse_date(date_str).weekday() + 1) % 7


def format_display(date_str: str) -> str:
    """
    Format a date for display (e.g., "Today", "Yesterday", "Friday, 15 Mar")
    """
    current = today_date()
    if date_str == format_date(current):
        return "Today"
    if date_str == format_date(current - timedelta(days=1)):
        return "Yesterday"

    value = parse_date(date_str)
    return f"{value.strftime('%A')}, {value.day} {value.strftime('%b')}"
