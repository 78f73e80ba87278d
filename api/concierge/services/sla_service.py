"""Time-derived conversation state: SLA clock, unreported flag, sent-today.

Every function takes an optional ``now``; naive datetimes are read as UTC.
Calendar-day questions are answered in the business timezone (JST), never in
UTC or the host's local zone.
"""
import math
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

BUSINESS_TZ = ZoneInfo('Asia/Tokyo')


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes; leave aware ones alone."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def business_date(moment: datetime, tz: ZoneInfo = BUSINESS_TZ) -> date:
    """Calendar date of ``moment`` in the operational timezone."""
    return as_aware(moment).astimezone(tz).date()


def business_midnight(day: date, tz: ZoneInfo = BUSINESS_TZ) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def minutes_since(moment: datetime, now: datetime | None = None) -> int:
    now = as_aware(now or utcnow())
    return math.floor((now - as_aware(moment)).total_seconds() / 60)


def calculate_sla_remaining(
    last_user_message_at: datetime | None,
    sla_minutes: int,
    now: datetime | None = None,
) -> int | None:
    """Whole minutes left before the reply deadline.

    None means no clock is running. 0 means the SLA is breached; the overdue
    magnitude is deliberately not reported.
    """
    if last_user_message_at is None:
        return None

    now = as_aware(now or utcnow())
    deadline = as_aware(last_user_message_at) + timedelta(minutes=sla_minutes)
    remaining = math.floor((deadline - now).total_seconds() / 60)
    return max(0, remaining)


def is_unreported(
    last_checkin_at: datetime | None,
    last_message_at: datetime | None,
    threshold_days: int = 2,
    now: datetime | None = None,
) -> bool:
    """True only when BOTH the last check-in and the last message are stale.

    A signal is stale when absent or strictly older than ``threshold_days``.
    """
    now = as_aware(now or utcnow())
    threshold = timedelta(days=threshold_days)

    def stale(moment: datetime | None) -> bool:
        return moment is None or now - as_aware(moment) > threshold

    return stale(last_checkin_at) and stale(last_message_at)


def has_sent_message_today(
    last_sent_at: datetime | None,
    now: datetime | None = None,
    tz: ZoneInfo = BUSINESS_TZ,
) -> bool:
    """Whether the last outbound message falls on today's JST calendar date."""
    if last_sent_at is None:
        return False
    return business_date(last_sent_at, tz) == business_date(now or utcnow(), tz)


def is_birthday_today(
    birthday: date | None,
    now: datetime | None = None,
    tz: ZoneInfo = BUSINESS_TZ,
) -> bool:
    """Month/day match against today's JST date (Feb 29 only matches leap days)."""
    if birthday is None:
        return False
    today = business_date(now or utcnow(), tz)
    return (birthday.month, birthday.day) == (today.month, today.day)
