"""Inbox ranking: which end user a staff member should attend to next.

Score bands are spaced by orders of magnitude so secondary signals never lift
a conversation across a tier boundary:

  unreplied         10000 + up to 1000 for SLA pressure
  not sent today     5000
  up to date         1000
  legacy (no reply state)   0 + 1000 inside the SLA warning window

  + 500 risk, + 300 unreported, + (4 - plan level) * 100,
  + up to 50 for recency, - 5000 when paused (may go negative).
"""
import logging
import math
from datetime import datetime
from typing import Iterable, Sequence
from zoneinfo import ZoneInfo

from concierge.models.inbox import (
    PLAN_PRIORITY_LEVELS, PlanCode, UserStatus, ReplyStatus, SortBy,
    InboxSignal, ConversationActivity, InboxItem, InboxFilters, InboxSummary,
)
from concierge.services.sla_service import (
    BUSINESS_TZ, as_aware, utcnow, business_midnight, minutes_since,
    calculate_sla_remaining, is_unreported, has_sent_message_today, is_birthday_today,
)

logger = logging.getLogger(__name__)

UNREPLIED_BASE = 10000
SLA_PRESSURE_MAX = 1000
NOT_SENT_TODAY_BASE = 5000
UP_TO_DATE_BASE = 1000
LEGACY_SLA_WARNING_BONUS = 1000
RISK_BONUS = 500
UNREPORTED_BONUS = 300
PLAN_LEVEL_CEILING = 4
PLAN_LEVEL_STEP = 100
RECENCY_BONUS_MAX = 50
PAUSED_PENALTY = 5000


def calculate_inbox_priority(signal: InboxSignal, now: datetime | None = None) -> int:
    """Ranking score for one conversation. Higher = more urgent, unbounded."""
    score = 0

    if signal.has_unreplied_message is None:
        # Legacy path for callers that never computed reply state
        if (
            signal.sla_remaining_minutes is not None
            and signal.sla_remaining_minutes <= signal.sla_warning_minutes
        ):
            score += LEGACY_SLA_WARNING_BONUS
    elif signal.has_unreplied_message:
        score += UNREPLIED_BASE
        if signal.sla_remaining_minutes is not None:
            score += max(0, SLA_PRESSURE_MAX - signal.sla_remaining_minutes)
    elif not signal.has_sent_today_message:
        score += NOT_SENT_TODAY_BASE
    else:
        score += UP_TO_DATE_BASE

    if signal.has_risk:
        score += RISK_BONUS
    if signal.is_unreported:
        score += UNREPORTED_BONUS

    # Level 1 (premium) = +300 ... level 3 (light) = +100; 4+ is not guarded
    score += (PLAN_LEVEL_CEILING - signal.plan_priority_level) * PLAN_LEVEL_STEP

    if signal.last_message_at is not None:
        now = as_aware(now or utcnow())
        age_hours = (now - as_aware(signal.last_message_at)).total_seconds() / 3600
        score += max(0, RECENCY_BONUS_MAX - math.floor(age_hours))

    if signal.is_paused:
        score -= PAUSED_PENALTY

    return score


def sort_by_priority(items: Iterable[InboxItem]) -> list[InboxItem]:
    """Descending score; ties keep their input order."""
    return sorted(items, key=lambda i: i.priority_score, reverse=True)


def plan_priority_level(plan_code: str) -> int:
    try:
        return PLAN_PRIORITY_LEVELS[PlanCode(plan_code)]
    except ValueError:
        return PLAN_PRIORITY_LEVELS[PlanCode.STANDARD]


class InboxService:
    """Builds the staff inbox from caller-supplied conversation activity."""

    def __init__(
        self,
        plan_sla: dict[str, tuple[int, int]],
        unreported_threshold_days: int = 2,
        tz: ZoneInfo = BUSINESS_TZ,
    ):
        self.plan_sla = plan_sla
        self.unreported_threshold_days = unreported_threshold_days
        self.tz = tz

    def sla_for_plan(self, plan_code: str) -> tuple[int, int]:
        """(sla_minutes, warning_minutes); unknown plans get the standard window."""
        if plan_code in self.plan_sla:
            return self.plan_sla[plan_code]
        logger.debug(f'Unknown plan {plan_code!r}, using standard SLA')
        return self.plan_sla[PlanCode.STANDARD.value]

    def build_item(self, activity: ConversationActivity, now: datetime | None = None) -> InboxItem:
        now = as_aware(now or utcnow())
        sla_minutes, warning_minutes = self.sla_for_plan(activity.plan_code)

        last_in = activity.last_user_message_at
        last_out = activity.last_cast_message_at

        # Unreplied = the user spoke last
        has_unreplied = False
        unreplied_minutes = None
        sla_remaining = None
        if last_in is not None and (last_out is None or as_aware(last_in) > as_aware(last_out)):
            has_unreplied = True
            unreplied_minutes = minutes_since(last_in, now)
            sla_remaining = calculate_sla_remaining(last_in, sla_minutes, now)

        sent_today = has_sent_message_today(last_out, now, self.tz)

        if has_unreplied:
            reply_status = ReplyStatus.UNREPLIED
        elif not sent_today:
            reply_status = ReplyStatus.NOT_SENT_TODAY
        else:
            reply_status = ReplyStatus.REPLIED

        # Check-ins are whole days; count them from JST midnight
        last_checkin_at = (
            business_midnight(activity.last_checkin_on, self.tz)
            if activity.last_checkin_on else None
        )
        unreported = is_unreported(
            last_checkin_at, last_in, self.unreported_threshold_days, now,
        )

        signal = InboxSignal(
            has_risk=activity.has_open_risk,
            sla_remaining_minutes=sla_remaining,
            sla_warning_minutes=warning_minutes,
            is_unreported=unreported,
            is_paused=activity.status == UserStatus.PAUSED.value,
            plan_priority_level=plan_priority_level(activity.plan_code),
            has_unreplied_message=has_unreplied,
            has_sent_today_message=sent_today,
            last_message_at=last_in,
        )

        return InboxItem(
            id=activity.id,
            nickname=activity.nickname,
            plan_code=activity.plan_code,
            status=activity.status,
            assigned_cast_id=activity.assigned_cast_id,
            tags=list(activity.tags),
            priority_score=calculate_inbox_priority(signal, now),
            has_risk=activity.has_open_risk,
            risk_level=activity.risk_level,
            last_user_message_at=last_in,
            last_cast_message_at=last_out,
            unreplied_minutes=unreplied_minutes,
            sla_remaining_minutes=sla_remaining,
            sla_warning_minutes=warning_minutes,
            is_unreported=unreported,
            last_checkin_on=activity.last_checkin_on,
            birthday=activity.birthday,
            is_birthday_today=is_birthday_today(activity.birthday, now, self.tz),
            has_unreplied_message=has_unreplied,
            has_sent_today_message=sent_today,
            today_sent_count=activity.today_sent_count,
            reply_status=reply_status,
        )

    @staticmethod
    def summarize(items: Sequence[InboxItem]) -> InboxSummary:
        return InboxSummary(
            total=len(items),
            unreplied=sum(1 for i in items if i.reply_status == ReplyStatus.UNREPLIED),
            not_sent_today=sum(1 for i in items if i.reply_status == ReplyStatus.NOT_SENT_TODAY),
            replied=sum(1 for i in items if i.reply_status == ReplyStatus.REPLIED),
        )

    @staticmethod
    def select_activities(
        activities: Iterable[ConversationActivity],
        filters: InboxFilters,
    ) -> list[ConversationActivity]:
        """Account-level filters, applied before any scoring."""
        selected = []
        for a in activities:
            # Users who never finished sign-up never show up in the inbox
            if a.status == UserStatus.INCOMPLETE.value:
                continue
            if filters.plan_codes and a.plan_code not in filters.plan_codes:
                continue
            if filters.statuses and a.status not in filters.statuses:
                continue
            if filters.assigned_cast_id and a.assigned_cast_id != filters.assigned_cast_id:
                continue
            if filters.unassigned_only and a.assigned_cast_id is not None:
                continue
            selected.append(a)
        return selected

    @staticmethod
    def filter_items(items: Iterable[InboxItem], filters: InboxFilters) -> list[InboxItem]:
        """State-level filters that depend on derived fields."""
        result = list(items)
        if filters.reply_status == ReplyStatus.UNREPLIED.value:
            result = [i for i in result if i.has_unreplied_message]
        elif filters.reply_status == ReplyStatus.NOT_SENT_TODAY.value:
            result = [
                i for i in result
                if not i.has_unreplied_message and not i.has_sent_today_message
            ]
        if filters.has_risk:
            result = [i for i in result if i.has_risk]
        if filters.is_unreported:
            result = [i for i in result if i.is_unreported]
        return result

    @staticmethod
    def sort_items(items: Iterable[InboxItem], sort_by: SortBy = SortBy.PRIORITY) -> list[InboxItem]:
        if sort_by == SortBy.LAST_MESSAGE:
            # Newest user message first; users who never wrote go last
            return sorted(
                items,
                key=lambda i: (
                    i.last_user_message_at is not None,
                    as_aware(i.last_user_message_at).timestamp() if i.last_user_message_at else 0,
                ),
                reverse=True,
            )
        if sort_by == SortBy.NICKNAME:
            return sorted(items, key=lambda i: i.nickname.casefold())
        return sort_by_priority(items)

    def build_inbox(
        self,
        activities: Iterable[ConversationActivity],
        filters: InboxFilters | None = None,
        now: datetime | None = None,
    ) -> tuple[list[InboxItem], InboxSummary]:
        """Score, summarize, filter and sort. The summary ignores state filters."""
        filters = filters or InboxFilters()
        now = as_aware(now or utcnow())

        selected = self.select_activities(activities, filters)
        items = [self.build_item(a, now) for a in selected]
        summary = self.summarize(items)

        visible = self.sort_items(self.filter_items(items, filters), filters.sort_by)
        logger.debug(
            f'Inbox built: {summary.total} users, {len(visible)} visible, '
            f'{summary.unreplied} unreplied'
        )
        return visible, summary
