from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class PlanCode(str, Enum):
    LIGHT = 'light'
    STANDARD = 'standard'
    PREMIUM = 'premium'


# 1 = most attentive tier
PLAN_PRIORITY_LEVELS = {
    PlanCode.PREMIUM: 1,
    PlanCode.STANDARD: 2,
    PlanCode.LIGHT: 3,
}


class UserStatus(str, Enum):
    TRIAL = 'trial'
    ACTIVE = 'active'
    PAST_DUE = 'past_due'
    PAUSED = 'paused'
    CANCELED = 'canceled'
    INCOMPLETE = 'incomplete'


class ReplyStatus(str, Enum):
    UNREPLIED = 'unreplied'
    NOT_SENT_TODAY = 'not_sent_today'
    REPLIED = 'replied'


class SortBy(str, Enum):
    PRIORITY = 'priority'
    LAST_MESSAGE = 'last_message'
    NICKNAME = 'nickname'


@dataclass(frozen=True)
class InboxSignal:
    """Ranking inputs for one conversation, rebuilt on every inbox render.

    ``has_unreplied_message=None`` selects the legacy SLA-only scoring used by
    call sites that never computed reply state.
    """
    has_risk: bool
    sla_remaining_minutes: int | None
    sla_warning_minutes: int
    is_unreported: bool
    is_paused: bool
    plan_priority_level: int
    has_unreplied_message: bool | None = None
    has_sent_today_message: bool = False
    last_message_at: datetime | None = None


@dataclass(frozen=True)
class ConversationActivity:
    """Raw per-user activity gathered by the caller."""
    id: str
    nickname: str
    plan_code: str
    status: str
    assigned_cast_id: str | None = None
    tags: list[str] = field(default_factory=list)
    birthday: date | None = None
    has_open_risk: bool = False
    risk_level: int | None = None
    last_user_message_at: datetime | None = None
    last_cast_message_at: datetime | None = None
    last_checkin_on: date | None = None
    today_sent_count: int = 0


@dataclass(frozen=True)
class InboxItem:
    id: str
    nickname: str
    plan_code: str
    status: str
    assigned_cast_id: str | None
    tags: list[str]
    priority_score: int
    has_risk: bool
    risk_level: int | None
    last_user_message_at: datetime | None
    last_cast_message_at: datetime | None
    unreplied_minutes: int | None
    sla_remaining_minutes: int | None
    sla_warning_minutes: int
    is_unreported: bool
    last_checkin_on: date | None
    birthday: date | None
    is_birthday_today: bool
    has_unreplied_message: bool
    has_sent_today_message: bool
    today_sent_count: int
    reply_status: ReplyStatus


@dataclass(frozen=True)
class InboxFilters:
    plan_codes: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)
    assigned_cast_id: str | None = None
    unassigned_only: bool = False
    has_risk: bool = False
    is_unreported: bool = False
    reply_status: str = 'all'
    sort_by: SortBy = SortBy.PRIORITY


@dataclass(frozen=True)
class InboxSummary:
    total: int = 0
    unreplied: int = 0
    not_sent_today: int = 0
    replied: int = 0
