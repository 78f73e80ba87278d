from datetime import date, datetime
from pydantic import BaseModel, Field

from concierge.models.inbox import (
    ReplyStatus, SortBy, InboxSignal, ConversationActivity, InboxFilters,
)


class InboxSignalSchema(BaseModel):
    """Signals for a single conversation. Leave has_unreplied_message unset
    to get the legacy SLA-only score."""
    has_risk: bool = False
    sla_remaining_minutes: int | None = None
    sla_warning_minutes: int = Field(..., ge=0)
    is_unreported: bool = False
    is_paused: bool = False
    plan_priority_level: int = Field(..., ge=1)
    has_unreplied_message: bool | None = None
    has_sent_today_message: bool = False
    last_message_at: datetime | None = None

    def to_model(self) -> InboxSignal:
        return InboxSignal(**self.model_dump())


class PriorityRequest(BaseModel):
    signal: InboxSignalSchema
    now: datetime | None = None


class PriorityResponse(BaseModel):
    priority_score: int


class ConversationActivitySchema(BaseModel):
    id: str
    nickname: str
    plan_code: str
    status: str
    assigned_cast_id: str | None = None
    tags: list[str] = []
    birthday: date | None = None
    has_open_risk: bool = False
    risk_level: int | None = None
    last_user_message_at: datetime | None = None
    last_cast_message_at: datetime | None = None
    last_checkin_on: date | None = None
    today_sent_count: int = Field(0, ge=0)

    def to_model(self) -> ConversationActivity:
        return ConversationActivity(**self.model_dump())


class InboxFiltersSchema(BaseModel):
    plan_codes: list[str] = []
    statuses: list[str] = []
    assigned_cast_id: str | None = None
    unassigned_only: bool = False
    has_risk: bool = False
    is_unreported: bool = False
    reply_status: str = Field('all', pattern='^(all|unreplied|not_sent_today)$')
    sort_by: SortBy = SortBy.PRIORITY

    def to_model(self) -> InboxFilters:
        return InboxFilters(**self.model_dump())


class InboxRequest(BaseModel):
    activities: list[ConversationActivitySchema] = []
    filters: InboxFiltersSchema = InboxFiltersSchema()
    now: datetime | None = None


class InboxItemResponse(BaseModel):
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

    class Config:
        from_attributes = True


class InboxSummaryResponse(BaseModel):
    total: int
    unreplied: int
    not_sent_today: int
    replied: int

    class Config:
        from_attributes = True


class InboxResponse(BaseModel):
    items: list[InboxItemResponse]
    summary: InboxSummaryResponse
