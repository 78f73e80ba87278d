"""Staff inbox ranking endpoints."""
from zoneinfo import ZoneInfo

from fastapi import APIRouter

from concierge.config import settings
from concierge.schemas.inbox import (
    PriorityRequest, PriorityResponse, InboxRequest, InboxResponse,
    InboxItemResponse, InboxSummaryResponse,
)
from concierge.services.inbox_service import InboxService, calculate_inbox_priority

router = APIRouter()


@router.post('/priority', response_model=PriorityResponse)
async def priority(req: PriorityRequest):
    """Score a single conversation."""
    return PriorityResponse(
        priority_score=calculate_inbox_priority(req.signal.to_model(), req.now)
    )


@router.post('', response_model=InboxResponse)
async def build_inbox(req: InboxRequest):
    """Rank the supplied conversations. Summary counts ignore reply/risk filters."""
    svc = InboxService(
        settings.plan_sla(),
        settings.unreported_threshold_days,
        ZoneInfo(settings.business_timezone),
    )
    items, summary = svc.build_inbox(
        [a.to_model() for a in req.activities],
        req.filters.to_model(),
        req.now,
    )
    return InboxResponse(
        items=[InboxItemResponse.model_validate(i) for i in items],
        summary=InboxSummaryResponse.model_validate(summary),
    )
