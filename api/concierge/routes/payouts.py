"""Payout rule resolution & gift pricing endpoints."""
from fastapi import APIRouter, HTTPException

from concierge.config import settings
from concierge.exceptions import PayoutRuleNotFound
from concierge.schemas.payout import (
    PayoutRuleSchema, ResolveRuleRequest, ResolveRuleResponse,
    PriceGiftRequest, GiftRevenueResponse,
)
from concierge.services.payout_rule_service import PayoutRuleService, resolve_payout_rule

router = APIRouter()


@router.post('/resolve', response_model=ResolveRuleResponse)
async def resolve(req: ResolveRuleRequest):
    """Find the rule governing a gift send. ``rule`` is null when none applies."""
    rule = resolve_payout_rule(
        [r.to_model() for r in req.rules],
        req.cast_id,
        req.gift_id,
        req.gift_category,
        req.occurred_on,
    )
    return ResolveRuleResponse(
        rule=PayoutRuleSchema.model_validate(rule) if rule else None
    )


@router.post('/price', response_model=GiftRevenueResponse)
async def price(req: PriceGiftRequest):
    """Tax + payout for a single gift send."""
    tax_rate = req.tax_rate if req.tax_rate is not None else settings.default_tax_rate
    svc = PayoutRuleService([r.to_model() for r in req.rules], tax_rate)
    try:
        return svc.price_gift_send(
            req.amount_excl_tax,
            req.cast_id,
            req.gift_id,
            req.gift_category,
            req.occurred_on,
            fallback_percent=req.fallback_percent,
        )
    except PayoutRuleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
