"""Tax and payout arithmetic endpoints."""
from fastapi import APIRouter

from concierge.config import settings
from concierge.schemas.calculation import TaxRequest, TaxResponse, PayoutRequest, PayoutResponse
from concierge.services.calculation_service import calculate_tax, calculate_payout

router = APIRouter()


@router.post('/tax', response_model=TaxResponse)
async def tax(req: TaxRequest):
    """Floor-rounded tax. Falls back to the configured rate."""
    rate = req.tax_rate if req.tax_rate is not None else settings.default_tax_rate
    return calculate_tax(req.amount_excl_tax, rate)


@router.post('/payout', response_model=PayoutResponse)
async def payout(req: PayoutRequest):
    """Floor-rounded cast share for a percent (0-100)."""
    return calculate_payout(req.amount_excl_tax, req.percent_rate)
