from fastapi import APIRouter

from concierge.schemas.ledger import BalanceRequest, BalanceResponse
from concierge.services.calculation_service import calculate_balance

router = APIRouter()


@router.post('/balance', response_model=BalanceResponse)
async def balance(req: BalanceRequest):
    """Sum a user's ledger entries. No clamping at zero."""
    entries = [e.to_model() for e in req.entries]
    return BalanceResponse(balance=calculate_balance(entries), entry_count=len(entries))
