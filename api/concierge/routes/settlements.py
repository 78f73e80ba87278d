"""Settlement batch endpoints (draft -> approved -> paid)."""
from fastapi import APIRouter, HTTPException, status

from concierge.exceptions import (
    InvalidSettlementPeriod, EmptySettlementPeriod, InvalidBatchTransition,
)
from concierge.schemas.settlement import (
    CreateBatchRequest, CreateBatchResponse, BatchTransitionRequest, SettlementBatchSchema,
)
from concierge.services.settlement_service import SettlementService

router = APIRouter()


@router.post('/batches', response_model=CreateBatchResponse, status_code=status.HTTP_201_CREATED)
async def create_batch(req: CreateBatchRequest):
    """Draft a batch from the unsettled calculations in a period."""
    svc = SettlementService()
    try:
        batch, claimed = svc.create_batch(
            [c.to_model() for c in req.calculations],
            req.period_from,
            req.period_to,
            req.now,
        )
    except InvalidSettlementPeriod as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmptySettlementPeriod as e:
        raise HTTPException(status_code=409, detail=str(e))

    return CreateBatchResponse(
        batch=SettlementBatchSchema.model_validate(batch),
        calculation_ids=claimed,
    )


@router.post('/batches/approve', response_model=SettlementBatchSchema)
async def approve_batch(req: BatchTransitionRequest):
    svc = SettlementService()
    try:
        batch = svc.approve(req.batch.to_model(), req.now)
    except InvalidBatchTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SettlementBatchSchema.model_validate(batch)


@router.post('/batches/pay', response_model=SettlementBatchSchema)
async def pay_batch(req: BatchTransitionRequest):
    svc = SettlementService()
    try:
        batch = svc.mark_paid(req.batch.to_model(), req.now)
    except InvalidBatchTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SettlementBatchSchema.model_validate(batch)
