from datetime import datetime
from pydantic import BaseModel

from concierge.models.settlement import (
    BatchStatus, PayoutCalculation, SettlementItem, SettlementBatch,
)
from concierge.schemas.types import IsoDate


class PayoutCalculationSchema(BaseModel):
    id: str
    cast_id: str
    amount: int
    occurred_on: IsoDate
    settlement_batch_id: str | None = None

    def to_model(self) -> PayoutCalculation:
        return PayoutCalculation(**self.model_dump())


class CreateBatchRequest(BaseModel):
    """Settle every unbatched calculation between period_from and period_to."""
    calculations: list[PayoutCalculationSchema] = []
    period_from: IsoDate
    period_to: IsoDate
    now: datetime | None = None


class SettlementItemSchema(BaseModel):
    cast_id: str
    amount: int
    calculation_count: int

    class Config:
        from_attributes = True


class SettlementBatchSchema(BaseModel):
    id: str
    period_from: str
    period_to: str
    status: BatchStatus
    total_amount: int
    cast_count: int = 0
    items: list[SettlementItemSchema] = []
    created_at: datetime | None = None
    approved_at: datetime | None = None
    paid_at: datetime | None = None

    class Config:
        from_attributes = True

    def to_model(self) -> SettlementBatch:
        return SettlementBatch(
            id=self.id,
            period_from=self.period_from,
            period_to=self.period_to,
            status=self.status,
            total_amount=self.total_amount,
            items=[SettlementItem(**i.model_dump()) for i in self.items],
            created_at=self.created_at,
            approved_at=self.approved_at,
            paid_at=self.paid_at,
        )


class CreateBatchResponse(BaseModel):
    batch: SettlementBatchSchema
    calculation_ids: list[str]


class BatchTransitionRequest(BaseModel):
    batch: SettlementBatchSchema
    now: datetime | None = None
