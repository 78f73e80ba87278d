from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BatchStatus(str, Enum):
    """Settlement batches only move forward: draft -> approved -> paid."""
    DRAFT = 'draft'
    APPROVED = 'approved'
    PAID = 'paid'


@dataclass(frozen=True)
class PayoutCalculation:
    """A cast's share of one revenue event, waiting to be settled."""
    id: str
    cast_id: str
    amount: int
    occurred_on: str
    settlement_batch_id: str | None = None


@dataclass(frozen=True)
class SettlementItem:
    cast_id: str
    amount: int
    calculation_count: int


@dataclass(frozen=True)
class SettlementBatch:
    id: str
    period_from: str
    period_to: str
    status: BatchStatus
    total_amount: int
    items: list[SettlementItem] = field(default_factory=list)
    created_at: datetime | None = None
    approved_at: datetime | None = None
    paid_at: datetime | None = None

    @property
    def cast_count(self) -> int:
        return len(self.items)
