"""
Settlement Service

Rolls unsettled payout calculations into per-cast settlement batches and
walks batches through draft -> approved -> paid.
"""
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable

from concierge.exceptions import (
    InvalidSettlementPeriod, EmptySettlementPeriod, InvalidBatchTransition,
)
from concierge.models.settlement import (
    BatchStatus, PayoutCalculation, SettlementItem, SettlementBatch,
)
from concierge.services.payout_rule_service import parse_iso_date
from concierge.services.sla_service import as_aware, utcnow

logger = logging.getLogger(__name__)


def validate_period(period_from: str, period_to: str) -> tuple[str, str]:
    try:
        parse_iso_date(period_from)
        parse_iso_date(period_to)
    except ValueError as e:
        raise InvalidSettlementPeriod(str(e)) from e
    if period_from > period_to:
        raise InvalidSettlementPeriod(
            f'Period start {period_from} is after period end {period_to}'
        )
    return period_from, period_to


class SettlementService:
    """Pure settlement bookkeeping; persisting the result is the caller's job."""

    def __init__(self, id_factory: Callable[[], str] | None = None):
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def create_batch(
        self,
        calculations: Iterable[PayoutCalculation],
        period_from: str,
        period_to: str,
        now: datetime | None = None,
    ) -> tuple[SettlementBatch, list[str]]:
        """Build a draft batch from unbatched calculations inside the period.

        Returns (batch, claimed calculation ids).
        """
        validate_period(period_from, period_to)

        eligible = [
            c for c in calculations
            if c.settlement_batch_id is None
            and period_from <= c.occurred_on <= period_to
        ]
        if not eligible:
            raise EmptySettlementPeriod(
                f'No unsettled payouts between {period_from} and {period_to}'
            )

        # cast_id -> [amount, count]
        totals: dict[str, list[int]] = {}
        for calc in eligible:
            t = totals.setdefault(calc.cast_id, [0, 0])
            t[0] += calc.amount
            t[1] += 1

        items = sorted(
            (
                SettlementItem(cast_id=cast_id, amount=amount, calculation_count=count)
                for cast_id, (amount, count) in totals.items()
            ),
            key=lambda i: i.amount,
            reverse=True,
        )

        batch = SettlementBatch(
            id=self.id_factory(),
            period_from=period_from,
            period_to=period_to,
            status=BatchStatus.DRAFT,
            total_amount=sum(i.amount for i in items),
            items=items,
            created_at=as_aware(now or utcnow()),
        )
        logger.info(
            f'Settlement batch {batch.id} drafted for {period_from}..{period_to}: '
            f'{batch.cast_count} casts, total {batch.total_amount}'
        )
        return batch, [c.id for c in eligible]

    def approve(self, batch: SettlementBatch, now: datetime | None = None) -> SettlementBatch:
        if batch.status != BatchStatus.DRAFT:
            raise InvalidBatchTransition(
                f'Only draft batches can be approved (batch {batch.id} is {batch.status.value})'
            )
        logger.info(f'Settlement batch {batch.id} approved')
        return replace(batch, status=BatchStatus.APPROVED, approved_at=as_aware(now or utcnow()))

    def mark_paid(self, batch: SettlementBatch, now: datetime | None = None) -> SettlementBatch:
        if batch.status != BatchStatus.APPROVED:
            raise InvalidBatchTransition(
                f'Only approved batches can be marked paid (batch {batch.id} is {batch.status.value})'
            )
        logger.info(f'Settlement batch {batch.id} marked paid')
        return replace(batch, status=BatchStatus.PAID, paid_at=as_aware(now or utcnow()))
