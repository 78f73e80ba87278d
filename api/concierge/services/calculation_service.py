"""Tax, payout and point-balance arithmetic.

All amounts are integers in the smallest currency unit (JPY). Every fractional
result is floored so the platform never over-charges or over-pays a unit.
Products are computed in Decimal so the floor sees the exact value rather than
a binary float approximation (e.g. 100 * 0.29 would otherwise floor to 28).
"""
import math
from decimal import Decimal
from typing import Iterable

from concierge.models.ledger import LedgerEntry
from concierge.models.payout import TaxBreakdown, PayoutAmount


def _dec(value: int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_tax(amount_excl_tax: int, tax_rate: float | Decimal) -> TaxBreakdown:
    """Tax on a pre-tax amount. ``tax_rate`` is a fraction (0.10 = 10%).

    Negative amounts are not rejected; they floor toward -inf like any other.
    """
    tax = math.floor(_dec(amount_excl_tax) * _dec(tax_rate))
    return TaxBreakdown(
        amount_excl_tax=amount_excl_tax,
        tax=tax,
        amount_incl_tax=amount_excl_tax + tax,
    )


def calculate_payout(amount_excl_tax: int, percent_rate: float | Decimal) -> PayoutAmount:
    """Cast share of a pre-tax amount. ``percent_rate`` is 0-100, not a fraction."""
    payout = math.floor(_dec(amount_excl_tax) * _dec(percent_rate) / 100)
    return PayoutAmount(payout_amount=payout, percent_applied=percent_rate)


def calculate_balance(entries: Iterable[LedgerEntry]) -> int:
    """Point balance as the sum of ledger deltas. May be negative."""
    return sum((entry.delta for entry in entries), 0)
