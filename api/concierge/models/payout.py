from dataclasses import dataclass
from enum import Enum


class RuleType(str, Enum):
    """Kinds of revenue share a payout rule can describe."""
    GIFT_SHARE = 'gift_share'


class ScopeType(str, Enum):
    """How narrowly a payout rule applies. Listed from broadest to narrowest."""
    GLOBAL = 'global'
    CAST = 'cast'
    CAST_GIFT_CATEGORY = 'cast_gift_category'
    CAST_GIFT = 'cast_gift'


# Scopes that only make sense with a cast attached
CAST_SCOPES = (ScopeType.CAST, ScopeType.CAST_GIFT_CATEGORY, ScopeType.CAST_GIFT)


@dataclass(frozen=True)
class PayoutRule:
    """Revenue-share percentage for a scope and an inclusive date window.

    Dates are ISO ``YYYY-MM-DD`` strings; ``effective_to=None`` is open-ended.
    Rules are deactivated rather than deleted, so inactive ones still show up.
    """
    id: str
    scope_type: ScopeType
    percent: float
    effective_from: str
    rule_type: RuleType = RuleType.GIFT_SHARE
    cast_id: str | None = None
    gift_id: str | None = None
    gift_category: str | None = None
    effective_to: str | None = None
    active: bool = True


@dataclass(frozen=True)
class TaxBreakdown:
    amount_excl_tax: int
    tax: int
    amount_incl_tax: int


@dataclass(frozen=True)
class PayoutAmount:
    payout_amount: int
    percent_applied: float


@dataclass(frozen=True)
class GiftRevenue:
    """Priced gift send: recognized revenue plus the cast's share of it."""
    amount_excl_tax: int
    tax: int
    amount_incl_tax: int
    payout_amount: int
    percent_applied: float
    payout_rule_id: str | None
