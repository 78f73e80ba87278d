"""Payout rule resolution and gift-send pricing.

Resolution order (first match wins, in input order within a tier):
  1. cast x gift           (explicit per-cast, per-gift override)
  2. cast x gift category  (per-cast override for a class of gifts)
  3. cast                  (per-cast default across all gifts)
  4. global                (system-wide default)
"""
import logging
import re
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from concierge.exceptions import PayoutRuleNotFound
from concierge.models.payout import PayoutRule, ScopeType, GiftRevenue
from concierge.services.calculation_service import calculate_tax, calculate_payout

logger = logging.getLogger(__name__)

# Rule dates are compared as strings, which only works for one fixed format
ISO_DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'
_ISO_DATE_RE = re.compile(ISO_DATE_PATTERN)


def parse_iso_date(value: str) -> str:
    """Return ``value`` unchanged if it is a real ``YYYY-MM-DD`` date."""
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise ValueError(f'Expected YYYY-MM-DD date, got {value!r}')
    date.fromisoformat(value)
    return value


def is_rule_valid_on(rule: PayoutRule, occurred_on: str) -> bool:
    if not rule.active:
        return False
    if rule.effective_from > occurred_on:
        return False
    if rule.effective_to and rule.effective_to < occurred_on:
        return False
    return True


def resolve_payout_rule(
    rules: Iterable[PayoutRule],
    cast_id: str,
    gift_id: str,
    gift_category: str | None,
    occurred_on: str,
) -> PayoutRule | None:
    """Pick the rule that governs a gift send, or None if nothing applies.

    The resolver never invents a default percent; that is the caller's call.
    Overlapping rules in the same tier are not ranked by date: the one that
    comes first in ``rules`` wins.
    """
    valid = [r for r in rules if is_rule_valid_on(r, occurred_on)]

    tiers: list[Callable[[PayoutRule], bool]] = [
        lambda r: (
            r.scope_type == ScopeType.CAST_GIFT
            and r.cast_id == cast_id
            and r.gift_id == gift_id
        ),
        lambda r: (
            r.scope_type == ScopeType.CAST_GIFT_CATEGORY
            and r.cast_id == cast_id
            and r.gift_category == gift_category
        ),
        lambda r: r.scope_type == ScopeType.CAST and r.cast_id == cast_id,
        lambda r: r.scope_type == ScopeType.GLOBAL,
    ]

    for matches in tiers:
        for rule in valid:
            if matches(rule):
                return rule
    return None


class PayoutRuleService:
    """Prices gift sends against a caller-supplied rule set."""

    def __init__(self, rules: Sequence[PayoutRule], tax_rate: float | Decimal):
        self.rules = rules
        self.tax_rate = tax_rate

    def resolve(
        self,
        cast_id: str,
        gift_id: str,
        gift_category: str | None,
        occurred_on: str,
    ) -> PayoutRule | None:
        return resolve_payout_rule(
            self.rules, cast_id, gift_id, gift_category, parse_iso_date(occurred_on),
        )

    def price_gift_send(
        self,
        amount_excl_tax: int,
        cast_id: str,
        gift_id: str,
        gift_category: str | None,
        occurred_on: str,
        fallback_percent: float | None = None,
    ) -> GiftRevenue:
        """Recognize revenue for one gift send and compute the cast's payout.

        Raises PayoutRuleNotFound when no rule applies and no fallback is given.
        """
        rule = self.resolve(cast_id, gift_id, gift_category, occurred_on)
        if rule is None:
            if fallback_percent is None:
                logger.warning(
                    f'No payout rule for cast={cast_id} gift={gift_id} on {occurred_on}'
                )
                raise PayoutRuleNotFound(
                    f'No payout rule applies to cast {cast_id} / gift {gift_id} on {occurred_on}'
                )
            logger.info(
                f'No payout rule for cast={cast_id} gift={gift_id}, '
                f'using fallback {fallback_percent}%'
            )
            percent = fallback_percent
        else:
            percent = rule.percent

        tax = calculate_tax(amount_excl_tax, self.tax_rate)
        payout = calculate_payout(amount_excl_tax, percent)
        return GiftRevenue(
            amount_excl_tax=tax.amount_excl_tax,
            tax=tax.tax,
            amount_incl_tax=tax.amount_incl_tax,
            payout_amount=payout.payout_amount,
            percent_applied=payout.percent_applied,
            payout_rule_id=rule.id if rule else None,
        )
