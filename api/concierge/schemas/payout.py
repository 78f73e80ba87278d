from pydantic import BaseModel, Field, model_validator

from concierge.models.payout import CAST_SCOPES, PayoutRule, RuleType, ScopeType
from concierge.schemas.types import IsoDate


class PayoutRuleSchema(BaseModel):
    """Payout rule as exchanged with the console."""
    id: str
    rule_type: RuleType = RuleType.GIFT_SHARE
    scope_type: ScopeType
    cast_id: str | None = None
    gift_id: str | None = None
    gift_category: str | None = None
    percent: float = Field(..., ge=0, le=100)
    effective_from: IsoDate
    effective_to: IsoDate | None = None
    active: bool = True

    class Config:
        from_attributes = True

    @model_validator(mode='after')
    def check_scope_targets(self):
        if self.scope_type in CAST_SCOPES and not self.cast_id:
            raise ValueError(f'cast_id is required for scope {self.scope_type.value}')
        if self.scope_type == ScopeType.CAST_GIFT and not self.gift_id:
            raise ValueError('gift_id is required for scope cast_gift')
        if self.scope_type == ScopeType.CAST_GIFT_CATEGORY and not self.gift_category:
            raise ValueError('gift_category is required for scope cast_gift_category')
        if self.effective_to and self.effective_to < self.effective_from:
            raise ValueError('effective_to must not be before effective_from')
        return self

    def to_model(self) -> PayoutRule:
        return PayoutRule(
            id=self.id,
            rule_type=self.rule_type,
            scope_type=self.scope_type,
            cast_id=self.cast_id,
            gift_id=self.gift_id,
            gift_category=self.gift_category,
            percent=self.percent,
            effective_from=self.effective_from,
            effective_to=self.effective_to,
            active=self.active,
        )


class ResolveRuleRequest(BaseModel):
    """Context of a gift send to resolve a rule for."""
    rules: list[PayoutRuleSchema] = []
    cast_id: str
    gift_id: str
    gift_category: str | None = None
    occurred_on: IsoDate


class ResolveRuleResponse(BaseModel):
    rule: PayoutRuleSchema | None = None


class PriceGiftRequest(ResolveRuleRequest):
    amount_excl_tax: int = Field(..., ge=0)
    tax_rate: float | None = Field(None, ge=0, le=1)
    fallback_percent: float | None = Field(None, ge=0, le=100)


class GiftRevenueResponse(BaseModel):
    amount_excl_tax: int
    tax: int
    amount_incl_tax: int
    payout_amount: int
    percent_applied: float
    payout_rule_id: str | None = None

    class Config:
        from_attributes = True
