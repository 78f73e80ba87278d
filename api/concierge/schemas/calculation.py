from pydantic import BaseModel, Field


class TaxRequest(BaseModel):
    """Tax on a pre-tax amount. Omit tax_rate to use the configured rate."""
    amount_excl_tax: int
    tax_rate: float | None = Field(None, ge=0, le=1)


class TaxResponse(BaseModel):
    amount_excl_tax: int
    tax: int
    amount_incl_tax: int

    class Config:
        from_attributes = True


class PayoutRequest(BaseModel):
    amount_excl_tax: int
    percent_rate: float = Field(..., ge=0, le=100)


class PayoutResponse(BaseModel):
    payout_amount: int
    percent_applied: float

    class Config:
        from_attributes = True
