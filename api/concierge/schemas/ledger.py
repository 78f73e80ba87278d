from pydantic import BaseModel, Field

from concierge.models.ledger import LedgerEntry


class LedgerEntryIn(BaseModel):
    """Single point movement."""
    delta: int
    reason: str | None = Field(None, max_length=200)

    def to_model(self) -> LedgerEntry:
        return LedgerEntry(delta=self.delta, reason=self.reason)


class BalanceRequest(BaseModel):
    entries: list[LedgerEntryIn] = []


class BalanceResponse(BaseModel):
    """Point balance summary. Negative balances are reported as-is."""
    balance: int
    entry_count: int
