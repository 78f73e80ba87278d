from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerEntry:
    """Point movement for an end user. +delta = credit, -delta = debit.

    Entries are append-only; the balance is always derived, never stored.
    """
    delta: int
    reason: str | None = None
