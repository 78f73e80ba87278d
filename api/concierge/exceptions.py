class ConciergeError(Exception):
    """Base class for service-level errors."""
    pass


class PayoutRuleNotFound(ConciergeError):
    """Raised when no payout rule applies and no fallback percent was given."""
    pass


class InvalidSettlementPeriod(ConciergeError):
    """Raised when a settlement period is malformed or reversed."""
    pass


class EmptySettlementPeriod(ConciergeError):
    """Raised when a period contains no unbatched payout calculations."""
    pass


class InvalidBatchTransition(ConciergeError):
    """Raised when a settlement batch is moved out of order."""
    pass
