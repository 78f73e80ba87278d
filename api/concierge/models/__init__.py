from concierge.models.payout import (
    RuleType, ScopeType, PayoutRule, TaxBreakdown, PayoutAmount, GiftRevenue,
)
from concierge.models.ledger import LedgerEntry
from concierge.models.inbox import (
    PlanCode, UserStatus, ReplyStatus, SortBy,
    InboxSignal, ConversationActivity, InboxItem, InboxFilters, InboxSummary,
)
from concierge.models.settlement import (
    BatchStatus, PayoutCalculation, SettlementItem, SettlementBatch,
)

__all__ = [
    'RuleType',
    'ScopeType',
    'PayoutRule',
    'TaxBreakdown',
    'PayoutAmount',
    'GiftRevenue',
    'LedgerEntry',
    'PlanCode',
    'UserStatus',
    'ReplyStatus',
    'SortBy',
    'InboxSignal',
    'ConversationActivity',
    'InboxItem',
    'InboxFilters',
    'InboxSummary',
    'BatchStatus',
    'PayoutCalculation',
    'SettlementItem',
    'SettlementBatch',
]
