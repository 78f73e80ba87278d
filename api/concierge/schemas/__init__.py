from concierge.schemas.calculation import TaxRequest, TaxResponse, PayoutRequest, PayoutResponse
from concierge.schemas.ledger import LedgerEntryIn, BalanceRequest, BalanceResponse
from concierge.schemas.payout import (
    PayoutRuleSchema,
    ResolveRuleRequest,
    ResolveRuleResponse,
    PriceGiftRequest,
    GiftRevenueResponse,
)
from concierge.schemas.inbox import (
    InboxSignalSchema,
    PriorityRequest,
    PriorityResponse,
    InboxRequest,
    InboxResponse,
)
from concierge.schemas.settlement import (
    CreateBatchRequest,
    CreateBatchResponse,
    BatchTransitionRequest,
    SettlementBatchSchema,
)

__all__ = [
    'TaxRequest',
    'TaxResponse',
    'PayoutRequest',
    'PayoutResponse',
    'LedgerEntryIn',
    'BalanceRequest',
    'BalanceResponse',
    'PayoutRuleSchema',
    'ResolveRuleRequest',
    'ResolveRuleResponse',
    'PriceGiftRequest',
    'GiftRevenueResponse',
    'InboxSignalSchema',
    'PriorityRequest',
    'PriorityResponse',
    'InboxRequest',
    'InboxResponse',
    'CreateBatchRequest',
    'CreateBatchResponse',
    'BatchTransitionRequest',
    'SettlementBatchSchema',
]
