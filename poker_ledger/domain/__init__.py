from .ledger import (
    DomainValidationError,
    LedgerNotFoundError,
    LedgerSummary,
    PlayerLedger,
    normalize_game_code,
    normalize_player_name,
    summarize_ledger,
    validate_buy_in_amount,
    validate_final_amount,
)
from .settlement import (
    SETTLEMENT_EPSILON,
    PlayerResult,
    SettlementTransfer,
    calculate_settlement,
)

__all__ = [
    "DomainValidationError",
    "LedgerNotFoundError",
    "LedgerSummary",
    "PlayerLedger",
    "PlayerResult",
    "SETTLEMENT_EPSILON",
    "SettlementTransfer",
    "calculate_settlement",
    "normalize_game_code",
    "normalize_player_name",
    "summarize_ledger",
    "validate_buy_in_amount",
    "validate_final_amount",
]
