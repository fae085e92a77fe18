from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class LedgerConfig:
    database_url: str = "sqlite:///./poker_ledger.db"
    log_level: str = "INFO"
    currency_symbol: str = "฿"
    settlement_epsilon: float = 1e-9
    game_code_attempts: int = 100

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        defaults = cls()
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", defaults.currency_symbol),
            settlement_epsilon=float(os.getenv("SETTLEMENT_EPSILON", defaults.settlement_epsilon)),
            game_code_attempts=int(os.getenv("GAME_CODE_ATTEMPTS", defaults.game_code_attempts)),
        )
