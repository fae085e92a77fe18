from __future__ import annotations

from poker_ledger.config import LedgerConfig
from poker_ledger.service import LedgerService
from poker_ledger.storage.database import SessionLocal, engine, init_db
from poker_ledger.storage.repository import LedgerRepository

config = LedgerConfig.from_env()

init_db(engine)
repo = LedgerRepository(SessionLocal)
service = LedgerService(repo, config)


def get_service() -> LedgerService:
    return service
