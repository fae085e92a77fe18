import os
from collections.abc import Generator

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from sqlalchemy.orm import Session, sessionmaker

from poker_ledger.config import LedgerConfig
from poker_ledger.service import LedgerService
from poker_ledger.storage.database import build_engine, build_session_factory, init_db
from poker_ledger.storage.repository import LedgerRepository


@pytest.fixture
def session_factory() -> Generator[sessionmaker[Session], None, None]:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def repo(session_factory: sessionmaker[Session]) -> LedgerRepository:
    return LedgerRepository(session_factory)


@pytest.fixture
def service(repo: LedgerRepository) -> LedgerService:
    return LedgerService(repo, LedgerConfig(database_url="sqlite+pysqlite:///:memory:"))


@pytest.fixture
def client(service: LedgerService):
    from fastapi.testclient import TestClient

    from poker_ledger.main import app
    from poker_ledger.runtime import get_service

    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
