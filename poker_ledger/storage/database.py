from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from poker_ledger.config import LedgerConfig

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, future=True)

    connect_args = {"check_same_thread": False}
    if ":memory:" in database_url or database_url in {"sqlite://", "sqlite+pysqlite://"}:
        # every connection to an in-memory database would otherwise get its own empty schema
        return create_engine(database_url, future=True, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, future=True, connect_args=connect_args)


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False, future=True, expire_on_commit=False)


def init_db(bind: Engine) -> None:
    from poker_ledger.storage import models  # noqa: F401

    Base.metadata.create_all(bind=bind)


DATABASE_URL = LedgerConfig.from_env().database_url

engine = build_engine(DATABASE_URL)
SessionLocal = build_session_factory(engine)
