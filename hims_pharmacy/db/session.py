# hims_pharmacy/db/session.py
from typing import Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hims_pharmacy.core.config import settings

_engines: Dict[str, Engine] = {}


def get_or_create_engine(db_uri: str) -> Engine:
    eng = _engines.get(db_uri)
    if eng is None:
        kwargs = {"pool_pre_ping": True, "future": True}
        if db_uri.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        eng = create_engine(db_uri, **kwargs)
        _engines[db_uri] = eng
    return eng


def create_session(db_uri: str | None = None) -> Session:
    """
    Return a new SQLAlchemy Session bound to the given DB URI
    (defaults to settings.DATABASE_URI).
    """
    eng = get_or_create_engine(db_uri or settings.DATABASE_URI)
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=eng,
        future=True,
    )
    return SessionLocal()


def get_db() -> Generator[Session, None, None]:
    db = create_session()
    try:
        yield db
    finally:
        db.close()
