"""Engine and unit-of-work helpers for the user store.

``user_repository()`` is the entry point for callers that normalize and
persist users in one transaction::

    with user_repository() as users:
        record = User(username=..., mobile=..., mail=...)
        users.normalize(record)
        users.db.add(record)

The transaction commits when the block exits cleanly and rolls back when
it raises.  The existence check and the insert still race with other
writers; the unique constraint on ``users.username`` is the backstop.
"""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from usernorm.core.settings import get_settings
from usernorm.db.repositories import UserRepository


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_engine(get_settings().database_url, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)


def reset_engine() -> None:
    """Dispose the cached engine so the next call re-reads ``DATABASE_URL``."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


@contextmanager
def user_repository(factory: sessionmaker[Session] | None = None) -> Iterator[UserRepository]:
    """Yield a ``UserRepository`` bound to a fresh session, committing on success."""
    session_factory = factory or get_session_factory()
    with session_factory() as db:
        try:
            yield UserRepository(db)
            db.commit()
        except Exception:
            db.rollback()
            raise
