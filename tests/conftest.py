import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from usernorm.core.settings import get_settings
from usernorm.db import models  # noqa: F401  registers tables on Base.metadata
from usernorm.db.base import Base


@pytest.fixture
def db_session() -> Session:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    with session_factory() as db:
        yield db

    engine.dispose()


@pytest.fixture
def clean_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
