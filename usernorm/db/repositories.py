from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from usernorm.core.settings import get_settings
from usernorm.db import models
from usernorm.normalization.user_validator import SupportsUserFields, validate_and_normalize_user

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def create(self, **kwargs) -> ModelT:
        entity = self.model(**kwargs)
        self.db.add(entity)
        self.db.flush()
        return entity

    def get(self, entity_id: UUID) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def list(self, limit: int = 100, offset: int = 0) -> list[ModelT]:
        stmt = select(self.model).offset(offset).limit(limit)
        return self.db.execute(stmt).scalars().all()


class UserRepository(BaseRepository[models.User]):
    model = models.User

    def get_by_username(self, username: str) -> models.User | None:
        stmt = select(models.User).where(models.User.username == username)
        return self.db.execute(stmt).scalar_one_or_none()

    def username_exists(self, username: str) -> bool:
        """Exact-match existence check, usable as the normalizer's predicate."""
        stmt = select(exists().where(models.User.username == username))
        return bool(self.db.execute(stmt).scalar())

    def normalize(self, user: SupportsUserFields, default_domain: str | None = None) -> None:
        """Normalize *user* in place against the usernames stored in this session.

        *default_domain* defaults to the ``DEFAULT_EMAIL_DOMAIN`` setting.
        No row is locked; a concurrent insert of the same name is not detected.
        """
        if default_domain is None:
            default_domain = get_settings().default_email_domain
        validate_and_normalize_user(user, default_domain, self.username_exists)
