from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, func, text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from usernorm.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    mobile: Mapped[str] = mapped_column(String(32), nullable=False, default="", server_default=sql_text("''"))
    mail: Mapped[str] = mapped_column(String(255), nullable=False, default="", server_default=sql_text("''"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
