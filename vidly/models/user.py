"""User and authentication token models."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidly.database import Base
from vidly.models.mixins import TimestampMixin, uuid_column


class User(TimestampMixin, Base):
    """Registered staff user."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = uuid_column()
    name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    password_hash: Mapped[str] = mapped_column(String(512))
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)

    tokens = relationship("AuthToken", back_populates="user")


class AuthToken(TimestampMixin, Base):
    """Opaque bearer token issued to a user."""

    __tablename__ = "auth_tokens"
    __table_args__ = (Index("ix_auth_tokens_lookup", "token_lookup"),)

    id: Mapped[uuid.UUID] = uuid_column()
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"))
    token_hash: Mapped[str] = mapped_column(String(512))
    token_lookup: Mapped[str] = mapped_column(String(64))
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    user = relationship("User", back_populates="tokens", lazy="joined")
