"""Customer model."""

import uuid

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from vidly.database import Base
from vidly.models.mixins import TimestampMixin, uuid_column


class Customer(TimestampMixin, Base):
    """Rental customer."""

    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = uuid_column()
    name: Mapped[str] = mapped_column(String(50))
    phone: Mapped[str] = mapped_column(String(50))
    is_gold: Mapped[bool] = mapped_column(Boolean, default=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
