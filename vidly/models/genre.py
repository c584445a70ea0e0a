"""Genre model."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from vidly.database import Base
from vidly.models.mixins import TimestampMixin, uuid_column


class Genre(TimestampMixin, Base):
    """Movie genre."""

    __tablename__ = "genres"

    id: Mapped[uuid.UUID] = uuid_column()
    name: Mapped[str] = mapped_column(String(50))
