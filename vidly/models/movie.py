"""Movie model."""

import uuid

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vidly.database import Base
from vidly.models.mixins import TimestampMixin, uuid_column

MAX_STOCK = 255
MAX_STORED_RATE = 255


class Movie(TimestampMixin, Base):
    """Rentable title with an embedded genre snapshot."""

    __tablename__ = "movies"
    __table_args__ = (
        CheckConstraint(
            f"number_in_stock >= 0 AND number_in_stock <= {MAX_STOCK}",
            name="ck_movies_stock_range",
        ),
        CheckConstraint(
            f"daily_rental_rate >= 0 AND daily_rental_rate <= {MAX_STORED_RATE}",
            name="ck_movies_rate_range",
        ),
    )

    id: Mapped[uuid.UUID] = uuid_column()
    title: Mapped[str] = mapped_column(String(50))
    genre_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("genres.id"))
    genre_name: Mapped[str] = mapped_column(String(50))
    number_in_stock: Mapped[int] = mapped_column(Integer, default=0)
    daily_rental_rate: Mapped[float] = mapped_column(Float)
