"""Rental model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidly.database import Base
from vidly.models.mixins import as_utc, utcnow, uuid_column

SECONDS_PER_DAY = 86400


def billable_days(
    date_out: datetime, date_returned: datetime, *, minimum: int = 1
) -> int:
    """Count the days charged for a rental.

    Whole elapsed days are counted, partial days are dropped, and the
    result never falls below ``minimum``.

    Parameters
    ----------
    date_out : datetime
        Checkout timestamp.
    date_returned : datetime
        Return timestamp.
    minimum : int, default=1
        Smallest billable day count.

    Returns
    -------
    int
        Number of billable days.
    """
    elapsed = as_utc(date_returned) - as_utc(date_out)
    whole_days = int(elapsed.total_seconds() // SECONDS_PER_DAY)
    return max(minimum, whole_days)


class Rental(Base):
    """A movie checked out by a customer.

    Customer and movie fields are copies taken at checkout, so later
    catalogue edits leave rental history untouched. Updates are guarded
    by ``version_id``; a stale write raises ``StaleDataError``.
    """

    __tablename__ = "rentals"
    __table_args__ = (
        Index("ix_rentals_customer_movie", "customer_id", "movie_id", "date_out"),
    )

    id: Mapped[uuid.UUID] = uuid_column()
    customer_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True))
    customer_name: Mapped[str] = mapped_column(String(50))
    customer_phone: Mapped[str] = mapped_column(String(50))
    movie_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True))
    movie_title: Mapped[str] = mapped_column(String(50))
    movie_daily_rental_rate: Mapped[float] = mapped_column(Float)
    date_out: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    date_returned: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    rental_fee: Mapped[float | None] = mapped_column(Float)
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def is_returned(self) -> bool:
        """Return whether the rental has been closed."""
        return self.date_returned is not None

    def mark_returned(self, now: datetime, *, min_billable_days: int = 1) -> None:
        """Close the rental in memory and compute its fee.

        Callers must check ``is_returned`` first; this method does not.

        Parameters
        ----------
        now : datetime
            Return timestamp.
        min_billable_days : int, default=1
            Smallest number of days charged.

        Returns
        -------
        None
            Sets ``date_returned`` and ``rental_fee``.
        """
        days = billable_days(self.date_out, now, minimum=min_billable_days)
        self.date_returned = now
        self.rental_fee = round(days * self.movie_daily_rental_rate, 2)
