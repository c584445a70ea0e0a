"""Rental and return schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from vidly.models.mixins import as_utc
from vidly.models.rental import Rental
from vidly.schemas.common import APIModel, RequestModel


class RentalRequest(RequestModel):
    """Checkout payload."""

    customer_id: UUID
    movie_id: UUID


class ReturnRequest(RequestModel):
    """Return payload."""

    customer_id: UUID
    movie_id: UUID


class RentalCustomer(APIModel):
    """Customer snapshot stored on a rental."""

    id: UUID
    name: str
    phone: str


class RentalMovie(APIModel):
    """Movie snapshot stored on a rental."""

    id: UUID
    title: str
    daily_rental_rate: float


class RentalResponse(APIModel):
    """Rental payload."""

    id: UUID
    customer: RentalCustomer
    movie: RentalMovie
    date_out: datetime
    date_returned: datetime | None
    rental_fee: float | None

    @classmethod
    def from_rental(cls, rental: Rental) -> RentalResponse:
        """Build a response from a rental row.

        Parameters
        ----------
        rental : Rental
            Rental row.

        Returns
        -------
        RentalResponse
            Serialized rental.
        """
        return cls(
            id=rental.id,
            customer=RentalCustomer(
                id=rental.customer_id,
                name=rental.customer_name,
                phone=rental.customer_phone,
            ),
            movie=RentalMovie(
                id=rental.movie_id,
                title=rental.movie_title,
                daily_rental_rate=rental.movie_daily_rental_rate,
            ),
            date_out=as_utc(rental.date_out),
            date_returned=(
                as_utc(rental.date_returned)
                if rental.date_returned is not None
                else None
            ),
            rental_fee=rental.rental_fee,
        )
