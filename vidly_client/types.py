"""SDK response types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from vidly_client.client import VidlyClient


@dataclass(frozen=True, slots=True)
class MovieInfo:
    """Catalogue movie entry.

    Attributes
    ----------
    movie_id : UUID
        Movie identifier.
    title : str
        Movie title.
    genre : str
        Genre name.
    number_in_stock : int
        Copies available to rent.
    daily_rental_rate : float
        Price per rental day.
    """

    movie_id: UUID
    title: str
    genre: str
    number_in_stock: int
    daily_rental_rate: float

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> MovieInfo:
        """Build from a JSON payload."""
        return cls(
            movie_id=UUID(data["id"]),
            title=data["title"],
            genre=data["genre"]["name"],
            number_in_stock=data["number_in_stock"],
            daily_rental_rate=data["daily_rental_rate"],
        )


@dataclass(frozen=True, slots=True)
class RentalInfo:
    """Rental record.

    Attributes
    ----------
    rental_id : UUID
        Rental identifier.
    customer_id : UUID
        Customer identifier.
    movie_id : UUID
        Movie identifier.
    movie_title : str
        Title captured at checkout.
    date_out : datetime
        Checkout timestamp.
    date_returned : datetime | None
        Return timestamp.
    rental_fee : float | None
        Fee charged on return.
    """

    rental_id: UUID
    customer_id: UUID
    movie_id: UUID
    movie_title: str
    date_out: datetime
    date_returned: datetime | None
    rental_fee: float | None

    @property
    def is_returned(self) -> bool:
        """Return whether the rental has been closed."""
        return self.date_returned is not None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> RentalInfo:
        """Build from a JSON payload."""
        date_returned = data.get("date_returned")
        return cls(
            rental_id=UUID(data["id"]),
            customer_id=UUID(data["customer"]["id"]),
            movie_id=UUID(data["movie"]["id"]),
            movie_title=data["movie"]["title"],
            date_out=_parse_datetime(data["date_out"]),
            date_returned=(
                _parse_datetime(date_returned) if date_returned is not None else None
            ),
            rental_fee=data.get("rental_fee"),
        )


@dataclass(slots=True)
class RentalHandle:
    """Context-managed rental that is returned on exit.

    Parameters
    ----------
    client : VidlyClient
        SDK client that created the rental.
    rental : RentalInfo
        Rental payload at checkout.
    auto_return : bool, default=True
        Whether to return the movie on context exit.
    """

    client: VidlyClient
    rental: RentalInfo
    auto_return: bool = True
    returned: RentalInfo | None = None

    def return_rental(self) -> RentalInfo:
        """Return the movie once.

        Returns
        -------
        RentalInfo
            Closed rental with its fee.
        """
        if self.returned is None:
            self.returned = self.client.return_rental(
                self.rental.customer_id, self.rental.movie_id
            )
        return self.returned

    def __enter__(self) -> RentalHandle:
        """Enter the rental context.

        Returns
        -------
        RentalHandle
            This rental handle.
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Return the movie on context exit when configured."""
        _ = (exc_type, exc_value, traceback)
        if self.auto_return:
            self.return_rental()


def _parse_datetime(value: str) -> datetime:
    """Parse an ISO datetime string.

    Parameters
    ----------
    value : str
        ISO-formatted datetime string.

    Returns
    -------
    datetime
        Parsed datetime.
    """
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
