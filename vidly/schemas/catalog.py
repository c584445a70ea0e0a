"""Genre, customer and movie schemas."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from vidly.models.movie import Movie
from vidly.schemas.common import APIModel, RequestModel


class GenreRequest(RequestModel):
    """Create or rename a genre."""

    name: str = Field(min_length=3, max_length=50)


class GenreResponse(APIModel):
    """Genre payload."""

    id: UUID
    name: str


class CustomerRequest(RequestModel):
    """Create or replace a customer."""

    name: str = Field(min_length=3, max_length=50)
    phone: str = Field(min_length=3, max_length=50)
    is_gold: bool = False
    address: str | None = Field(default=None, min_length=3, max_length=255)


class CustomerResponse(APIModel):
    """Customer payload."""

    id: UUID
    name: str
    phone: str
    is_gold: bool
    address: str | None


class MovieRequest(RequestModel):
    """Create or replace a movie."""

    title: str = Field(min_length=3, max_length=50)
    genre_id: UUID
    number_in_stock: int = Field(ge=0, le=255)
    daily_rental_rate: float = Field(ge=0, le=10)


class MovieResponse(APIModel):
    """Movie payload with its embedded genre."""

    id: UUID
    title: str
    genre: GenreResponse
    number_in_stock: int
    daily_rental_rate: float

    @classmethod
    def from_movie(cls, movie: Movie) -> MovieResponse:
        """Build a response from a movie row.

        Parameters
        ----------
        movie : Movie
            Movie row.

        Returns
        -------
        MovieResponse
            Serialized movie.
        """
        return cls(
            id=movie.id,
            title=movie.title,
            genre=GenreResponse(id=movie.genre_id, name=movie.genre_name),
            number_in_stock=movie.number_in_stock,
            daily_rental_rate=movie.daily_rental_rate,
        )
