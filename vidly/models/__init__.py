"""ORM models."""

from vidly.models.customer import Customer
from vidly.models.genre import Genre
from vidly.models.movie import Movie
from vidly.models.rental import Rental
from vidly.models.user import AuthToken, User

__all__ = [
    "AuthToken",
    "Customer",
    "Genre",
    "Movie",
    "Rental",
    "User",
]
