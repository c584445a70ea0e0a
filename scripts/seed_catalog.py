"""Seed genres, movies and customers through the HTTP API."""

from __future__ import annotations

import os
from dataclasses import dataclass

import anyio
import httpx


@dataclass(frozen=True, slots=True)
class MovieSeed:
    """Movie seed definition.

    Attributes
    ----------
    title : str
        Movie title.
    genre : str
        Genre name; created when missing.
    number_in_stock : int
        Initial stock.
    daily_rental_rate : float
        Price per rental day.
    """

    title: str
    genre: str
    number_in_stock: int
    daily_rental_rate: float


MOVIES: tuple[MovieSeed, ...] = (
    MovieSeed("Airplane", "Comedy", 5, 2),
    MovieSeed("The Hangover", "Comedy", 10, 2),
    MovieSeed("Wedding Crashers", "Comedy", 15, 2),
    MovieSeed("Die Hard", "Action", 5, 2),
    MovieSeed("Terminator", "Action", 10, 2),
    MovieSeed("The Avengers", "Action", 15, 2),
    MovieSeed("The Notebook", "Romance", 5, 2),
    MovieSeed("When Harry Met Sally", "Romance", 10, 2),
    MovieSeed("Pretty Woman", "Romance", 15, 2),
    MovieSeed("The Sixth Sense", "Thriller", 5, 2),
    MovieSeed("Gone Girl", "Thriller", 10, 2),
    MovieSeed("The Others", "Thriller", 15, 2),
)

CUSTOMERS: tuple[dict[str, str | bool], ...] = (
    {"name": "Ada Lovelace", "phone": "555-0101", "is_gold": True},
    {"name": "Alan Turing", "phone": "555-0102", "is_gold": False},
)


async def ensure_genre(client: httpx.AsyncClient, name: str) -> dict[str, str]:
    """Ensure a genre exists.

    Parameters
    ----------
    client : httpx.AsyncClient
        Authenticated API client.
    name : str
        Genre name.

    Returns
    -------
    dict[str, str]
        Genre payload from the API.
    """
    response = await client.get("/api/genres", params={"limit": 200, "offset": 0})
    response.raise_for_status()
    for genre in response.json():
        if genre["name"] == name:
            return genre

    create_response = await client.post("/api/genres", json={"name": name})
    create_response.raise_for_status()
    return create_response.json()


async def ensure_movie(
    client: httpx.AsyncClient, movie: MovieSeed, genre_id: str
) -> None:
    """Ensure a movie exists.

    Parameters
    ----------
    client : httpx.AsyncClient
        Authenticated API client.
    movie : MovieSeed
        Movie definition.
    genre_id : str
        Genre identifier.

    Returns
    -------
    None
        Creates the movie if needed.
    """
    response = await client.get("/api/movies", params={"limit": 200, "offset": 0})
    response.raise_for_status()
    if any(row["title"] == movie.title for row in response.json()):
        return
    create_response = await client.post(
        "/api/movies",
        json={
            "title": movie.title,
            "genre_id": genre_id,
            "number_in_stock": movie.number_in_stock,
            "daily_rental_rate": movie.daily_rental_rate,
        },
    )
    create_response.raise_for_status()


async def main() -> None:
    """Seed the catalogue using ``VIDLY_TOKEN``.

    Returns
    -------
    None
        Seeds genres, movies and customers and prints a short summary.
    """
    base_url = os.environ.get("VIDLY_BASE_URL", "http://127.0.0.1:8000")
    token = os.environ.get("VIDLY_TOKEN")
    if not token:
        raise SystemExit("VIDLY_TOKEN is required")

    headers = {"Authorization": f"Bearer {token}"}
    async with httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=10.0,
    ) as client:
        genre_ids: dict[str, str] = {}
        for movie in MOVIES:
            if movie.genre not in genre_ids:
                genre = await ensure_genre(client, movie.genre)
                genre_ids[movie.genre] = genre["id"]
            await ensure_movie(client, movie, genre_ids[movie.genre])
        print(f"seeded {len(MOVIES)} movies in {len(genre_ids)} genres")

        for customer in CUSTOMERS:
            response = await client.post("/api/customers", json=customer)
            response.raise_for_status()
        print(f"seeded {len(CUSTOMERS)} customers")


if __name__ == "__main__":
    anyio.run(main)
