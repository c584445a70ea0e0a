"""Movie routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.database import get_session
from vidly.models.genre import Genre
from vidly.models.movie import Movie
from vidly.models.user import User
from vidly.routers.dependencies import Page, commit_session, parse_id_or_404
from vidly.schemas.catalog import MovieRequest, MovieResponse
from vidly.services.auth import require_admin, require_user

router = APIRouter(prefix="/api/movies", tags=["movies"])


async def _get_movie_or_404(session: AsyncSession, movie_id: str) -> Movie:
    """Return a movie or raise 404.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    movie_id : str
        Raw movie identifier.

    Returns
    -------
    Movie
        Matching movie row.
    """
    movie = await session.get(Movie, parse_id_or_404(movie_id, "Movie not found"))
    if movie is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Movie not found",
        )
    return movie


async def _get_genre_or_400(session: AsyncSession, genre_id: UUID) -> Genre:
    """Resolve the genre named in a movie payload.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    genre_id : UUID
        Genre identifier from the request body.

    Returns
    -------
    Genre
        Matching genre row.
    """
    genre = await session.get(Genre, genre_id)
    if genre is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid genre",
        )
    return genre


@router.get("", response_model=list[MovieResponse])
async def list_movies(
    page: Page = Depends(),
    session: AsyncSession = Depends(get_session),
) -> list[MovieResponse]:
    """List movies by title."""
    result = await session.execute(
        select(Movie)
        .order_by(Movie.title.asc(), Movie.id.asc())
        .limit(page.limit)
        .offset(page.offset)
    )
    return [MovieResponse.from_movie(row) for row in result.scalars().all()]


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: str,
    session: AsyncSession = Depends(get_session),
) -> MovieResponse:
    """Fetch one movie."""
    return MovieResponse.from_movie(await _get_movie_or_404(session, movie_id))


@router.post("", response_model=MovieResponse)
async def create_movie(
    payload: MovieRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> MovieResponse:
    """Create a movie."""
    genre = await _get_genre_or_400(session, payload.genre_id)
    movie = Movie(
        title=payload.title,
        genre_id=genre.id,
        genre_name=genre.name,
        number_in_stock=payload.number_in_stock,
        daily_rental_rate=payload.daily_rental_rate,
    )
    session.add(movie)
    await session.flush()
    await commit_session(session)
    return MovieResponse.from_movie(movie)


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(
    movie_id: str,
    payload: MovieRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> MovieResponse:
    """Replace a movie's details."""
    genre = await _get_genre_or_400(session, payload.genre_id)
    movie = await _get_movie_or_404(session, movie_id)
    movie.title = payload.title
    movie.genre_id = genre.id
    movie.genre_name = genre.name
    movie.number_in_stock = payload.number_in_stock
    movie.daily_rental_rate = payload.daily_rental_rate
    await commit_session(session)
    return MovieResponse.from_movie(movie)


@router.delete("/{movie_id}", response_model=MovieResponse)
async def delete_movie(
    movie_id: str,
    _: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
) -> MovieResponse:
    """Delete a movie and return it."""
    movie = await _get_movie_or_404(session, movie_id)
    response = MovieResponse.from_movie(movie)
    await session.delete(movie)
    await commit_session(session)
    return response
