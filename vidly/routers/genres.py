"""Genre routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.database import get_session
from vidly.models.genre import Genre
from vidly.models.movie import Movie
from vidly.models.user import User
from vidly.routers.dependencies import Page, commit_session, parse_id_or_404
from vidly.schemas.catalog import GenreRequest, GenreResponse
from vidly.services.auth import require_admin, require_user

router = APIRouter(prefix="/api/genres", tags=["genres"])


async def _get_genre_or_404(session: AsyncSession, genre_id: str) -> Genre:
    """Return a genre or raise 404.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    genre_id : str
        Raw genre identifier.

    Returns
    -------
    Genre
        Matching genre row.
    """
    genre = await session.get(
        Genre, parse_id_or_404(genre_id, "Genre not found")
    )
    if genre is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Genre not found",
        )
    return genre


@router.get("", response_model=list[GenreResponse])
async def list_genres(
    page: Page = Depends(),
    session: AsyncSession = Depends(get_session),
) -> list[GenreResponse]:
    """List genres by name."""
    result = await session.execute(
        select(Genre)
        .order_by(Genre.name.asc(), Genre.id.asc())
        .limit(page.limit)
        .offset(page.offset)
    )
    return [GenreResponse.model_validate(row) for row in result.scalars().all()]


@router.get("/{genre_id}", response_model=GenreResponse)
async def get_genre(
    genre_id: str,
    session: AsyncSession = Depends(get_session),
) -> GenreResponse:
    """Fetch one genre."""
    return GenreResponse.model_validate(await _get_genre_or_404(session, genre_id))


@router.post("", response_model=GenreResponse)
async def create_genre(
    payload: GenreRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> GenreResponse:
    """Create a genre."""
    genre = Genre(name=payload.name)
    session.add(genre)
    await session.flush()
    await commit_session(session)
    return GenreResponse.model_validate(genre)


@router.put("/{genre_id}", response_model=GenreResponse)
async def update_genre(
    genre_id: str,
    payload: GenreRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> GenreResponse:
    """Rename a genre.

    Movies keep the genre name they were saved with.
    """
    genre = await _get_genre_or_404(session, genre_id)
    genre.name = payload.name
    await commit_session(session)
    return GenreResponse.model_validate(genre)


@router.delete("/{genre_id}", response_model=GenreResponse)
async def delete_genre(
    genre_id: str,
    _: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
) -> GenreResponse:
    """Delete a genre and return it."""
    genre = await _get_genre_or_404(session, genre_id)
    in_use = await session.execute(
        select(Movie.id).where(Movie.genre_id == genre.id).limit(1)
    )
    if in_use.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Genre is used by existing movies",
        )
    response = GenreResponse.model_validate(genre)
    await session.delete(genre)
    await commit_session(session)
    return response
