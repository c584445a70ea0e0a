"""Rental checkout routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.database import get_session
from vidly.models.rental import Rental
from vidly.models.user import User
from vidly.routers.dependencies import Page, commit_session, parse_id_or_404
from vidly.schemas.rentals import RentalRequest, RentalResponse
from vidly.services.auth import require_user
from vidly.services.rentals import create_rental, list_rentals

router = APIRouter(prefix="/api/rentals", tags=["rentals"])


@router.get("", response_model=list[RentalResponse])
async def list_rental_records(
    customer_id: UUID | None = Query(default=None),
    page: Page = Depends(),
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> list[RentalResponse]:
    """List rentals, most recent checkout first."""
    rentals = await list_rentals(
        session,
        customer_id=customer_id,
        limit=page.limit,
        offset=page.offset,
    )
    return [RentalResponse.from_rental(row) for row in rentals]


@router.get("/{rental_id}", response_model=RentalResponse)
async def get_rental(
    rental_id: str,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> RentalResponse:
    """Fetch one rental."""
    rental = await session.get(
        Rental, parse_id_or_404(rental_id, "Rental not found")
    )
    if rental is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rental not found",
        )
    return RentalResponse.from_rental(rental)


@router.post("", response_model=RentalResponse)
async def check_out_movie(
    payload: RentalRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> RentalResponse:
    """Check a movie out to a customer."""
    rental = await create_rental(
        session,
        customer_id=payload.customer_id,
        movie_id=payload.movie_id,
    )
    await commit_session(session)
    return RentalResponse.from_rental(rental)
