"""Rental return routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.database import get_session
from vidly.models.user import User
from vidly.schemas.rentals import RentalResponse, ReturnRequest
from vidly.services.auth import require_user
from vidly.services.rentals import process_return

router = APIRouter(prefix="/api/returns", tags=["returns"])


@router.post("", response_model=RentalResponse)
async def return_movie(
    payload: ReturnRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> RentalResponse:
    """Close the latest rental for a customer/movie pair and restock.

    Parameters
    ----------
    payload : ReturnRequest
        Customer and movie identifiers.
    session : AsyncSession
        Active database session.

    Returns
    -------
    RentalResponse
        Returned rental including its fee.
    """
    rental = await process_return(
        session,
        customer_id=payload.customer_id,
        movie_id=payload.movie_id,
    )
    return RentalResponse.from_rental(rental)
