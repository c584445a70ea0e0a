"""Rental checkout and return orchestration."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from vidly.config import get_settings
from vidly.models.customer import Customer
from vidly.models.mixins import utcnow
from vidly.models.movie import Movie
from vidly.models.rental import Rental
from vidly.services.errors import (
    InvalidReferenceError,
    OutOfStockError,
    RentalNotFoundError,
    ReturnAlreadyProcessedError,
)

logger = logging.getLogger(__name__)


async def lookup_rental(
    session: AsyncSession, *, customer_id: UUID, movie_id: UUID
) -> Rental | None:
    """Find the latest rental for a customer/movie pair.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    customer_id : UUID
        Customer identifier.
    movie_id : UUID
        Movie identifier.

    Returns
    -------
    Rental | None
        Rental with the most recent ``date_out``, or ``None``.
    """
    result = await session.execute(
        select(Rental)
        .where(Rental.customer_id == customer_id, Rental.movie_id == movie_id)
        .order_by(Rental.date_out.desc(), Rental.id.desc())
        .limit(1)
    )
    return result.scalars().first()


async def create_rental(
    session: AsyncSession, *, customer_id: UUID, movie_id: UUID
) -> Rental:
    """Check a movie out to a customer.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    customer_id : UUID
        Customer identifier.
    movie_id : UUID
        Movie identifier.

    Returns
    -------
    Rental
        New rental carrying customer and movie snapshots.
    """
    customer = await session.get(Customer, customer_id)
    if customer is None:
        raise InvalidReferenceError("Invalid customer")
    movie = await session.get(Movie, movie_id)
    if movie is None:
        raise InvalidReferenceError("Invalid movie")
    if movie.number_in_stock == 0:
        raise OutOfStockError()

    result = await session.execute(
        update(Movie)
        .where(Movie.id == movie.id, Movie.number_in_stock > 0)
        .values(number_in_stock=Movie.number_in_stock - 1)
    )
    if result.rowcount == 0:
        raise OutOfStockError()

    rental = Rental(
        customer_id=customer.id,
        customer_name=customer.name,
        customer_phone=customer.phone,
        movie_id=movie.id,
        movie_title=movie.title,
        movie_daily_rental_rate=movie.daily_rental_rate,
        date_out=utcnow(),
    )
    session.add(rental)
    await session.flush()
    logger.info("Rental %s created for customer %s", rental.id, customer.id)
    return rental


async def process_return(
    session: AsyncSession, *, customer_id: UUID, movie_id: UUID
) -> Rental:
    """Return a rented movie.

    The rental is closed and committed first; the stock increment is a
    second, separately committed write. A crash between the two leaves
    the rental returned with stock not yet restored, never a double
    increment.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    customer_id : UUID
        Customer identifier.
    movie_id : UUID
        Movie identifier.

    Returns
    -------
    Rental
        Returned rental with its fee.
    """
    rental = await lookup_rental(session, customer_id=customer_id, movie_id=movie_id)
    if rental is None:
        logger.warning(
            "Return rejected: no rental for customer %s movie %s",
            customer_id,
            movie_id,
        )
        raise RentalNotFoundError()
    if rental.is_returned:
        logger.warning("Return rejected: rental %s already returned", rental.id)
        raise ReturnAlreadyProcessedError()

    rental.mark_returned(
        utcnow(), min_billable_days=get_settings().min_billable_days
    )
    await _persist_return(session, rental)
    await _restock_movie(session, rental.movie_id)
    logger.info("Rental %s returned, fee %.2f", rental.id, rental.rental_fee)
    return rental


async def _persist_return(session: AsyncSession, rental: Rental) -> None:
    """Commit the returned state if no other request got there first.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    rental : Rental
        Rental closed in memory.

    Returns
    -------
    None
        Raises when the stored row changed since it was read.
    """
    # Rollback expires the instance; keep the id for logging.
    rental_id = rental.id
    try:
        await session.commit()
    except StaleDataError as exc:
        await session.rollback()
        logger.warning("Return rejected: rental %s closed concurrently", rental_id)
        raise ReturnAlreadyProcessedError() from exc


async def _restock_movie(session: AsyncSession, movie_id: UUID) -> None:
    """Put one copy of a movie back in stock.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    movie_id : UUID
        Movie identifier.

    Returns
    -------
    None
        Commits the increment.
    """
    result = await session.execute(
        update(Movie)
        .where(Movie.id == movie_id)
        .values(number_in_stock=Movie.number_in_stock + 1)
    )
    await session.commit()
    if result.rowcount == 0:
        logger.warning("Restock skipped: movie %s no longer exists", movie_id)


async def list_rentals(
    session: AsyncSession,
    *,
    customer_id: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Rental]:
    """List rentals newest first.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    customer_id : UUID | None, default=None
        Optional customer filter.
    limit : int, default=50
        Page size.
    offset : int, default=0
        Page offset.

    Returns
    -------
    list[Rental]
        Matching rentals.
    """
    query = select(Rental)
    if customer_id is not None:
        query = query.where(Rental.customer_id == customer_id)
    result = await session.execute(
        query.order_by(Rental.date_out.desc(), Rental.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())
