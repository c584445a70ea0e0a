"""Pytest fixtures."""

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vidly.config import get_settings
from vidly.database import Base, get_session
from vidly.main import app
from vidly.models.customer import Customer
from vidly.models.genre import Genre
from vidly.models.mixins import utcnow
from vidly.models.movie import Movie
from vidly.models.rental import Rental
from vidly.models.user import User

SessionFactory = async_sessionmaker[AsyncSession]
RentalFactory = Callable[..., Awaitable[Rental]]


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Reset cached settings around each test.

    Yields
    ------
    None
        Runs the test with fresh settings.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
async def session_factory(tmp_path: Path) -> AsyncIterator[SessionFactory]:
    """Create a session factory bound to a fresh SQLite database.

    Parameters
    ----------
    tmp_path : Path
        Temporary directory for test database.

    Yields
    ------
    async_sessionmaker[AsyncSession]
        Factory for sessions on the test database.
    """
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(database_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    await engine.dispose()


@pytest.fixture()
async def client(session_factory: SessionFactory) -> AsyncIterator[AsyncClient]:
    """Create a test HTTP client backed by SQLite.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession]
        Test session factory.

    Yields
    ------
    AsyncClient
        Configured test client.
    """

    async def _override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
async def faulting_client(client: AsyncClient) -> AsyncIterator[AsyncClient]:
    """Create a client that receives 500 responses instead of raised errors.

    Parameters
    ----------
    client : AsyncClient
        Regular test client; keeps the session override installed.

    Yields
    ------
    AsyncClient
        Client whose transport does not re-raise application errors.
    """
    _ = client
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as test_client:
        yield test_client


async def register(client: AsyncClient, email: str) -> dict[str, str]:
    """Register a user and return bearer headers for it.

    Parameters
    ----------
    client : AsyncClient
        Test HTTP client.
    email : str
        Email to register.

    Returns
    -------
    dict[str, str]
        Authorization header mapping.
    """
    response = await client.post(
        "/api/users",
        json={"name": "Clerk", "email": email, "password": "secret-pass"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
async def user_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for a regular user."""
    return await register(client, "clerk@example.com")


@pytest.fixture()
async def admin_headers(
    client: AsyncClient, session_factory: SessionFactory
) -> dict[str, str]:
    """Bearer headers for an administrator."""
    headers = await register(client, "admin@example.com")
    async with session_factory() as session:
        await session.execute(
            update(User)
            .where(User.email == "admin@example.com")
            .values(is_admin=True)
        )
        await session.commit()
    return headers


@pytest.fixture()
def make_rental(session_factory: SessionFactory) -> RentalFactory:
    """Return a helper that stores a customer, movie and open rental.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession]
        Test session factory.

    Returns
    -------
    Callable[..., Awaitable[Rental]]
        Coroutine function creating a rental row.
    """

    async def _make_rental(
        *,
        days_out: float = 0,
        daily_rental_rate: float = 2,
        number_in_stock: int = 10,
        date_out: datetime | None = None,
        like: Rental | None = None,
    ) -> Rental:
        async with session_factory() as session:
            if like is None:
                like = await _store_catalogue(
                    session,
                    daily_rental_rate=daily_rental_rate,
                    number_in_stock=number_in_stock,
                )
            rental = Rental(
                customer_id=like.customer_id,
                customer_name=like.customer_name,
                customer_phone=like.customer_phone,
                movie_id=like.movie_id,
                movie_title=like.movie_title,
                movie_daily_rental_rate=like.movie_daily_rental_rate,
                date_out=date_out or utcnow() - timedelta(days=days_out),
            )
            session.add(rental)
            await session.commit()
            return rental

    return _make_rental


async def _store_catalogue(
    session: AsyncSession, *, daily_rental_rate: float, number_in_stock: int
) -> Rental:
    """Store a genre, movie and customer and return an unsaved template rental.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    daily_rental_rate : float
        Movie rate.
    number_in_stock : int
        Movie stock.

    Returns
    -------
    Rental
        Transient rental carrying the customer and movie snapshots.
    """
    genre = Genre(name="Comedy")
    session.add(genre)
    await session.flush()
    movie = Movie(
        title="Airplane",
        genre_id=genre.id,
        genre_name=genre.name,
        number_in_stock=number_in_stock,
        daily_rental_rate=daily_rental_rate,
    )
    customer = Customer(name="Ada Lovelace", phone="555-0101")
    session.add_all([movie, customer])
    await session.flush()
    return Rental(
        customer_id=customer.id,
        customer_name=customer.name,
        customer_phone=customer.phone,
        movie_id=movie.id,
        movie_title=movie.title,
        movie_daily_rental_rate=movie.daily_rental_rate,
    )
