"""Return-workflow tests."""

from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from vidly.models.movie import Movie
from vidly.models.rental import Rental
from vidly.services.errors import ReturnAlreadyProcessedError
from vidly.services.rentals import process_return


def _parse(value: str) -> datetime:
    """Parse an API timestamp."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _stock(session_factory, movie_id) -> int:
    """Read a movie's stock straight from the database."""
    async with session_factory() as session:
        movie = await session.get(Movie, movie_id)
        return movie.number_in_stock


class TestReturnRequests:
    """Request-level guards on POST /api/returns."""

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthorized(self, client, make_rental) -> None:
        """Reject anonymous returns before any lookup.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        make_rental : Callable
            Rental factory.

        Returns
        -------
        None
            Asserts a 401 response.
        """
        rental = await make_rental()
        response = await client.post(
            "/api/returns",
            json={
                "customer_id": str(rental.customer_id),
                "movie_id": str(rental.movie_id),
            },
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token_is_unauthorized(self, client) -> None:
        """Reject unknown bearer tokens.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.

        Returns
        -------
        None
            Asserts a 401 response.
        """
        response = await client.post(
            "/api/returns",
            headers={"Authorization": "Bearer vid_not-a-token"},
            json={"customer_id": str(uuid4()), "movie_id": str(uuid4())},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    @pytest.mark.asyncio
    async def test_missing_customer_id_is_a_validation_error(
        self, client, user_headers
    ) -> None:
        """Return field errors when the customer id is absent.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.

        Returns
        -------
        None
            Asserts a 400 with a field error.
        """
        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={"movie_id": str(uuid4())},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert [error["field"] for error in body["errors"]] == ["customer_id"]

    @pytest.mark.asyncio
    async def test_malformed_movie_id_is_a_validation_error(
        self, client, user_headers
    ) -> None:
        """Reject identifiers that are not UUIDs.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.

        Returns
        -------
        None
            Asserts a 400 with a field error.
        """
        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={"customer_id": str(uuid4()), "movie_id": "1"},
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "movie_id"


class TestReturnWorkflow:
    """End-to-end return scenarios."""

    @pytest.mark.asyncio
    async def test_unknown_rental_is_not_found_and_changes_nothing(
        self, client, user_headers, make_rental, session_factory
    ) -> None:
        """Leave the store untouched when no rental matches.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.
        make_rental : Callable
            Rental factory.
        session_factory : async_sessionmaker
            Test session factory.

        Returns
        -------
        None
            Asserts a 404 and unchanged rows.
        """
        rental = await make_rental(number_in_stock=3)
        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={"customer_id": str(uuid4()), "movie_id": str(rental.movie_id)},
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Rental not found"
        assert await _stock(session_factory, rental.movie_id) == 3
        async with session_factory() as session:
            stored = await session.get(Rental, rental.id)
            assert stored.date_returned is None
            assert stored.rental_fee is None

    @pytest.mark.asyncio
    async def test_return_closes_rental_and_restocks(
        self, client, user_headers, make_rental, session_factory
    ) -> None:
        """Charge seven days at rate two and put one copy back.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.
        make_rental : Callable
            Rental factory.
        session_factory : async_sessionmaker
            Test session factory.

        Returns
        -------
        None
            Asserts fee, timestamps and stock.
        """
        rental = await make_rental(days_out=7, daily_rental_rate=2, number_in_stock=4)
        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={
                "customer_id": str(rental.customer_id),
                "movie_id": str(rental.movie_id),
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(rental.id)
        assert body["rental_fee"] == 14
        assert _parse(body["date_returned"]) >= _parse(body["date_out"])
        assert body["customer"]["name"] == "Ada Lovelace"
        assert body["movie"]["title"] == "Airplane"
        assert await _stock(session_factory, rental.movie_id) == 5

        async with session_factory() as session:
            stored = await session.get(Rental, rental.id)
            assert stored.date_returned is not None
            assert stored.rental_fee == 14

    @pytest.mark.asyncio
    async def test_same_day_return_charges_one_day(
        self, client, user_headers, make_rental
    ) -> None:
        """Bill the minimum of one day for an immediate return.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.
        make_rental : Callable
            Rental factory.

        Returns
        -------
        None
            Asserts the minimum fee.
        """
        rental = await make_rental(days_out=0, daily_rental_rate=3)
        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={
                "customer_id": str(rental.customer_id),
                "movie_id": str(rental.movie_id),
            },
        )
        assert response.status_code == 200
        assert response.json()["rental_fee"] == 3

    @pytest.mark.asyncio
    async def test_second_return_is_rejected_and_restocks_once(
        self, client, user_headers, make_rental, session_factory
    ) -> None:
        """Accept the first return only.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.
        make_rental : Callable
            Rental factory.
        session_factory : async_sessionmaker
            Test session factory.

        Returns
        -------
        None
            Asserts one success, one rejection and one increment.
        """
        rental = await make_rental(days_out=2, number_in_stock=0)
        payload = {
            "customer_id": str(rental.customer_id),
            "movie_id": str(rental.movie_id),
        }

        first = await client.post("/api/returns", headers=user_headers, json=payload)
        second = await client.post("/api/returns", headers=user_headers, json=payload)

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["detail"] == "Return already processed"
        assert await _stock(session_factory, rental.movie_id) == 1

        async with session_factory() as session:
            stored = await session.get(Rental, rental.id)
            assert stored.rental_fee == first.json()["rental_fee"]

    @pytest.mark.asyncio
    async def test_latest_rental_is_the_one_returned(
        self, client, user_headers, make_rental, session_factory
    ) -> None:
        """Pick the most recent checkout when a pair was rented twice.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.
        make_rental : Callable
            Rental factory.
        session_factory : async_sessionmaker
            Test session factory.

        Returns
        -------
        None
            Asserts the newer rental is closed.
        """
        older = await make_rental(days_out=30)
        newer = await make_rental(days_out=3, like=older)

        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={
                "customer_id": str(older.customer_id),
                "movie_id": str(older.movie_id),
            },
        )
        assert response.status_code == 200
        assert response.json()["id"] == str(newer.id)
        assert response.json()["rental_fee"] == 6

        async with session_factory() as session:
            untouched = await session.get(Rental, older.id)
            assert untouched.date_returned is None

    @pytest.mark.asyncio
    async def test_returned_rental_keeps_checkout_snapshot(
        self, client, user_headers, admin_headers, make_rental
    ) -> None:
        """Keep the title captured at checkout after the movie is renamed.

        Parameters
        ----------
        client : AsyncClient
            Test HTTP client.
        user_headers : dict[str, str]
            Authenticated headers.
        admin_headers : dict[str, str]
            Administrator headers.
        make_rental : Callable
            Rental factory.

        Returns
        -------
        None
            Asserts the snapshot is unchanged.
        """
        rental = await make_rental(days_out=1)
        genres = await client.get("/api/genres")
        renamed = await client.put(
            f"/api/movies/{rental.movie_id}",
            headers=admin_headers,
            json={
                "title": "Airplane II",
                "genre_id": genres.json()[0]["id"],
                "number_in_stock": 10,
                "daily_rental_rate": 9,
            },
        )
        assert renamed.status_code == 200

        response = await client.post(
            "/api/returns",
            headers=user_headers,
            json={
                "customer_id": str(rental.customer_id),
                "movie_id": str(rental.movie_id),
            },
        )
        assert response.status_code == 200
        assert response.json()["movie"]["title"] == "Airplane"
        assert response.json()["rental_fee"] == 2


class TestConcurrentReturns:
    """Races between two sessions returning the same rental."""

    @pytest.mark.asyncio
    async def test_stale_return_is_rejected(
        self, make_rental, session_factory, caplog
    ) -> None:
        """Reject a return whose copy of the rental went stale.

        Parameters
        ----------
        make_rental : Callable
            Rental factory.
        session_factory : async_sessionmaker
            Test session factory.
        caplog : pytest.LogCaptureFixture
            Log capture fixture.

        Returns
        -------
        None
            Asserts only one return is applied.
        """
        rental = await make_rental(days_out=4, number_in_stock=2)

        async with session_factory() as slow, session_factory() as fast:
            # Load the open rental into the slow session before the fast one
            # closes it, so the slow session passes the open-rental check.
            stale = await slow.get(Rental, rental.id)
            assert stale.date_returned is None

            await process_return(
                fast, customer_id=rental.customer_id, movie_id=rental.movie_id
            )
            with pytest.raises(ReturnAlreadyProcessedError):
                await process_return(
                    slow, customer_id=rental.customer_id, movie_id=rental.movie_id
                )

        assert f"rental {rental.id} closed concurrently" in caplog.text
        assert await _stock(session_factory, rental.movie_id) == 3
        async with session_factory() as session:
            returned = await session.execute(
                select(func.count(Rental.id)).where(Rental.date_returned.is_not(None))
            )
            assert returned.scalar_one() == 1



class TestReturnWriteOrdering:
    """Failures after the rental commit."""

    @pytest.mark.asyncio
    async def test_failed_restock_keeps_rental_returned(
        self, faulting_client, user_headers, make_rental, session_factory
    ) -> None:
        """Keep the committed return when the stock increment fails.

        Parameters
        ----------
        faulting_client : AsyncClient
            Test HTTP client that receives 500 responses.
        user_headers : dict[str, str]
            Authenticated headers.
        make_rental : Callable
            Rental factory.
        session_factory : async_sessionmaker
            Test session factory.

        Returns
        -------
        None
            Asserts a 500, a persisted return and unchanged stock.
        """
        rental = await make_rental(days_out=2, number_in_stock=255)

        response = await faulting_client.post(
            "/api/returns",
            headers=user_headers,
            json={
                "customer_id": str(rental.customer_id),
                "movie_id": str(rental.movie_id),
            },
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Something failed."}
        assert await _stock(session_factory, rental.movie_id) == 255
        async with session_factory() as session:
            stored = await session.get(Rental, rental.id)
            assert stored.date_returned is not None
            assert stored.rental_fee == 4
