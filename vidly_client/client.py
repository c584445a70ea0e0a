"""Synchronous Python SDK client."""

from __future__ import annotations

import os
from time import sleep
from typing import Any
from uuid import UUID

import httpx

from vidly_client.exceptions import (
    VidlyAPIError,
    VidlyAuthError,
    VidlyConflictError,
    VidlyNotFoundError,
    VidlyRateLimitError,
    VidlyValidationError,
)
from vidly_client.types import MovieInfo, RentalHandle, RentalInfo

ALREADY_RETURNED_DETAIL = "Return already processed"


class VidlyClient:
    """Client for the Vidly rental API.

    Parameters
    ----------
    base_url : str
        Vidly service base URL.
    token : str
        User bearer token.
    timeout : float, default=10.0
        Request timeout in seconds.
    max_retries : int, default=2
        Number of retries for transient errors.
    transport : httpx.BaseTransport | None, default=None
        Optional transport for tests or advanced usage.
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        timeout: float = 10.0,
        max_retries: int = 2,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.max_retries = max_retries
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=self.timeout,
            transport=transport,
        )

    @classmethod
    def from_env(cls) -> VidlyClient:
        """Build a client from environment variables.

        Expected variables
        ------------------
        VIDLY_BASE_URL
            Service base URL. Defaults to ``http://127.0.0.1:8000``.
        VIDLY_TOKEN
            Required bearer token.

        Returns
        -------
        VidlyClient
            Configured SDK client.
        """
        base_url = os.environ.get("VIDLY_BASE_URL", "http://127.0.0.1:8000")
        token = os.environ.get("VIDLY_TOKEN")
        if not token:
            raise VidlyValidationError("VIDLY_TOKEN is required to create the client")
        return cls(base_url=base_url, token=token)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def list_movies(self, *, limit: int = 50, offset: int = 0) -> list[MovieInfo]:
        """List catalogue movies.

        Parameters
        ----------
        limit : int, default=50
            Page size.
        offset : int, default=0
            Page offset.

        Returns
        -------
        list[MovieInfo]
            Movies ordered by title.
        """
        response = self._request(
            "GET",
            "/api/movies",
            params={"limit": limit, "offset": offset},
        )
        return [MovieInfo.from_payload(item) for item in response.json()]

    def rent(self, customer_id: UUID, movie_id: UUID) -> RentalHandle:
        """Check a movie out to a customer.

        Parameters
        ----------
        customer_id : UUID
            Customer identifier.
        movie_id : UUID
            Movie identifier.

        Returns
        -------
        RentalHandle
            Context-manageable rental handle.
        """
        response = self._request(
            "POST",
            "/api/rentals",
            json={"customer_id": str(customer_id), "movie_id": str(movie_id)},
        )
        return RentalHandle(client=self, rental=RentalInfo.from_payload(response.json()))

    def return_rental(self, customer_id: UUID, movie_id: UUID) -> RentalInfo:
        """Return the latest rental for a customer/movie pair.

        Parameters
        ----------
        customer_id : UUID
            Customer identifier.
        movie_id : UUID
            Movie identifier.

        Returns
        -------
        RentalInfo
            Closed rental with its fee.
        """
        response = self._request(
            "POST",
            "/api/returns",
            json={"customer_id": str(customer_id), "movie_id": str(movie_id)},
        )
        return RentalInfo.from_payload(response.json())

    def list_rentals(
        self,
        *,
        customer_id: UUID | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[RentalInfo]:
        """List rentals newest first.

        Parameters
        ----------
        customer_id : UUID | None, default=None
            Optional customer filter.
        limit : int, default=50
            Page size.
        offset : int, default=0
            Page offset.

        Returns
        -------
        list[RentalInfo]
            Rental records.
        """
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if customer_id is not None:
            params["customer_id"] = str(customer_id)
        response = self._request("GET", "/api/rentals", params=params)
        return [RentalInfo.from_payload(item) for item in response.json()]

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP request with light retry logic.

        Parameters
        ----------
        method : str
            HTTP method.
        path : str
            Relative request path.
        **kwargs : Any
            Additional request arguments.

        Returns
        -------
        httpx.Response
            Successful response.
        """
        attempts = self.max_retries + 1
        last_exception: Exception | None = None
        for attempt in range(attempts):
            try:
                response = self._client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                last_exception = exc
                if attempt < self.max_retries:
                    sleep(0.1 * (attempt + 1))
                    continue
                raise VidlyAPIError(str(exc)) from exc

            if response.status_code < 400:
                return response
            if _is_transient_response(response) and attempt < self.max_retries:
                sleep(0.1 * (attempt + 1))
                continue
            raise _exception_for_response(response)

        if last_exception is not None:
            raise VidlyAPIError(str(last_exception)) from last_exception
        raise VidlyAPIError("Request failed")

    def __enter__(self) -> VidlyClient:
        """Enter the client context."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Close the client on context exit."""
        _ = (exc_type, exc_value, traceback)
        self.close()


def _is_transient_response(response: httpx.Response) -> bool:
    """Return whether a response is worth retrying.

    Parameters
    ----------
    response : httpx.Response
        HTTP response.

    Returns
    -------
    bool
        Whether the status is transient.
    """
    return response.status_code in {429, 502, 503, 504}


def _exception_for_response(response: httpx.Response) -> VidlyAPIError:
    """Map an error response to a typed SDK exception.

    A duplicate return arrives as a 400 but is surfaced as a conflict.

    Parameters
    ----------
    response : httpx.Response
        HTTP response.

    Returns
    -------
    VidlyAPIError
        Typed SDK error.
    """
    try:
        data = response.json()
    except ValueError:
        data = {}
    detail = data.get("detail") if isinstance(data, dict) else None
    message = detail or f"Vidly request failed with status {response.status_code}"
    code = response.status_code

    if code in {401, 403}:
        return VidlyAuthError(message, status_code=code)
    if code == 404:
        return VidlyNotFoundError(message, status_code=code)
    if code == 409 or detail == ALREADY_RETURNED_DETAIL:
        return VidlyConflictError(message, status_code=code)
    if code == 429:
        return VidlyRateLimitError(message, status_code=code)
    if code in {400, 422}:
        return VidlyValidationError(message, status_code=code)
    return VidlyAPIError(message, status_code=code)
