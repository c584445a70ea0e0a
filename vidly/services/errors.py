"""Domain errors raised by service functions."""

from __future__ import annotations

from fastapi import status


class VidlyError(Exception):
    """Base domain error carrying the HTTP status it maps to.

    Parameters
    ----------
    message : str
        Client-facing error message.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RentalNotFoundError(VidlyError):
    """No rental matches the customer/movie pair."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Rental not found") -> None:
        super().__init__(message)


class ReturnAlreadyProcessedError(VidlyError):
    """The rental was already returned."""

    def __init__(self, message: str = "Return already processed") -> None:
        super().__init__(message)


class InvalidReferenceError(VidlyError):
    """A request referenced an entity that does not exist."""


class OutOfStockError(VidlyError):
    """The requested movie has no copies left."""

    def __init__(self, message: str = "Movie not in stock") -> None:
        super().__init__(message)
