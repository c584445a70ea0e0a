"""Python SDK for the Vidly rental service."""

from vidly_client.client import VidlyClient
from vidly_client.exceptions import (
    VidlyAPIError,
    VidlyAuthError,
    VidlyConflictError,
    VidlyError,
    VidlyNotFoundError,
    VidlyRateLimitError,
    VidlyValidationError,
)
from vidly_client.types import MovieInfo, RentalHandle, RentalInfo

__all__ = [
    "MovieInfo",
    "RentalHandle",
    "RentalInfo",
    "VidlyAPIError",
    "VidlyAuthError",
    "VidlyClient",
    "VidlyConflictError",
    "VidlyError",
    "VidlyNotFoundError",
    "VidlyRateLimitError",
    "VidlyValidationError",
]
