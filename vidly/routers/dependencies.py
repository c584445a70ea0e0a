"""Shared router helpers."""

from uuid import UUID

from fastapi import HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession


async def commit_session(session: AsyncSession) -> None:
    """Commit the current transaction.

    Parameters
    ----------
    session : AsyncSession
        Active database session.

    Returns
    -------
    None
        Commits current transaction.
    """
    await session.commit()


def parse_id_or_404(raw_id: str, detail: str) -> UUID:
    """Parse a path identifier, treating malformed ids as missing.

    Parameters
    ----------
    raw_id : str
        Identifier taken from the URL path.
    detail : str
        Not-found message.

    Returns
    -------
    UUID
        Parsed identifier.
    """
    try:
        return UUID(raw_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        ) from None


class Page:
    """Limit/offset query parameters."""

    def __init__(
        self,
        limit: int = Query(default=50, ge=1, le=200),
        offset: int = Query(default=0, ge=0),
    ) -> None:
        self.limit = limit
        self.offset = offset
