"""Authentication dependencies."""

from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.config import get_settings
from vidly.database import get_session
from vidly.models.user import AuthToken, User
from vidly.services.security import (
    generate_plaintext_token,
    hash_secret,
    lookup_hash,
    verify_secret,
)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Authenticate a bearer token.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed bearer token.
    session : AsyncSession
        Active database session.

    Returns
    -------
    User
        Owner of the token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
        )
    token = await _match_token(session, credentials.credentials)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return token.user


async def require_admin(user: User = Depends(require_user)) -> User:
    """Require an authenticated administrator.

    Parameters
    ----------
    user : User
        Authenticated user.

    Returns
    -------
    User
        The same user when it is an administrator.
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    return user


async def issue_token(session: AsyncSession, user: User) -> tuple[AuthToken, str]:
    """Create a token row and return it with its plaintext.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    user : User
        Token owner.

    Returns
    -------
    tuple[AuthToken, str]
        Persisted token row and the plaintext shown once to the caller.
    """
    plaintext = generate_plaintext_token(get_settings().token_prefix)
    token = AuthToken(
        user_id=user.id,
        token_hash=hash_secret(plaintext),
        token_lookup=lookup_hash(plaintext),
    )
    session.add(token)
    await session.flush()
    return token, plaintext


async def authenticate(session: AsyncSession, *, email: str, password: str) -> User:
    """Check an email/password pair.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    email : str
        Login email.
    password : str
        Raw password.

    Returns
    -------
    User
        Matching user.
    """
    result = await session.execute(select(User).where(User.email == email.lower()))
    user = result.scalar_one_or_none()
    if user is None or not verify_secret(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email or password",
        )
    return user


async def _match_token(session: AsyncSession, raw_token: str) -> AuthToken | None:
    """Match a raw token against hashed rows.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    raw_token : str
        Raw bearer token.

    Returns
    -------
    AuthToken | None
        Matching token row if found.
    """
    result = await session.execute(
        select(AuthToken).where(
            AuthToken.token_lookup == lookup_hash(raw_token),
            AuthToken.revoked_at.is_(None),
        )
    )
    for row in result.scalars().unique().all():
        if verify_secret(raw_token, row.token_hash):
            return row
    return None
