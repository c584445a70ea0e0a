"""User registration and login routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.database import get_session
from vidly.models.user import User
from vidly.routers.dependencies import commit_session
from vidly.schemas.common import TokenResponse
from vidly.schemas.users import (
    LoginRequest,
    RegistrationResponse,
    UserCreateRequest,
    UserResponse,
)
from vidly.services.auth import authenticate, issue_token, require_user
from vidly.services.security import hash_secret

router = APIRouter(prefix="/api/users", tags=["users"])
auth_router = APIRouter(prefix="/api", tags=["auth"])


@router.post("", response_model=RegistrationResponse)
async def register_user(
    payload: UserCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> RegistrationResponse:
    """Register a user and issue its first token."""
    email = payload.email.lower()
    existing = await session.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already registered",
        )
    user = User(
        name=payload.name,
        email=email,
        password_hash=hash_secret(payload.password),
    )
    session.add(user)
    await session.flush()
    _, plaintext = await issue_token(session, user)
    await commit_session(session)
    return RegistrationResponse(user=UserResponse.model_validate(user), token=plaintext)


@router.get("/me", response_model=UserResponse)
async def read_current_user(user: User = Depends(require_user)) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.model_validate(user)


@auth_router.post("/auth", response_model=TokenResponse)
async def log_in(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_session),
) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user = await authenticate(session, email=payload.email, password=payload.password)
    token, plaintext = await issue_token(session, user)
    await commit_session(session)
    return TokenResponse(id=token.id, token=plaintext, user_id=user.id)
