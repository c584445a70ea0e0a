"""Grant administrator rights to a registered user."""

from __future__ import annotations

import sys

import anyio
from sqlalchemy import update

from vidly.database import SessionLocal, engine
from vidly.models.user import User


async def promote(email: str) -> bool:
    """Mark the user with ``email`` as an administrator.

    Parameters
    ----------
    email : str
        Registered email address.

    Returns
    -------
    bool
        Whether a user was updated.
    """
    async with SessionLocal() as session:
        result = await session.execute(
            update(User).where(User.email == email.lower()).values(is_admin=True)
        )
        await session.commit()
    await engine.dispose()
    return result.rowcount > 0


async def main() -> None:
    """Promote the user named on the command line."""
    if len(sys.argv) != 2:
        raise SystemExit("usage: python scripts/promote_admin.py EMAIL")
    if not await promote(sys.argv[1]):
        raise SystemExit(f"no user registered as {sys.argv[1]}")
    print(f"promoted {sys.argv[1]}")


if __name__ == "__main__":
    anyio.run(main)
