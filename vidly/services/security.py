"""Security helpers."""

import hashlib
from secrets import token_urlsafe

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, VerifyMismatchError

password_hasher = PasswordHasher()


def generate_plaintext_token(prefix: str) -> str:
    """Generate an opaque bearer token.

    Parameters
    ----------
    prefix : str
        Human-readable token prefix.

    Returns
    -------
    str
        New opaque token.
    """
    return f"{prefix}_{token_urlsafe(24)}"


def lookup_hash(token: str) -> str:
    """Compute a fast, non-secret hash for DB lookup.

    Parameters
    ----------
    token : str
        Raw token.

    Returns
    -------
    str
        Hex-encoded SHA-256 digest.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def hash_secret(secret: str) -> str:
    """Hash a password or token for storage.

    Parameters
    ----------
    secret : str
        Raw secret.

    Returns
    -------
    str
        Argon2 hash.
    """
    return password_hasher.hash(secret)


def verify_secret(secret: str, secret_hash: str) -> bool:
    """Verify a secret against its hash.

    Parameters
    ----------
    secret : str
        Raw secret.
    secret_hash : str
        Stored argon2 hash.

    Returns
    -------
    bool
        Whether the secret matches.
    """
    try:
        return password_hasher.verify(secret_hash, secret)
    except (VerifyMismatchError, VerificationError):
        return False
