# shopfront/core/security.py
"""
Password hashing (bcrypt) and access token signing (JWT via python-jose).
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

BCRYPT_ROUNDS = 10

DEFAULT_TOKEN_TTL = timedelta(hours=24)


class InvalidTokenError(Exception):
    """Token signature is invalid, the token is malformed or it has expired."""


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def sign_token(
    claims: dict[str, Any],
    secret: str,
    *,
    algorithm: str = "HS256",
    expires_in: timedelta = DEFAULT_TOKEN_TTL,
) -> str:
    """
    Sign `claims` into a JWT that expires after `expires_in`.

    Args:
        claims: payload to embed, e.g. {"id": ..., "email": ...}
        secret: HMAC signing key
        algorithm: JWS algorithm
        expires_in: lifetime of the token

    Returns:
        Encoded JWT string.
    """
    payload = dict(claims)
    payload["exp"] = datetime.now(timezone.utc) + expires_in
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, *, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Decode and verify a JWT (signature + exp).

    Raises:
        InvalidTokenError: if the token is invalid or expired.
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
